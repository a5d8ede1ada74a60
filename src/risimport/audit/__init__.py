"""Audit logging for import runs.

Main Components
---------------
- AuditLogger: JSONL event logger tied to one run
- LogEvent / EventLevel: the event line format
- generate_run_id / environment_info: run metadata
"""

from risimport.audit.events import EventLevel, LogEvent, environment_info, generate_run_id
from risimport.audit.logger import AuditLogger

__all__ = [
    "AuditLogger",
    "EventLevel",
    "LogEvent",
    "environment_info",
    "generate_run_id",
]
