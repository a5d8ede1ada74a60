"""Import run orchestration.

This package provides the main entry point for decoding a file or folder
and writing the decoded entries, reports and audit events to disk.
"""

from risimport.engine.config import ImportConfig, ImportResult
from risimport.engine.runner import run_import

__all__ = [
    "ImportConfig",
    "ImportResult",
    "run_import",
]
