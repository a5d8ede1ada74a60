"""Decoder for RIS bibliographic exports.

This package provides:
- Data models (risimport.models): BibEntry, entry types, fields, months
- Parsing (risimport.parse): RIS decoding and file ingestion
- Normalization (risimport.normalize): DOI and author name normalizers
- Engine (risimport.engine): audited import runs
- Audit (risimport.audit): JSONL event logging
- CLI (risimport.cli): command-line interface
- Public API (risimport.api): high-level convenience functions
"""

__version__ = "0.1.0"
__license__ = "MIT"

from risimport.api import (
    ParseError,
    import_references,
    parse_file,
    parse_folder,
    parse_text,
    write_jsonl,
)
from risimport.models import BibEntry, EntryType, Month, StandardField
from risimport.parse import is_recognized_format

__all__ = [
    "__version__",
    "__license__",
    "BibEntry",
    "EntryType",
    "Month",
    "StandardField",
    "ParseError",
    "import_references",
    "is_recognized_format",
    "parse_file",
    "parse_folder",
    "parse_text",
    "write_jsonl",
]
