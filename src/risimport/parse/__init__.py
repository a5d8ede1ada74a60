"""RIS decoding and file ingestion.

Main entry points:
- parse_ris_text: Decode RIS text into BibEntry objects
- is_recognized_format: Cheap check whether text is RIS
- ingest_file: Decode a single file
- ingest_folder: Scan a folder and decode all supported files
"""

from risimport.parse.base import ParseResult, is_recognized_format
from risimport.parse.ingestion import ingest_file, ingest_folder
from risimport.parse.ris import parse_ris, parse_ris_text

__all__ = [
    "ParseResult",
    "ingest_file",
    "ingest_folder",
    "is_recognized_format",
    "parse_ris",
    "parse_ris_text",
]
