"""Shared data types for risimport.

This package contains the output entry model and the vocabularies
(entry types, field names, months) the decoder writes into it.
"""

from risimport.models.entry import (
    SCHEMA_VERSION,
    BibEntry,
    EntryType,
    Month,
    StandardField,
)

__all__ = [
    "SCHEMA_VERSION",
    "BibEntry",
    "EntryType",
    "Month",
    "StandardField",
]
