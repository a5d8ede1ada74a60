"""Bibliographic entry data models for risimport.

This module defines the output schema produced by the RIS decoder.
All field names follow BibTeX/BibLaTeX conventions; fields without a
standard name are stored under free-text keys.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum, StrEnum
from types import MappingProxyType
from typing import Any

# Schema version constant
SCHEMA_VERSION = "1.0.0"


class EntryType(StrEnum):
    """Entry types an RIS ``TY`` tag can resolve to."""

    ARTICLE = "article"
    BOOK = "book"
    INCOLLECTION = "incollection"
    INPROCEEDINGS = "inproceedings"
    MISC = "misc"
    PATENT = "patent"
    PHDTHESIS = "phdthesis"
    TECHREPORT = "techreport"
    UNPUBLISHED = "unpublished"


class StandardField(StrEnum):
    """Standard field names written by the decoder."""

    ABSTRACT = "abstract"
    ADDRESS = "address"
    AUTHOR = "author"
    BOOKTITLE = "booktitle"
    COMMENT = "comment"
    DOI = "doi"
    EDITION = "edition"
    EDITOR = "editor"
    EPRINT = "eprint"
    EPRINTTYPE = "eprinttype"
    EVENTTITLE = "eventtitle"
    ISSN = "issn"
    JOURNAL = "journal"
    KEYWORDS = "keywords"
    LANGUAGE = "language"
    NOTE = "note"
    NUMBER = "number"
    PAGES = "pages"
    PUBLISHER = "publisher"
    SCHOOL = "school"
    SERIES = "series"
    SHORTTITLE = "shorttitle"
    TITLE = "title"
    TRANSLATOR = "translator"
    URL = "url"
    VOLUME = "volume"
    YEAR = "year"


class Month(Enum):
    """Calendar month with its BibTeX short name.

    Attributes
    ----------
    number : int
        Month number, 1-12.
    short_name : str
        Three-letter BibTeX macro (e.g., 'jan').
    full_name : str
        English month name.
    """

    JANUARY = (1, "jan", "January")
    FEBRUARY = (2, "feb", "February")
    MARCH = (3, "mar", "March")
    APRIL = (4, "apr", "April")
    MAY = (5, "may", "May")
    JUNE = (6, "jun", "June")
    JULY = (7, "jul", "July")
    AUGUST = (8, "aug", "August")
    SEPTEMBER = (9, "sep", "September")
    OCTOBER = (10, "oct", "October")
    NOVEMBER = (11, "nov", "November")
    DECEMBER = (12, "dec", "December")

    def __init__(self, number: int, short_name: str, full_name: str) -> None:
        self.number = number
        self.short_name = short_name
        self.full_name = full_name

    @classmethod
    def get_month_by_number(cls, number: int) -> "Month | None":
        """Look up a month by its number.

        Parameters
        ----------
        number : int
            Month number.

        Returns
        -------
        Month | None
            Matching month, or None when outside 1-12.
        """
        for month in cls:
            if month.number == number:
                return month
        return None

    @classmethod
    def get_month_by_short_name(cls, short_name: str) -> "Month | None":
        """Look up a month by its three-letter name (case-insensitive)."""
        for month in cls:
            if month.short_name == short_name.strip().lower():
                return month
        return None


@dataclass(frozen=True)
class BibEntry:
    """Finalized bibliographic entry.

    Created once per RIS record and never mutated afterwards.

    Attributes
    ----------
    entry_type : EntryType
        Resolved entry type (misc when the record has no known ``TY``).
    fields : Mapping[str, str]
        Field name to non-blank value. Standard fields use
        ``StandardField`` names; unmapped RIS tags use free-text keys.
    month : Month | None
        Month resolved from the record's date, kept apart from ``fields``.
    """

    entry_type: EntryType = EntryType.MISC
    fields: Mapping[str, str] = field(default_factory=dict)
    month: Month | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def get(self, name: str) -> str | None:
        """Return a field value or None if absent."""
        return self.fields.get(name)

    def has_field(self, name: str) -> bool:
        """Check whether a field is set."""
        return name in self.fields

    def to_dict(self) -> dict[str, Any]:
        """Convert entry to dictionary for JSON serialization.

        Returns
        -------
        dict[str, Any]
            Dictionary representation compatible with ``entry.schema.json``.
        """
        return {
            "schema_version": SCHEMA_VERSION,
            "entry_type": str(self.entry_type),
            "fields": {str(k): v for k, v in self.fields.items()},
            "month": self.month.short_name if self.month is not None else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BibEntry":
        """Reconstruct a BibEntry from a dictionary.

        Parameters
        ----------
        data : dict[str, Any]
            Dictionary (e.g. from JSON) produced by ``to_dict``.

        Returns
        -------
        BibEntry
            Reconstructed entry.
        """
        month_name = data.get("month")
        return cls(
            entry_type=EntryType(data.get("entry_type", EntryType.MISC)),
            fields=dict(data.get("fields", {})),
            month=Month.get_month_by_short_name(month_name) if month_name else None,
        )
