"""Shared types and text helpers for the RIS decoder."""

import codecs
import re
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import NamedTuple

from risimport.models import BibEntry
from risimport.utils import sha256_of_bytes, utc_mtime, utc_now

SUPPORTED_EXTENSIONS: frozenset[str] = frozenset({".ris", ".txt"})

RECORD_START_PATTERN = re.compile(r"^TY  -")

_NEWLINE_RE = re.compile(r"\r\n?")

# Typographic dashes some exporters write in place of ASCII hyphens
_DASH_TRANSLATION = str.maketrans({"–": "-", "—": "--", "―": "--"})


@dataclass(frozen=True)
class FileContext:
    """What is known about an input file before it is decoded.

    Attributes
    ----------
    file_path : Path
        Where the bytes came from.
    file_digest : str
        ``sha256:<hex>`` of the bytes.
    file_mtime : str
        Modification time, or the read time if the file system has none.
    file_size : int
        Number of bytes read.
    """

    file_path: Path
    file_digest: str
    file_mtime: str
    file_size: int

    @classmethod
    def from_bytes(cls, file_path: Path, data: bytes) -> "FileContext":
        """Describe ``data`` as read from ``file_path``."""
        return cls(
            file_path=file_path,
            file_digest=sha256_of_bytes(data),
            file_mtime=utc_mtime(file_path) or utc_now(),
            file_size=len(data),
        )


class LogicalLine(NamedTuple):
    """A tag line with its soft-wrapped continuation lines merged back in."""

    tag: str
    value: str


class ParseResult(NamedTuple):
    """Entries decoded from one text plus the messages raised on the way.

    Unpacks as ``entries, warnings, errors = parse_ris_text(...)``.
    """

    records: list[BibEntry]
    warnings: list[str]
    errors: list[str]


def detect_encoding(data: bytes) -> str:
    """Pick a codec for raw file bytes.

    A UTF-8 byte order mark selects ``utf-8-sig``; bytes that decode as
    UTF-8 select ``utf-8``; anything else falls back to ``latin-1``,
    which accepts every byte.
    """
    if data.startswith(codecs.BOM_UTF8):
        return "utf-8-sig"
    try:
        data.decode("utf-8")
    except UnicodeDecodeError:
        return "latin-1"
    return "utf-8"


def normalize_line_endings(text: str) -> str:
    """Turn CRLF and bare CR line breaks into LF."""
    return _NEWLINE_RE.sub("\n", text)


def normalize_dashes(text: str) -> str:
    """Replace U+2013 with ``-`` and U+2014/U+2015 with ``--``.

    Some exporters emit typographic dashes in tag separators (``ER  –``)
    and page ranges; after this pass both use ASCII hyphens.
    """
    return text.translate(_DASH_TRANSLATION)


def is_recognized_format(lines: Iterable[str]) -> bool:
    """Tell whether some line opens a RIS record (``TY  -``).

    Lines are consumed lazily and the scan stops at the first match, so
    an open text stream can be passed directly.
    """
    return any(RECORD_START_PATTERN.match(line) for line in lines)
