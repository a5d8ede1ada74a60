"""RIS format decoder.

RIS format: Two-letter tags, "TY  - " starts record, "ER  - " ends it.
Reference: https://refdb.sourceforge.net/manual-0.9.6/sect1-ris-format.html

Decoding runs per record: split the text on ``ER`` lines, merge soft-wrapped
lines into tag lines, apply each tag's merge policy to a
``RecordAccumulator`` and finalize it into a ``BibEntry``.
"""

import re
from collections.abc import Callable, Iterable

from risimport.models import BibEntry, EntryType, Month, StandardField
from risimport.normalize import fix_author_last_name_first, parse_doi
from risimport.parse.base import LogicalLine, ParseResult, normalize_dashes

PARSER_NAME = "ris_parser"
PARSER_VERSION = "1.0.0"

RECORD_END_PATTERN = re.compile(r"^ER  -.*\n*", re.MULTILINE)

TAG_SEPARATOR = "  - "
MIN_LINE_LENGTH = 6

# Highest priority first
DATE_TAGS: tuple[str, ...] = ("Y1", "PY", "DA", "Y2")

TYPE_MAP: dict[str, EntryType] = {
    "BOOK": EntryType.BOOK,
    "JOUR": EntryType.ARTICLE,
    "MGZN": EntryType.ARTICLE,
    "THES": EntryType.PHDTHESIS,
    "UNPB": EntryType.UNPUBLISHED,
    "RPRT": EntryType.TECHREPORT,
    "CONF": EntryType.INPROCEEDINGS,
    "CHAP": EntryType.INCOLLECTION,
    "PAT": EntryType.PATENT,
}

# Tags whose value overwrites a single field
FIELD_TAGS: dict[str, str] = {
    "BT": StandardField.BOOKTITLE,
    "T3": StandardField.SERIES,
    "LA": StandardField.LANGUAGE,
    "CA": "caption",
    "DB": "database",
    "IS": StandardField.NUMBER,
    "AN": StandardField.NUMBER,
    "C7": StandardField.NUMBER,
    "M1": StandardField.NUMBER,
    "AD": StandardField.ADDRESS,
    "CY": StandardField.ADDRESS,
    "PP": StandardField.ADDRESS,
    "ET": StandardField.EDITION,
    "SN": StandardField.ISSN,
    "VL": StandardField.VOLUME,
    "UR": StandardField.URL,
    "L2": StandardField.URL,
    "LK": StandardField.URL,
    "C3": StandardField.EVENTTITLE,
    "RN": StandardField.NOTE,
    "ST": StandardField.SHORTTITLE,
    "TA": StandardField.TRANSLATOR,
    "AV": "archive_location",
    "CN": "call-number",
    "VO": "call-number",
    "NV": "number-of-volumes",
    "OP": "original-title",
    "RI": "reviewed-title",
    "RP": "status",
    "SE": "section",
    "ID": "refid",
}

_WHITESPACE_RUN_RE = re.compile(r"\s+", re.ASCII)
_YEAR_RE = re.compile(r"\d{4}", re.ASCII)
_MONTH_NUMBER_RE = re.compile(r"[+-]?\d+", re.ASCII)


# ---------------------------------------------------------------------------
# Record splitting and line merging
# ---------------------------------------------------------------------------


def split_records(text: str) -> list[str]:
    """Split RIS text into raw record blocks.

    Parameters
    ----------
    text : str
        Complete RIS text with LF line endings.

    Returns
    -------
    list[str]
        Blocks in input order, ``ER`` lines removed. The block after the
        last ``ER`` line is always present and may be empty.
    """
    return RECORD_END_PATTERN.split(normalize_dashes(text))


def is_continuation(line: str) -> bool:
    """Check whether a physical line continues the previous tag line."""
    return len(line) < MIN_LINE_LENGTH or line[2:MIN_LINE_LENGTH] != TAG_SEPARATOR


def merge_continuation_lines(lines: list[str]) -> list[LogicalLine]:
    """Re-join soft-wrapped physical lines into logical tag lines.

    Parameters
    ----------
    lines : list[str]
        Physical lines of one record block.

    Returns
    -------
    list[LogicalLine]
        Tag lines in order. Lines too short to carry a tag are dropped.
    """
    logical: list[LogicalLine] = []
    i = 0

    while i < len(lines):
        current = lines[i]
        while i + 1 < len(lines) and is_continuation(lines[i + 1]):
            following = lines[i + 1]
            if (
                current
                and following
                and not current[-1].isspace()
                and not following[0].isspace()
            ):
                current += " "
            current += following
            i += 1
        i += 1

        if len(current) < MIN_LINE_LENGTH:
            continue
        logical.append(LogicalLine(current[:2], current[MIN_LINE_LENGTH:].strip()))

    return logical


# ---------------------------------------------------------------------------
# Date resolution
# ---------------------------------------------------------------------------


class DateResolver:
    """Select the most authoritative date among a record's date tags.

    Attributes
    ----------
    best_tag : str | None
        Tag of the best date seen so far.
    best_value : str | None
        Raw value of the best date.
    best_priority : int
        Index of ``best_tag`` in ``DATE_TAGS``; ``len(DATE_TAGS)`` if none.
    fallback_year : str | None
        First four characters of a higher-priority value whose year did
        not parse.
    """

    def __init__(self) -> None:
        self.best_tag: str | None = None
        self.best_value: str | None = None
        self.best_priority = len(DATE_TAGS)
        self.fallback_year: str | None = None

    def offer(self, tag: str, value: str) -> None:
        """Consider a date tag line.

        Parameters
        ----------
        tag : str
            One of ``DATE_TAGS``.
        value : str
            Tag value, e.g. ``"1999/05/12/"``.
        """
        if len(value) < 4:
            return

        priority = DATE_TAGS.index(tag)
        if priority >= self.best_priority:
            return

        year = value[:4]
        if _is_calendar_year(year):
            self.best_tag = tag
            self.best_value = value
            self.best_priority = priority
            self.fallback_year = None
        else:
            self.fallback_year = year

    def resolve(self) -> tuple[str | None, Month | None]:
        """Return the resolved year and month.

        Returns
        -------
        tuple[str | None, Month | None]
            Year string and month; month is None if the best date has no
            usable month segment.
        """
        if self.best_value is None:
            return self.fallback_year, None

        month = None
        parts = self.best_value.split("/")
        if len(parts) > 1 and _MONTH_NUMBER_RE.fullmatch(parts[1]):
            month = Month.get_month_by_number(int(parts[1]))

        return self.best_value[:4], month


def _is_calendar_year(text: str) -> bool:
    return bool(_YEAR_RE.fullmatch(text)) and int(text) > 0


# ---------------------------------------------------------------------------
# Record accumulation
# ---------------------------------------------------------------------------


class RecordAccumulator:
    """Mutable state of one record while its tag lines are applied.

    Attributes
    ----------
    entry_type : EntryType
        Type from the last ``TY`` line (misc by default).
    fields : dict[str, str]
        Fields written so far.
    authors : list[str]
        Raw author names in order.
    editors : list[str]
        Raw editor names in order.
    abstract : list[str]
        Abstract lines, joined by newlines at finalization.
    comments : list[str]
        Comment lines, joined by newlines at finalization.
    start_page : str
        Value of the last ``SP`` line.
    end_page : str
        Value of the last ``EP`` line, prefixed with ``--`` if non-empty.
    dates : DateResolver
        Date candidates.
    has_type : bool
        True once a ``TY`` line was seen.
    """

    def __init__(self) -> None:
        self.entry_type = EntryType.MISC
        self.fields: dict[str, str] = {}
        self.authors: list[str] = []
        self.editors: list[str] = []
        self.abstract: list[str] = []
        self.comments: list[str] = []
        self.start_page = ""
        self.end_page = ""
        self.dates = DateResolver()
        self.has_type = False

    def apply(self, line: LogicalLine) -> None:
        """Apply one tag line according to its tag's merge policy.

        Unknown tags are ignored.

        Parameters
        ----------
        line : LogicalLine
            Tag line to apply.
        """
        handler = _TAG_HANDLERS.get(line.tag)
        if handler is not None:
            handler(self, line.value)
            return

        field_name = FIELD_TAGS.get(line.tag)
        if field_name is not None:
            self.fields[field_name] = line.value

    def finalize(self) -> BibEntry:
        """Build the immutable entry from the accumulated state.

        Returns
        -------
        BibEntry
            Entry with blank fields removed and the resolved month attached.
        """
        fields = dict(self.fields)

        if self.authors:
            fields[StandardField.AUTHOR] = fix_author_last_name_first(" and ".join(self.authors))
        if self.editors:
            fields[StandardField.EDITOR] = fix_author_last_name_first(" and ".join(self.editors))
        if self.abstract:
            fields[StandardField.ABSTRACT] = "\n".join(self.abstract)
        if self.comments:
            fields[StandardField.COMMENT] = "\n".join(self.comments)
        fields[StandardField.PAGES] = self.start_page + self.end_page

        year, month = self.dates.resolve()
        if year is not None:
            fields[StandardField.YEAR] = year

        fields = {name: value for name, value in fields.items() if value and value.strip()}

        return BibEntry(entry_type=self.entry_type, fields=fields, month=month)

    # -- tag policies -------------------------------------------------------

    def _set_type(self, value: str) -> None:
        self.entry_type = TYPE_MAP.get(value, EntryType.MISC)
        self.has_type = True

    def _add_title(self, value: str) -> None:
        old = self.fields.get(StandardField.TITLE)
        if old is None:
            title = value
        elif old.endswith((":", ".", "?")):
            title = f"{old} {value}"
        else:
            title = f"{old}: {value}"
        self.fields[StandardField.TITLE] = _WHITESPACE_RUN_RE.sub(" ", title)

    def _set_secondary_journal(self, value: str) -> None:
        if not self.fields.get(StandardField.JOURNAL):
            self.fields[StandardField.JOURNAL] = value

    def _set_journal(self, value: str) -> None:
        if self.entry_type == EntryType.INPROCEEDINGS:
            self.fields[StandardField.BOOKTITLE] = value
        else:
            self.fields[StandardField.JOURNAL] = value

    def _add_author(self, value: str) -> None:
        self.authors.append(value)

    def _add_editor(self, value: str) -> None:
        self.editors.append(value)

    def _set_start_page(self, value: str) -> None:
        self.start_page = value

    def _set_end_page(self, value: str) -> None:
        self.end_page = f"--{value}" if value else ""

    def _set_publisher(self, value: str) -> None:
        if self.entry_type == EntryType.PHDTHESIS:
            self.fields[StandardField.SCHOOL] = value
        else:
            self.fields[StandardField.PUBLISHER] = value

    def _add_abstract(self, value: str) -> None:
        if "\n".join(self.abstract) != value:
            self.abstract.append(value)

    def _offer_date(self, tag: str, value: str) -> None:
        self.dates.offer(tag, value)

    def _add_keywords(self, value: str) -> None:
        if StandardField.KEYWORDS in self.fields:
            self.fields[StandardField.KEYWORDS] += f", {value}"
        else:
            self.fields[StandardField.KEYWORDS] = value

    def _add_comment(self, value: str) -> None:
        self.comments.append(value)

    def _add_note(self, value: str) -> None:
        self.comments.append(value)
        self.fields[StandardField.NOTE] = value

    def _set_doi(self, value: str) -> None:
        doi = parse_doi(value)
        if doi is not None:
            self.fields[StandardField.DOI] = doi

    def _set_pubmed_id(self, value: str) -> None:
        self.fields[StandardField.EPRINT] = value
        self.fields[StandardField.EPRINTTYPE] = "pubmed"


def _date_handler(tag: str) -> Callable[[RecordAccumulator, str], None]:
    return lambda acc, value: acc._offer_date(tag, value)


_TAG_HANDLERS: dict[str, Callable[[RecordAccumulator, str], None]] = {
    "TY": RecordAccumulator._set_type,
    "T1": RecordAccumulator._add_title,
    "TI": RecordAccumulator._add_title,
    "T2": RecordAccumulator._set_secondary_journal,
    "J2": RecordAccumulator._set_secondary_journal,
    "JA": RecordAccumulator._set_journal,
    "JO": RecordAccumulator._set_journal,
    "J1": RecordAccumulator._set_journal,
    "JF": RecordAccumulator._set_journal,
    "AU": RecordAccumulator._add_author,
    "A1": RecordAccumulator._add_author,
    "A2": RecordAccumulator._add_author,
    "A3": RecordAccumulator._add_author,
    "A4": RecordAccumulator._add_author,
    "ED": RecordAccumulator._add_editor,
    "SP": RecordAccumulator._set_start_page,
    "EP": RecordAccumulator._set_end_page,
    "PB": RecordAccumulator._set_publisher,
    "N2": RecordAccumulator._add_abstract,
    "AB": RecordAccumulator._add_abstract,
    "KW": RecordAccumulator._add_keywords,
    "U1": RecordAccumulator._add_comment,
    "U2": RecordAccumulator._add_comment,
    "N1": RecordAccumulator._add_note,
    "M3": RecordAccumulator._set_doi,
    "DO": RecordAccumulator._set_doi,
    "C2": RecordAccumulator._set_pubmed_id,
    **{tag: _date_handler(tag) for tag in DATE_TAGS},
}


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------


def _accumulate(block: str) -> RecordAccumulator:
    acc = RecordAccumulator()
    for line in merge_continuation_lines(block.split("\n")):
        acc.apply(line)
    return acc


def parse_record(block: str) -> BibEntry:
    """Decode one raw record block into an entry.

    Parameters
    ----------
    block : str
        Text of one record, without its ``ER`` line.
        Typographic dashes are folded to ASCII as in ``parse_ris_text``.

    Returns
    -------
    BibEntry
        Decoded entry; malformed input degrades to a sparse misc entry.
    """
    return _accumulate(normalize_dashes(block)).finalize()


def parse_ris_text(text: str) -> ParseResult:
    """Decode RIS text into entries.

    Parameters
    ----------
    text : str
        Complete RIS text with LF line endings.

    Returns
    -------
    ParseResult
        Entries in input order and warnings. Decoding never reports errors.
    """
    warnings: list[str] = []
    errors: list[str] = []
    records: list[BibEntry] = []

    blocks = split_records(text)

    for block_index, block in enumerate(blocks):
        if not block.strip():
            continue

        record_index = len(records)
        acc = _accumulate(block)

        if not acc.has_type:
            warnings.append(f"Record {record_index}: No TY tag, using type misc")
        if block_index == len(blocks) - 1:
            warnings.append(f"Record {record_index}: End of input reached without closing ER tag")

        records.append(acc.finalize())

    return ParseResult(records, warnings, errors)


def parse_ris(lines: Iterable[str]) -> ParseResult:
    """Decode RIS lines into entries.

    Parameters
    ----------
    lines : Iterable[str]
        Decoded lines without newline characters.

    Returns
    -------
    ParseResult
        Entries, warnings, and errors.
    """
    return parse_ris_text("\n".join(lines))
