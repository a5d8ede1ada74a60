"""Reading RIS exports from disk.

``ingest_file`` turns one file into entries plus a ``FileIngestionResult``
describing what happened; ``ingest_folder`` does the same for every
supported file below a directory and sums the results into an
``IngestionReport``. Neither raises for bad input: unreadable,
undecodable and non-RIS files come back as errors on their result.
"""

from collections.abc import Iterable
from dataclasses import dataclass, replace
from pathlib import Path

from risimport.models import BibEntry
from risimport.parse.base import (
    SUPPORTED_EXTENSIONS,
    FileContext,
    detect_encoding,
    is_recognized_format,
    normalize_line_endings,
)
from risimport.parse.ris import parse_ris_text
from risimport.utils import utc_now

INGESTION_VERSION = "1.0.0"

NOT_RIS_MESSAGE = "No RIS record start (TY  - ) found"


@dataclass(frozen=True)
class FileIngestionResult:
    """Outcome of ingesting one file.

    Attributes
    ----------
    filename : str
        Base name, used as the file's key in reports and audit events.
    filepath : str
        Path as given.
    file_size : int
        Bytes read (0 if unreadable).
    file_mtime : str
        ISO8601 modification time ("" if unreadable).
    format_detected : str
        ``"ris"`` once the content was decoded as RIS, else ``"unknown"``.
    source_ext : str
        Lower-cased extension.
    encoding_used : str
        Codec the bytes were decoded with ("" if unreadable).
    records_parsed : int
        Entries decoded.
    warnings : tuple[str, ...]
        Decoder warnings.
    errors : tuple[str, ...]
        Read, decode and format errors.
    file_digest : str
        ``sha256:<hex>`` of the bytes ("" if unreadable).
    """

    filename: str
    filepath: str
    file_size: int
    file_mtime: str
    format_detected: str
    source_ext: str
    encoding_used: str
    records_parsed: int
    warnings: tuple[str, ...] = ()
    errors: tuple[str, ...] = ()
    file_digest: str = ""

    @classmethod
    def pending(
        cls, file_path: Path, ctx: FileContext | None = None, encoding: str = ""
    ) -> "FileIngestionResult":
        """Start a result for ``file_path`` with nothing decoded yet."""
        return cls(
            filename=file_path.name,
            filepath=str(file_path),
            file_size=ctx.file_size if ctx else 0,
            file_mtime=ctx.file_mtime if ctx else "",
            format_detected="unknown",
            source_ext=file_path.suffix.lower(),
            encoding_used=encoding,
            records_parsed=0,
            file_digest=ctx.file_digest if ctx else "",
        )


@dataclass(frozen=True)
class IngestionReport:
    """Totals over every file of an ingestion run, with per-file results."""

    tool_version: str
    run_timestamp: str
    total_files: int
    total_records: int
    total_errors: int
    total_warnings: int
    file_results: tuple[FileIngestionResult, ...]

    @classmethod
    def from_results(cls, results: Iterable[FileIngestionResult]) -> "IngestionReport":
        """Sum per-file results, keeping their order."""
        results = tuple(results)
        return cls(
            tool_version=INGESTION_VERSION,
            run_timestamp=utc_now(),
            total_files=len(results),
            total_records=sum(r.records_parsed for r in results),
            total_errors=sum(len(r.errors) for r in results),
            total_warnings=sum(len(r.warnings) for r in results),
            file_results=results,
        )


def ingest_file(
    file_path: Path,
    encoding: str | None = None,
) -> tuple[list[BibEntry], FileIngestionResult]:
    """Decode one RIS file.

    Parameters
    ----------
    file_path : Path
        File to read.
    encoding : str | None, optional
        Codec to use instead of ``detect_encoding``.

    Returns
    -------
    tuple[list[BibEntry], FileIngestionResult]
        Entries in file order (empty on error) and the file's result.
        An empty file is not an error and yields no entries.
    """
    try:
        data = file_path.read_bytes()
    except OSError as e:
        failed = FileIngestionResult.pending(file_path)
        return [], replace(failed, errors=(f"Failed to read file: {e}",))

    codec = encoding or detect_encoding(data)
    result = FileIngestionResult.pending(file_path, FileContext.from_bytes(file_path, data), codec)

    try:
        text = normalize_line_endings(data.decode(codec))
    except (UnicodeDecodeError, LookupError) as e:
        return [], replace(result, errors=(f"Failed to decode with {codec}: {e}",))

    if text.strip() and not is_recognized_format(text.split("\n")):
        return [], replace(result, errors=(NOT_RIS_MESSAGE,))

    entries, warnings, errors = parse_ris_text(text)

    return entries, replace(
        result,
        format_detected="ris",
        records_parsed=len(entries),
        warnings=tuple(warnings),
        errors=tuple(errors),
    )


def ingest_folder(
    folder_path: Path,
    recursive: bool = False,
    glob_pattern: str = "*",
    encoding: str | None = None,
) -> tuple[list[BibEntry], IngestionReport]:
    """Decode every ``.ris``/``.txt`` file in a folder.

    Files are processed in sorted path order so the entry order does not
    depend on the file system.

    Parameters
    ----------
    folder_path : Path
        Folder to scan.
    recursive : bool, optional
        Descend into subdirectories, by default False.
    glob_pattern : str, optional
        Pattern file names must match, by default "*".
    encoding : str | None, optional
        Codec forced on every file, by default None (detect per file).

    Returns
    -------
    tuple[list[BibEntry], IngestionReport]
        All entries, file after file, and the run report.
    """
    matches = folder_path.rglob(glob_pattern) if recursive else folder_path.glob(glob_pattern)
    files = sorted(p for p in matches if p.is_file() and p.suffix.lower() in SUPPORTED_EXTENSIONS)

    entries: list[BibEntry] = []
    results: list[FileIngestionResult] = []
    for file_path in files:
        file_entries, result = ingest_file(file_path, encoding=encoding)
        entries.extend(file_entries)
        results.append(result)

    return entries, IngestionReport.from_results(results)
