"""Public API.

Decode RIS text, a file or a folder into ``BibEntry`` objects, write
entries as JSON Lines, or run a full audited import into an output
directory.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from risimport.models import BibEntry
from risimport.parse.base import normalize_line_endings
from risimport.parse.ingestion import FileIngestionResult, ingest_file, ingest_folder
from risimport.parse.ris import parse_ris_text

if TYPE_CHECKING:
    from risimport.engine.config import ImportResult

__all__ = [
    "parse_text",
    "parse_file",
    "parse_folder",
    "write_jsonl",
    "import_references",
    "ParseError",
]

# Failed files named in a ParseError message before it is truncated
_MAX_REPORTED_FILES = 3


class ParseError(Exception):
    """A file could not be decoded while ``strict`` was on.

    Attributes
    ----------
    file : str | None
        Offending file, when a single one is to blame.
    """

    def __init__(self, message: str, file: str | None = None) -> None:
        super().__init__(message)
        self.file = file

    @classmethod
    def from_results(cls, failed: Sequence[FileIngestionResult]) -> ParseError:
        """Summarize the errors of one or more failed files."""
        if len(failed) == 1:
            only = failed[0]
            return cls(f"Failed to parse {only.filename}: {'; '.join(only.errors)}", only.filepath)

        shown = "; ".join(
            f"{r.filename}: {', '.join(r.errors)}" for r in failed[:_MAX_REPORTED_FILES]
        )
        return cls(f"Failed to parse {len(failed)} file(s): {shown}")


def _existing(path: str | Path, what: str) -> Path:
    resolved = Path(path)
    if not resolved.exists():
        raise FileNotFoundError(f"{what} not found: {path}")
    return resolved


def parse_text(text: str) -> list[BibEntry]:
    """Decode RIS text already in memory.

    Never raises for malformed content; an empty string yields no entries.

    Examples
    --------
        >>> from risimport import parse_text
        >>> entries = parse_text("TY  - JOUR\\nTI  - A title\\nER  - \\n")
        >>> entries[0].get("title")
        'A title'
    """
    return parse_ris_text(normalize_line_endings(text)).records


def parse_file(
    path: str | Path,
    *,
    strict: bool = True,
    encoding: str | None = None,
) -> list[BibEntry]:
    """Decode a single RIS file.

    Parameters
    ----------
    path : str | Path
        File to decode.
    strict : bool, optional
        Raise when the file cannot be read, decoded or recognized as RIS.
        When False such a file yields an empty list. By default True.
    encoding : str | None, optional
        Codec to use instead of detecting one.

    Returns
    -------
    list[BibEntry]
        Entries in file order.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    ParseError
        If ``strict`` and the file could not be decoded.
    """
    entries, result = ingest_file(_existing(path, "File"), encoding=encoding)

    if strict and result.errors:
        raise ParseError.from_results([result])

    return entries


def parse_folder(
    path: str | Path,
    *,
    pattern: str | None = None,
    recursive: bool = False,
    strict: bool = False,
) -> list[BibEntry]:
    """Decode every ``.ris``/``.txt`` file in a folder.

    Parameters
    ----------
    path : str | Path
        Folder to scan.
    pattern : str | None, optional
        Glob the file names must match (e.g. ``"*.ris"``); all supported
        files when None.
    recursive : bool, optional
        Descend into subdirectories, by default False.
    strict : bool, optional
        Raise if any file fails instead of skipping it, by default False.

    Returns
    -------
    list[BibEntry]
        Entries of all files, in sorted file order.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    ValueError
        If ``path`` is not a directory.
    ParseError
        If ``strict`` and any file could not be decoded.
    """
    folder = _existing(path, "Folder")
    if not folder.is_dir():
        raise ValueError(f"Path is not a directory: {path}")

    entries, report = ingest_folder(folder, recursive=recursive, glob_pattern=pattern or "*")

    failed = [r for r in report.file_results if r.errors]
    if strict and failed:
        raise ParseError.from_results(failed)

    return entries


def write_jsonl(
    entries: Iterable[BibEntry],
    path: str | Path,
    *,
    sort_keys: bool = True,
) -> int:
    """Write one JSON object per entry, UTF-8, LF line endings.

    With ``sort_keys`` the same entries always produce the same bytes.

    Returns
    -------
    int
        Number of entries written.
    """
    count = 0
    with Path(path).open("w", encoding="utf-8", newline="\n") as f:
        for entry in entries:
            f.write(json.dumps(entry.to_dict(), ensure_ascii=False, sort_keys=sort_keys))
            f.write("\n")
            count += 1
    return count


def import_references(
    input_path: str | Path,
    *,
    output_dir: str | Path = "out",
    recursive: bool = False,
    strict: bool = False,
    encoding: str | None = None,
) -> ImportResult:
    """Run an audited import of a file or folder.

    Writes ``entries.jsonl``, ``reports/ingestion_report.json`` and
    ``events.jsonl`` under ``output_dir``.

    Parameters
    ----------
    input_path : str | Path
        RIS file or folder of RIS files.
    output_dir : str | Path, optional
        Where outputs go, by default "out".
    recursive : bool, optional
        Descend into subdirectories of a folder input.
    strict : bool, optional
        Fail the import if any file could not be decoded.
    encoding : str | None, optional
        Codec forced on every file.

    Returns
    -------
    ImportResult
        Counts and ``output_files`` (artifact name to path).

    Raises
    ------
    FileNotFoundError
        If ``input_path`` does not exist.
    ParseError
        If the import failed.
    """
    from risimport.engine import ImportConfig, run_import

    source = _existing(input_path, "Input path")
    config = ImportConfig(
        output_dir=Path(output_dir),
        recursive=recursive,
        encoding=encoding,
        strict=strict,
    )

    result = run_import(source, config)
    if not result.success:
        raise ParseError(f"Import failed: {result.error_message}", file=str(source))

    return result
