"""Settings and outcome of an import run."""

import codecs
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any


@dataclass
class ImportConfig:
    """How an import run reads its input and where it writes.

    Attributes
    ----------
    output_dir : Path
        Receives ``entries.jsonl``, ``reports/`` and ``events.jsonl``.
    recursive : bool
        Descend into subdirectories of a folder input.
    glob_pattern : str
        File-name pattern applied inside a folder input.
    encoding : str | None
        Codec forced on every file; detected per file when None.
    strict : bool
        Fail the run, writing no entries, if any file reports an error.
    write_audit_log : bool
        Append run events to ``output_dir/events.jsonl``.
    """

    output_dir: Path = Path("out")
    recursive: bool = False
    glob_pattern: str = "*"
    encoding: str | None = None
    strict: bool = False
    write_audit_log: bool = True

    def __post_init__(self) -> None:
        """Coerce ``output_dir`` to a Path and reject unusable settings.

        Raises
        ------
        ValueError
            If ``glob_pattern`` is empty or ``encoding`` names no known codec.
        """
        self.output_dir = Path(self.output_dir)

        if not self.glob_pattern:
            raise ValueError("glob_pattern must not be empty")

        if self.encoding is not None:
            if not self.encoding.strip():
                raise ValueError("encoding must not be blank")
            try:
                codecs.lookup(self.encoding)
            except LookupError as e:
                raise ValueError(f"Unknown encoding: {self.encoding!r}") from e

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready copy, as recorded in the ``run_started`` event."""
        return {**asdict(self), "output_dir": str(self.output_dir)}


@dataclass
class ImportResult:
    """Counts and artifacts of a finished import run.

    ``output_files`` maps ``"entries"``, ``"ingestion_report"`` and, when
    audited, ``"events"`` to the paths written. It is empty for a failed
    run, whose reason is in ``error_message``.
    """

    success: bool
    total_files: int
    total_records: int
    total_warnings: int
    total_errors: int
    output_files: dict[str, str] = field(default_factory=dict)
    error_message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
