"""Append-only JSONL audit log for import runs.

One ``AuditLogger`` follows a run from ``run_started`` to
``run_finished``: it times stages, records what each input file yielded
and fingerprints every artifact the run writes.
"""

import sys
import time
import traceback
from pathlib import Path
from typing import TYPE_CHECKING, Any

from risimport.audit.events import EventLevel, LogEvent, environment_info, generate_run_id
from risimport.utils import sha256_of_file, utc_now

if TYPE_CHECKING:
    from risimport.parse.ingestion import FileIngestionResult

__all__ = ["AuditLogger"]


class AuditLogger:
    """JSONL audit logger with a persistent append handle.

    Every event is flushed as soon as it is written, so the log is
    complete up to the last event even if the run dies.

    Attributes
    ----------
    run_id : str
        Identifier written on every event.
    log_path : Path
        JSONL file events are appended to.
    current_stage : str | None
        Stage between ``stage_started`` and ``stage_finished``.
    """

    def __init__(self, log_path: Path, run_id: str | None = None) -> None:
        """Open ``log_path`` for appending, creating parent directories.

        Parameters
        ----------
        log_path : Path
            Path to JSONL log file.
        run_id : str | None, optional
            Run identifier; generated when omitted.
        """
        self.run_id = run_id or generate_run_id()
        self.log_path = Path(log_path)
        self.current_stage: str | None = None
        self._stage_start: float | None = None

        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        self._file = self.log_path.open("a", encoding="utf-8")

    def __enter__(self) -> "AuditLogger":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the log file; safe to call more than once."""
        if not self._file.closed:
            self._file.close()

    def emit(
        self,
        event: str,
        data: dict[str, Any] | None = None,
        *,
        level: EventLevel = EventLevel.INFO,
        rid: str | None = None,
    ) -> None:
        """Write one event tagged with the current stage.

        Parameters
        ----------
        event : str
            Event name.
        data : dict[str, Any] | None, optional
            JSON-serializable payload.
        level : EventLevel, optional
            Severity, by default INFO.
        rid : str | None, optional
            Input file the event refers to.
        """
        record = LogEvent(
            ts=utc_now(),
            run_id=self.run_id,
            level=level,
            event=event,
            data=data or {},
            stage=self.current_stage,
            rid=rid,
        )
        self._file.write(record.to_json() + "\n")
        self._file.flush()

    # -- run lifecycle ------------------------------------------------------

    def run_started(self, parameters: dict[str, Any]) -> None:
        """Record the command line, run parameters and environment."""
        self.emit(
            "run_started",
            {
                "command": list(sys.argv),
                "parameters": parameters,
                "environment": environment_info(),
            },
        )

    def run_finished(self, status: str, duration_seconds: float, records_processed: int) -> None:
        """Record the final run status ("success" or "failed")."""
        self.emit(
            "run_finished",
            {
                "status": status,
                "duration_seconds": duration_seconds,
                "records_processed": records_processed,
            },
        )

    def stage_started(self, stage: str) -> None:
        """Enter ``stage``; later events carry its name until it finishes."""
        self.current_stage = stage
        self._stage_start = time.perf_counter()
        self.emit("stage_started")

    def stage_finished(self, counters: dict[str, int] | None = None) -> None:
        """Leave the current stage, recording its duration and counters.

        Raises
        ------
        ValueError
            If no stage is active.
        """
        if self.current_stage is None or self._stage_start is None:
            raise ValueError("No stage in progress")

        data: dict[str, Any] = {"duration_seconds": time.perf_counter() - self._stage_start}
        if counters:
            data["counters"] = counters

        self.emit("stage_finished", data)
        self.current_stage = None
        self._stage_start = None

    # -- inputs and outputs -------------------------------------------------

    def file_parsed(self, result: "FileIngestionResult") -> None:
        """Record one ingested file with its warnings and errors.

        Writes a ``file_parsed`` event followed by one ``parse_warning``
        per warning and one ``error`` per ingestion error, all keyed by
        the file name.
        """
        self.emit(
            "file_parsed",
            {
                "records_parsed": result.records_parsed,
                "format": result.format_detected,
                "encoding": result.encoding_used,
                "sha256": result.file_digest,
            },
            rid=result.filename,
        )
        for message in result.warnings:
            self.warning(message, rid=result.filename)
        for message in result.errors:
            self.emit(
                "error",
                {"exception_class": "IngestionError", "message": message},
                level=EventLevel.ERROR,
                rid=result.filename,
            )

    def warning(self, message: str, rid: str | None = None) -> None:
        """Record a decoder warning."""
        self.emit("parse_warning", {"message": message}, level=EventLevel.WARN, rid=rid)

    def artifact_written(self, path: Path, root: Path, record_count: int | None = None) -> None:
        """Fingerprint an output file.

        Parameters
        ----------
        path : Path
            File just written.
        root : Path
            Output directory; the event stores ``path`` relative to it.
        record_count : int | None, optional
            Entries contained in the file, for JSONL outputs.
        """
        data: dict[str, Any] = {
            "path": path.relative_to(root).as_posix(),
            "sha256": sha256_of_file(path),
            "bytes": path.stat().st_size,
        }
        if record_count is not None:
            data["record_count"] = record_count

        self.emit("artifact_written", data)

    def error(self, exc: BaseException, rid: str | None = None) -> None:
        """Record an exception that aborted (part of) the run, with its traceback."""
        self.emit(
            "error",
            {
                "exception_class": type(exc).__name__,
                "message": str(exc),
                "traceback": "".join(traceback.format_exception(exc)),
            },
            level=EventLevel.ERROR,
            rid=rid,
        )
