"""End-to-end import runner.

Chains the two stages of an import into a single auditable call:

    Stage 1: Parse    decode every input file into entries
    Stage 2: Write    persist entries.jsonl and the ingestion report
"""

import json
import time
from dataclasses import asdict
from pathlib import Path

from risimport.api import write_jsonl
from risimport.audit import AuditLogger
from risimport.engine.config import ImportConfig, ImportResult
from risimport.models import BibEntry
from risimport.parse.ingestion import IngestionReport, ingest_file, ingest_folder

ENTRIES_FILENAME = "entries.jsonl"
REPORT_FILENAME = "reports/ingestion_report.json"
EVENTS_FILENAME = "events.jsonl"


def _summary(
    report: IngestionReport | None,
    output_files: dict[str, str] | None = None,
    error_message: str | None = None,
) -> ImportResult:
    return ImportResult(
        success=error_message is None,
        total_files=report.total_files if report else 0,
        total_records=report.total_records if report else 0,
        total_warnings=report.total_warnings if report else 0,
        total_errors=report.total_errors if report else 0,
        output_files=output_files or {},
        error_message=error_message,
    )


def _ingest(input_path: Path, config: ImportConfig) -> tuple[list[BibEntry], IngestionReport]:
    if input_path.is_dir():
        return ingest_folder(
            input_path,
            recursive=config.recursive,
            glob_pattern=config.glob_pattern,
            encoding=config.encoding,
        )

    entries, result = ingest_file(input_path, encoding=config.encoding)
    return entries, IngestionReport.from_results([result])


def _stage1_parse(
    input_path: Path,
    config: ImportConfig,
    logger: AuditLogger | None,
) -> tuple[list[BibEntry], IngestionReport]:
    """Decode the input and log what every file yielded."""
    if logger:
        logger.stage_started("parse")

    entries, report = _ingest(input_path, config)

    if logger:
        for result in report.file_results:
            logger.file_parsed(result)
        logger.stage_finished(
            {
                "files_in": report.total_files,
                "records_out": report.total_records,
                "warnings": report.total_warnings,
                "errors": report.total_errors,
            }
        )

    return entries, report


def _stage2_write(
    entries: list[BibEntry],
    report: IngestionReport,
    output_dir: Path,
    logger: AuditLogger | None,
) -> dict[str, str]:
    """Write decoded entries and the ingestion report under ``output_dir``."""
    if logger:
        logger.stage_started("write")

    entries_path = output_dir / ENTRIES_FILENAME
    report_path = output_dir / REPORT_FILENAME
    report_path.parent.mkdir(parents=True, exist_ok=True)

    write_jsonl(entries, entries_path)
    report_path.write_text(
        json.dumps(asdict(report), indent=2, ensure_ascii=False, sort_keys=True),
        encoding="utf-8",
    )

    if logger:
        logger.artifact_written(entries_path, output_dir, record_count=len(entries))
        logger.artifact_written(report_path, output_dir)
        logger.stage_finished()

    return {"entries": str(entries_path), "ingestion_report": str(report_path)}


def _run_stages(
    input_path: Path,
    config: ImportConfig,
    logger: AuditLogger | None,
) -> ImportResult:
    start = time.perf_counter()
    report: IngestionReport | None = None

    if logger:
        logger.run_started(config.to_dict())

    try:
        if not input_path.exists():
            raise FileNotFoundError(f"Input path not found: {input_path}")

        entries, report = _stage1_parse(input_path, config, logger)

        if config.strict and report.total_errors:
            failed = ", ".join(r.filename for r in report.file_results if r.errors)
            result = _summary(report, error_message=f"Ingestion errors in: {failed}")
        else:
            output_files = _stage2_write(entries, report, config.output_dir, logger)
            if logger:
                output_files["events"] = str(logger.log_path)
            result = _summary(report, output_files)

    except Exception as e:
        if logger:
            logger.error(e)
        result = _summary(report, error_message=f"{type(e).__name__}: {e}")

    if logger:
        logger.run_finished(
            status="success" if result.success else "failed",
            duration_seconds=time.perf_counter() - start,
            records_processed=result.total_records,
        )

    return result


def run_import(
    input_path: Path | str,
    config: ImportConfig | None = None,
    logger: AuditLogger | None = None,
) -> ImportResult:
    """Decode a RIS file or folder and write the results to disk.

    Never raises for bad input; failures are reported on the result.

    Parameters
    ----------
    input_path : Path | str
        Path to input file or folder.
    config : ImportConfig | None, optional
        Run configuration. If None, uses defaults.
    logger : AuditLogger | None, optional
        Audit logger for tracking. If None and ``config.write_audit_log``
        is set, events go to ``output_dir/events.jsonl``.

    Returns
    -------
    ImportResult
        Run results.

    Examples
    --------
        >>> from risimport.engine import run_import
        >>> result = run_import("data/references.ris")
        >>> if result.success:
        ...     print(f"Imported {result.total_records} entries")
    """
    input_path = Path(input_path)
    config = config or ImportConfig()

    if logger is not None or not config.write_audit_log:
        return _run_stages(input_path, config, logger)

    with AuditLogger(config.output_dir / EVENTS_FILENAME) as own:
        return _run_stages(input_path, config, own)
