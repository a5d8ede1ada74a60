"""Event records written to ``events.jsonl`` and the run metadata they carry."""

import importlib.metadata
import json
import secrets
import sys
from dataclasses import asdict, dataclass, field
from enum import StrEnum
from typing import Any

from risimport.parse.ris import PARSER_NAME, PARSER_VERSION
from risimport.utils import utc_now

__all__ = [
    "EventLevel",
    "LogEvent",
    "environment_info",
    "generate_run_id",
    "get_package_version",
]

# Distributions whose versions are recorded with every run
TRACKED_DEPENDENCIES: tuple[str, ...] = ("click", "jsonschema")


class EventLevel(StrEnum):
    """Severity of an audit event."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


@dataclass(frozen=True)
class LogEvent:
    """One line of the audit log.

    Attributes
    ----------
    ts : str
        UTC timestamp with microseconds.
    run_id : str
        Identifier shared by every event of a run.
    level : EventLevel
        Severity.
    event : str
        Event name, e.g. ``"file_parsed"``.
    data : dict[str, Any]
        Event payload.
    stage : str | None
        Stage active when the event was written.
    rid : str | None
        Input file the event refers to, if any.
    """

    ts: str
    run_id: str
    level: EventLevel
    event: str
    data: dict[str, Any] = field(default_factory=dict)
    stage: str | None = None
    rid: str | None = None

    def to_json(self) -> str:
        """Serialize as a single compact JSON line (no trailing newline)."""
        return json.dumps(asdict(self), ensure_ascii=False, separators=(",", ":"))


def generate_run_id() -> str:
    """Return a sortable run id: ``<utc timestamp>__<8 hex chars>``."""
    return f"{utc_now()}__{secrets.token_hex(4)}"


def get_package_version() -> str:
    """Installed risimport version, or ``"unknown"`` when running from source."""
    try:
        return importlib.metadata.version("risimport")
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


def environment_info(packages: tuple[str, ...] = TRACKED_DEPENDENCIES) -> dict[str, Any]:
    """Describe the interpreter, package, decoder and dependency versions.

    Parameters
    ----------
    packages : tuple[str, ...], optional
        Distribution names whose versions are reported.

    Returns
    -------
    dict[str, Any]
        JSON-ready mapping; missing distributions are reported as
        ``"unknown"``.
    """
    dependencies: dict[str, str] = {}
    for package in packages:
        try:
            dependencies[package] = importlib.metadata.version(package)
        except importlib.metadata.PackageNotFoundError:
            dependencies[package] = "unknown"

    return {
        "python_version": sys.version.split()[0],
        "package_version": get_package_version(),
        "parser": {"name": PARSER_NAME, "version": PARSER_VERSION},
        "dependencies": dependencies,
    }
