"""Digests and UTC timestamps recorded in reports and audit events.

Digests are written as ``sha256:<hex>``; timestamps as ISO8601 with a
``Z`` suffix.
"""

import hashlib
from datetime import UTC, datetime
from pathlib import Path

__all__ = [
    "sha256_of_bytes",
    "sha256_of_file",
    "utc_now",
    "utc_mtime",
]

DIGEST_PREFIX = "sha256:"


def _iso_utc(moment: datetime) -> str:
    return moment.isoformat().replace("+00:00", "Z")


def sha256_of_bytes(data: bytes) -> str:
    """Digest of raw input bytes, e.g. a RIS file already read into memory."""
    return DIGEST_PREFIX + hashlib.sha256(data).hexdigest()


def sha256_of_file(path: Path) -> str:
    """Digest of an artifact on disk.

    Parameters
    ----------
    path : Path
        File to hash; read in chunks.

    Returns
    -------
    str
        Digest in ``sha256:<hex>`` form.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    """
    with path.open("rb") as f:
        return DIGEST_PREFIX + hashlib.file_digest(f, "sha256").hexdigest()


def utc_now() -> str:
    """Current UTC time with microseconds (e.g. ``2026-02-03T12:34:56.123456Z``)."""
    return _iso_utc(datetime.now(UTC))


def utc_mtime(path: Path) -> str:
    """Modification time of ``path`` to the second, or ``""`` if unavailable."""
    try:
        mtime = datetime.fromtimestamp(path.stat().st_mtime, UTC)
    except (OSError, ValueError):
        return ""
    return _iso_utc(mtime.replace(microsecond=0))
