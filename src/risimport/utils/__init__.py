"""Helpers shared by ingestion, the engine and the audit log."""

from risimport.utils.fileinfo import sha256_of_bytes, sha256_of_file, utc_mtime, utc_now

__all__ = [
    "sha256_of_bytes",
    "sha256_of_file",
    "utc_mtime",
    "utc_now",
]
