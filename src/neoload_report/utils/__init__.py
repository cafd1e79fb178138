"""Shared utility helpers."""

from neoload_report.utils.paths import file_mtime_utc, is_writable, read_text, write_text_atomically
from neoload_report.utils.time_utils import ensure_utc, format_log_timestamp

__all__ = [
    "file_mtime_utc",
    "is_writable",
    "read_text",
    "write_text_atomically",
    "ensure_utc",
    "format_log_timestamp",
]
