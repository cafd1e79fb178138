"""Time utility helpers for UTC-safe timestamps."""

from __future__ import annotations

from datetime import datetime, timezone

LOG_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def ensure_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC and convert aware ones to UTC."""

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_log_timestamp(value: datetime) -> str:
    return ensure_utc(value).strftime(LOG_TIMESTAMP_FORMAT)
