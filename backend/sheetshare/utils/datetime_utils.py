"""Datetime conversion utilities."""

from datetime import UTC, datetime


def datetime_to_iso(value: datetime | None) -> str | None:
    """Convert a datetime to an ISO-8601 UTC string, or None.

    Naive values (SQLite drops tzinfo) are taken to be UTC.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat()
