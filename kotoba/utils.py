"""Utility functions for the backend."""

from datetime import UTC, datetime

# Wire format of all timestamps, always UTC
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def format_timestamp(value: datetime) -> str:
    """
    Format a timestamp for API responses.

    Naive datetimes are taken to be UTC, which is how SQLite hands back
    timezone-aware columns.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).strftime(TIMESTAMP_FORMAT)
