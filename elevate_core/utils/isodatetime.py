"""ISO 8601 datetime conversion utilities.

This module centralizes all transformations between Python datetime objects,
ISO 8601 strings and Unix timestamps. Stored timestamps and JWT claims should
go through these functions to keep the formats consistent.
"""

from datetime import datetime, UTC


def to_timestamp(dt: datetime) -> str:
    """Convert datetime to ISO 8601 UTC timestamp string."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.isoformat().replace("+00:00", "Z")


def to_datetime(timestamp: str) -> datetime:
    """Convert ISO 8601 UTC timestamp string to datetime."""
    return datetime.fromisoformat(timestamp.replace('Z', '+00:00'))


def now() -> str:
    """Get current UTC timestamp as ISO 8601 string."""
    return to_timestamp(datetime.now(UTC))


def now_datetime() -> datetime:
    """Get current UTC time as an aware datetime."""
    return datetime.now(UTC)


def now_unix() -> int:
    """Get current UTC time as integer seconds since the epoch."""
    return int(datetime.now(UTC).timestamp())


def to_unix(dt: datetime) -> int:
    """Convert datetime to integer seconds since the epoch (naive = UTC)."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return int(dt.timestamp())
