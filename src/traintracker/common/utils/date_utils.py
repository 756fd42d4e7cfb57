"""
Date Utilities
==============

Common date/time handling utilities for timestamps, conversions, and schedule alignment.
"""

import math
from datetime import UTC, datetime, timedelta


def to_unix_ms(dt: datetime) -> int:
    """
    Convert datetime to Unix timestamp in milliseconds.

    Args:
        dt: Datetime object (timezone-aware or naive assumed UTC)

    Returns:
        Unix timestamp in milliseconds
    """
    if dt.tzinfo is None:
        # Assume UTC for naive datetimes
        dt = dt.replace(tzinfo=UTC)

    return int(dt.timestamp() * 1000)


def utc_now() -> datetime:
    """
    Get current time in UTC.

    Returns:
        Current UTC datetime
    """
    return datetime.now(UTC)


def to_iso_z(dt: datetime) -> str:
    """
    Format datetime as ISO-8601 UTC with millisecond precision and a ``Z`` suffix.

    Example: ``2024-01-15T10:00:00.000Z``
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    dt = dt.astimezone(UTC)
    return dt.replace(tzinfo=None).isoformat(timespec="milliseconds") + "Z"


def next_boundary(dt: datetime, interval_seconds: float) -> datetime:
    """
    Get the next wall-clock boundary strictly after ``dt``.

    With a 60 second interval this is the start of the next minute.

    Args:
        dt: Reference datetime
        interval_seconds: Boundary spacing in seconds

    Returns:
        First boundary later than ``dt``
    """
    if interval_seconds <= 0:
        raise ValueError("interval_seconds must be positive")

    epoch = to_unix_ms(dt) / 1000
    boundary = math.floor(epoch / interval_seconds + 1) * interval_seconds
    return datetime.fromtimestamp(boundary, tz=UTC)


def backdated(end: datetime, count: int, spacing_seconds: float) -> list[datetime]:
    """
    Generate ``count`` timestamps spaced ``spacing_seconds`` apart, ending at ``end``.

    Returns:
        Ascending list of datetimes; the last element equals ``end``
    """
    step = timedelta(seconds=spacing_seconds)
    return [end - step * i for i in range(count - 1, -1, -1)]
