"""Epoch timestamp helpers.

Expirations are stored as integer UTC epoch seconds. Everything that needs
the current time goes through ``now()`` so tests can move the clock.
"""

import time
from datetime import datetime, timedelta, timezone


def now() -> int:
    """Return the current UTC epoch time in whole seconds."""
    return int(time.time())


def from_datetime(value: datetime) -> int:
    """Convert a datetime to epoch seconds.

    Naive datetimes are interpreted as UTC.

    Args:
        value: The datetime to convert.

    Returns:
        The epoch timestamp in whole seconds.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return int(value.timestamp())


def after(delta: timedelta | int) -> int:
    """Return the epoch timestamp ``delta`` from now.

    Args:
        delta: A timedelta or a number of seconds (may be negative).

    Returns:
        The epoch timestamp in whole seconds.
    """
    if isinstance(delta, timedelta):
        return now() + int(delta.total_seconds())
    return now() + delta
