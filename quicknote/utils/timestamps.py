"""
Timestamp utilities for QuickNote.

Notes carry creation and update times as integer milliseconds since
the Unix epoch, the same unit the persisted schema uses.
"""

from datetime import datetime


def to_ms(moment: datetime) -> int:
    """
    Convert a datetime to milliseconds since the epoch.

    Naive datetimes are interpreted as local time.

    Args:
        moment: Datetime to convert

    Returns:
        Integer milliseconds since 1970-01-01T00:00:00Z
    """
    return int(moment.timestamp()) * 1000 + moment.microsecond // 1000
