"""Time window helpers

All windows are half-open ``[start, end)``. Instants are compared as naive
UTC, which is how they are stored.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

# Default table occupancy when no end time is given
TURN_MINUTES = 120


def overlaps(a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime) -> bool:
    """Whether two half-open windows intersect; touching endpoints do not"""
    return a_start < b_end and a_end > b_start


def add_minutes(dt: datetime, minutes: int) -> datetime:
    return dt + timedelta(minutes=minutes)


def turn_window(start: datetime, duration_minutes: Optional[int] = None) -> Tuple[datetime, datetime]:
    """Window starting at ``start`` lasting the given or default turn duration"""
    if duration_minutes is None:
        duration_minutes = TURN_MINUTES
    return start, add_minutes(start, duration_minutes)


def to_utc_naive(dt: datetime) -> datetime:
    """Normalize an instant to naive UTC; naive input is taken as UTC"""
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(timezone.utc).replace(tzinfo=None)
