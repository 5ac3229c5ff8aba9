"""Restaurant-local day boundaries"""

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Tuple
from zoneinfo import ZoneInfo

from host_console.config import settings


def _zone(tz_name: Optional[str]) -> ZoneInfo:
    return ZoneInfo(tz_name or settings.default_timezone)


def utcnow() -> datetime:
    """Current instant as naive UTC"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_local(instant: datetime, tz_name: Optional[str]) -> datetime:
    """Naive UTC instant as an aware restaurant-local datetime"""
    return instant.replace(tzinfo=timezone.utc).astimezone(_zone(tz_name))


def local_day(instant: datetime, tz_name: Optional[str]) -> date:
    return to_local(instant, tz_name).date()


def day_bounds(day: date, tz_name: Optional[str]) -> Tuple[datetime, datetime]:
    """Restaurant-local day as a naive UTC window ``[start, end)``"""
    zone = _zone(tz_name)
    start = datetime.combine(day, time.min, tzinfo=zone)
    end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=zone)
    return (
        start.astimezone(timezone.utc).replace(tzinfo=None),
        end.astimezone(timezone.utc).replace(tzinfo=None),
    )
