"""
Clock helpers shared by models and services.

Domain timestamps are integer milliseconds since the Unix epoch. Calendar
arithmetic (days, weeks, months) happens in the studio's configured timezone.
"""

from datetime import date, datetime, time, timedelta, timezone
from functools import lru_cache
from zoneinfo import ZoneInfo

from .config import settings


@lru_cache(maxsize=8)
def _zone(name: str) -> ZoneInfo:
    return ZoneInfo(name)


def studio_tz() -> ZoneInfo:
    """Timezone used for every calendar computation."""
    return _zone(settings.TIMEZONE)


def now_ms() -> int:
    return int(datetime.now(timezone.utc).timestamp() * 1000)


def local_now() -> datetime:
    return datetime.now(studio_tz())


def to_local(ms: int) -> datetime:
    """Convert epoch milliseconds to an aware datetime in the studio timezone."""
    return datetime.fromtimestamp(ms / 1000, tz=timezone.utc).astimezone(studio_tz())


def to_ms(value: datetime) -> int:
    """Convert a datetime to epoch milliseconds; naive values are read as studio time."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=studio_tz())
    return int(value.timestamp() * 1000)


def day_start_ms(day: date) -> int:
    return to_ms(datetime.combine(day, time.min))


def day_end_ms(day: date) -> int:
    """Last millisecond of ``day`` (23:59:59.999 local)."""
    return day_start_ms(day + timedelta(days=1)) - 1


def local_date(ms: int) -> date:
    return to_local(ms).date()
