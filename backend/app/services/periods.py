"""
Calendar range arithmetic for dashboards and histories.

All ranges are whole local days in the studio timezone and are exposed as
inclusive epoch-millisecond bounds, the last one ending at 23:59:59.999.
Sunday is the studio's only non-working day.
"""

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Iterator, List, Optional

from app.core.timeutils import day_end_ms, day_start_ms, local_now


class Period(str, Enum):
    """Named reporting periods."""
    TODAY = "today"
    YESTERDAY = "yesterday"
    WEEKLY = "weekly"
    WORK_WEEK = "work_week"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    CUSTOM = "custom"


SUNDAY = 6  # date.weekday()


@dataclass(frozen=True)
class DateRange:
    """Inclusive span of local calendar days."""
    first_day: date
    last_day: date

    @property
    def start_ms(self) -> int:
        return day_start_ms(self.first_day)

    @property
    def end_ms(self) -> int:
        return day_end_ms(self.last_day)

    def days(self) -> Iterator[date]:
        current = self.first_day
        while current <= self.last_day:
            yield current
            current += timedelta(days=1)

    def contains(self, ms: int) -> bool:
        return self.start_ms <= ms <= self.end_ms

    def to_dict(self) -> dict:
        return {
            "startDate": self.first_day.isoformat(),
            "endDate": self.last_day.isoformat(),
            "start": self.start_ms,
            "end": self.end_ms,
        }


def today() -> date:
    return local_now().date()


def week_start(day: date) -> date:
    """Monday of the week containing ``day``."""
    return day - timedelta(days=day.weekday())


def week_range(day: date, include_sunday: bool = True) -> DateRange:
    """
    Week containing ``day``.

    Args:
        day: Any day of the week
        include_sunday: Monday to Sunday when True, Monday to Saturday otherwise
    """
    monday = week_start(day)
    return DateRange(monday, monday + timedelta(days=6 if include_sunday else 5))


def month_range(year: int, month: int) -> DateRange:
    last = calendar.monthrange(year, month)[1]
    return DateRange(date(year, month, 1), date(year, month, last))


def year_range(year: int) -> DateRange:
    return DateRange(date(year, 1, 1), date(year, 12, 31))


def resolve_period(
    period: Period,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    reference: Optional[date] = None,
) -> DateRange:
    """
    Turn a named period into a concrete range.

    Args:
        period: The period to resolve
        start_date: First day for ``custom``
        end_date: Last day for ``custom``
        reference: Day treated as "today"; defaults to the current local date

    Returns:
        DateRange: The resolved range. A custom period with a single date is
        that day alone, with no dates it is today, and swapped dates are
        reordered.
    """
    ref = reference or today()

    if period == Period.TODAY:
        return DateRange(ref, ref)
    if period == Period.YESTERDAY:
        yesterday = ref - timedelta(days=1)
        return DateRange(yesterday, yesterday)
    if period == Period.WEEKLY:
        return week_range(ref)
    if period == Period.WORK_WEEK:
        return week_range(ref, include_sunday=False)
    if period == Period.MONTHLY:
        return month_range(ref.year, ref.month)
    if period == Period.YEARLY:
        return year_range(ref.year)

    # custom
    if start_date and end_date:
        first, last = sorted((start_date, end_date))
        return DateRange(first, last)
    single = start_date or end_date
    if single:
        return DateRange(single, single)
    return DateRange(ref, ref)


def working_days(rng: DateRange) -> int:
    """Days in the range that are not Sundays, never less than one."""
    count = sum(1 for day in rng.days() if day.weekday() != SUNDAY)
    return count or 1


@dataclass(frozen=True)
class WeekBucket:
    number: int
    range: DateRange

    @property
    def label(self) -> str:
        first, last = self.range.first_day, self.range.last_day
        return f"Sem {self.number} ({first.day}-{last.day})"


def weekly_buckets(year: int, month: int) -> List[WeekBucket]:
    """
    Working weeks (Monday to Saturday) of a month, clipped to the month.

    A Sunday that opens the month belongs to no bucket, and a week whose
    working days all fall outside the month is skipped.
    """
    month_rng = month_range(year, month)
    buckets: List[WeekBucket] = []
    monday = week_start(month_rng.first_day)

    while monday <= month_rng.last_day:
        saturday = monday + timedelta(days=5)
        first = max(monday, month_rng.first_day)
        last = min(saturday, month_rng.last_day)
        if first <= last:
            buckets.append(WeekBucket(len(buckets) + 1, DateRange(first, last)))
        monday += timedelta(days=7)

    return buckets
