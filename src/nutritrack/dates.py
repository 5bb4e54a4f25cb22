"""
Calendar-day helpers and the injectable clock.

All datetimes are stored as timezone-aware absolute instants. Grouping
by "day" converts them into a single reference time zone first, so two
instants share a calendar day only if their local year/month/day match
in that zone.
"""

import calendar
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Callable, Iterable, List
from zoneinfo import ZoneInfo

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Default clock: the current instant in UTC."""
    return datetime.now(timezone.utc)


def ensure_aware(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def resolve_timezone(name: str) -> tzinfo:
    """Map a configured zone name to a tzinfo ("UTC" needs no tz database)."""
    if not name or name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)


def add_months(day: date, months: int) -> date:
    """Shift a date by whole months, clamping to the last day of the month."""
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


class CalendarDays:
    """Calendar-day arithmetic in a fixed reference time zone."""

    def __init__(self, tz: tzinfo = timezone.utc):
        self.tz = tz

    def day_of(self, value: datetime) -> date:
        return ensure_aware(value).astimezone(self.tz).date()

    def shift_days(self, value: datetime, days: int) -> datetime:
        """Move by whole calendar days, keeping the local wall-clock time."""
        local = ensure_aware(value).astimezone(self.tz)
        return local + timedelta(days=days)

    def window(self, anchor: datetime, days: int) -> List[date]:
        """The ``days`` calendar days ending at ``anchor``'s day, inclusive."""
        end = self.day_of(anchor)
        return [end - timedelta(days=offset) for offset in range(days - 1, -1, -1)]

    def month_window(self, anchor: datetime) -> tuple:
        """(first, last) calendar days of the trailing month ending at ``anchor``."""
        end = self.day_of(anchor)
        return add_months(end, -1), end

    def distinct_days(self, values: Iterable[datetime]) -> List[date]:
        """Sorted distinct calendar days (most recent first)."""
        return sorted({self.day_of(v) for v in values}, reverse=True)
