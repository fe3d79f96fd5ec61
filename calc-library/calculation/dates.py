"""
Holiday calendars, business day conventions and day counts.

Calendars are reference data: products name them by `HolidayCalendarId` and
the concrete calendar is looked up when the product is resolved.
"""

from __future__ import annotations

import calendar as _calendar
from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum
from typing import Iterable

SATURDAY = 5
SUNDAY = 6


@dataclass(frozen=True, order=True)
class HolidayCalendarId:
    """Reference data key of a holiday calendar."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class HolidayCalendar:
    """Set of holidays plus weekend days (0=Monday .. 6=Sunday)."""

    id: HolidayCalendarId
    holidays: frozenset[date] = frozenset()
    weekend_days: frozenset[int] = field(default_factory=lambda: frozenset({SATURDAY, SUNDAY}))

    def __post_init__(self) -> None:
        if not self.weekend_days <= frozenset(range(7)):
            raise ValueError(f"weekend days must be within 0..6, got {sorted(self.weekend_days)}")
        if len(self.weekend_days) == 7:
            raise ValueError(f"calendar '{self.id}' has no business days")

    @classmethod
    def of(
        cls,
        name: str,
        holidays: Iterable[date] = (),
        weekend_days: Iterable[int] = (SATURDAY, SUNDAY),
    ) -> "HolidayCalendar":
        return cls(HolidayCalendarId(name), frozenset(holidays), frozenset(weekend_days))

    def is_holiday(self, d: date) -> bool:
        return d.weekday() in self.weekend_days or d in self.holidays

    def is_business_day(self, d: date) -> bool:
        return not self.is_holiday(d)

    def next_or_same(self, d: date) -> date:
        while self.is_holiday(d):
            d += timedelta(days=1)
        return d

    def previous_or_same(self, d: date) -> date:
        while self.is_holiday(d):
            d -= timedelta(days=1)
        return d

    def shift(self, d: date, business_days: int) -> date:
        """Move `business_days` business days forward (or backward if negative)."""
        step = timedelta(days=1 if business_days >= 0 else -1)
        remaining = abs(business_days)
        while remaining > 0:
            d += step
            if self.is_business_day(d):
                remaining -= 1
        return d


class HolidayCalendarIds:
    """Calendars available in standard reference data."""

    NO_HOLIDAYS = HolidayCalendarId("NoHolidays")
    SAT_SUN = HolidayCalendarId("SatSun")


NO_HOLIDAYS = HolidayCalendar(HolidayCalendarIds.NO_HOLIDAYS, frozenset(), frozenset())
SAT_SUN = HolidayCalendar(HolidayCalendarIds.SAT_SUN)


class BusinessDayConvention(str, Enum):
    """How a date falling on a holiday is adjusted."""

    NO_ADJUST = "NoAdjust"
    FOLLOWING = "Following"
    MODIFIED_FOLLOWING = "ModifiedFollowing"
    PRECEDING = "Preceding"

    def adjust(self, d: date, cal: HolidayCalendar) -> date:
        if self is BusinessDayConvention.NO_ADJUST:
            return d
        if self is BusinessDayConvention.FOLLOWING:
            return cal.next_or_same(d)
        if self is BusinessDayConvention.PRECEDING:
            return cal.previous_or_same(d)
        adjusted = cal.next_or_same(d)
        # modified following stays within the month
        return adjusted if adjusted.month == d.month else cal.previous_or_same(d)


class DayCount(str, Enum):
    """Day count conventions used to turn date intervals into year fractions."""

    ACT_365F = "Act/365F"
    ACT_360 = "Act/360"
    THIRTY_E_360 = "30E/360"

    def year_fraction(self, start: date, end: date) -> float:
        if self is DayCount.ACT_365F:
            return (end - start).days / 365.0
        if self is DayCount.ACT_360:
            return (end - start).days / 360.0
        d1 = min(start.day, 30)
        d2 = min(end.day, 30)
        days = 360 * (end.year - start.year) + 30 * (end.month - start.month) + (d2 - d1)
        return days / 360.0


def plus_months(d: date, months: int) -> date:
    """Add calendar months, clamping the day to the end of the target month."""
    month_index = d.month - 1 + months
    year = d.year + month_index // 12
    month = month_index % 12 + 1
    day = min(d.day, _calendar.monthrange(year, month)[1])
    return date(year, month, day)
