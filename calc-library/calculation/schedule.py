"""Periodic schedule generation for coupon-bearing products."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from calculation.dates import BusinessDayConvention, DayCount, HolidayCalendar, plus_months


@dataclass(frozen=True)
class SchedulePeriod:
    """One accrual period: unadjusted and adjusted boundaries plus its year fraction."""

    unadjusted_start: date
    unadjusted_end: date
    start: date
    end: date
    year_fraction: float

    def contains(self, d: date) -> bool:
        return self.start <= d < self.end


def periodic_schedule(
    start: date,
    end: date,
    frequency_months: int,
    cal: HolidayCalendar,
    convention: BusinessDayConvention,
    day_count: DayCount,
) -> tuple[SchedulePeriod, ...]:
    """
    Build periods rolling backwards from `end`, leaving any stub at the front.

    Start and end dates are adjusted like every other boundary.
    """
    if frequency_months <= 0:
        raise ValueError("frequency_months must be > 0")
    if end <= start:
        raise ValueError(f"Schedule end {end} must be after start {start}")
    boundaries = [end]
    n = 1
    while True:
        d = plus_months(end, -frequency_months * n)
        if d <= start:
            break
        boundaries.append(d)
        n += 1
    boundaries.append(start)
    boundaries.reverse()
    periods = []
    for unadj_start, unadj_end in zip(boundaries[:-1], boundaries[1:]):
        adj_start = convention.adjust(unadj_start, cal)
        adj_end = convention.adjust(unadj_end, cal)
        periods.append(
            SchedulePeriod(
                unadjusted_start=unadj_start,
                unadjusted_end=unadj_end,
                start=adj_start,
                end=adj_end,
                year_fraction=day_count.year_fraction(adj_start, adj_end),
            )
        )
    return tuple(periods)
