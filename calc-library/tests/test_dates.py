"""Tests for calendars, conventions, day counts, schedules and reference data."""

from datetime import date

import pytest

from calculation.dates import (
    SAT_SUN,
    BusinessDayConvention,
    DayCount,
    HolidayCalendar,
    HolidayCalendarId,
    HolidayCalendarIds,
    plus_months,
)
from calculation.errors import ReferenceDataNotFoundError
from calculation.reference_data import ReferenceData
from calculation.schedule import periodic_schedule


def test_weekends_are_holidays() -> None:
    assert SAT_SUN.is_holiday(date(2024, 1, 13))  # Saturday
    assert SAT_SUN.is_business_day(date(2024, 1, 15))  # Monday


def test_shift_skips_holidays() -> None:
    cal = HolidayCalendar.of("Test", holidays=[date(2024, 1, 15)])
    # Friday + 1 business day skips the weekend and the Monday holiday
    assert cal.shift(date(2024, 1, 12), 1) == date(2024, 1, 16)
    assert cal.shift(date(2024, 1, 16), -1) == date(2024, 1, 12)


def test_calendar_needs_business_days() -> None:
    """A calendar whose every weekday is a weekend day could never roll a date."""
    with pytest.raises(ValueError, match="no business days"):
        HolidayCalendar.of("Closed", weekend_days=range(7))
    with pytest.raises(ValueError, match="within 0..6"):
        HolidayCalendar.of("Bad", weekend_days=[5, 7])


def test_business_day_conventions() -> None:
    saturday = date(2024, 8, 31)
    assert BusinessDayConvention.NO_ADJUST.adjust(saturday, SAT_SUN) == saturday
    assert BusinessDayConvention.FOLLOWING.adjust(saturday, SAT_SUN) == date(2024, 9, 2)
    assert BusinessDayConvention.PRECEDING.adjust(saturday, SAT_SUN) == date(2024, 8, 30)
    # modified following stays in August
    assert BusinessDayConvention.MODIFIED_FOLLOWING.adjust(saturday, SAT_SUN) == date(2024, 8, 30)


def test_day_counts() -> None:
    start, end = date(2024, 1, 31), date(2024, 7, 31)
    assert DayCount.ACT_365F.year_fraction(start, end) == pytest.approx(182 / 365)
    assert DayCount.ACT_360.year_fraction(start, end) == pytest.approx(182 / 360)
    assert DayCount.THIRTY_E_360.year_fraction(start, end) == pytest.approx(0.5)


def test_plus_months_clamps_day() -> None:
    assert plus_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
    assert plus_months(date(2024, 3, 15), -3) == date(2023, 12, 15)


def test_schedule_rolls_back_from_end() -> None:
    """Regular periods roll back from the end date; any stub is at the front."""
    periods = periodic_schedule(
        date(2024, 3, 1),
        date(2025, 1, 15),
        6,
        SAT_SUN,
        BusinessDayConvention.NO_ADJUST,
        DayCount.ACT_365F,
    )
    assert [p.unadjusted_start for p in periods] == [date(2024, 3, 1), date(2024, 7, 15)]
    assert periods[-1].end == date(2025, 1, 15)
    assert periods[0].contains(date(2024, 3, 1))
    assert not periods[0].contains(date(2024, 7, 15))


def test_schedule_rejects_bad_dates() -> None:
    with pytest.raises(ValueError):
        periodic_schedule(
            date(2025, 1, 1),
            date(2024, 1, 1),
            6,
            SAT_SUN,
            BusinessDayConvention.NO_ADJUST,
            DayCount.ACT_365F,
        )


def test_reference_data_lookup() -> None:
    ref_data = ReferenceData.standard()
    assert ref_data.lookup(HolidayCalendar, HolidayCalendarIds.SAT_SUN) is SAT_SUN
    with pytest.raises(ReferenceDataNotFoundError, match="Unknown"):
        ref_data.lookup(HolidayCalendar, HolidayCalendarId("Unknown"))
    with pytest.raises(TypeError):
        ReferenceData.of({"x": 1}).lookup(HolidayCalendar, "x")


def test_reference_data_combined_with_prefers_self() -> None:
    cal = HolidayCalendar.of("SatSun", holidays=[date(2024, 12, 25)])
    combined = ReferenceData.of({cal.id: cal}).combined_with(ReferenceData.standard())
    assert combined.lookup(HolidayCalendar, HolidayCalendarIds.SAT_SUN) is cal
    assert combined.contains(HolidayCalendarIds.NO_HOLIDAYS)
    assert len(combined) == 2
