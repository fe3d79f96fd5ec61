"""Fixed-float interest rate swap (single curve; instrument data only)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from calculation.currency import Currency
from calculation.dates import BusinessDayConvention, DayCount, HolidayCalendar, HolidayCalendarId, HolidayCalendarIds
from calculation.products.common import TradeInfo
from calculation.reference_data import ReferenceData
from calculation.schedule import SchedulePeriod, periodic_schedule


@dataclass(frozen=True)
class FixedFloatSwap:
    """
    Fixed vs float swap (single curve).
    Receive float, pay fixed; both legs share one schedule.
    """

    currency: Currency
    notional: float
    fixed_rate: float
    start_date: date
    end_date: date
    frequency_months: int = 6
    calendar: HolidayCalendarId = HolidayCalendarIds.SAT_SUN
    convention: BusinessDayConvention = BusinessDayConvention.MODIFIED_FOLLOWING
    day_count: DayCount = DayCount.ACT_365F

    def __post_init__(self) -> None:
        if self.end_date <= self.start_date:
            raise ValueError("end_date must be after start_date")

    def resolve(self, ref_data: ReferenceData) -> "ResolvedFixedFloatSwap":
        cal = ref_data.lookup(HolidayCalendar, self.calendar)
        periods = periodic_schedule(
            self.start_date,
            self.end_date,
            self.frequency_months,
            cal,
            self.convention,
            self.day_count,
        )
        return ResolvedFixedFloatSwap(
            currency=self.currency,
            notional=self.notional,
            fixed_rate=self.fixed_rate,
            periods=periods,
        )


@dataclass(frozen=True)
class ResolvedFixedFloatSwap:
    """Swap with its payment schedule fixed."""

    currency: Currency
    notional: float
    fixed_rate: float
    periods: tuple[SchedulePeriod, ...]


@dataclass(frozen=True)
class ResolvedSwapTrade:
    info: TradeInfo
    product: ResolvedFixedFloatSwap


@dataclass(frozen=True)
class SwapTrade:
    """Trade in a fixed-float swap."""

    info: TradeInfo
    product: FixedFloatSwap

    @property
    def currency(self) -> Currency:
        return self.product.currency

    def resolve(self, ref_data: ReferenceData) -> ResolvedSwapTrade:
        return ResolvedSwapTrade(info=self.info, product=self.product.resolve(ref_data))
