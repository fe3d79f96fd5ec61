"""Fixed coupon bond (instrument data only; pricing via the bond future pricer)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from calculation.currency import Currency
from calculation.dates import BusinessDayConvention, DayCount, HolidayCalendar, HolidayCalendarId, HolidayCalendarIds
from calculation.identifiers import LegalEntityId, SecurityId
from calculation.reference_data import ReferenceData
from calculation.schedule import SchedulePeriod, periodic_schedule


@dataclass(frozen=True)
class FixedCouponBond:
    """
    Fixed coupon bond issued by a legal entity.

    Coupons of `notional * fixed_rate * year_fraction` are paid at the end of
    each period of a schedule rolling back from `end_date`; the notional is
    repaid on the last payment date.
    """

    security_id: SecurityId
    legal_entity_id: LegalEntityId
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
        if self.notional <= 0:
            raise ValueError("notional must be > 0")
        if self.end_date <= self.start_date:
            raise ValueError("end_date must be after start_date")

    def resolve(self, ref_data: ReferenceData) -> "ResolvedFixedCouponBond":
        cal = ref_data.lookup(HolidayCalendar, self.calendar)
        periods = periodic_schedule(
            self.start_date,
            self.end_date,
            self.frequency_months,
            cal,
            self.convention,
            self.day_count,
        )
        return ResolvedFixedCouponBond(
            security_id=self.security_id,
            legal_entity_id=self.legal_entity_id,
            currency=self.currency,
            notional=self.notional,
            fixed_rate=self.fixed_rate,
            day_count=self.day_count,
            periods=periods,
        )


@dataclass(frozen=True)
class ResolvedFixedCouponBond:
    """Fixed coupon bond with its coupon schedule fixed."""

    security_id: SecurityId
    legal_entity_id: LegalEntityId
    currency: Currency
    notional: float
    fixed_rate: float
    day_count: DayCount
    periods: tuple[SchedulePeriod, ...]

    @property
    def maturity_date(self) -> date:
        return self.periods[-1].end

    def coupon(self, period: SchedulePeriod) -> float:
        return self.notional * self.fixed_rate * period.year_fraction

    def accrued_interest(self, settlement_date: date) -> float:
        """Accrued coupon at `settlement_date`, as an amount."""
        for period in self.periods:
            if period.contains(settlement_date):
                accrual = self.day_count.year_fraction(period.start, settlement_date)
                return self.notional * self.fixed_rate * accrual
        return 0.0
