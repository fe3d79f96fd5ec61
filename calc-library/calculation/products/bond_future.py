"""
Bond future: a future on a basket of deliverable fixed coupon bonds.

`BondFutureTrade` and `BondFuturePosition` both resolve to a
`ResolvedBondFutureTrade`, so one calculation function serves both.
Prices are decimal (1.0 = par).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from calculation.currency import Currency
from calculation.dates import HolidayCalendar, HolidayCalendarId, HolidayCalendarIds
from calculation.identifiers import SecurityId
from calculation.products.bond import FixedCouponBond, ResolvedFixedCouponBond
from calculation.products.common import PositionInfo, TradedPrice, TradeInfo
from calculation.reference_data import ReferenceData


@dataclass(frozen=True)
class BondFuture:
    """
    Bond future product.

    `conversion_factors[i]` applies to `delivery_basket[i]`. When not given,
    the first delivery date is the business day after the first notice date
    and the last delivery date the business day after the last notice date.
    """

    security_id: SecurityId
    currency: Currency
    notional: float
    delivery_basket: tuple[FixedCouponBond, ...]
    conversion_factors: tuple[float, ...]
    last_trade_date: date
    first_notice_date: date
    last_notice_date: date
    first_delivery_date: Optional[date] = None
    last_delivery_date: Optional[date] = None
    calendar: HolidayCalendarId = HolidayCalendarIds.SAT_SUN

    def __post_init__(self) -> None:
        object.__setattr__(self, "delivery_basket", tuple(self.delivery_basket))
        object.__setattr__(self, "conversion_factors", tuple(self.conversion_factors))
        self._validate()

    def _validate(self) -> None:
        if not self.delivery_basket:
            raise ValueError("delivery_basket must not be empty")
        if len(self.delivery_basket) != len(self.conversion_factors):
            raise ValueError("delivery_basket and conversion_factors must have the same length")
        if any(cf <= 0 for cf in self.conversion_factors):
            raise ValueError("conversion_factors must be > 0")
        if any(bond.currency != self.currency for bond in self.delivery_basket):
            raise ValueError("all bonds in the delivery basket must be in the future's currency")
        if self.last_notice_date < self.first_notice_date:
            raise ValueError("last_notice_date must not be before first_notice_date")

    def resolve(self, ref_data: ReferenceData) -> "ResolvedBondFuture":
        cal = ref_data.lookup(HolidayCalendar, self.calendar)
        first_delivery = self.first_delivery_date or cal.shift(self.first_notice_date, 1)
        last_delivery = self.last_delivery_date or cal.shift(self.last_notice_date, 1)
        return ResolvedBondFuture(
            security_id=self.security_id,
            currency=self.currency,
            notional=self.notional,
            delivery_basket=tuple(bond.resolve(ref_data) for bond in self.delivery_basket),
            conversion_factors=self.conversion_factors,
            last_trade_date=self.last_trade_date,
            first_notice_date=self.first_notice_date,
            last_notice_date=self.last_notice_date,
            first_delivery_date=first_delivery,
            last_delivery_date=last_delivery,
        )


@dataclass(frozen=True)
class ResolvedBondFuture:
    """Bond future with every date and coupon schedule fixed."""

    security_id: SecurityId
    currency: Currency
    notional: float
    delivery_basket: tuple[ResolvedFixedCouponBond, ...]
    conversion_factors: tuple[float, ...]
    last_trade_date: date
    first_notice_date: date
    last_notice_date: date
    first_delivery_date: date
    last_delivery_date: date


@dataclass(frozen=True)
class ResolvedBondFutureTrade:
    """Resolved trade or position in a bond future."""

    info: TradeInfo
    product: ResolvedBondFuture
    quantity: float
    traded_price: Optional[TradedPrice] = None


@dataclass(frozen=True)
class BondFutureTrade:
    """Trade in a bond future at a given price."""

    info: TradeInfo
    product: BondFuture
    quantity: float
    price: float

    @property
    def currency(self) -> Currency:
        return self.product.currency

    def resolve(self, ref_data: ReferenceData) -> ResolvedBondFutureTrade:
        traded_price = None
        if self.info.trade_date is not None:
            traded_price = TradedPrice(self.info.trade_date, self.price)
        return ResolvedBondFutureTrade(
            info=self.info,
            product=self.product.resolve(ref_data),
            quantity=self.quantity,
            traded_price=traded_price,
        )


@dataclass(frozen=True)
class BondFuturePosition:
    """Position in a bond future: long and short quantities, no traded price."""

    info: PositionInfo
    product: BondFuture
    long_quantity: float
    short_quantity: float = 0.0

    @property
    def currency(self) -> Currency:
        return self.product.currency

    @property
    def quantity(self) -> float:
        return self.long_quantity - self.short_quantity

    def resolve(self, ref_data: ReferenceData) -> ResolvedBondFutureTrade:
        return ResolvedBondFutureTrade(
            info=self.info.to_trade_info(),
            product=self.product.resolve(ref_data),
            quantity=self.quantity,
        )
