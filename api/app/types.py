"""GraphQL types for the calculation API."""

from __future__ import annotations

from datetime import date
from typing import Optional

import strawberry


# --- Input types (request payloads) ---


@strawberry.input
class CurveInput:
    """Zero curve: name, pillars (year fractions), zero rates (continuously compounded).

    `scenario_shifts` turns the curve into one curve per scenario, each shifted
    in parallel by the given amount (0.0001 = 1bp).
    """

    name: str
    pillars: list[float]
    zero_rates_cc: list[float]
    scenario_shifts: Optional[list[float]] = None


@strawberry.input
class QuoteInput:
    """Quote for an identifier `scheme~value`; one value, or one value per scenario."""

    id: str
    values: list[float]
    field: str = "SettlementPrice"


@strawberry.input
class MarketDataInput:
    """Market data for a set of scenarios, all sharing one valuation date."""

    valuation_date: date
    curves: list[CurveInput]
    quotes: Optional[list[QuoteInput]] = None


@strawberry.input
class DiscountCurveInput:
    """Discount curve to use for a currency."""

    currency: str
    curve: str


@strawberry.input
class RepoCurveInput:
    """Repo curve for a security or, when no security is given, for an issuer."""

    currency: str
    curve: str
    security_id: Optional[str] = None
    issuer: Optional[str] = None


@strawberry.input
class IssuerCurveInput:
    """Issuer curve for a legal entity and currency."""

    issuer: str
    currency: str
    curve: str


@strawberry.input
class SwapTradeInput:
    """Fixed-float interest rate swap trade (receive float, pay fixed)."""

    currency: str
    notional: float
    fixed_rate: float
    start_date: date
    end_date: date
    frequency_months: int = 6
    trade_id: Optional[str] = None


@strawberry.input
class FixedCouponBondInput:
    """Deliverable fixed coupon bond."""

    security_id: str
    issuer: str
    notional: float
    fixed_rate: float
    start_date: date
    end_date: date
    frequency_months: int = 6


@strawberry.input
class BondFutureInput:
    """Bond future on a basket of deliverable bonds; prices are decimal (1.0 = par)."""

    security_id: str
    currency: str
    notional: float
    delivery_basket: list[FixedCouponBondInput]
    conversion_factors: list[float]
    last_trade_date: date
    first_notice_date: date
    last_notice_date: date


@strawberry.input
class BondFutureTradeInput:
    """Trade (or, with `position` set, position) in a bond future."""

    future: BondFutureInput
    quantity: float
    price: float = 0.0
    trade_date: Optional[date] = None
    trade_id: Optional[str] = None
    position: bool = False


# --- Output types (response payloads) ---


@strawberry.type
class AmountOutput:
    currency: str
    amount: float


@strawberry.type
class ScenarioAmounts:
    """Multi-currency amount of one scenario."""

    scenario: int
    amounts: list[AmountOutput]


@strawberry.type
class CurveSensitivityOutput:
    """Pillar sensitivities of one curve in one scenario."""

    scenario: int
    curve: str
    currency: str
    pillars: list[float]
    sensitivities: list[float]


@strawberry.type
class MeasureResult:
    """Result of one measure: `status` is SUCCESS or the failure reason.

    Exactly one of the value fields is set on success, depending on the shape
    of the measure.
    """

    measure: str
    status: str
    message: Optional[str] = None
    currency: Optional[str] = None
    values: Optional[list[float]] = None
    amounts: Optional[list[ScenarioAmounts]] = None
    sensitivities: Optional[list[CurveSensitivityOutput]] = None
    text: Optional[str] = None


@strawberry.type
class CalculationOutput:
    """Results for one target; `failure` is set when the whole target failed."""

    target_id: Optional[str] = None
    failure: Optional[str] = None
    results: list[MeasureResult] = strawberry.field(default_factory=list)
