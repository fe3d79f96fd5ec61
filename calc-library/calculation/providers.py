"""
Discounting providers: per-scenario access to curves for pricers.

A provider reads curves lazily from one scenario's `MarketData`, so a missing
curve only fails the calculations that actually need it. Bumped copies for
risk are made with `with_curve`, which leaves the original untouched.
"""

from __future__ import annotations

import copy
from datetime import date
from typing import TYPE_CHECKING, Mapping

from calculation.dates import DayCount
from calculation.interfaces import Curve
from calculation.market_data import CurveId, MarketData

if TYPE_CHECKING:
    from calculation.currency import Currency
    from calculation.identifiers import LegalEntityId, SecurityId
    from calculation.lookup.legal_entity import LegalEntityDiscountingMarketDataLookup
    from calculation.lookup.rates import RatesMarketDataLookup

# curves are parameterised by Act/365F year fractions from the valuation date
CURVE_DAY_COUNT = DayCount.ACT_365F


class DiscountingProvider:
    """Curves of one scenario plus any overrides applied for bump-and-reprice."""

    def __init__(
        self,
        market_data: MarketData,
        overrides: Mapping[CurveId, Curve] | None = None,
    ) -> None:
        self._market_data = market_data
        self._overrides: dict[CurveId, Curve] = dict(overrides) if overrides else {}

    @property
    def valuation_date(self) -> date:
        return self._market_data.valuation_date

    @property
    def market_data(self) -> MarketData:
        return self._market_data

    def curve(self, curve_id: CurveId) -> Curve:
        """Curve by id. Raises MissingMarketDataError if not in market data."""
        if curve_id in self._overrides:
            return self._overrides[curve_id]
        return self._market_data.value(curve_id)

    def discount_factor(self, curve_id: CurveId, on_date: date) -> float:
        """Discount factor from `on_date` back to the valuation date; 1 for past dates."""
        t = CURVE_DAY_COUNT.year_fraction(self.valuation_date, on_date)
        if t <= 0:
            return 1.0
        return self.curve(curve_id).df(t)

    def with_curve(self, curve_id: CurveId, curve: Curve) -> "DiscountingProvider":
        """Return a new provider with the given curve replaced."""
        # Copy-on-write: the original provider keeps its curves.
        bumped = copy.copy(self)
        bumped._overrides = {**self._overrides, curve_id: curve}
        return bumped


class RatesProvider(DiscountingProvider):
    """Discount curves by currency."""

    def __init__(
        self,
        lookup: "RatesMarketDataLookup",
        market_data: MarketData,
        overrides: Mapping[CurveId, Curve] | None = None,
    ) -> None:
        super().__init__(market_data, overrides)
        self._lookup = lookup

    def discount_curve_id(self, currency: "Currency") -> CurveId:
        return self._lookup.discount_curve_id(currency)

    def discount_factor_in(self, currency: "Currency", on_date: date) -> float:
        return self.discount_factor(self.discount_curve_id(currency), on_date)


class LegalEntityDiscountingProvider(DiscountingProvider):
    """Repo curves by security/issuer and issuer curves by legal entity and currency."""

    def __init__(
        self,
        lookup: "LegalEntityDiscountingMarketDataLookup",
        market_data: MarketData,
        overrides: Mapping[CurveId, Curve] | None = None,
    ) -> None:
        super().__init__(market_data, overrides)
        self._lookup = lookup

    def repo_discount_factor(
        self,
        security_id: "SecurityId",
        legal_entity_id: "LegalEntityId",
        currency: "Currency",
        on_date: date,
    ) -> float:
        curve_id = self._lookup.repo_curve_id(security_id, legal_entity_id, currency)
        return self.discount_factor(curve_id, on_date)

    def issuer_discount_factor(
        self,
        legal_entity_id: "LegalEntityId",
        currency: "Currency",
        on_date: date,
    ) -> float:
        curve_id = self._lookup.issuer_curve_id(legal_entity_id, currency)
        return self.discount_factor(curve_id, on_date)
