"""Rates market data lookup: discount curves by currency."""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import MappingProxyType
from concurrent.futures import Executor
from typing import Mapping, Optional

from calculation.currency import Currency
from calculation.errors import MissingMarketDataError
from calculation.market_data import CurveId, MarketData, ScenarioMarketData
from calculation.parameters import CalculationParameter
from calculation.providers import RatesProvider
from calculation.requirements import FunctionRequirements


class RatesMarketDataLookup(CalculationParameter, ABC):
    """Lookup providing discount curves by currency.

    Stored in `CalculationParameters` under `RatesMarketDataLookup` whatever the
    implementation.
    """

    def query_type(self) -> type:
        return RatesMarketDataLookup

    @property
    @abstractmethod
    def discount_currencies(self) -> frozenset[Currency]:
        """Currencies with a discount curve."""
        ...

    @abstractmethod
    def discount_curve_id(self, currency: Currency) -> CurveId:
        """Discount curve id for `currency`. Raises MissingMarketDataError if not configured."""
        ...

    def requirements(self, *currencies: Currency) -> FunctionRequirements:
        """Discount curves for the currencies, which also become output currencies."""
        return FunctionRequirements.of(
            value_requirements=[self.discount_curve_id(c) for c in currencies],
            output_currencies=currencies,
        )

    def market_data_view(
        self, market_data: ScenarioMarketData, executor: Optional[Executor] = None
    ) -> "RatesScenarioMarketData":
        return RatesScenarioMarketData(self, market_data, executor)


class DefaultRatesMarketDataLookup(RatesMarketDataLookup):
    """Rates lookup backed by a fixed currency to curve mapping."""

    def __init__(self, discount_curves: Mapping[Currency, CurveId]) -> None:
        self._discount_curves = MappingProxyType(dict(discount_curves))

    @classmethod
    def of(cls, discount_curves: Mapping[Currency, CurveId]) -> "DefaultRatesMarketDataLookup":
        return cls(discount_curves)

    @property
    def discount_currencies(self) -> frozenset[Currency]:
        return frozenset(self._discount_curves)

    def discount_curve_id(self, currency: Currency) -> CurveId:
        try:
            return self._discount_curves[currency]
        except KeyError:
            raise MissingMarketDataError(
                f"Rates lookup has no discount curve defined for currency '{currency}'"
            ) from None

    def __repr__(self) -> str:
        curves = {str(c): v.name for c, v in self._discount_curves.items()}
        return f"DefaultRatesMarketDataLookup({curves})"


class RatesScenarioMarketData:
    """Rates view over scenario market data.

    Measures spread their scenarios over `executor` when one is set.
    """

    def __init__(
        self,
        lookup: RatesMarketDataLookup,
        market_data: ScenarioMarketData,
        executor: Optional[Executor] = None,
    ) -> None:
        self.lookup = lookup
        self.market_data = market_data
        self.executor = executor

    @property
    def scenario_count(self) -> int:
        return self.market_data.scenario_count

    def scenario(self, scenario_index: int) -> "RatesMarketData":
        return RatesMarketData(self.lookup, self.market_data.scenario(scenario_index))


class RatesMarketData:
    """Rates view over one scenario."""

    def __init__(self, lookup: RatesMarketDataLookup, market_data: MarketData) -> None:
        self.lookup = lookup
        self.market_data = market_data

    @property
    def valuation_date(self):
        return self.market_data.valuation_date

    def rates_provider(self) -> RatesProvider:
        return RatesProvider(self.lookup, self.market_data)
