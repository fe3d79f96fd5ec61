"""
Legal entity discounting lookup: repo and issuer curves for bonds.

Repo curves are configured per security, falling back to the issuing legal
entity; issuer curves are configured per (legal entity, currency).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from concurrent.futures import Executor
from types import MappingProxyType
from typing import Mapping, Optional, Union

from calculation.currency import Currency
from calculation.errors import MissingMarketDataError
from calculation.identifiers import LegalEntityId, SecurityId
from calculation.market_data import CurveId, MarketData, ScenarioMarketData
from calculation.parameters import CalculationParameter
from calculation.providers import LegalEntityDiscountingProvider
from calculation.requirements import FunctionRequirements

RepoGroupKey = Union[SecurityId, LegalEntityId]


class LegalEntityDiscountingMarketDataLookup(CalculationParameter, ABC):
    """Lookup providing repo and issuer curves for securities of legal entities.

    Stored in `CalculationParameters` under
    `LegalEntityDiscountingMarketDataLookup` whatever the implementation.
    """

    def query_type(self) -> type:
        return LegalEntityDiscountingMarketDataLookup

    @abstractmethod
    def repo_curve_id(
        self, security_id: SecurityId, legal_entity_id: LegalEntityId, currency: Currency
    ) -> CurveId:
        """Repo curve id. Raises MissingMarketDataError if not configured."""
        ...

    @abstractmethod
    def issuer_curve_id(self, legal_entity_id: LegalEntityId, currency: Currency) -> CurveId:
        """Issuer curve id. Raises MissingMarketDataError if not configured."""
        ...

    def requirements(
        self, security_id: SecurityId, legal_entity_id: LegalEntityId, currency: Currency
    ) -> FunctionRequirements:
        """Repo and issuer curves for a security, with its currency as output currency."""
        return FunctionRequirements.of(
            value_requirements=[
                self.repo_curve_id(security_id, legal_entity_id, currency),
                self.issuer_curve_id(legal_entity_id, currency),
            ],
            output_currencies=[currency],
        )

    def market_data_view(
        self, market_data: ScenarioMarketData, executor: Optional[Executor] = None
    ) -> "LegalEntityDiscountingScenarioMarketData":
        return LegalEntityDiscountingScenarioMarketData(self, market_data, executor)


class DefaultLegalEntityDiscountingMarketDataLookup(LegalEntityDiscountingMarketDataLookup):
    """Legal entity lookup backed by fixed curve mappings."""

    def __init__(
        self,
        repo_curves: Mapping[tuple[RepoGroupKey, Currency], CurveId],
        issuer_curves: Mapping[tuple[LegalEntityId, Currency], CurveId],
    ) -> None:
        self._repo_curves = MappingProxyType(dict(repo_curves))
        self._issuer_curves = MappingProxyType(dict(issuer_curves))

    @classmethod
    def of(
        cls,
        repo_curves: Mapping[tuple[RepoGroupKey, Currency], CurveId],
        issuer_curves: Mapping[tuple[LegalEntityId, Currency], CurveId],
    ) -> "DefaultLegalEntityDiscountingMarketDataLookup":
        return cls(repo_curves, issuer_curves)

    def repo_curve_id(
        self, security_id: SecurityId, legal_entity_id: LegalEntityId, currency: Currency
    ) -> CurveId:
        curve_id: Optional[CurveId] = self._repo_curves.get((security_id, currency))
        if curve_id is None:
            curve_id = self._repo_curves.get((legal_entity_id, currency))
        if curve_id is None:
            raise MissingMarketDataError(
                f"Legal entity discounting lookup has no repo curve defined for "
                f"'{security_id}' and '{legal_entity_id}' in {currency}"
            )
        return curve_id

    def issuer_curve_id(self, legal_entity_id: LegalEntityId, currency: Currency) -> CurveId:
        try:
            return self._issuer_curves[(legal_entity_id, currency)]
        except KeyError:
            raise MissingMarketDataError(
                f"Legal entity discounting lookup has no issuer curve defined for "
                f"'{legal_entity_id}' in {currency}"
            ) from None


class LegalEntityDiscountingScenarioMarketData:
    """Legal entity discounting view over scenario market data."""

    def __init__(
        self,
        lookup: LegalEntityDiscountingMarketDataLookup,
        market_data: ScenarioMarketData,
        executor: Optional[Executor] = None,
    ) -> None:
        self.lookup = lookup
        self.market_data = market_data
        self.executor = executor

    @property
    def scenario_count(self) -> int:
        return self.market_data.scenario_count

    def scenario(self, scenario_index: int) -> "LegalEntityDiscountingMarketData":
        return LegalEntityDiscountingMarketData(self.lookup, self.market_data.scenario(scenario_index))


class LegalEntityDiscountingMarketData:
    """Legal entity discounting view over one scenario."""

    def __init__(self, lookup: LegalEntityDiscountingMarketDataLookup, market_data: MarketData) -> None:
        self.lookup = lookup
        self.market_data = market_data

    @property
    def valuation_date(self):
        return self.market_data.valuation_date

    def discounting_provider(self) -> LegalEntityDiscountingProvider:
        return LegalEntityDiscountingProvider(self.lookup, self.market_data)
