"""
Calculations on a single `BondFutureTrade` or `BondFuturePosition` for each of
a set of scenarios.

This uses the standard discounting calculation method. An instance of
`LegalEntityDiscountingMarketDataLookup` must be present in the calculation
parameters. The supported built-in measures are:

- present value
- PV01 calibrated sum
- PV01 calibrated bucketed
- unit price
- par spread
- currency exposure
- resolved trade

Bond futures use decimal prices in the trade model, pricers and market data;
the settlement price quote must be decimal too.
"""

from __future__ import annotations

from typing import Optional, Union

from calculation.currency import CurrencyAmount
from calculation.function import MeasureCalculationFunction, MeasureDispatchTable
from calculation.identifiers import SecurityId
from calculation.lookup.legal_entity import (
    LegalEntityDiscountingMarketData,
    LegalEntityDiscountingMarketDataLookup,
    LegalEntityDiscountingScenarioMarketData,
)
from calculation.market_data import CurveId, FieldName, QuoteId
from calculation.measures import Measures
from calculation.pricers.bond_future_pricer import DiscountingBondFutureTradePricer
from calculation.products.bond_future import BondFuturePosition, BondFutureTrade, ResolvedBondFutureTrade
from calculation.providers import LegalEntityDiscountingProvider
from calculation.requirements import FunctionRequirements
from calculation.risk import PV01CalibratedBucketed, PV01CalibratedSum
from calculation.scenario import CurrencyScenarioArray, DoubleScenarioArray, MultiCurrencyScenarioArray, ScenarioArray
from calculation.sensitivity import CurveSensitivities


def settlement_price_id(security_id: SecurityId) -> QuoteId:
    return QuoteId(security_id.standard_id, FieldName.SETTLEMENT_PRICE)


class BondFutureMeasureCalculations:
    """Multi-scenario measure calculations for bond futures."""

    def __init__(self, trade_pricer: Optional[DiscountingBondFutureTradePricer] = None) -> None:
        self.trade_pricer = trade_pricer or DiscountingBondFutureTradePricer()
        self._pv01_sum = PV01CalibratedSum()
        self._pv01_bucketed = PV01CalibratedBucketed()

    # present value for all scenarios
    def present_value(
        self,
        resolved: ResolvedBondFutureTrade,
        market_data: LegalEntityDiscountingScenarioMarketData,
    ) -> CurrencyScenarioArray:
        return CurrencyScenarioArray.of_scenarios(
            market_data.scenario_count,
            lambda i: self._present_value(resolved, market_data.scenario(i)),
            market_data.executor,
        )

    def pv01_calibrated_sum(
        self,
        resolved: ResolvedBondFutureTrade,
        market_data: LegalEntityDiscountingScenarioMarketData,
    ) -> MultiCurrencyScenarioArray:
        return MultiCurrencyScenarioArray.of_scenarios(
            market_data.scenario_count,
            lambda i: self._pv01_sum.compute(*self._risk_inputs(resolved, market_data.scenario(i))),
            market_data.executor,
        )

    def pv01_calibrated_bucketed(
        self,
        resolved: ResolvedBondFutureTrade,
        market_data: LegalEntityDiscountingScenarioMarketData,
    ) -> ScenarioArray[CurveSensitivities]:
        return ScenarioArray.of_scenarios(
            market_data.scenario_count,
            lambda i: self._pv01_bucketed.compute(*self._risk_inputs(resolved, market_data.scenario(i))),
            market_data.executor,
        )

    def unit_price(
        self,
        resolved: ResolvedBondFutureTrade,
        market_data: LegalEntityDiscountingScenarioMarketData,
    ) -> DoubleScenarioArray:
        return DoubleScenarioArray.of_scenarios(
            market_data.scenario_count,
            lambda i: self.trade_pricer.price(resolved, market_data.scenario(i).discounting_provider()),
            market_data.executor,
        )

    def par_spread(
        self,
        resolved: ResolvedBondFutureTrade,
        market_data: LegalEntityDiscountingScenarioMarketData,
    ) -> DoubleScenarioArray:
        def calc(i: int) -> float:
            md = market_data.scenario(i)
            settlement = md.market_data.value(settlement_price_id(resolved.product.security_id))
            return self.trade_pricer.par_spread(resolved, md.discounting_provider(), settlement)

        return DoubleScenarioArray.of_scenarios(market_data.scenario_count, calc, market_data.executor)

    def currency_exposure(
        self,
        resolved: ResolvedBondFutureTrade,
        market_data: LegalEntityDiscountingScenarioMarketData,
    ) -> MultiCurrencyScenarioArray:
        def calc(i: int):
            md = market_data.scenario(i)
            settlement = md.market_data.value(settlement_price_id(resolved.product.security_id))
            return self.trade_pricer.currency_exposure(resolved, md.discounting_provider(), settlement)

        return MultiCurrencyScenarioArray.of_scenarios(market_data.scenario_count, calc, market_data.executor)

    # single scenario helpers
    def _present_value(
        self, resolved: ResolvedBondFutureTrade, md: LegalEntityDiscountingMarketData
    ) -> CurrencyAmount:
        settlement = md.market_data.value(settlement_price_id(resolved.product.security_id))
        return self.trade_pricer.present_value(resolved, md.discounting_provider(), settlement)

    def _risk_inputs(self, resolved: ResolvedBondFutureTrade, md: LegalEntityDiscountingMarketData):
        settlement = md.market_data.value(settlement_price_id(resolved.product.security_id))

        def pv(provider: LegalEntityDiscountingProvider) -> CurrencyAmount:
            return self.trade_pricer.present_value(resolved, provider, settlement)

        return pv, md.discounting_provider(), curve_ids(resolved, md.lookup)


def curve_ids(
    resolved: ResolvedBondFutureTrade, lookup: LegalEntityDiscountingMarketDataLookup
) -> list[CurveId]:
    """Curves the trade is priced off: repo and issuer curve of each basket bond."""
    ids: list[CurveId] = []
    for bond in resolved.product.delivery_basket:
        reqs = lookup.requirements(bond.security_id, bond.legal_entity_id, bond.currency)
        ids.extend(r for r in reqs.value_requirements if isinstance(r, CurveId))
    return ids


DEFAULT_CALCULATIONS = BondFutureMeasureCalculations()

BondFutureTarget = Union[BondFutureTrade, BondFuturePosition]

# The calculations by measure.
CALCULATORS = MeasureDispatchTable.of(
    {
        Measures.PRESENT_VALUE: DEFAULT_CALCULATIONS.present_value,
        Measures.PV01_CALIBRATED_SUM: DEFAULT_CALCULATIONS.pv01_calibrated_sum,
        Measures.PV01_CALIBRATED_BUCKETED: DEFAULT_CALCULATIONS.pv01_calibrated_bucketed,
        Measures.UNIT_PRICE: DEFAULT_CALCULATIONS.unit_price,
        Measures.PAR_SPREAD: DEFAULT_CALCULATIONS.par_spread,
        Measures.CURRENCY_EXPOSURE: DEFAULT_CALCULATIONS.currency_exposure,
        Measures.RESOLVED_TARGET: lambda resolved, market_data: resolved,
    }
)


def requirements(
    target: BondFutureTarget, lookup: LegalEntityDiscountingMarketDataLookup
) -> FunctionRequirements:
    """Settlement price quote and output currency, plus the lookup's curves for each basket bond."""
    product = target.product
    reqs = FunctionRequirements.of(
        value_requirements=[settlement_price_id(product.security_id)],
        output_currencies=[product.currency],
    )
    for bond in product.delivery_basket:
        reqs = reqs.combined_with(lookup.requirements(bond.security_id, bond.legal_entity_id, bond.currency))
    return reqs


# one function per target type; trades and positions share the dispatch table
TRADE = MeasureCalculationFunction(
    BondFutureTrade, CALCULATORS, LegalEntityDiscountingMarketDataLookup, requirements
)
POSITION = MeasureCalculationFunction(
    BondFuturePosition, CALCULATORS, LegalEntityDiscountingMarketDataLookup, requirements
)
