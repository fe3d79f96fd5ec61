"""
Calculations on a single `SwapTrade` for each of a set of scenarios.

An instance of `RatesMarketDataLookup` must be present in the calculation
parameters. Supported measures: present value, par rate, PV01 calibrated sum,
PV01 calibrated bucketed, currency exposure and resolved trade.
"""

from __future__ import annotations

from typing import Optional

from calculation.currency import CurrencyAmount
from calculation.function import MeasureCalculationFunction, MeasureDispatchTable
from calculation.lookup.rates import RatesMarketDataLookup, RatesScenarioMarketData
from calculation.measures import Measures
from calculation.pricers.swap_pricer import DiscountingSwapTradePricer
from calculation.products.swap import ResolvedSwapTrade, SwapTrade
from calculation.providers import RatesProvider
from calculation.requirements import FunctionRequirements
from calculation.risk import PV01CalibratedBucketed, PV01CalibratedSum
from calculation.scenario import CurrencyScenarioArray, DoubleScenarioArray, MultiCurrencyScenarioArray, ScenarioArray
from calculation.sensitivity import CurveSensitivities


class SwapMeasureCalculations:
    """Multi-scenario measure calculations for swaps."""

    def __init__(self, trade_pricer: Optional[DiscountingSwapTradePricer] = None) -> None:
        self.trade_pricer = trade_pricer or DiscountingSwapTradePricer()
        self._pv01_sum = PV01CalibratedSum()
        self._pv01_bucketed = PV01CalibratedBucketed()

    def present_value(
        self, resolved: ResolvedSwapTrade, market_data: RatesScenarioMarketData
    ) -> CurrencyScenarioArray:
        return CurrencyScenarioArray.of_scenarios(
            market_data.scenario_count,
            lambda i: self.trade_pricer.present_value(resolved, market_data.scenario(i).rates_provider()),
            market_data.executor,
        )

    def par_rate(self, resolved: ResolvedSwapTrade, market_data: RatesScenarioMarketData) -> DoubleScenarioArray:
        return DoubleScenarioArray.of_scenarios(
            market_data.scenario_count,
            lambda i: self.trade_pricer.par_rate(resolved, market_data.scenario(i).rates_provider()),
            market_data.executor,
        )

    def pv01_calibrated_sum(
        self, resolved: ResolvedSwapTrade, market_data: RatesScenarioMarketData
    ) -> MultiCurrencyScenarioArray:
        return MultiCurrencyScenarioArray.of_scenarios(
            market_data.scenario_count,
            lambda i: self._pv01_sum.compute(*self._risk_inputs(resolved, market_data, i)),
            market_data.executor,
        )

    def pv01_calibrated_bucketed(
        self, resolved: ResolvedSwapTrade, market_data: RatesScenarioMarketData
    ) -> ScenarioArray[CurveSensitivities]:
        return ScenarioArray.of_scenarios(
            market_data.scenario_count,
            lambda i: self._pv01_bucketed.compute(*self._risk_inputs(resolved, market_data, i)),
            market_data.executor,
        )

    def currency_exposure(
        self, resolved: ResolvedSwapTrade, market_data: RatesScenarioMarketData
    ) -> MultiCurrencyScenarioArray:
        return MultiCurrencyScenarioArray.of_scenarios(
            market_data.scenario_count,
            lambda i: self.trade_pricer.currency_exposure(resolved, market_data.scenario(i).rates_provider()),
            market_data.executor,
        )

    def _risk_inputs(self, resolved: ResolvedSwapTrade, market_data: RatesScenarioMarketData, i: int):
        def pv(provider: RatesProvider) -> CurrencyAmount:
            return self.trade_pricer.present_value(resolved, provider)

        provider = market_data.scenario(i).rates_provider()
        return pv, provider, [provider.discount_curve_id(resolved.product.currency)]


DEFAULT_CALCULATIONS = SwapMeasureCalculations()

# The calculations by measure.
CALCULATORS = MeasureDispatchTable.of(
    {
        Measures.PRESENT_VALUE: DEFAULT_CALCULATIONS.present_value,
        Measures.PAR_RATE: DEFAULT_CALCULATIONS.par_rate,
        Measures.PV01_CALIBRATED_SUM: DEFAULT_CALCULATIONS.pv01_calibrated_sum,
        Measures.PV01_CALIBRATED_BUCKETED: DEFAULT_CALCULATIONS.pv01_calibrated_bucketed,
        Measures.CURRENCY_EXPOSURE: DEFAULT_CALCULATIONS.currency_exposure,
        Measures.RESOLVED_TARGET: lambda resolved, market_data: resolved,
    }
)


def requirements(target: SwapTrade, lookup: RatesMarketDataLookup) -> FunctionRequirements:
    """Discount curve of the swap currency."""
    return lookup.requirements(target.product.currency)


TRADE = MeasureCalculationFunction(SwapTrade, CALCULATORS, RatesMarketDataLookup, requirements)
