"""Tests for the calculation runner and its function registry."""

from dataclasses import dataclass, replace

import pytest

from calculation.config import CalculationConfig
from calculation.currency import USD
from calculation.dates import HolidayCalendarId
from calculation.errors import FailureReason, MissingParameterError
from calculation.lookup import DefaultRatesMarketDataLookup
from calculation.measure import bond_future, swap
from calculation.measures import Measures
from calculation.parameters import CalculationParameters
from calculation.products.bond_future import BondFuturePosition, BondFutureTrade
from calculation.products.swap import SwapTrade
from calculation.requirements import FunctionRequirements
from calculation.runner import CalculationFunctions, CalculationRunner, standard_functions

from conftest import DISCOUNT_CURVE, ISSUER_CURVE, REPO_CURVE, SETTLEMENT_PRICE_ID

MEASURES = [Measures.PRESENT_VALUE, Measures.UNIT_PRICE, Measures.PV01_CALIBRATED_SUM, Measures.RESOLVED_TARGET]


@dataclass(frozen=True)
class Unknown:
    value: int = 1


@pytest.fixture
def runner():
    with CalculationRunner(config=CalculationConfig(max_workers=2)) as r:
        yield r


def test_standard_functions_registry() -> None:
    functions = standard_functions()
    assert functions.target_types == {SwapTrade, BondFutureTrade, BondFuturePosition}
    assert functions.find_for_type(BondFuturePosition) is bond_future.POSITION
    assert functions.find(Unknown()) is None


def test_registry_follows_class_hierarchy(bond_future_trade) -> None:
    """A subclass of a registered target type uses the parent's function."""

    @dataclass(frozen=True)
    class TaggedTrade(BondFutureTrade):
        tag: str = ""

    functions = CalculationFunctions()
    functions.register(bond_future.TRADE)
    assert len(functions) == 1
    assert functions.find_for_type(TaggedTrade) is bond_future.TRADE


def test_requirements_combined_over_targets(
    runner, bond_future_trade, swap_trade, legal_entity_lookup, ref_data
) -> None:
    """Requirements of all targets are unioned; unregistered targets need nothing."""
    parameters = CalculationParameters.of(
        legal_entity_lookup, DefaultRatesMarketDataLookup.of({USD: DISCOUNT_CURVE})
    )
    reqs = runner.requirements([bond_future_trade, swap_trade, Unknown()], MEASURES, parameters, ref_data)
    assert reqs == FunctionRequirements.of(
        [SETTLEMENT_PRICE_ID, REPO_CURVE, ISSUER_CURVE, DISCOUNT_CURVE], [USD]
    )


def test_requirements_missing_parameter_raises(runner, swap_trade, ref_data) -> None:
    with pytest.raises(MissingParameterError):
        runner.requirements([swap_trade], MEASURES, CalculationParameters.empty(), ref_data)


def test_calculate_all(runner, bond_future_trade, bond_future_position, bond_future_parameters,
                       bond_future_market_data, ref_data) -> None:
    """Targets come back in order with one result per measure."""
    all_results = runner.calculate_all(
        [bond_future_trade, bond_future_position], MEASURES, bond_future_parameters, bond_future_market_data, ref_data
    )
    assert [r.target for r in all_results] == [bond_future_trade, bond_future_position]
    for results in all_results:
        assert not results.is_batch_failure
        assert list(results.results) == MEASURES
        assert all(results.result(m).is_success for m in MEASURES)


def test_parallel_matches_sequential(bond_future_trade, bond_future_parameters, bond_future_market_data,
                                     ref_data) -> None:
    with CalculationRunner(config=CalculationConfig(parallel=False)) as sequential:
        expected = sequential.calculate(
            bond_future_trade, MEASURES, bond_future_parameters, bond_future_market_data, ref_data
        )
    with CalculationRunner(config=CalculationConfig(max_workers=4)) as parallel:
        actual = parallel.calculate(
            bond_future_trade, MEASURES, bond_future_parameters, bond_future_market_data, ref_data
        )
    assert actual.results == expected.results


def test_unknown_calendar_is_batch_failure(runner, bond_future_trade, bond_future_parameters,
                                           bond_future_market_data, ref_data) -> None:
    """Resolution failure: one batch-level failure, no per-measure results."""
    product = replace(bond_future_trade.product, calendar=HolidayCalendarId("Mars"))
    trade = replace(bond_future_trade, product=product)
    results = runner.calculate(trade, MEASURES, bond_future_parameters, bond_future_market_data, ref_data)
    assert results.is_batch_failure
    assert results.results == {}
    assert results.failure.reason is FailureReason.INVALID
    assert "Mars" in results.failure.message
    # every measure reports the batch failure
    assert results.result(Measures.PRESENT_VALUE).failure_info == results.failure


class OverflowingSwapTrade(SwapTrade):
    """Swap trade whose resolution fails with an error outside the engine's taxonomy."""

    def resolve(self, ref_data):
        raise OverflowError("date value out of range")


def test_any_resolution_error_only_fails_its_target(
    runner, swap_trade, rates_parameters, swap_market_data, ref_data
) -> None:
    """An unexpected resolution error becomes that target's batch failure; other targets still calculate."""
    bad = OverflowingSwapTrade(info=swap_trade.info, product=swap_trade.product)
    good_results, bad_results = runner.calculate_all(
        [swap_trade, bad], [Measures.PRESENT_VALUE], rates_parameters, swap_market_data, ref_data
    )
    assert good_results.result(Measures.PRESENT_VALUE).is_success
    assert bad_results.is_batch_failure
    assert bad_results.failure.reason is FailureReason.INVALID
    assert "OverflowingSwapTrade" in bad_results.failure.message
    assert "date value out of range" in bad_results.failure.message


def test_missing_parameter_is_batch_failure(runner, swap_trade, swap_market_data, ref_data) -> None:
    results = runner.calculate(swap_trade, MEASURES, CalculationParameters.empty(), swap_market_data, ref_data)
    assert results.is_batch_failure
    assert results.failure.reason is FailureReason.INVALID
    assert "RatesMarketDataLookup" in results.failure.message


def test_unregistered_target_is_batch_failure(runner, swap_market_data, ref_data) -> None:
    results = runner.calculate(Unknown(), MEASURES, CalculationParameters.empty(), swap_market_data, ref_data)
    assert results.failure.reason is FailureReason.UNSUPPORTED
    assert "Unknown" in results.failure.message


def test_cancel(bond_future_trade, bond_future_parameters, bond_future_market_data, ref_data) -> None:
    """After cancel(), measures are reported as CANCELLED, not dropped."""
    with CalculationRunner(config=CalculationConfig(parallel=False)) as runner:
        runner.cancel()
        assert runner.cancelled
        results = runner.calculate(
            bond_future_trade, MEASURES, bond_future_parameters, bond_future_market_data, ref_data
        )
    assert list(results.results) == MEASURES
    assert all(r.failure_info.reason is FailureReason.CANCELLED for r in results.results.values())


def test_swap_through_runner(runner, swap_trade, rates_parameters, swap_market_data, ref_data) -> None:
    results = runner.calculate(
        swap_trade, [Measures.PRESENT_VALUE, Measures.PAR_RATE], rates_parameters, swap_market_data, ref_data
    )
    assert results.result(Measures.PRESENT_VALUE).is_success
    assert results.result(Measures.PAR_RATE).is_success
    assert swap.TRADE.identifier(swap_trade) == "OG-Trade~S1"
