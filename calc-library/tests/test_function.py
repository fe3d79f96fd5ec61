"""Tests for MeasureDispatchTable and the generic MeasureCalculationFunction."""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import date
from threading import Event

import pytest

from calculation.errors import FailureReason, ResolutionError
from calculation.function import MeasureCalculationFunction, MeasureDispatchTable
from calculation.market_data import ScenarioMarketData
from calculation.measures import Measure
from calculation.parameters import CalculationParameter, CalculationParameters
from calculation.reference_data import ReferenceData
from calculation.requirements import FunctionRequirements

DOUBLE = Measure.of("Double")
FAIL = Measure.of("Fail")
STOP = Measure.of("Stop")
OTHER = Measure.of("Other")
MD = ScenarioMarketData.of(1, date(2024, 1, 15), {})


@dataclass(frozen=True)
class Widget:
    """Minimal target: resolves to its value, or fails to resolve when negative."""

    value: float

    def resolve(self, ref_data: ReferenceData) -> float:
        if self.value < 0:
            raise ValueError("negative widget")
        return self.value


class WidgetLookup(CalculationParameter):
    def market_data_view(self, market_data: ScenarioMarketData, executor=None) -> ScenarioMarketData:
        return market_data


def fail(resolved, market_data):
    raise ZeroDivisionError("division by zero")


def make_function(stop_event: Event | None = None) -> MeasureCalculationFunction:
    def stop(resolved, market_data):
        if stop_event is not None:
            stop_event.set()
        return "stopped"

    table = MeasureDispatchTable.of(
        {DOUBLE: lambda resolved, md: resolved * 2, FAIL: fail, STOP: stop}
    )
    return MeasureCalculationFunction(Widget, table, WidgetLookup, lambda target, lookup: FunctionRequirements.empty())


PARAMS = CalculationParameters.of(WidgetLookup())


def test_dispatch_table() -> None:
    table = MeasureDispatchTable.of({DOUBLE: fail})
    assert table.measures() == {DOUBLE}
    assert DOUBLE in table and OTHER not in table
    assert table.calculator(OTHER) is None
    assert len(table) == 1


def test_unsupported_measure_does_not_affect_others() -> None:
    """An unsupported measure fails alone, naming the target type."""
    results = make_function().calculate(Widget(2.0), [DOUBLE, OTHER], PARAMS, MD, ReferenceData.empty())
    assert list(results) == [DOUBLE, OTHER]
    assert results[DOUBLE].value == 4.0
    failure = results[OTHER].failure_info
    assert failure.reason is FailureReason.UNSUPPORTED
    assert failure.message == "Unsupported measure for Widget: Other"
    assert failure.exception_type == "UnsupportedMeasureError"


def test_calculator_exception_captured() -> None:
    results = make_function().calculate(Widget(2.0), [FAIL, DOUBLE], PARAMS, MD, ReferenceData.empty())
    assert results[FAIL].failure_info.reason is FailureReason.CALCULATION_FAILED
    assert results[DOUBLE].is_success


def test_duplicate_measures_collapse() -> None:
    results = make_function().calculate(Widget(1.0), [DOUBLE, DOUBLE], PARAMS, MD, ReferenceData.empty())
    assert len(results) == 1


def test_resolution_failure_aborts_batch() -> None:
    with pytest.raises(ResolutionError, match="Unable to resolve Widget"):
        make_function().calculate(Widget(-1.0), [DOUBLE], PARAMS, MD, ReferenceData.empty())


def test_executor_gives_same_results() -> None:
    function = make_function()
    measures = [DOUBLE, FAIL, OTHER]
    sequential = function.calculate(Widget(3.0), measures, PARAMS, MD, ReferenceData.empty())
    with ThreadPoolExecutor(max_workers=2) as executor:
        parallel = function.calculate(Widget(3.0), measures, PARAMS, MD, ReferenceData.empty(), executor=executor)
    assert list(parallel) == measures
    assert parallel == sequential


def test_cancel_before_start() -> None:
    """All measures come back CANCELLED when the event is already set."""
    event = Event()
    event.set()
    results = make_function().calculate(
        Widget(1.0), [DOUBLE, FAIL], PARAMS, MD, ReferenceData.empty(), cancel_event=event
    )
    assert all(r.failure_info.reason is FailureReason.CANCELLED for r in results.values())


def test_cancel_midway_keeps_completed_results() -> None:
    """Measures completed before cancellation keep their results; later ones are CANCELLED."""
    event = Event()
    results = make_function(event).calculate(
        Widget(1.0), [DOUBLE, STOP, FAIL], PARAMS, MD, ReferenceData.empty(), cancel_event=event
    )
    assert results[DOUBLE].value == 2.0
    assert results[STOP].value == "stopped"
    assert results[FAIL].failure_info.reason is FailureReason.CANCELLED
    assert "Fail" in results[FAIL].failure_info.message


def test_supported_measures_and_identifier() -> None:
    function = make_function()
    assert function.target_type is Widget
    assert function.supported_measures() == {DOUBLE, FAIL, STOP}
    assert function.identifier(Widget(1.0)) is None
