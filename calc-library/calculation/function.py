"""
Measure dispatch and the generic calculation function.

`MeasureCalculationFunction` is written once and instantiated per target type.
Each instance:

1. declares requirements by asking the market data lookup held in the
   calculation parameters, before any market data exists;
2. resolves the target exactly once per `calculate()` call;
3. evaluates every requested measure independently through its dispatch
   table, capturing each outcome as a `Result`.

A resolution failure (or a missing lookup parameter) aborts the batch by
raising; every other failure is reported against its measure only.
"""

from __future__ import annotations

import logging
from concurrent.futures import Executor, Future
from threading import Event
from types import MappingProxyType
from typing import Any, Callable, Generic, Iterable, Mapping, Optional, TypeVar

from calculation.currency import Currency
from calculation.errors import FailureReason, UnsupportedMeasureError
from calculation.interfaces import MarketDataLookup
from calculation.market_data import ScenarioMarketData
from calculation.measures import Measure
from calculation.parameters import CalculationParameters
from calculation.reference_data import ReferenceData
from calculation.requirements import FunctionRequirements
from calculation.resolver import resolve_target
from calculation.result import Result

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")
L = TypeVar("L")
V = TypeVar("V")

# (resolved target, scenario view) -> measure value
SingleMeasureCalculation = Callable[[R, V], Any]


class MeasureDispatchTable(Generic[R, V]):
    """Fixed mapping from measure to calculation entry point."""

    def __init__(self, calculators: Mapping[Measure, SingleMeasureCalculation]) -> None:
        self._calculators = MappingProxyType(dict(calculators))

    @classmethod
    def of(cls, calculators: Mapping[Measure, SingleMeasureCalculation]) -> "MeasureDispatchTable[R, V]":
        return cls(calculators)

    def measures(self) -> frozenset[Measure]:
        return frozenset(self._calculators)

    def calculator(self, measure: Measure) -> Optional[SingleMeasureCalculation]:
        """Entry point for `measure`, or None when there is no calculator."""
        return self._calculators.get(measure)

    def __contains__(self, measure: object) -> bool:
        return measure in self._calculators

    def __len__(self) -> int:
        return len(self._calculators)


class MeasureCalculationFunction(Generic[T, R, L]):
    """
    Calculation function for one target type.

    - `lookup_type` is the parameter kind of the market data lookup to use.
    - `requirements_builder(target, lookup)` returns everything the target
      needs: the lookup's own requirements combined with any directly
      observed data (such as a settlement price quote).
    """

    def __init__(
        self,
        target_type: type[T],
        dispatch_table: MeasureDispatchTable[R, Any],
        lookup_type: type[L],
        requirements_builder: Callable[[T, L], FunctionRequirements],
    ) -> None:
        self._target_type = target_type
        self._dispatch_table = dispatch_table
        self._lookup_type = lookup_type
        self._requirements_builder = requirements_builder

    @property
    def target_type(self) -> type[T]:
        return self._target_type

    def supported_measures(self) -> frozenset[Measure]:
        return self._dispatch_table.measures()

    def identifier(self, target: T) -> Optional[str]:
        target_id = getattr(getattr(target, "info", None), "id", None)
        return None if target_id is None else str(target_id)

    def natural_currency(self, target: T, ref_data: ReferenceData) -> Currency:
        return target.currency  # type: ignore[attr-defined]

    def requirements(
        self,
        target: T,
        measures: Iterable[Measure],
        parameters: CalculationParameters,
        ref_data: ReferenceData,
    ) -> FunctionRequirements:
        """Market data needed for `target`. Raises MissingParameterError if the lookup is absent."""
        lookup = parameters.parameter(self._lookup_type)
        return self._requirements_builder(target, lookup)

    def calculate(
        self,
        target: T,
        measures: Iterable[Measure],
        parameters: CalculationParameters,
        scenario_market_data: ScenarioMarketData,
        ref_data: ReferenceData,
        *,
        executor: Optional[Executor] = None,
        cancel_event: Optional[Event] = None,
    ) -> dict[Measure, Result[Any]]:
        """
        Calculate `measures` for every scenario.

        With an `executor`, measures are evaluated concurrently and each measure
        spreads its scenarios over the same executor; the resolved target and
        the market data view are shared read-only. Setting `cancel_event` stops
        scheduling: measures not yet started are reported as CANCELLED,
        completed results are kept.
        """
        measures = list(dict.fromkeys(measures))
        # resolve the target once for all measures and all scenarios
        resolved = resolve_target(target, ref_data)

        # use lookup to query market data
        lookup: MarketDataLookup = parameters.parameter(self._lookup_type)  # type: ignore[assignment]
        market_data = lookup.market_data_view(scenario_market_data, executor)
        logger.debug(
            "Calculating %d measure(s) for %s over %d scenario(s)",
            len(measures),
            self._target_type.__name__,
            scenario_market_data.scenario_count,
        )

        results: dict[Measure, Result[Any]] = {}
        futures: dict[Measure, Future] = {}
        for measure in measures:
            if cancel_event is not None and cancel_event.is_set():
                results[measure] = self._cancelled(measure)
            elif executor is None:
                results[measure] = self._calculate(measure, resolved, market_data)
            else:
                futures[measure] = executor.submit(self._calculate, measure, resolved, market_data)

        for measure, future in futures.items():
            if cancel_event is not None and cancel_event.is_set():
                # only cancels evaluations that have not started
                future.cancel()
            results[measure] = self._cancelled(measure) if future.cancelled() else future.result()

        # keep the caller's measure order
        return {measure: results[measure] for measure in measures}

    # calculate one measure
    def _calculate(self, measure: Measure, resolved: R, market_data: Any) -> Result[Any]:
        result = Result.of(lambda: self._calculator(measure)(resolved, market_data))
        if result.is_failure:
            logger.debug("Measure %s failed for %s: %s", measure, self._target_type.__name__, result.failure_info)
        return result

    def _calculator(self, measure: Measure) -> SingleMeasureCalculation:
        calculator = self._dispatch_table.calculator(measure)
        if calculator is None:
            raise UnsupportedMeasureError(f"Unsupported measure for {self._target_type.__name__}: {measure}")
        return calculator

    def _cancelled(self, measure: Measure) -> Result[Any]:
        return Result.failure(
            FailureReason.CANCELLED,
            f"Calculation cancelled before measure {measure} was evaluated",
        )

    def __repr__(self) -> str:
        return f"MeasureCalculationFunction({self._target_type.__name__})"
