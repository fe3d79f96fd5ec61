"""
Calculation runner: dispatches targets to their calculation function.

Design intent:
- Targets are **data only**; the function for a target is found through a
  **registry keyed by target type**, so new target types are added by
  registering a function, without changing the runner.
- Measures of a target are fanned out over a thread pool. Every requested
  measure comes back with exactly one `Result`.
- Errors that make the whole target uncalculable (no registered function,
  resolution failure, missing lookup parameter) become one batch-level
  `Failure` instead of a result per measure.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from threading import Event
from typing import Any, Iterable, Optional

from calculation.config import CalculationConfig
from calculation.errors import FailureReason, MissingParameterError, ResolutionError
from calculation.interfaces import CalculationFunction
from calculation.market_data import ScenarioMarketData
from calculation.measures import Measure
from calculation.parameters import CalculationParameters
from calculation.reference_data import ReferenceData
from calculation.requirements import FunctionRequirements
from calculation.result import Failure, Result

logger = logging.getLogger(__name__)


class CalculationFunctions:
    """Registry of calculation functions keyed by target type."""

    def __init__(self) -> None:
        self._functions: dict[type, CalculationFunction] = {}

    def register(self, function: CalculationFunction) -> None:
        """Register `function` for its target type, replacing any previous one."""
        self._functions[function.target_type] = function

    def find(self, target: Any) -> Optional[CalculationFunction]:
        """Function for `target`, or None if its type is not registered."""
        return self.find_for_type(type(target))

    def find_for_type(self, target_type: type) -> Optional[CalculationFunction]:
        """First function registered along the class hierarchy of `target_type`."""
        for cls in target_type.__mro__:
            function = self._functions.get(cls)
            if function is not None:
                return function
        return None

    @property
    def target_types(self) -> frozenset[type]:
        return frozenset(self._functions)

    def __len__(self) -> int:
        return len(self._functions)


def standard_functions() -> CalculationFunctions:
    """Registry with the built-in functions (swap trades, bond future trades and positions)."""
    from calculation.measure import bond_future, swap

    functions = CalculationFunctions()
    functions.register(swap.TRADE)
    functions.register(bond_future.TRADE)
    functions.register(bond_future.POSITION)
    return functions


@dataclass(frozen=True)
class CalculationResults:
    """Results for one target: a result per measure, or a single batch-level failure."""

    target: Any
    results: dict[Measure, Result[Any]] = field(default_factory=dict)
    failure: Optional[Failure] = None

    @property
    def is_batch_failure(self) -> bool:
        return self.failure is not None

    def result(self, measure: Measure) -> Result[Any]:
        """Result for `measure`; the batch failure when the whole target failed."""
        if self.failure is not None:
            return Result.of_failure(self.failure)
        return self.results[measure]


class CalculationRunner:
    """
    Runs calculation functions for targets, measures and scenarios.

    Use as a context manager (or call `close()`) to shut the thread pool down.
    `cancel()` is sticky: once cancelled, every later measure is reported as
    CANCELLED.
    """

    def __init__(
        self,
        functions: Optional[CalculationFunctions] = None,
        config: Optional[CalculationConfig] = None,
    ) -> None:
        self.functions = functions or standard_functions()
        self.config = config or CalculationConfig()
        self._cancel_event = Event()
        self._executor: Optional[ThreadPoolExecutor] = None
        if self.config.parallel:
            self._executor = ThreadPoolExecutor(
                max_workers=self.config.max_workers, thread_name_prefix="calc"
            )

    def requirements(
        self,
        targets: Iterable[Any],
        measures: Iterable[Measure],
        parameters: CalculationParameters,
        ref_data: ReferenceData,
    ) -> FunctionRequirements:
        """
        Union of the requirements of every target.

        Raises MissingParameterError when a lookup is absent; targets with no
        registered function need nothing.
        """
        measures = list(measures)
        reqs = []
        for target in targets:
            function = self.functions.find(target)
            if function is None:
                logger.warning("No calculation function registered for %s", type(target).__name__)
                continue
            reqs.append(function.requirements(target, measures, parameters, ref_data))
        return FunctionRequirements.combine_all(reqs)

    def calculate(
        self,
        target: Any,
        measures: Iterable[Measure],
        parameters: CalculationParameters,
        market_data: ScenarioMarketData,
        ref_data: ReferenceData,
    ) -> CalculationResults:
        """Calculate `measures` for one target over every scenario."""
        function = self.functions.find(target)
        if function is None:
            return self._batch_failure(
                target,
                Failure(
                    FailureReason.UNSUPPORTED,
                    f"No calculation function registered for {type(target).__name__}",
                ),
            )
        try:
            results = function.calculate(
                target,
                measures,
                parameters,
                market_data,
                ref_data,
                executor=self._executor,
                cancel_event=self._cancel_event,
            )
        except (ResolutionError, MissingParameterError) as exc:
            return self._batch_failure(target, Failure.from_exception(exc))
        return CalculationResults(target=target, results=results)

    def calculate_all(
        self,
        targets: Iterable[Any],
        measures: Iterable[Measure],
        parameters: CalculationParameters,
        market_data: ScenarioMarketData,
        ref_data: ReferenceData,
    ) -> list[CalculationResults]:
        """Calculate `measures` for each target, in target order."""
        measures = list(measures)
        return [self.calculate(t, measures, parameters, market_data, ref_data) for t in targets]

    def cancel(self) -> None:
        """Stop scheduling measures; in-flight evaluations finish and are kept."""
        logger.info("Calculation runner cancelled")
        self._cancel_event.set()

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def close(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True, cancel_futures=True)
            self._executor = None

    def __enter__(self) -> "CalculationRunner":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _batch_failure(self, target: Any, failure: Failure) -> CalculationResults:
        logger.warning("Calculation failed for %s: %s", type(target).__name__, failure)
        return CalculationResults(target=target, failure=failure)
