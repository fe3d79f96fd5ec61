"""Per-scenario result containers returned by scenario-aware measures."""

from __future__ import annotations

from concurrent.futures import Executor
from dataclasses import dataclass
from typing import Callable, Generic, Iterator, Optional, Sequence, TypeVar

from calculation.currency import Currency, CurrencyAmount, MultiCurrencyAmount

T = TypeVar("T")


def map_scenarios(
    scenario_count: int, fn: Callable[[int], T], executor: Optional[Executor] = None
) -> list[T]:
    """
    `fn(i)` for every scenario index, in scenario order.

    With an `executor`, scenarios after the first are submitted to it while the
    calling thread evaluates the first. A submitted scenario no worker has
    started yet is taken back and run by the calling thread, so a measure that
    is itself running on a pool worker never waits on work queued behind it.
    """
    if executor is None or scenario_count < 2:
        return [fn(i) for i in range(scenario_count)]
    futures = [executor.submit(fn, i) for i in range(1, scenario_count)]
    try:
        values = [fn(0)]
        for i, future in enumerate(futures, start=1):
            values.append(fn(i) if future.cancel() else future.result())
    finally:
        # stop whatever is still queued when a scenario failed
        for future in futures:
            future.cancel()
    return values


@dataclass(frozen=True)
class ScenarioArray(Generic[T]):
    """One value per scenario."""

    values: tuple[T, ...]

    @classmethod
    def of(cls, values: Sequence[T]) -> "ScenarioArray[T]":
        return cls(tuple(values))

    @classmethod
    def of_scenarios(
        cls, scenario_count: int, fn: Callable[[int], T], executor: Optional[Executor] = None
    ) -> "ScenarioArray[T]":
        return cls(tuple(map_scenarios(scenario_count, fn, executor)))

    @property
    def scenario_count(self) -> int:
        return len(self.values)

    def get(self, scenario_index: int) -> T:
        return self.values[scenario_index]

    def __iter__(self) -> Iterator[T]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)


@dataclass(frozen=True)
class DoubleScenarioArray(ScenarioArray[float]):
    """One number per scenario (prices, spreads, rates)."""

    @classmethod
    def of(cls, values: Sequence[float]) -> "DoubleScenarioArray":
        return cls(tuple(float(v) for v in values))

    @classmethod
    def of_scenarios(
        cls, scenario_count: int, fn: Callable[[int], float], executor: Optional[Executor] = None
    ) -> "DoubleScenarioArray":
        return cls(tuple(float(v) for v in map_scenarios(scenario_count, fn, executor)))


@dataclass(frozen=True)
class CurrencyScenarioArray:
    """One amount per scenario, all in the same currency."""

    currency: Currency
    amounts: tuple[float, ...]

    @classmethod
    def of(cls, amounts: Sequence[CurrencyAmount]) -> "CurrencyScenarioArray":
        if not amounts:
            raise ValueError("CurrencyScenarioArray requires at least one amount")
        currency = amounts[0].currency
        if any(a.currency != currency for a in amounts):
            raise ValueError("All amounts in a CurrencyScenarioArray must share a currency")
        return cls(currency, tuple(a.amount for a in amounts))

    @classmethod
    def of_scenarios(
        cls, scenario_count: int, fn: Callable[[int], CurrencyAmount], executor: Optional[Executor] = None
    ) -> "CurrencyScenarioArray":
        return cls.of(map_scenarios(scenario_count, fn, executor))

    @property
    def scenario_count(self) -> int:
        return len(self.amounts)

    def get(self, scenario_index: int) -> CurrencyAmount:
        return CurrencyAmount(self.currency, self.amounts[scenario_index])


@dataclass(frozen=True)
class MultiCurrencyScenarioArray(ScenarioArray[MultiCurrencyAmount]):
    """One multi-currency amount per scenario (currency exposure, summed PV01)."""

    @property
    def currencies(self) -> frozenset[Currency]:
        return frozenset(c for v in self.values for c in v.currencies)
