"""
Protocol-based interfaces for the extension points of the calculation engine.

Using typing.Protocol enables structural subtyping: any class that implements
the required methods satisfies the protocol without explicit inheritance.
New products, lookups and calculation functions plug in without touching the
engine.
"""

from __future__ import annotations

from concurrent.futures import Executor
from threading import Event
from typing import TYPE_CHECKING, Any, Generic, Iterable, Optional, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from calculation.currency import Currency
    from calculation.market_data import ScenarioMarketData
    from calculation.measures import Measure
    from calculation.parameters import CalculationParameters
    from calculation.reference_data import ReferenceData
    from calculation.requirements import FunctionRequirements
    from calculation.result import Result

T = TypeVar("T")
R = TypeVar("R", covariant=True)
V = TypeVar("V", covariant=True)


@runtime_checkable
class Curve(Protocol):
    """Protocol for discount curve implementations.

    Any class implementing df() and the bump methods can be stored as curve
    market data and used by the discounting providers.
    """

    name: str
    pillars: tuple[float, ...]

    def df(self, t: float) -> float:
        """Return discount factor to time t (year-fraction)."""
        ...

    def bumped(self, bump: float) -> Curve:
        """Return new curve with parallel additive rate shift."""
        ...

    def bumped_at(self, index: int, bump: float) -> Curve:
        """Return new curve with the rate at one pillar shifted."""
        ...


@runtime_checkable
class Resolvable(Protocol[R]):
    """Something that can be turned into a fixed, calculation-ready form."""

    def resolve(self, ref_data: ReferenceData) -> R:
        """Resolve using reference data; deterministic for immutable reference data."""
        ...


class ScenarioMarketDataView(Protocol[V]):
    """Typed per-scenario accessor produced by a market data lookup."""

    @property
    def scenario_count(self) -> int:
        ...

    @property
    def executor(self) -> Optional[Executor]:
        ...

    def scenario(self, scenario_index: int) -> V:
        ...


class MarketDataLookup(Protocol):
    """Common capability of market data lookups: presenting a scenario view.

    `requirements()` is variant-specific (it takes the entity references the
    variant understands) and is therefore not part of this protocol.
    """

    def query_type(self) -> type:
        ...

    def market_data_view(
        self, market_data: ScenarioMarketData, executor: Optional[Executor] = None
    ) -> ScenarioMarketDataView[Any]:
        """View over `market_data`; scenario-aware measures map scenarios through `executor`."""
        ...


class CalculationFunction(Protocol, Generic[T]):
    """Calculates measures for one target type across a set of scenarios."""

    @property
    def target_type(self) -> type[T]:
        ...

    def supported_measures(self) -> frozenset[Measure]:
        ...

    def identifier(self, target: T) -> Optional[str]:
        ...

    def natural_currency(self, target: T, ref_data: ReferenceData) -> Currency:
        ...

    def requirements(
        self,
        target: T,
        measures: Iterable[Measure],
        parameters: CalculationParameters,
        ref_data: ReferenceData,
    ) -> FunctionRequirements:
        ...

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
        ...
