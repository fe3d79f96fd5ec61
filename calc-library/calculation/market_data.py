"""
Market data keys and immutable scenario market data containers.

`ScenarioMarketData` is built by the caller for one invocation and is
read-only during calculation. Each value is held in a `MarketDataBox`, which
either shares one value across all scenarios or holds one value per scenario.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from types import MappingProxyType
from typing import Any, Generic, Mapping, Optional, Sequence, TypeVar

from calculation.errors import MissingMarketDataError
from calculation.identifiers import StandardId

T = TypeVar("T")


class MarketDataId:
    """Marker base class for market data keys."""

    __slots__ = ()


class FieldName(str, Enum):
    """Field of a quote."""

    MARKET_VALUE = "MarketValue"
    SETTLEMENT_PRICE = "SettlementPrice"


@dataclass(frozen=True)
class QuoteId(MarketDataId):
    """Key of an observable quote, such as the settlement price of a future."""

    standard_id: StandardId
    field_name: FieldName = FieldName.MARKET_VALUE

    def __str__(self) -> str:
        return f"QuoteId:{self.standard_id}/{self.field_name.value}"


@dataclass(frozen=True)
class CurveId(MarketDataId):
    """Key of a curve (e.g. "USD-Disc")."""

    name: str

    def __str__(self) -> str:
        return f"CurveId:{self.name}"


class MarketDataBox(Generic[T]):
    """A market data value for a set of scenarios."""

    __slots__ = ("_single", "_values")

    def __init__(self, single: Optional[T] = None, values: Optional[tuple[T, ...]] = None) -> None:
        if (single is None) == (values is None):
            raise ValueError("MarketDataBox requires exactly one of single or values")
        if values is not None and not values:
            raise ValueError("MarketDataBox requires at least one scenario value")
        self._single = single
        self._values = values

    @classmethod
    def of_single_value(cls, value: T) -> "MarketDataBox[T]":
        return cls(single=value)

    @classmethod
    def of_scenario_values(cls, values: Sequence[T]) -> "MarketDataBox[T]":
        return cls(values=tuple(values))

    @property
    def is_single_value(self) -> bool:
        return self._values is None

    @property
    def scenario_count(self) -> Optional[int]:
        """Number of scenario values, or None for a single shared value."""
        return None if self._values is None else len(self._values)

    def value(self, scenario_index: int) -> T:
        if self._values is None:
            return self._single  # type: ignore[return-value]
        return self._values[scenario_index]

    def __repr__(self) -> str:
        if self._values is None:
            return f"MarketDataBox.single({self._single!r})"
        return f"MarketDataBox.scenarios({list(self._values)!r})"


class MarketData:
    """Market data for a single scenario."""

    def __init__(self, valuation_date: date, values: Mapping[MarketDataId, Any]) -> None:
        self._valuation_date = valuation_date
        self._values = MappingProxyType(dict(values))

    @classmethod
    def of(cls, valuation_date: date, values: Mapping[MarketDataId, Any]) -> "MarketData":
        return cls(valuation_date, values)

    @property
    def valuation_date(self) -> date:
        return self._valuation_date

    @property
    def ids(self) -> frozenset[MarketDataId]:
        return frozenset(self._values)

    def contains_value(self, key: MarketDataId) -> bool:
        return key in self._values

    def find_value(self, key: MarketDataId) -> Optional[Any]:
        return self._values.get(key)

    def value(self, key: MarketDataId) -> Any:
        """Value for `key`. Raises MissingMarketDataError if absent."""
        try:
            return self._values[key]
        except KeyError:
            raise MissingMarketDataError(f"Market data not found for identifier '{key}'") from None


class _ScenarioView(MarketData):
    """Read-through view of one scenario of a ScenarioMarketData."""

    def __init__(self, parent: "ScenarioMarketData", scenario_index: int) -> None:
        self._parent = parent
        self._index = scenario_index
        self._valuation_date = parent.valuation_date

    @property
    def ids(self) -> frozenset[MarketDataId]:
        return self._parent.ids

    def contains_value(self, key: MarketDataId) -> bool:
        return self._parent.contains_value(key)

    def find_value(self, key: MarketDataId) -> Optional[Any]:
        box = self._parent.find_value(key)
        return None if box is None else box.value(self._index)

    def value(self, key: MarketDataId) -> Any:
        return self._parent.value(key).value(self._index)


class ScenarioMarketData:
    """Immutable market data for a set of parallel scenarios."""

    def __init__(
        self,
        scenario_count: int,
        valuation_date: date,
        values: Mapping[MarketDataId, MarketDataBox[Any]],
    ) -> None:
        if scenario_count < 1:
            raise ValueError("scenario_count must be >= 1")
        for key, box in values.items():
            count = box.scenario_count
            if count is not None and count != scenario_count:
                raise ValueError(
                    f"Value for '{key}' has {count} scenarios but the market data has {scenario_count}"
                )
        self._scenario_count = scenario_count
        self._valuation_date = valuation_date
        self._values = MappingProxyType(dict(values))

    @classmethod
    def of(
        cls,
        scenario_count: int,
        valuation_date: date,
        values: Mapping[MarketDataId, MarketDataBox[Any] | Any],
    ) -> "ScenarioMarketData":
        """Build scenario market data; plain values are shared by all scenarios."""
        boxed = {
            k: v if isinstance(v, MarketDataBox) else MarketDataBox.of_single_value(v)
            for k, v in values.items()
        }
        return cls(scenario_count, valuation_date, boxed)

    @classmethod
    def of_single(cls, market_data: MarketData) -> "ScenarioMarketData":
        """Wrap single-scenario market data as a one-scenario set."""
        values = {k: market_data.value(k) for k in market_data.ids}
        return cls.of(1, market_data.valuation_date, values)

    @property
    def scenario_count(self) -> int:
        return self._scenario_count

    @property
    def valuation_date(self) -> date:
        return self._valuation_date

    @property
    def ids(self) -> frozenset[MarketDataId]:
        return frozenset(self._values)

    def contains_value(self, key: MarketDataId) -> bool:
        return key in self._values

    def find_value(self, key: MarketDataId) -> Optional[MarketDataBox[Any]]:
        return self._values.get(key)

    def value(self, key: MarketDataId) -> MarketDataBox[Any]:
        """Box for `key`. Raises MissingMarketDataError if absent."""
        try:
            return self._values[key]
        except KeyError:
            raise MissingMarketDataError(f"Market data not found for identifier '{key}'") from None

    def scenario(self, scenario_index: int) -> MarketData:
        if not 0 <= scenario_index < self._scenario_count:
            raise IndexError(
                f"Scenario index {scenario_index} out of range for {self._scenario_count} scenarios"
            )
        return _ScenarioView(self, scenario_index)
