"""Base class for bump-and-reprice risk measures."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable, TypeVar

from calculation.currency import CurrencyAmount
from calculation.market_data import CurveId
from calculation.providers import DiscountingProvider

P = TypeVar("P", bound=DiscountingProvider)

PresentValueFn = Callable[[Any], CurrencyAmount]


class BaseRiskMeasure(ABC):
    """Base class for risk measures that reprice against bumped curves."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name."""
        ...

    @abstractmethod
    def compute(
        self,
        present_value: PresentValueFn,
        provider: DiscountingProvider,
        curve_ids: Iterable[CurveId],
    ) -> Any:
        """Compute the risk measure by repricing `present_value` on bumped providers."""
        ...
