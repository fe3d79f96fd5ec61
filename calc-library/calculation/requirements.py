"""
Market data requirements of a calculation.

Requirements are declared before any market data is loaded so that the caller
can fetch everything a batch needs in one pass.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import reduce
from typing import Iterable

from calculation.currency import Currency
from calculation.market_data import MarketDataId


@dataclass(frozen=True)
class FunctionRequirements:
    """Set of market data keys and output currencies needed by a calculation."""

    value_requirements: frozenset[MarketDataId] = frozenset()
    output_currencies: frozenset[Currency] = frozenset()

    @classmethod
    def empty(cls) -> "FunctionRequirements":
        return _EMPTY

    @classmethod
    def of(
        cls,
        value_requirements: Iterable[MarketDataId] = (),
        output_currencies: Iterable[Currency] = (),
    ) -> "FunctionRequirements":
        return cls(frozenset(value_requirements), frozenset(output_currencies))

    @classmethod
    def combine_all(cls, requirements: Iterable["FunctionRequirements"]) -> "FunctionRequirements":
        return reduce(FunctionRequirements.combined_with, requirements, _EMPTY)

    def combined_with(self, other: "FunctionRequirements") -> "FunctionRequirements":
        """Union of both sets of requirements."""
        return FunctionRequirements(
            self.value_requirements | other.value_requirements,
            self.output_currencies | other.output_currencies,
        )

    @property
    def is_empty(self) -> bool:
        return not self.value_requirements and not self.output_currencies


_EMPTY = FunctionRequirements()
