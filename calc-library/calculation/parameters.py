"""
Calculation parameters: configuration values keyed by their kind.

Parameters are looked up by type rather than by name, so two functions asking
for similarly shaped configuration under different kinds never collide.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Mapping, Optional, TypeVar

from calculation.errors import MissingParameterError

P = TypeVar("P")


class CalculationParameter:
    """
    Base class for parameters.

    `query_type()` is the kind the parameter is stored under. It defaults to
    the concrete class; abstract parameter families (such as market data
    lookups) override it so implementations are found via the family type.
    """

    def query_type(self) -> type:
        return type(self)


class CalculationParameters:
    """Immutable bag of parameters, at most one per kind."""

    def __init__(self, parameters: Mapping[type, CalculationParameter] | None = None) -> None:
        self._parameters = MappingProxyType(dict(parameters or {}))

    @classmethod
    def empty(cls) -> "CalculationParameters":
        return cls()

    @classmethod
    def of(cls, *parameters: CalculationParameter) -> "CalculationParameters":
        """Build from parameters. Raises ValueError if two share a kind."""
        return cls(_index(parameters))

    @property
    def kinds(self) -> frozenset[type]:
        return frozenset(self._parameters)

    def __len__(self) -> int:
        return len(self._parameters)

    def find_parameter(self, kind: type[P]) -> Optional[P]:
        return self._parameters.get(kind)  # type: ignore[return-value]

    def parameter(self, kind: type[P]) -> P:
        """Parameter of `kind`. Raises MissingParameterError if absent."""
        param = self._parameters.get(kind)
        if param is None:
            raise MissingParameterError(kind)
        return param  # type: ignore[return-value]

    def parameter_or_default(self, kind: type[P], default: P) -> P:
        param = self._parameters.get(kind)
        return default if param is None else param  # type: ignore[return-value]

    def with_parameter(self, parameter: CalculationParameter) -> "CalculationParameters":
        """New bag with `parameter` added. Raises ValueError if its kind is present."""
        return CalculationParameters(_index(list(self._parameters.values()) + [parameter]))

    def combined_with(self, other: "CalculationParameters") -> "CalculationParameters":
        """Union of two bags. Raises ValueError if a kind appears in both."""
        return CalculationParameters(
            _index(list(self._parameters.values()) + list(other._parameters.values()))
        )

    def __repr__(self) -> str:
        kinds = ", ".join(sorted(k.__name__ for k in self._parameters))
        return f"CalculationParameters({kinds})"


def _index(parameters: Iterable[CalculationParameter]) -> dict[type, CalculationParameter]:
    indexed: dict[type, CalculationParameter] = {}
    for param in parameters:
        kind = param.query_type()
        if kind in indexed:
            raise ValueError(f"Duplicate calculation parameter of type '{kind.__name__}'")
        indexed[kind] = param
    return indexed
