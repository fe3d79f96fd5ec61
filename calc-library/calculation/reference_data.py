"""
Static reference data: holiday calendars, securities and similar.

Reference data is immutable and shared by every calculation; products consult
it only while being resolved.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Hashable, Mapping, TypeVar

from calculation.dates import NO_HOLIDAYS, SAT_SUN
from calculation.errors import ReferenceDataNotFoundError

V = TypeVar("V")


class ReferenceData:
    """Immutable mapping from reference data id to value."""

    def __init__(self, values: Mapping[Hashable, Any] | None = None) -> None:
        self._values = MappingProxyType(dict(values or {}))

    @classmethod
    def of(cls, values: Mapping[Hashable, Any]) -> "ReferenceData":
        return cls(values)

    @classmethod
    def empty(cls) -> "ReferenceData":
        return cls()

    @classmethod
    def standard(cls) -> "ReferenceData":
        """Reference data holding the built-in holiday calendars."""
        return cls({NO_HOLIDAYS.id: NO_HOLIDAYS, SAT_SUN.id: SAT_SUN})

    def contains(self, ref_id: Hashable) -> bool:
        return ref_id in self._values

    def lookup(self, kind: type[V], ref_id: Hashable) -> V:
        """
        Value of type `kind` stored under `ref_id`.

        Raises ReferenceDataNotFoundError if the id is unknown and TypeError if
        the stored value is not a `kind`.
        """
        try:
            value = self._values[ref_id]
        except KeyError:
            raise ReferenceDataNotFoundError(
                f"Reference data not found for '{ref_id}' of type '{kind.__name__}'"
            ) from None
        if not isinstance(value, kind):
            raise TypeError(
                f"Reference data for '{ref_id}' is a {type(value).__name__}, expected {kind.__name__}"
            )
        return value

    def combined_with(self, other: "ReferenceData") -> "ReferenceData":
        """Union of both; values in this instance take precedence."""
        merged = dict(other._values)
        merged.update(self._values)
        return ReferenceData(merged)

    def __len__(self) -> int:
        return len(self._values)
