"""
Result of a single measure calculation: a success value or a typed failure.

A `Result` is terminal: once built it never raises, except when the caller
explicitly asks for the value of a failure.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

from calculation.errors import CalculationFailure, FailureReason

logger = logging.getLogger(__name__)

V = TypeVar("V")
U = TypeVar("U")


@dataclass(frozen=True)
class Failure:
    """Failure payload: reason, human-readable message and the originating exception type."""

    reason: FailureReason
    message: str
    exception_type: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.reason.value}: {self.message}"

    @classmethod
    def from_exception(cls, exc: BaseException) -> "Failure":
        """Map an exception onto a failure using the engine's taxonomy."""
        if isinstance(exc, CalculationFailure):
            reason = exc.reason
        elif isinstance(exc, (ArithmeticError, ValueError)):
            reason = FailureReason.CALCULATION_FAILED
        else:
            reason = FailureReason.ERROR
        message = str(exc) or type(exc).__name__
        return cls(reason=reason, message=message, exception_type=type(exc).__name__)


class Result(Generic[V]):
    """Tagged union of Success(value) and Failure(reason, message)."""

    __slots__ = ("_value", "_failure")

    def __init__(self, value: Optional[V] = None, failure: Optional[Failure] = None) -> None:
        self._value = value
        self._failure = failure

    @classmethod
    def success(cls, value: V) -> "Result[V]":
        return cls(value=value)

    @classmethod
    def failure(cls, reason: FailureReason, message: str) -> "Result[Any]":
        return cls(failure=Failure(reason=reason, message=message))

    @classmethod
    def of_failure(cls, failure: Failure) -> "Result[Any]":
        return cls(failure=failure)

    @classmethod
    def of(cls, supplier: Callable[[], V]) -> "Result[V]":
        """Call `supplier`, capturing any exception as a Failure."""
        try:
            return cls.success(supplier())
        except Exception as exc:
            logger.debug("Calculation failed: %s", exc, exc_info=True)
            return cls(failure=Failure.from_exception(exc))

    @property
    def is_success(self) -> bool:
        return self._failure is None

    @property
    def is_failure(self) -> bool:
        return self._failure is not None

    @property
    def value(self) -> V:
        """Success value. Raises ValueError on a failure result."""
        if self._failure is not None:
            raise ValueError(f"Unable to get a value from a failure result: {self._failure}")
        return self._value  # type: ignore[return-value]

    @property
    def failure_info(self) -> Failure:
        """Failure payload. Raises ValueError on a success result."""
        if self._failure is None:
            raise ValueError("Unable to get a failure from a success result")
        return self._failure

    def value_or(self, default: V) -> V:
        return default if self._failure is not None else self._value  # type: ignore[return-value]

    def map(self, fn: Callable[[V], U]) -> "Result[U]":
        """Apply `fn` to a success value; failures pass through unchanged."""
        if self._failure is not None:
            return Result(failure=self._failure)
        return Result.of(lambda: fn(self._value))  # type: ignore[arg-type]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Result):
            return NotImplemented
        return self._value == other._value and self._failure == other._failure

    def __repr__(self) -> str:
        if self._failure is not None:
            return f"Result.failure({self._failure.reason.value}, {self._failure.message!r})"
        return f"Result.success({self._value!r})"
