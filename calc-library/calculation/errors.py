"""
Failure taxonomy for the calculation engine.

Every exception raised by the engine derives from `CalculationFailure` and
carries the `FailureReason` it is reported under when captured into a
`Result`. Batch-level errors (resolution, missing parameters) propagate out of
`calculate()`; the others are caught per measure.
"""

from __future__ import annotations

from enum import Enum


class FailureReason(str, Enum):
    """Why a measure (or a whole batch) could not be calculated."""

    UNSUPPORTED = "UNSUPPORTED"
    MISSING_DATA = "MISSING_DATA"
    INVALID = "INVALID"
    CALCULATION_FAILED = "CALCULATION_FAILED"
    ERROR = "ERROR"
    CANCELLED = "CANCELLED"


class CalculationFailure(Exception):
    """Base class for engine errors; `reason` maps the error onto a Failure."""

    reason: FailureReason = FailureReason.ERROR


class MissingParameterError(CalculationFailure, LookupError):
    """A required parameter kind is absent from `CalculationParameters`."""

    reason = FailureReason.INVALID

    def __init__(self, kind: type) -> None:
        super().__init__(f"No parameter of type '{kind.__name__}' found in calculation parameters")
        self.kind = kind


class ResolutionError(CalculationFailure):
    """The target could not be resolved; fatal for the whole batch."""

    reason = FailureReason.INVALID


class MissingMarketDataError(CalculationFailure, LookupError):
    """A market data value required by a calculation is not available."""

    reason = FailureReason.MISSING_DATA


class UnsupportedMeasureError(CalculationFailure):
    """The measure is not in the target type's dispatch table."""

    reason = FailureReason.UNSUPPORTED


class CalculationError(CalculationFailure):
    """A numerical problem inside a pricer."""

    reason = FailureReason.CALCULATION_FAILED


class ReferenceDataNotFoundError(CalculationFailure, LookupError):
    """A static reference (holiday calendar, security) is unknown."""

    reason = FailureReason.MISSING_DATA
