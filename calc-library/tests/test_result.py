"""Tests for Result and Failure."""

import pytest

from calculation.errors import (
    CalculationError,
    FailureReason,
    MissingMarketDataError,
    ResolutionError,
    UnsupportedMeasureError,
)
from calculation.result import Failure, Result


def test_success() -> None:
    result = Result.success(1.5)
    assert result.is_success and not result.is_failure
    assert result.value == 1.5
    with pytest.raises(ValueError):
        result.failure_info


def test_failure_value_raises() -> None:
    result = Result.failure(FailureReason.UNSUPPORTED, "nope")
    assert result.is_failure
    assert result.failure_info == Failure(FailureReason.UNSUPPORTED, "nope")
    assert result.value_or(0.0) == 0.0
    with pytest.raises(ValueError, match="UNSUPPORTED: nope"):
        result.value


def test_of_captures_exceptions() -> None:
    """Result.of never raises; the exception type picks the reason."""

    def boom(exc: Exception):
        def supplier():
            raise exc

        return supplier

    cases = [
        (MissingMarketDataError("no curve"), FailureReason.MISSING_DATA),
        (CalculationError("bad"), FailureReason.CALCULATION_FAILED),
        (UnsupportedMeasureError("x"), FailureReason.UNSUPPORTED),
        (ResolutionError("x"), FailureReason.INVALID),
        (ZeroDivisionError("division by zero"), FailureReason.CALCULATION_FAILED),
        (ValueError("bad value"), FailureReason.CALCULATION_FAILED),
        (RuntimeError("unexpected"), FailureReason.ERROR),
    ]
    for exc, reason in cases:
        result = Result.of(boom(exc))
        assert result.is_failure
        assert result.failure_info.reason is reason
        assert result.failure_info.exception_type == type(exc).__name__


def test_of_success() -> None:
    assert Result.of(lambda: 2 + 2) == Result.success(4)


def test_map() -> None:
    assert Result.success(2).map(lambda v: v * 3) == Result.success(6)
    failure = Result.failure(FailureReason.MISSING_DATA, "missing")
    assert failure.map(lambda v: v * 3) == failure
    mapped = Result.success(0).map(lambda v: 1 / v)
    assert mapped.failure_info.reason is FailureReason.CALCULATION_FAILED


def test_failure_str() -> None:
    assert str(Failure(FailureReason.CANCELLED, "stopped")) == "CANCELLED: stopped"
