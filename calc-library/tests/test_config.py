"""Tests for CalculationConfig.from_env."""

import pytest

from calculation.config import CalculationConfig


def test_defaults_from_empty_env() -> None:
    assert CalculationConfig.from_env({}) == CalculationConfig(max_workers=None, parallel=True, log_level="INFO")


def test_reads_environment() -> None:
    config = CalculationConfig.from_env(
        {"CALC_MAX_WORKERS": "3", "CALC_PARALLEL": "false", "LOG_LEVEL": "debug"}
    )
    assert config == CalculationConfig(max_workers=3, parallel=False, log_level="DEBUG")


def test_reads_os_environ(monkeypatch) -> None:
    monkeypatch.setenv("CALC_MAX_WORKERS", "5")
    monkeypatch.delenv("CALC_PARALLEL", raising=False)
    assert CalculationConfig.from_env().max_workers == 5


def test_invalid_values_rejected() -> None:
    with pytest.raises(ValueError, match="CALC_MAX_WORKERS"):
        CalculationConfig.from_env({"CALC_MAX_WORKERS": "many"})
    with pytest.raises(ValueError, match="CALC_PARALLEL"):
        CalculationConfig.from_env({"CALC_PARALLEL": "maybe"})
    with pytest.raises(ValueError, match="max_workers"):
        CalculationConfig(max_workers=0)
