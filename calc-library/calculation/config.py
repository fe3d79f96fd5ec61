"""Runtime configuration for the calculation runner."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


@dataclass(frozen=True)
class CalculationConfig:
    """
    Runner settings.

    `max_workers` bounds the measure thread pool (None lets the executor pick);
    `parallel=False` evaluates measures on the calling thread.
    """

    max_workers: Optional[int] = None
    parallel: bool = True
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError("max_workers must be >= 1")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "CalculationConfig":
        """Read CALC_MAX_WORKERS, CALC_PARALLEL and LOG_LEVEL."""
        env = os.environ if environ is None else environ
        max_workers_raw = env.get("CALC_MAX_WORKERS")
        try:
            max_workers = int(max_workers_raw) if max_workers_raw else None
        except ValueError:
            raise ValueError(f"CALC_MAX_WORKERS must be an integer, got {max_workers_raw!r}") from None
        parallel_raw = env.get("CALC_PARALLEL")
        parallel = _parse_bool("CALC_PARALLEL", parallel_raw) if parallel_raw else True
        log_level = env.get("LOG_LEVEL", "INFO").upper()
        return cls(max_workers=max_workers, parallel=parallel, log_level=log_level)
