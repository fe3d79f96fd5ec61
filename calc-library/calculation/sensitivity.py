"""Bucketed curve sensitivities."""

from __future__ import annotations

from dataclasses import dataclass

from calculation.currency import Currency, CurrencyAmount, MultiCurrencyAmount
from calculation.market_data import CurveId


@dataclass(frozen=True)
class CurveSensitivity:
    """Sensitivity of a value to each pillar of one curve, in one currency."""

    curve_id: CurveId
    currency: Currency
    pillars: tuple[float, ...]
    sensitivities: tuple[float, ...]

    def __post_init__(self) -> None:
        if len(self.pillars) != len(self.sensitivities):
            raise ValueError("pillars and sensitivities must have the same length")

    def total(self) -> CurrencyAmount:
        return CurrencyAmount(self.currency, sum(self.sensitivities))


@dataclass(frozen=True)
class CurveSensitivities:
    """Sensitivities to several curves."""

    entries: tuple[CurveSensitivity, ...] = ()

    def find(self, curve_id: CurveId) -> CurveSensitivity | None:
        for entry in self.entries:
            if entry.curve_id == curve_id:
                return entry
        return None

    @property
    def curve_ids(self) -> tuple[CurveId, ...]:
        return tuple(e.curve_id for e in self.entries)

    def total(self) -> MultiCurrencyAmount:
        """Sum of all pillar sensitivities, by currency."""
        return MultiCurrencyAmount.total(e.total() for e in self.entries)
