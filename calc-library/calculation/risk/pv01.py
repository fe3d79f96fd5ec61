"""PV01 risk measures (bump curves, reprice)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from calculation.currency import MultiCurrencyAmount
from calculation.market_data import CurveId
from calculation.providers import DiscountingProvider
from calculation.risk.base import BaseRiskMeasure, PresentValueFn
from calculation.sensitivity import CurveSensitivities, CurveSensitivity


@dataclass
class PV01CalibratedSum(BaseRiskMeasure):
    """PV01 summed over curves: each curve bumped in parallel, one at a time."""

    bump_bp: float = 1.0

    @property
    def name(self) -> str:
        return "PV01CalibratedSum"

    def compute(
        self,
        present_value: PresentValueFn,
        provider: DiscountingProvider,
        curve_ids: Iterable[CurveId],
    ) -> MultiCurrencyAmount:
        """Sum over curves of PV(bumped) - PV(base), by currency."""
        bump = self.bump_bp / 10000.0
        base = present_value(provider)
        deltas = []
        for curve_id in sorted(set(curve_ids), key=lambda c: c.name):
            bumped = provider.with_curve(curve_id, provider.curve(curve_id).bumped(bump))
            deltas.append(present_value(bumped).plus(base.multiplied_by(-1.0)))
        return MultiCurrencyAmount.total(deltas)


@dataclass
class PV01CalibratedBucketed(BaseRiskMeasure):
    """PV01 per curve pillar: each pillar of each curve bumped on its own."""

    bump_bp: float = 1.0

    @property
    def name(self) -> str:
        return "PV01CalibratedBucketed"

    def compute(
        self,
        present_value: PresentValueFn,
        provider: DiscountingProvider,
        curve_ids: Iterable[CurveId],
    ) -> CurveSensitivities:
        """PV(bumped at pillar) - PV(base) for every pillar of every curve."""
        bump = self.bump_bp / 10000.0
        base = present_value(provider)
        entries = []
        for curve_id in sorted(set(curve_ids), key=lambda c: c.name):
            curve = provider.curve(curve_id)
            sensitivities = []
            for i in range(len(curve.pillars)):
                bumped = provider.with_curve(curve_id, curve.bumped_at(i, bump))
                sensitivities.append(present_value(bumped).amount - base.amount)
            entries.append(
                CurveSensitivity(
                    curve_id=curve_id,
                    currency=base.currency,
                    pillars=tuple(curve.pillars),
                    sensitivities=tuple(sensitivities),
                )
            )
        return CurveSensitivities(tuple(entries))
