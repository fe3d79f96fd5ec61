"""Tests for PV01 (calibrated sum and bucketed)."""

import math
from datetime import date

import pytest

from calculation.currency import USD, CurrencyAmount
from calculation.curves import ZeroRateCurve
from calculation.market_data import CurveId, MarketData
from calculation.providers import DiscountingProvider
from calculation.risk import PV01CalibratedBucketed, PV01CalibratedSum

VAL = date(2024, 1, 15)
CURVE = CurveId("C")


def zcb_pv(maturity: date, notional: float = 1_000_000.0):
    """PV of a zero coupon bond on curve C."""

    def pv(provider: DiscountingProvider) -> CurrencyAmount:
        return CurrencyAmount(USD, notional * provider.discount_factor(CURVE, maturity))

    return pv


def provider(rates=(0.04, 0.04)) -> DiscountingProvider:
    curve = ZeroRateCurve(name="C", pillars=[1.0, 2.0], zero_rates_cc=list(rates))
    return DiscountingProvider(MarketData.of(VAL, {CURVE: curve}))


def test_pv01_zcb_negative() -> None:
    """Bumping rates up => DF down => PV down => PV01 negative."""
    pv01 = PV01CalibratedSum().compute(zcb_pv(date(2025, 7, 15)), provider(), [CURVE])
    assert pv01.amount(USD).amount < 0


def test_pv01_scale_sanity() -> None:
    """PV01 ~ -PV * T * 1e-4 for a zero coupon bond."""
    maturity = date(2026, 1, 15)
    base = provider()
    pv_base = zcb_pv(maturity)(base).amount
    t = (maturity - VAL).days / 365.0
    pv01 = PV01CalibratedSum().compute(zcb_pv(maturity), base, [CURVE]).amount(USD).amount
    assert pv01 == pytest.approx(-pv_base * t * 1e-4, rel=1e-3)
    assert pv_base == pytest.approx(1_000_000.0 * math.exp(-0.04 * t))


def test_bucketed_sums_to_parallel() -> None:
    """With linear interpolation, pillar bumps add up to the parallel bump."""
    pv = zcb_pv(date(2025, 7, 15))
    total = PV01CalibratedSum().compute(pv, provider(), [CURVE]).amount(USD).amount
    bucketed = PV01CalibratedBucketed().compute(pv, provider(), [CURVE])
    entry = bucketed.find(CURVE)
    assert entry is not None
    assert entry.pillars == (1.0, 2.0)
    assert sum(entry.sensitivities) == pytest.approx(total, rel=1e-3)
    assert bucketed.total().amount(USD).amount == pytest.approx(total, rel=1e-3)


def test_bump_does_not_mutate_provider() -> None:
    """with_curve is copy-on-write."""
    base = provider()
    bumped = base.with_curve(CURVE, base.curve(CURVE).bumped(0.01))
    assert base.curve(CURVE).zero_rates_cc == (0.04, 0.04)
    assert bumped.curve(CURVE).zero_rates_cc == pytest.approx((0.05, 0.05))


def test_duplicate_curve_ids_bumped_once() -> None:
    pv = zcb_pv(date(2025, 7, 15))
    once = PV01CalibratedSum().compute(pv, provider(), [CURVE])
    twice = PV01CalibratedSum().compute(pv, provider(), [CURVE, CURVE])
    assert once == twice


def test_no_curves_gives_empty_amount() -> None:
    assert len(PV01CalibratedSum().compute(zcb_pv(date(2025, 7, 15)), provider(), [])) == 0
