"""Pricers invoked by the measure calculations."""

from calculation.pricers.bond_future_pricer import (
    DiscountingBondFutureProductPricer,
    DiscountingBondFutureTradePricer,
    DiscountingFixedCouponBondProductPricer,
)
from calculation.pricers.swap_pricer import DiscountingSwapTradePricer

__all__ = [
    "DiscountingBondFutureProductPricer",
    "DiscountingBondFutureTradePricer",
    "DiscountingFixedCouponBondProductPricer",
    "DiscountingSwapTradePricer",
]
