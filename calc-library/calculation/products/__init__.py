"""Products and the trades/positions holding them (instrument data only)."""

from calculation.products.bond import FixedCouponBond, ResolvedFixedCouponBond
from calculation.products.bond_future import (
    BondFuture,
    BondFuturePosition,
    BondFutureTrade,
    ResolvedBondFuture,
    ResolvedBondFutureTrade,
)
from calculation.products.common import PositionInfo, TradedPrice, TradeInfo
from calculation.products.swap import FixedFloatSwap, ResolvedFixedFloatSwap, ResolvedSwapTrade, SwapTrade

__all__ = [
    "BondFuture",
    "BondFuturePosition",
    "BondFutureTrade",
    "FixedCouponBond",
    "FixedFloatSwap",
    "PositionInfo",
    "ResolvedBondFuture",
    "ResolvedBondFutureTrade",
    "ResolvedFixedCouponBond",
    "ResolvedFixedFloatSwap",
    "ResolvedSwapTrade",
    "SwapTrade",
    "TradeInfo",
    "TradedPrice",
]
