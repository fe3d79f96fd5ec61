"""Static information attached to trades and positions."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from calculation.identifiers import StandardId


@dataclass(frozen=True)
class TradeInfo:
    """Trade id, counterparty and trade date; all optional."""

    id: Optional[StandardId] = None
    counterparty: Optional[StandardId] = None
    trade_date: Optional[date] = None


@dataclass(frozen=True)
class PositionInfo:
    """Position id; optional."""

    id: Optional[StandardId] = None

    def to_trade_info(self) -> TradeInfo:
        return TradeInfo(id=self.id)


@dataclass(frozen=True)
class TradedPrice:
    """Price agreed on the trade date."""

    trade_date: date
    price: float
