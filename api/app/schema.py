"""GraphQL schema: measure calculation queries."""

from typing import Optional

import strawberry
from strawberry.types import Info

from app.services import calculate_bond_futures, calculate_swaps, supported_measures
from app.types import (
    BondFutureTradeInput,
    CalculationOutput,
    DiscountCurveInput,
    IssuerCurveInput,
    MarketDataInput,
    RepoCurveInput,
    SwapTradeInput,
)


@strawberry.type
class Query:
    @strawberry.field
    def version(self) -> str:
        return "0.1.0"

    @strawberry.field
    def supported_measures(self, info: Info, target_type: str) -> list[str]:
        """Measures the calculation function for `target_type` (e.g. BondFutureTrade) supports."""
        return supported_measures(info.context["runner"], target_type)

    @strawberry.field
    def calculate_swap(
        self,
        info: Info,
        trades: list[SwapTradeInput],
        market_data: MarketDataInput,
        discount_curves: list[DiscountCurveInput],
        measures: list[str],
    ) -> list[CalculationOutput]:
        """Calculate measures for fixed-float swap trades over every scenario."""
        return calculate_swaps(
            runner=info.context["runner"],
            trades=trades,
            market_data=market_data,
            discount_curves=discount_curves,
            measures=measures,
        )

    @strawberry.field
    def calculate_bond_future(
        self,
        info: Info,
        trades: list[BondFutureTradeInput],
        market_data: MarketDataInput,
        issuer_curves: list[IssuerCurveInput],
        measures: list[str],
        repo_curves: Optional[list[RepoCurveInput]] = None,
    ) -> list[CalculationOutput]:
        """Calculate measures for bond future trades and positions over every scenario."""
        return calculate_bond_futures(
            runner=info.context["runner"],
            trades=trades,
            market_data=market_data,
            repo_curves=repo_curves or [],
            issuer_curves=issuer_curves,
            measures=measures,
        )


schema = strawberry.Schema(query=Query)
