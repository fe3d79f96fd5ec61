"""Pricers for bond futures using repo and issuer curves."""

from __future__ import annotations

from datetime import date
from typing import Optional

from calculation.currency import CurrencyAmount, MultiCurrencyAmount
from calculation.errors import CalculationError
from calculation.products.bond import ResolvedFixedCouponBond
from calculation.products.bond_future import ResolvedBondFuture, ResolvedBondFutureTrade
from calculation.providers import LegalEntityDiscountingProvider


class DiscountingFixedCouponBondProductPricer:
    """Forward prices of fixed coupon bonds (per unit notional)."""

    def dirty_price_from_curves(
        self,
        bond: ResolvedFixedCouponBond,
        provider: LegalEntityDiscountingProvider,
        settlement_date: date,
    ) -> float:
        """
        Forward dirty price for settlement at `settlement_date`.

        Cashflows after settlement are discounted on the issuer curve, then
        carried forward to settlement on the repo curve.
        """
        if bond.maturity_date <= settlement_date:
            raise CalculationError(
                f"Bond {bond.security_id} matures on {bond.maturity_date}, "
                f"not after settlement on {settlement_date}"
            )
        pv = 0.0
        for period in bond.periods:
            if period.end <= settlement_date:
                continue
            df = provider.issuer_discount_factor(bond.legal_entity_id, bond.currency, period.end)
            pv += bond.coupon(period) * df
        pv += bond.notional * provider.issuer_discount_factor(
            bond.legal_entity_id, bond.currency, bond.maturity_date
        )
        df_repo = provider.repo_discount_factor(
            bond.security_id, bond.legal_entity_id, bond.currency, settlement_date
        )
        return pv / df_repo / bond.notional

    def clean_price_from_curves(
        self,
        bond: ResolvedFixedCouponBond,
        provider: LegalEntityDiscountingProvider,
        settlement_date: date,
    ) -> float:
        dirty = self.dirty_price_from_curves(bond, provider, settlement_date)
        return dirty - bond.accrued_interest(settlement_date) / bond.notional


class DiscountingBondFutureProductPricer:
    """Bond future price: cheapest-to-deliver clean price over conversion factor."""

    def __init__(self, bond_pricer: Optional[DiscountingFixedCouponBondProductPricer] = None) -> None:
        self.bond_pricer = bond_pricer or DiscountingFixedCouponBondProductPricer()

    def price(self, future: ResolvedBondFuture, provider: LegalEntityDiscountingProvider) -> float:
        """Decimal futures price (1.0 = par)."""
        settlement = future.first_delivery_date
        return min(
            self.bond_pricer.clean_price_from_curves(bond, provider, settlement) / cf
            for bond, cf in zip(future.delivery_basket, future.conversion_factors)
        )


class DiscountingBondFutureTradePricer:
    """Trade-level measures of a bond future: margin-style present value against a reference price."""

    def __init__(self, product_pricer: Optional[DiscountingBondFutureProductPricer] = None) -> None:
        self.product_pricer = product_pricer or DiscountingBondFutureProductPricer()

    def price(self, trade: ResolvedBondFutureTrade, provider: LegalEntityDiscountingProvider) -> float:
        return self.product_pricer.price(trade.product, provider)

    @staticmethod
    def reference_price(
        trade: ResolvedBondFutureTrade, valuation_date: date, last_settlement_price: float
    ) -> float:
        """Traded price on the trade date, otherwise the last settlement price."""
        traded = trade.traded_price
        if traded is not None and traded.trade_date == valuation_date:
            return traded.price
        return last_settlement_price

    def present_value(
        self,
        trade: ResolvedBondFutureTrade,
        provider: LegalEntityDiscountingProvider,
        last_settlement_price: float,
    ) -> CurrencyAmount:
        """PV = (price - reference price) * notional * quantity."""
        ref_price = self.reference_price(trade, provider.valuation_date, last_settlement_price)
        price = self.price(trade, provider)
        amount = (price - ref_price) * trade.product.notional * trade.quantity
        return CurrencyAmount(trade.product.currency, amount)

    def par_spread(
        self,
        trade: ResolvedBondFutureTrade,
        provider: LegalEntityDiscountingProvider,
        last_settlement_price: float,
    ) -> float:
        ref_price = self.reference_price(trade, provider.valuation_date, last_settlement_price)
        return self.price(trade, provider) - ref_price

    def currency_exposure(
        self,
        trade: ResolvedBondFutureTrade,
        provider: LegalEntityDiscountingProvider,
        last_settlement_price: float,
    ) -> MultiCurrencyAmount:
        return MultiCurrencyAmount.of(self.present_value(trade, provider, last_settlement_price))
