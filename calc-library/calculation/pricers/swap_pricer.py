"""Pricer for fixed-float interest rate swaps (single curve)."""

from __future__ import annotations

from calculation.currency import CurrencyAmount, MultiCurrencyAmount
from calculation.errors import CalculationError
from calculation.products.swap import ResolvedFixedFloatSwap, ResolvedSwapTrade
from calculation.providers import RatesProvider


class DiscountingSwapTradePricer:
    """Pricer for fixed-float interest rate swaps (single curve)."""

    def present_value(self, trade: ResolvedSwapTrade, provider: RatesProvider) -> CurrencyAmount:
        """
        Fixed-float swap (single curve).
        Convention: receive float, pay fixed. PV = PV(float leg) - PV(fixed leg).
        """
        swap = trade.product
        pv_fixed = swap.fixed_rate * self._annuity(swap, provider)
        pv_float = self._pv_float_leg(swap, provider)
        return CurrencyAmount(swap.currency, pv_float - pv_fixed)

    def par_rate(self, trade: ResolvedSwapTrade, provider: RatesProvider) -> float:
        """Fixed rate making the swap worth zero: PV(float leg) / annuity."""
        swap = trade.product
        annuity = self._annuity(swap, provider)
        if annuity <= 0:
            raise CalculationError("Swap has no remaining fixed payments, par rate is undefined")
        return self._pv_float_leg(swap, provider) / annuity

    def currency_exposure(self, trade: ResolvedSwapTrade, provider: RatesProvider) -> MultiCurrencyAmount:
        return MultiCurrencyAmount.of(self.present_value(trade, provider))

    @staticmethod
    def _annuity(swap: ResolvedFixedFloatSwap, provider: RatesProvider) -> float:
        """
        PV of a unit fixed rate: sum_i notional * accrual_i * DF(t_i).
        Periods paid on or before the valuation date are excluded.
        """
        pv = 0.0
        for period in swap.periods:
            if period.end <= provider.valuation_date:
                continue
            df = provider.discount_factor_in(swap.currency, period.end)
            pv += swap.notional * period.year_fraction * df
        return pv

    @staticmethod
    def _pv_float_leg(swap: ResolvedFixedFloatSwap, provider: RatesProvider) -> float:
        """
        Float leg PV (single-curve).
        Forward rate from discount factors: f = (DF(start)/DF(end) - 1) / accrual,
        so each period contributes notional * (DF(start) - DF(end)).
        """
        pv = 0.0
        for period in swap.periods:
            if period.end <= provider.valuation_date:
                continue
            df_start = provider.discount_factor_in(swap.currency, period.start)
            df_end = provider.discount_factor_in(swap.currency, period.end)
            pv += swap.notional * (df_start - df_end)
        return pv
