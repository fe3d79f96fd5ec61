"""Shared bond future and swap fixtures."""

from datetime import date

import pytest

from calculation.currency import USD
from calculation.curves import ZeroRateCurve
from calculation.identifiers import LegalEntityId, SecurityId, StandardId
from calculation.lookup import DefaultLegalEntityDiscountingMarketDataLookup, DefaultRatesMarketDataLookup
from calculation.market_data import CurveId, FieldName, QuoteId, ScenarioMarketData
from calculation.parameters import CalculationParameters
from calculation.products.bond import FixedCouponBond
from calculation.products.bond_future import BondFuture, BondFuturePosition, BondFutureTrade
from calculation.products.common import PositionInfo, TradeInfo
from calculation.products.swap import FixedFloatSwap, SwapTrade
from calculation.reference_data import ReferenceData

VALUATION_DATE = date(2024, 1, 15)

ISSUER = LegalEntityId.of("OG-Ticker", "GOVT1")
FUTURE_ID = SecurityId.of("OG-Ticker", "GOVT1-BOND-FUT")
BOND_IDS = (SecurityId.of("OG-Ticker", "GOVT1-BOND1"), SecurityId.of("OG-Ticker", "GOVT1-BOND2"))

REPO_CURVE = CurveId("USD-Repo")
ISSUER_CURVE = CurveId("USD-Issuer")
DISCOUNT_CURVE = CurveId("USD-Disc")

SETTLEMENT_PRICE_ID = QuoteId(FUTURE_ID.standard_id, FieldName.SETTLEMENT_PRICE)
SETTLEMENT_PRICE = 1.10


def curve(name: str, level: float) -> ZeroRateCurve:
    return ZeroRateCurve(
        name=name,
        pillars=[0.5, 1.0, 2.0, 5.0, 10.0],
        zero_rates_cc=[level, level + 0.001, level + 0.002, level + 0.004, level + 0.005],
    )


@pytest.fixture
def ref_data() -> ReferenceData:
    return ReferenceData.standard()


@pytest.fixture
def bond_future() -> BondFuture:
    basket = (
        FixedCouponBond(
            security_id=BOND_IDS[0],
            legal_entity_id=ISSUER,
            currency=USD,
            notional=100.0,
            fixed_rate=0.04,
            start_date=date(2020, 2, 15),
            end_date=date(2030, 2, 15),
        ),
        FixedCouponBond(
            security_id=BOND_IDS[1],
            legal_entity_id=ISSUER,
            currency=USD,
            notional=100.0,
            fixed_rate=0.045,
            start_date=date(2022, 5, 15),
            end_date=date(2032, 5, 15),
        ),
    )
    return BondFuture(
        security_id=FUTURE_ID,
        currency=USD,
        notional=100_000.0,
        delivery_basket=basket,
        conversion_factors=(0.90, 0.92),
        last_trade_date=date(2024, 3, 19),
        first_notice_date=date(2024, 2, 29),
        last_notice_date=date(2024, 3, 27),
    )


@pytest.fixture
def bond_future_trade(bond_future: BondFuture) -> BondFutureTrade:
    info = TradeInfo(id=StandardId.of("OG-Trade", "T1"), trade_date=date(2024, 1, 10))
    return BondFutureTrade(info=info, product=bond_future, quantity=10.0, price=1.08)


@pytest.fixture
def bond_future_position(bond_future: BondFuture) -> BondFuturePosition:
    return BondFuturePosition(
        info=PositionInfo(id=StandardId.of("OG-Position", "P1")),
        product=bond_future,
        long_quantity=1.0,
    )


@pytest.fixture
def legal_entity_lookup() -> DefaultLegalEntityDiscountingMarketDataLookup:
    return DefaultLegalEntityDiscountingMarketDataLookup.of(
        repo_curves={(ISSUER, USD): REPO_CURVE},
        issuer_curves={(ISSUER, USD): ISSUER_CURVE},
    )


@pytest.fixture
def bond_future_parameters(legal_entity_lookup) -> CalculationParameters:
    return CalculationParameters.of(legal_entity_lookup)


@pytest.fixture
def bond_future_market_data() -> ScenarioMarketData:
    return ScenarioMarketData.of(
        1,
        VALUATION_DATE,
        {
            REPO_CURVE: curve("USD-Repo", 0.030),
            ISSUER_CURVE: curve("USD-Issuer", 0.035),
            SETTLEMENT_PRICE_ID: SETTLEMENT_PRICE,
        },
    )


@pytest.fixture
def swap_trade() -> SwapTrade:
    product = FixedFloatSwap(
        currency=USD,
        notional=10_000_000.0,
        fixed_rate=0.04,
        start_date=date(2024, 1, 17),
        end_date=date(2029, 1, 17),
    )
    return SwapTrade(info=TradeInfo(id=StandardId.of("OG-Trade", "S1")), product=product)


@pytest.fixture
def rates_parameters() -> CalculationParameters:
    return CalculationParameters.of(DefaultRatesMarketDataLookup.of({USD: DISCOUNT_CURVE}))


@pytest.fixture
def swap_market_data() -> ScenarioMarketData:
    return ScenarioMarketData.of(1, VALUATION_DATE, {DISCOUNT_CURVE: curve("USD-Disc", 0.040)})
