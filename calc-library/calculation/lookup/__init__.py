"""Market data lookups: turn entity references into requirements and scenario views."""

from calculation.lookup.legal_entity import (
    DefaultLegalEntityDiscountingMarketDataLookup,
    LegalEntityDiscountingMarketData,
    LegalEntityDiscountingMarketDataLookup,
    LegalEntityDiscountingScenarioMarketData,
)
from calculation.lookup.rates import (
    DefaultRatesMarketDataLookup,
    RatesMarketData,
    RatesMarketDataLookup,
    RatesScenarioMarketData,
)

__all__ = [
    "DefaultLegalEntityDiscountingMarketDataLookup",
    "DefaultRatesMarketDataLookup",
    "LegalEntityDiscountingMarketData",
    "LegalEntityDiscountingMarketDataLookup",
    "LegalEntityDiscountingScenarioMarketData",
    "RatesMarketData",
    "RatesMarketDataLookup",
    "RatesScenarioMarketData",
]
