"""Calculation library: measures, requirements, lookups, calculation functions and runner."""

import logging

from calculation.config import CalculationConfig
from calculation.currency import Currency, CurrencyAmount, MultiCurrencyAmount
from calculation.curves import ZeroRateCurve
from calculation.errors import (
    CalculationError,
    CalculationFailure,
    FailureReason,
    MissingMarketDataError,
    MissingParameterError,
    ReferenceDataNotFoundError,
    ResolutionError,
    UnsupportedMeasureError,
)
from calculation.function import MeasureCalculationFunction, MeasureDispatchTable
from calculation.identifiers import LegalEntityId, SecurityId, StandardId
from calculation.interfaces import CalculationFunction, Curve, MarketDataLookup
from calculation.lookup import (
    DefaultLegalEntityDiscountingMarketDataLookup,
    DefaultRatesMarketDataLookup,
    LegalEntityDiscountingMarketDataLookup,
    RatesMarketDataLookup,
)
from calculation.market_data import CurveId, FieldName, MarketData, MarketDataBox, QuoteId, ScenarioMarketData
from calculation.measures import Measure, Measures
from calculation.parameters import CalculationParameter, CalculationParameters
from calculation.reference_data import ReferenceData
from calculation.requirements import FunctionRequirements
from calculation.result import Failure, Result
from calculation.runner import CalculationFunctions, CalculationResults, CalculationRunner, standard_functions

# the library never configures handlers; applications do
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "CalculationConfig",
    "CalculationError",
    "CalculationFailure",
    "CalculationFunction",
    "CalculationFunctions",
    "CalculationParameter",
    "CalculationParameters",
    "CalculationResults",
    "CalculationRunner",
    "Currency",
    "CurrencyAmount",
    "Curve",
    "CurveId",
    "DefaultLegalEntityDiscountingMarketDataLookup",
    "DefaultRatesMarketDataLookup",
    "Failure",
    "FailureReason",
    "FieldName",
    "FunctionRequirements",
    "LegalEntityDiscountingMarketDataLookup",
    "LegalEntityId",
    "MarketData",
    "MarketDataBox",
    "MarketDataLookup",
    "Measure",
    "MeasureCalculationFunction",
    "MeasureDispatchTable",
    "Measures",
    "MissingMarketDataError",
    "MissingParameterError",
    "MultiCurrencyAmount",
    "QuoteId",
    "RatesMarketDataLookup",
    "ReferenceData",
    "ReferenceDataNotFoundError",
    "ResolutionError",
    "Result",
    "ScenarioMarketData",
    "SecurityId",
    "StandardId",
    "UnsupportedMeasureError",
    "ZeroRateCurve",
    "standard_functions",
]
