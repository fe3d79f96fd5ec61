"""Service layer: convert GraphQL inputs to calculation library objects and run the calculations."""

from __future__ import annotations

from typing import Any, Optional

from calculation.currency import Currency, CurrencyAmount, MultiCurrencyAmount
from calculation.curves import ZeroRateCurve
from calculation.identifiers import LegalEntityId, SecurityId, StandardId
from calculation.lookup import DefaultLegalEntityDiscountingMarketDataLookup, DefaultRatesMarketDataLookup
from calculation.market_data import CurveId, FieldName, MarketDataBox, QuoteId, ScenarioMarketData
from calculation.measures import Measure, Measures
from calculation.parameters import CalculationParameters
from calculation.products.bond import FixedCouponBond
from calculation.products.bond_future import BondFuture, BondFuturePosition, BondFutureTrade
from calculation.products.common import PositionInfo, TradeInfo
from calculation.products.swap import FixedFloatSwap, SwapTrade
from calculation.reference_data import ReferenceData
from calculation.result import Result
from calculation.runner import CalculationResults, CalculationRunner
from calculation.scenario import CurrencyScenarioArray, MultiCurrencyScenarioArray, ScenarioArray
from calculation.sensitivity import CurveSensitivities

from app.types import (
    AmountOutput,
    BondFutureTradeInput,
    CalculationOutput,
    CurveInput,
    CurveSensitivityOutput,
    DiscountCurveInput,
    IssuerCurveInput,
    MarketDataInput,
    MeasureResult,
    QuoteInput,
    RepoCurveInput,
    ScenarioAmounts,
    SwapTradeInput,
)

TRADE_ID_SCHEME = "API"


def _currency(code: str) -> Currency:
    try:
        return Currency.of(code)
    except ValueError as exc:
        raise ValueError(f"invalid currency '{code}'") from exc


def _standard_id(text: str) -> StandardId:
    """Accept `scheme~value`, or a bare value in the API scheme."""
    if "~" in text:
        return StandardId.parse(text)
    return StandardId(TRADE_ID_SCHEME, text)


def _curve_box(c: CurveInput) -> MarketDataBox[ZeroRateCurve]:
    """Build the curve (or one shifted curve per scenario) from GraphQL CurveInput."""
    curve = ZeroRateCurve(name=c.name, pillars=list(c.pillars), zero_rates_cc=list(c.zero_rates_cc))
    if not c.scenario_shifts:
        return MarketDataBox.of_single_value(curve)
    return MarketDataBox.of_scenario_values([curve.bumped(shift) for shift in c.scenario_shifts])


def _quote_box(q: QuoteInput) -> tuple[QuoteId, MarketDataBox[float]]:
    if not q.values:
        raise ValueError(f"quote '{q.id}' has no values")
    try:
        field = FieldName(q.field)
    except ValueError:
        raise ValueError(
            f"quote '{q.id}': unknown field '{q.field}'. Known fields: {[f.value for f in FieldName]}"
        ) from None
    key = QuoteId(_standard_id(q.id), field)
    if len(q.values) == 1:
        return key, MarketDataBox.of_single_value(q.values[0])
    return key, MarketDataBox.of_scenario_values(list(q.values))


def market_data_from_input(m: MarketDataInput) -> ScenarioMarketData:
    """Build ScenarioMarketData; the scenario count is that of the per-scenario values, else 1."""
    if not m.curves:
        raise ValueError("marketData.curves must not be empty")
    values: dict[Any, MarketDataBox[Any]] = {}
    for c in m.curves:
        values[CurveId(c.name)] = _curve_box(c)
    for q in m.quotes or []:
        key, box = _quote_box(q)
        values[key] = box
    counts = {box.scenario_count for box in values.values() if box.scenario_count is not None}
    if len(counts) > 1:
        raise ValueError(f"inconsistent scenario counts in market data: {sorted(counts)}")
    scenario_count = counts.pop() if counts else 1
    return ScenarioMarketData(scenario_count, m.valuation_date, values)


def measures_from_names(names: list[str]) -> list[Measure]:
    if not names:
        raise ValueError("measures must not be empty")
    try:
        return [Measures.by_name(n) for n in names]
    except ValueError as exc:
        raise ValueError(f"invalid measure name: {exc}") from exc


def _trade_info(trade_id: Optional[str], trade_date=None) -> TradeInfo:
    return TradeInfo(id=_standard_id(trade_id) if trade_id else None, trade_date=trade_date)


def swap_trade_from_input(s: SwapTradeInput) -> SwapTrade:
    product = FixedFloatSwap(
        currency=_currency(s.currency),
        notional=s.notional,
        fixed_rate=s.fixed_rate,
        start_date=s.start_date,
        end_date=s.end_date,
        frequency_months=s.frequency_months,
    )
    return SwapTrade(info=_trade_info(s.trade_id), product=product)


def bond_future_target_from_input(t: BondFutureTradeInput) -> BondFutureTrade | BondFuturePosition:
    f = t.future
    currency = _currency(f.currency)
    basket = [
        FixedCouponBond(
            security_id=SecurityId(_standard_id(b.security_id)),
            legal_entity_id=LegalEntityId(_standard_id(b.issuer)),
            currency=currency,
            notional=b.notional,
            fixed_rate=b.fixed_rate,
            start_date=b.start_date,
            end_date=b.end_date,
            frequency_months=b.frequency_months,
        )
        for b in f.delivery_basket
    ]
    product = BondFuture(
        security_id=SecurityId(_standard_id(f.security_id)),
        currency=currency,
        notional=f.notional,
        delivery_basket=tuple(basket),
        conversion_factors=tuple(f.conversion_factors),
        last_trade_date=f.last_trade_date,
        first_notice_date=f.first_notice_date,
        last_notice_date=f.last_notice_date,
    )
    if t.position:
        info = PositionInfo(id=_standard_id(t.trade_id) if t.trade_id else None)
        if t.quantity >= 0:
            return BondFuturePosition(info=info, product=product, long_quantity=t.quantity)
        return BondFuturePosition(info=info, product=product, long_quantity=0.0, short_quantity=-t.quantity)
    return BondFutureTrade(
        info=_trade_info(t.trade_id, t.trade_date),
        product=product,
        quantity=t.quantity,
        price=t.price,
    )


def rates_lookup_from_input(discount_curves: list[DiscountCurveInput]) -> DefaultRatesMarketDataLookup:
    if not discount_curves:
        raise ValueError("discountCurves must not be empty")
    return DefaultRatesMarketDataLookup.of(
        {_currency(d.currency): CurveId(d.curve) for d in discount_curves}
    )


def legal_entity_lookup_from_input(
    repo_curves: list[RepoCurveInput], issuer_curves: list[IssuerCurveInput]
) -> DefaultLegalEntityDiscountingMarketDataLookup:
    repo: dict[Any, CurveId] = {}
    for r in repo_curves:
        if (r.security_id is None) == (r.issuer is None):
            raise ValueError("repoCurves entries need exactly one of securityId or issuer")
        if r.security_id is not None:
            key: SecurityId | LegalEntityId = SecurityId(_standard_id(r.security_id))
        else:
            key = LegalEntityId(_standard_id(r.issuer))  # type: ignore[arg-type]
        repo[(key, _currency(r.currency))] = CurveId(r.curve)
    issuer = {
        (LegalEntityId(_standard_id(i.issuer)), _currency(i.currency)): CurveId(i.curve)
        for i in issuer_curves
    }
    return DefaultLegalEntityDiscountingMarketDataLookup(repo, issuer)


# --- Output conversion ---


def _amounts(amount: MultiCurrencyAmount) -> list[AmountOutput]:
    return [AmountOutput(currency=str(a.currency), amount=a.amount) for a in amount]


def measure_result(measure: Measure, result: Result[Any]) -> MeasureResult:
    """Flatten a Result into the GraphQL output shape."""
    if result.is_failure:
        failure = result.failure_info
        return MeasureResult(measure=measure.name, status=failure.reason.value, message=failure.message)
    value = result.value
    out = MeasureResult(measure=measure.name, status="SUCCESS")
    if isinstance(value, CurrencyScenarioArray):
        out.currency = str(value.currency)
        out.values = list(value.amounts)
    elif isinstance(value, MultiCurrencyScenarioArray):
        out.amounts = [ScenarioAmounts(scenario=i, amounts=_amounts(v)) for i, v in enumerate(value)]
    elif isinstance(value, ScenarioArray) and all(isinstance(v, CurveSensitivities) for v in value):
        out.sensitivities = [
            CurveSensitivityOutput(
                scenario=i,
                curve=e.curve_id.name,
                currency=str(e.currency),
                pillars=list(e.pillars),
                sensitivities=list(e.sensitivities),
            )
            for i, v in enumerate(value)
            for e in v.entries
        ]
    elif isinstance(value, ScenarioArray):
        out.values = [float(v) for v in value]
    elif isinstance(value, CurrencyAmount):
        out.currency = str(value.currency)
        out.values = [value.amount]
    else:
        out.text = repr(value)
    return out


def calculation_output(results: CalculationResults, measures: list[Measure]) -> CalculationOutput:
    target_id = getattr(results.target.info, "id", None)
    output = CalculationOutput(target_id=str(target_id) if target_id else None)
    if results.failure is not None:
        output.failure = str(results.failure)
        return output
    output.results = [measure_result(m, results.result(m)) for m in dict.fromkeys(measures)]
    return output


# --- Calculations ---


def calculate_swaps(
    runner: CalculationRunner,
    trades: list[SwapTradeInput],
    market_data: MarketDataInput,
    discount_curves: list[DiscountCurveInput],
    measures: list[str],
) -> list[CalculationOutput]:
    """Calculate measures for swap trades using the rates lookup."""
    targets = [swap_trade_from_input(t) for t in trades]
    parameters = CalculationParameters.of(rates_lookup_from_input(discount_curves))
    return _run(runner, targets, market_data, parameters, measures)


def calculate_bond_futures(
    runner: CalculationRunner,
    trades: list[BondFutureTradeInput],
    market_data: MarketDataInput,
    repo_curves: list[RepoCurveInput],
    issuer_curves: list[IssuerCurveInput],
    measures: list[str],
) -> list[CalculationOutput]:
    """Calculate measures for bond future trades and positions using the legal entity lookup."""
    targets = [bond_future_target_from_input(t) for t in trades]
    parameters = CalculationParameters.of(legal_entity_lookup_from_input(repo_curves, issuer_curves))
    return _run(runner, targets, market_data, parameters, measures)


def _run(
    runner: CalculationRunner,
    targets: list[Any],
    market_data: MarketDataInput,
    parameters: CalculationParameters,
    measures: list[str],
) -> list[CalculationOutput]:
    if not targets:
        raise ValueError("trades must not be empty")
    measure_list = measures_from_names(measures)
    md = market_data_from_input(market_data)
    all_results = runner.calculate_all(targets, measure_list, parameters, md, ReferenceData.standard())
    return [calculation_output(r, measure_list) for r in all_results]


def supported_measures(runner: CalculationRunner, target_type: str) -> list[str]:
    """Names of the measures supported for the target type with the given class name."""
    for cls in runner.functions.target_types:
        if cls.__name__ == target_type:
            function = runner.functions.find_for_type(cls)
            return sorted(m.name for m in function.supported_measures())
    known = sorted(cls.__name__ for cls in runner.functions.target_types)
    raise ValueError(f"unknown target type '{target_type}'. Known target types: {known}")
