"""Tests for FunctionRequirements."""

from calculation.currency import EUR, GBP, USD
from calculation.identifiers import StandardId
from calculation.market_data import CurveId, QuoteId
from calculation.requirements import FunctionRequirements

A = FunctionRequirements.of([CurveId("A")], [USD])
B = FunctionRequirements.of([CurveId("B"), QuoteId(StandardId.of("X", "1"))], [EUR])
C = FunctionRequirements.of([CurveId("A"), CurveId("C")], [GBP, USD])


def test_combine_is_union() -> None:
    """Combining unions both value requirements and output currencies."""
    combined = A.combined_with(C)
    assert combined.value_requirements == {CurveId("A"), CurveId("C")}
    assert combined.output_currencies == {USD, GBP}


def test_combine_associative() -> None:
    assert A.combined_with(B).combined_with(C) == A.combined_with(B.combined_with(C))


def test_combine_commutative() -> None:
    assert A.combined_with(B) == B.combined_with(A)


def test_empty_is_identity() -> None:
    """Combining with the empty set is a no-op on either side."""
    empty = FunctionRequirements.empty()
    assert empty.is_empty
    assert A.combined_with(empty) == A
    assert empty.combined_with(A) == A


def test_combine_all() -> None:
    assert FunctionRequirements.combine_all([A, B, C]) == A.combined_with(B).combined_with(C)
    assert FunctionRequirements.combine_all([]) == FunctionRequirements.empty()


def test_of_deduplicates() -> None:
    reqs = FunctionRequirements.of([CurveId("A"), CurveId("A")], [USD, USD])
    assert len(reqs.value_requirements) == 1
    assert len(reqs.output_currencies) == 1
