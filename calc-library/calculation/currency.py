"""Currency, single-currency amounts and multi-currency amounts."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Iterator, Mapping

_CODE = re.compile(r"^[A-Z]{3}$")


@dataclass(frozen=True, order=True)
class Currency:
    """ISO-4217 style three-letter currency code."""

    code: str

    def __post_init__(self) -> None:
        if not _CODE.match(self.code):
            raise ValueError(f"Invalid currency code: {self.code!r}")

    @classmethod
    def of(cls, code: str) -> "Currency":
        return cls(code.upper())

    def __str__(self) -> str:
        return self.code


USD = Currency("USD")
EUR = Currency("EUR")
GBP = Currency("GBP")
JPY = Currency("JPY")


@dataclass(frozen=True)
class CurrencyAmount:
    """An amount in a single currency."""

    currency: Currency
    amount: float

    def plus(self, other: "CurrencyAmount") -> "CurrencyAmount":
        if other.currency != self.currency:
            raise ValueError(f"Cannot add {other.currency} to {self.currency}")
        return CurrencyAmount(self.currency, self.amount + other.amount)

    def multiplied_by(self, factor: float) -> "CurrencyAmount":
        return CurrencyAmount(self.currency, self.amount * factor)

    def __str__(self) -> str:
        return f"{self.currency} {self.amount:.2f}"


@dataclass(frozen=True)
class MultiCurrencyAmount:
    """Amounts in several currencies, at most one per currency."""

    amounts: tuple[CurrencyAmount, ...] = ()

    def __post_init__(self) -> None:
        currencies = [a.currency for a in self.amounts]
        if len(set(currencies)) != len(currencies):
            raise ValueError("MultiCurrencyAmount must not contain duplicate currencies")

    @classmethod
    def of(cls, *amounts: CurrencyAmount) -> "MultiCurrencyAmount":
        """Build from amounts, summing any that share a currency."""
        return cls.total(amounts)

    @classmethod
    def total(cls, amounts: Iterable[CurrencyAmount]) -> "MultiCurrencyAmount":
        sums: dict[Currency, float] = {}
        for a in amounts:
            sums[a.currency] = sums.get(a.currency, 0.0) + a.amount
        return cls.from_mapping(sums)

    @classmethod
    def from_mapping(cls, amounts: Mapping[Currency, float]) -> "MultiCurrencyAmount":
        return cls(tuple(CurrencyAmount(c, amounts[c]) for c in sorted(amounts)))

    @property
    def currencies(self) -> frozenset[Currency]:
        return frozenset(a.currency for a in self.amounts)

    def amount(self, currency: Currency) -> CurrencyAmount:
        """Amount in `currency`. Raises KeyError if absent."""
        for a in self.amounts:
            if a.currency == currency:
                return a
        raise KeyError(f"No amount in currency {currency}")

    def plus(self, other: "MultiCurrencyAmount") -> "MultiCurrencyAmount":
        return MultiCurrencyAmount.total(list(self.amounts) + list(other.amounts))

    def __iter__(self) -> Iterator[CurrencyAmount]:
        return iter(self.amounts)

    def __len__(self) -> int:
        return len(self.amounts)
