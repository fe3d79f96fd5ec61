"""Identifiers for trades, securities and legal entities."""

from __future__ import annotations

from dataclasses import dataclass

_SEPARATOR = "~"


@dataclass(frozen=True, order=True)
class StandardId:
    """An identifier made of a scheme and a value, written `scheme~value`."""

    scheme: str
    value: str

    def __post_init__(self) -> None:
        if not self.scheme or not self.value:
            raise ValueError("StandardId scheme and value must not be empty")
        if _SEPARATOR in self.scheme:
            raise ValueError(f"StandardId scheme must not contain '{_SEPARATOR}': {self.scheme!r}")

    @classmethod
    def of(cls, scheme: str, value: str) -> "StandardId":
        return cls(scheme, value)

    @classmethod
    def parse(cls, text: str) -> "StandardId":
        scheme, sep, value = text.partition(_SEPARATOR)
        if not sep:
            raise ValueError(f"Unable to parse StandardId, expected 'scheme~value': {text!r}")
        return cls(scheme, value)

    def __str__(self) -> str:
        return f"{self.scheme}{_SEPARATOR}{self.value}"


@dataclass(frozen=True, order=True)
class SecurityId:
    """Identifier of a security, usable as a reference data key."""

    standard_id: StandardId

    @classmethod
    def of(cls, scheme: str, value: str) -> "SecurityId":
        return cls(StandardId(scheme, value))

    def __str__(self) -> str:
        return str(self.standard_id)


@dataclass(frozen=True, order=True)
class LegalEntityId:
    """Identifier of a legal entity (bond issuer, counterparty)."""

    standard_id: StandardId

    @classmethod
    def of(cls, scheme: str, value: str) -> "LegalEntityId":
        return cls(StandardId(scheme, value))

    def __str__(self) -> str:
        return str(self.standard_id)
