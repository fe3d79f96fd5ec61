"""Measures: named analytical outputs that a calculation function can produce."""

from __future__ import annotations

import re
from dataclasses import dataclass

_NAME = re.compile(r"^[A-Za-z0-9]+$")


@dataclass(frozen=True)
class Measure:
    """
    Opaque, comparable measure identifier.

    `scenario_aware` is True for measures producing one value per scenario and
    False for measures producing a single value for the whole batch.
    """

    name: str
    scenario_aware: bool = True

    def __post_init__(self) -> None:
        if not _NAME.match(self.name):
            raise ValueError(f"Measure name must be alphanumeric: {self.name!r}")

    @classmethod
    def of(cls, name: str, scenario_aware: bool = True) -> "Measure":
        return cls(name, scenario_aware)

    def __str__(self) -> str:
        return self.name


class Measures:
    """Built-in measures."""

    PRESENT_VALUE = Measure("PresentValue")
    PV01_CALIBRATED_SUM = Measure("PV01CalibratedSum")
    PV01_CALIBRATED_BUCKETED = Measure("PV01CalibratedBucketed")
    UNIT_PRICE = Measure("UnitPrice")
    PAR_SPREAD = Measure("ParSpread")
    PAR_RATE = Measure("ParRate")
    CURRENCY_EXPOSURE = Measure("CurrencyExposure")
    RESOLVED_TARGET = Measure("ResolvedTarget", scenario_aware=False)

    @classmethod
    def all(cls) -> tuple[Measure, ...]:
        return tuple(v for v in vars(cls).values() if isinstance(v, Measure))

    @classmethod
    def by_name(cls, name: str) -> Measure:
        """Built-in measure with the given name, or a new measure if not built in."""
        for measure in cls.all():
            if measure.name == name:
                return measure
        return Measure.of(name)
