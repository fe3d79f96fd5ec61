"""
Zero-rate discount curves used as market data values.

- Times are **year fractions** from the valuation date (Act/365F).
- Rates are **continuously compounded zero rates**.
- Interpolation is **linear in zero rates** between pillars, flat outside.
- `bumped` shifts every pillar, `bumped_at` a single pillar; both back the
  PV01 measures.
"""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class ZeroRateCurve:
    """
    Zero rate curve (continuously compounded) with linear interpolation.

    `zero_rates_cc[i]` is the zero rate at `pillars[i]`; pillars are strictly
    increasing year fractions.
    """

    name: str
    pillars: tuple[float, ...]
    zero_rates_cc: tuple[float, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "pillars", tuple(self.pillars))
        object.__setattr__(self, "zero_rates_cc", tuple(self.zero_rates_cc))
        self._validate()

    def _validate(self) -> None:
        if not self.pillars:
            raise ValueError("curve has no pillars")
        if len(self.pillars) != len(self.zero_rates_cc):
            raise ValueError("pillars and zero_rates_cc must have the same length")
        for i in range(1, len(self.pillars)):
            if self.pillars[i] <= self.pillars[i - 1]:
                raise ValueError("pillars must be strictly increasing")

    @classmethod
    def flat(cls, name: str, rate: float) -> "ZeroRateCurve":
        return cls(name=name, pillars=(1.0,), zero_rates_cc=(rate,))

    def zero_rate_cc(self, t: float) -> float:
        """Continuously compounded zero rate at year fraction t (t >= 0)."""
        if t < 0:
            raise ValueError("t must be >= 0")
        if t <= self.pillars[0]:
            return self.zero_rates_cc[0]
        if t >= self.pillars[-1]:
            return self.zero_rates_cc[-1]
        for i in range(len(self.pillars) - 1):
            if self.pillars[i] <= t <= self.pillars[i + 1]:
                t0, t1 = self.pillars[i], self.pillars[i + 1]
                r0, r1 = self.zero_rates_cc[i], self.zero_rates_cc[i + 1]
                return r0 + (r1 - r0) * (t - t0) / (t1 - t0)
        return self.zero_rates_cc[-1]

    def df(self, t: float) -> float:
        """Discount factor DF(t) = exp(-r(t)*t)."""
        return math.exp(-self.zero_rate_cc(t) * t)

    def bumped(self, bump: float) -> "ZeroRateCurve":
        """New curve with a parallel additive shift (1bp = 0.0001) to all zero rates."""
        return ZeroRateCurve(
            name=self.name,
            pillars=self.pillars,
            zero_rates_cc=tuple(r + bump for r in self.zero_rates_cc),
        )

    def bumped_at(self, index: int, bump: float) -> "ZeroRateCurve":
        """New curve with the zero rate at pillar `index` shifted by `bump`."""
        if not 0 <= index < len(self.pillars):
            raise IndexError(f"pillar index {index} out of range")
        rates = list(self.zero_rates_cc)
        rates[index] += bump
        return ZeroRateCurve(name=self.name, pillars=self.pillars, zero_rates_cc=tuple(rates))
