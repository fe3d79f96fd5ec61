"""Calculation functions for the built-in target types."""

from calculation.measure import bond_future, swap

__all__ = ["bond_future", "swap"]
