"""
Risk measures implemented via "bump and reprice".

The measures take a present value function and a discounting provider, so the
same implementation serves every product priced off curves.
"""

from calculation.risk.base import BaseRiskMeasure
from calculation.risk.pv01 import PV01CalibratedBucketed, PV01CalibratedSum

__all__ = [
    "BaseRiskMeasure",
    "PV01CalibratedBucketed",
    "PV01CalibratedSum",
]
