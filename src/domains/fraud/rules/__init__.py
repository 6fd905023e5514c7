"""Heuristic fraud rules package.

Exports ALL_RULES (rule instances in evaluation order) and the individual
rule classes for direct use. The order of ALL_RULES is the order reasons
appear on an analyzed transaction.
"""

from .amount import HighValueRule, StatisticalOutlierRule
from .base import FraudRule
from .geo import ForeignIpRule
from .velocity import HighVelocityRule

# All rule instances in evaluation order
ALL_RULES: list[FraudRule] = [
    StatisticalOutlierRule(),
    HighVelocityRule(),
    ForeignIpRule(),
    HighValueRule(),
]

__all__ = [
    "ALL_RULES",
    "FraudRule",
    "ForeignIpRule",
    "HighValueRule",
    "HighVelocityRule",
    "StatisticalOutlierRule",
]
