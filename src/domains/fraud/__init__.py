"""Fraud scoring domain."""

from .baseline import RollingStatsTracker
from .models import (
    AnalysisType,
    AnalyzedTransaction,
    RemoteVerdict,
    RiskReason,
    RuleResult,
    Transaction,
    TransactionOrigin,
)
from .monitoring import RemoteModelMonitor
from .remote import RemoteModelAdapter
from .rules import ALL_RULES
from .rules_engine import HeuristicScorer
from .scorer import AnalysisCoordinator

__all__ = [
    "ALL_RULES",
    "AnalysisCoordinator",
    "AnalysisType",
    "AnalyzedTransaction",
    "HeuristicScorer",
    "RemoteModelAdapter",
    "RemoteModelMonitor",
    "RemoteVerdict",
    "RiskReason",
    "RollingStatsTracker",
    "RuleResult",
    "Transaction",
    "TransactionOrigin",
]
