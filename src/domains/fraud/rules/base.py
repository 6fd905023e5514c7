"""Abstract base class for heuristic fraud rules."""

from abc import ABC, abstractmethod

from ..config import FraudConfig
from ..models import RiskReason, RuleResult, Transaction, TransactionFeatures


class FraudRule(ABC):
    """Base class for all heuristic rules.

    Rules are synchronous and side-effect free: the z-score is computed
    once by the scorer and handed in through ``features``.
    """

    rule_id: str
    reason: RiskReason

    @abstractmethod
    def weight(self, config: FraudConfig) -> int:
        """Points this rule adds to the risk score when triggered."""
        ...

    @abstractmethod
    def evaluate(
        self,
        transaction: Transaction,
        features: TransactionFeatures,
        config: FraudConfig,
    ) -> RuleResult:
        """Evaluate this rule and return a RuleResult."""
        ...

    def _not_triggered(self) -> RuleResult:
        """Convenience: return a non-triggered result for this rule."""
        return RuleResult(rule_name=self.rule_id, triggered=False)

    def _triggered(
        self,
        config: FraudConfig,
        details: str,
        evidence: dict | None = None,
    ) -> RuleResult:
        """Convenience: return a triggered result for this rule."""
        return RuleResult(
            rule_name=self.rule_id,
            triggered=True,
            score=self.weight(config),
            reason=self.reason,
            details=details,
            evidence=evidence or {},
        )
