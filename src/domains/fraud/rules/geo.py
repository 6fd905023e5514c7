"""Origin-based heuristic rule."""

from ..config import FraudConfig
from ..models import RiskReason, RuleResult, Transaction, TransactionFeatures
from .base import FraudRule


class ForeignIpRule(FraudRule):
    """Triggers when the transaction came from a foreign or untrusted IP."""

    rule_id = "foreign_ip"
    reason = RiskReason.FOREIGN_IP

    def weight(self, config: FraudConfig) -> int:
        return config.weights.foreign_ip

    def evaluate(
        self,
        transaction: Transaction,
        features: TransactionFeatures,
        config: FraudConfig,
    ) -> RuleResult:
        if not transaction.is_foreign_ip:
            return self._not_triggered()

        return self._triggered(
            config,
            details=f"Foreign IP origin ({transaction.location})",
            evidence={"location": transaction.location},
        )
