"""Velocity heuristic rule."""

from ..config import FraudConfig
from ..models import RiskReason, RuleResult, Transaction, TransactionFeatures
from .base import FraudRule


class HighVelocityRule(FraudRule):
    """Triggers on a burst signal above the velocity threshold.

    ``velocity`` is precomputed by the caller in [0, 1]; it is not derived
    from transaction history here.
    """

    rule_id = "high_velocity"
    reason = RiskReason.HIGH_VELOCITY

    def weight(self, config: FraudConfig) -> int:
        return config.weights.high_velocity

    def evaluate(
        self,
        transaction: Transaction,
        features: TransactionFeatures,
        config: FraudConfig,
    ) -> RuleResult:
        threshold = config.thresholds.velocity_threshold
        if transaction.velocity <= threshold:
            return self._not_triggered()

        return self._triggered(
            config,
            details=f"Velocity {transaction.velocity:.2f} above {threshold:.2f}",
            evidence={"velocity": transaction.velocity, "threshold": threshold},
        )
