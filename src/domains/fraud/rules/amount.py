"""Amount-based heuristic rules."""

from ..config import FraudConfig
from ..models import RiskReason, RuleResult, Transaction, TransactionFeatures
from .base import FraudRule


class StatisticalOutlierRule(FraudRule):
    """Triggers when the amount sits far from the rolling baseline."""

    rule_id = "statistical_outlier"
    reason = RiskReason.STATISTICAL_OUTLIER

    def weight(self, config: FraudConfig) -> int:
        return config.weights.statistical_outlier

    def evaluate(
        self,
        transaction: Transaction,
        features: TransactionFeatures,
        config: FraudConfig,
    ) -> RuleResult:
        threshold = config.thresholds.zscore_threshold
        zscore = features.z_score

        if abs(zscore) <= threshold:
            return self._not_triggered()

        return self._triggered(
            config,
            details=f"Z-score {zscore:.2f} beyond +/-{threshold:.2f}",
            evidence={"zscore": zscore, "threshold": threshold},
        )


class HighValueRule(FraudRule):
    """Triggers for single transactions above the absolute value limit."""

    rule_id = "high_value"
    reason = RiskReason.HIGH_VALUE

    def weight(self, config: FraudConfig) -> int:
        return config.weights.high_value

    def evaluate(
        self,
        transaction: Transaction,
        features: TransactionFeatures,
        config: FraudConfig,
    ) -> RuleResult:
        amount = transaction.amount
        threshold = config.thresholds.high_value_threshold

        if amount <= threshold:
            return self._not_triggered()

        return self._triggered(
            config,
            details=f"Amount ${amount:,.2f} exceeds ${threshold:,.2f}",
            evidence={"amount": amount, "threshold": threshold},
        )
