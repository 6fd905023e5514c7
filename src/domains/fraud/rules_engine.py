"""Heuristic risk scorer: rolling z-score plus additive rule checks."""

from datetime import UTC, datetime

import structlog

from .baseline import RollingStatsTracker
from .config import FraudConfig, default_config
from .models import (
    AnalysisType,
    AnalyzedTransaction,
    RuleResult,
    Transaction,
    TransactionFeatures,
)
from .rules import ALL_RULES, FraudRule

logger = structlog.get_logger()


class HeuristicScorer:
    """Scores transactions against the shared baseline and the rule set.

    Scoring is additive on a 0-100 scale:
    1. Observe the amount in the tracker -> z-score (history updated)
    2. Run every rule in ALL_RULES order
    3. Sum triggered weights, capped at max_score
    4. Fraud iff score > fraud_threshold
    """

    def __init__(
        self,
        tracker: RollingStatsTracker,
        config: FraudConfig | None = None,
        rules: list[FraudRule] | None = None,
    ) -> None:
        self._tracker = tracker
        self._config = config or default_config
        self._rules = list(rules) if rules is not None else list(ALL_RULES)
        logger.info("heuristic_scorer_initialized", rule_count=len(self._rules))

    @property
    def tracker(self) -> RollingStatsTracker:
        return self._tracker

    @property
    def config(self) -> FraudConfig:
        return self._config

    @property
    def rules(self) -> list[FraudRule]:
        return list(self._rules)

    def evaluate_rules(
        self,
        transaction: Transaction,
        features: TransactionFeatures,
    ) -> list[RuleResult]:
        results: list[RuleResult] = []
        for rule in self._rules:
            try:
                results.append(rule.evaluate(transaction, features, self._config))
            except Exception:
                logger.exception("rule_evaluation_error", rule_id=rule.rule_id)
                results.append(
                    RuleResult(
                        rule_name=rule.rule_id,
                        triggered=False,
                        details="Rule evaluation failed",
                    )
                )
        return results

    def score(self, transaction: Transaction) -> AnalyzedTransaction:
        """Score a transaction. Mutates the shared tracker; never raises."""
        features = TransactionFeatures(
            baseline_count=len(self._tracker),
            z_score=self._tracker.observe_and_score(transaction.amount),
        )
        results = self.evaluate_rules(transaction, features)
        triggered = [r for r in results if r.triggered]

        risk_score = min(sum(r.score for r in triggered), self._config.scoring.max_score)
        is_fraud = risk_score > self._config.scoring.fraud_threshold

        analyzed = AnalyzedTransaction(
            **transaction.model_dump(include=set(Transaction.model_fields)),
            risk_score=risk_score,
            is_fraud=is_fraud,
            reasons=[r.reason.value for r in triggered if r.reason],
            analysis_type=AnalysisType.HEURISTIC,
            analyzed_at=datetime.now(UTC),
        )

        logger.info(
            "heuristic_scored",
            amount=transaction.amount,
            z_score=round(features.z_score, 4),
            baseline_count=features.baseline_count,
            risk_score=risk_score,
            is_fraud=is_fraud,
            triggered=[r.rule_name for r in triggered],
        )
        return analyzed
