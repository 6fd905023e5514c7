"""Unit tests for the individual heuristic rules."""

import pytest

from src.domains.fraud.config import FraudConfig
from src.domains.fraud.models import RiskReason, TransactionFeatures
from src.domains.fraud.rules import (
    ALL_RULES,
    ForeignIpRule,
    HighValueRule,
    HighVelocityRule,
    StatisticalOutlierRule,
)
from tests.conftest import make_transaction

CONFIG = FraudConfig()
NO_SIGNAL = TransactionFeatures()


class TestStatisticalOutlierRule:
    rule = StatisticalOutlierRule()

    @pytest.mark.parametrize("z", [0.0, 2.5, -2.5, 1.9])
    def test_within_threshold(self, z):
        result = self.rule.evaluate(make_transaction(), TransactionFeatures(z_score=z), CONFIG)
        assert not result.triggered
        assert result.score == 0

    @pytest.mark.parametrize("z", [2.51, -2.51, 40.0])
    def test_beyond_threshold_either_side(self, z):
        result = self.rule.evaluate(make_transaction(), TransactionFeatures(z_score=z), CONFIG)
        assert result.triggered
        assert result.score == 40
        assert result.reason == RiskReason.STATISTICAL_OUTLIER
        assert result.evidence["zscore"] == z


class TestHighVelocityRule:
    rule = HighVelocityRule()

    def test_at_threshold_not_triggered(self):
        result = self.rule.evaluate(make_transaction(velocity=0.8), NO_SIGNAL, CONFIG)
        assert not result.triggered

    def test_above_threshold(self):
        result = self.rule.evaluate(make_transaction(velocity=0.81), NO_SIGNAL, CONFIG)
        assert result.triggered
        assert result.score == 30
        assert result.reason == RiskReason.HIGH_VELOCITY


class TestForeignIpRule:
    rule = ForeignIpRule()

    def test_domestic(self):
        assert not self.rule.evaluate(make_transaction(), NO_SIGNAL, CONFIG).triggered

    def test_foreign(self):
        result = self.rule.evaluate(
            make_transaction(is_foreign_ip=True, location="Lagos, NG"), NO_SIGNAL, CONFIG
        )
        assert result.triggered
        assert result.score == 25
        assert result.reason == RiskReason.FOREIGN_IP
        assert "Lagos, NG" in result.details


class TestHighValueRule:
    rule = HighValueRule()

    def test_at_threshold_not_triggered(self):
        assert not self.rule.evaluate(make_transaction(amount=4500), NO_SIGNAL, CONFIG).triggered

    def test_above_threshold(self):
        result = self.rule.evaluate(make_transaction(amount=4500.01), NO_SIGNAL, CONFIG)
        assert result.triggered
        assert result.score == 10
        assert result.reason == RiskReason.HIGH_VALUE

    def test_configurable_threshold(self):
        config = FraudConfig()
        config.thresholds.high_value_threshold = 100.0
        assert self.rule.evaluate(make_transaction(amount=150), NO_SIGNAL, config).triggered


class TestRuleOrder:
    def test_all_rules_evaluation_order(self):
        assert [r.rule_id for r in ALL_RULES] == [
            "statistical_outlier",
            "high_velocity",
            "foreign_ip",
            "high_value",
        ]
