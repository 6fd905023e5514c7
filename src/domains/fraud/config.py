"""Fraud scoring configuration with sensible defaults."""

import os
from dataclasses import dataclass, field


@dataclass
class BaselineSettings:
    history_capacity: int = 50
    min_samples: int = 5


@dataclass
class RuleThresholds:
    zscore_threshold: float = 2.5
    velocity_threshold: float = 0.8
    high_value_threshold: float = 4_500.0


@dataclass
class RuleWeights:
    statistical_outlier: int = 40
    high_velocity: int = 30
    foreign_ip: int = 25
    high_value: int = 10


@dataclass
class ScoringSettings:
    max_score: int = 100
    fraud_threshold: int = 50  # strictly greater than this is fraud


@dataclass
class RemoteModelSettings:
    baseline_statement: str = "Typical spend range for this account is $10 - $200."
    latency_window: int = 500


@dataclass
class FraudConfig:
    baseline: BaselineSettings = field(default_factory=BaselineSettings)
    thresholds: RuleThresholds = field(default_factory=RuleThresholds)
    weights: RuleWeights = field(default_factory=RuleWeights)
    scoring: ScoringSettings = field(default_factory=ScoringSettings)
    remote: RemoteModelSettings = field(default_factory=RemoteModelSettings)

    @classmethod
    def from_env(cls) -> "FraudConfig":
        """Load config with env var overrides. Env vars use FRAUD_ prefix."""
        config = cls()

        # Baseline overrides
        if v := os.getenv("FRAUD_HISTORY_CAPACITY"):
            config.baseline.history_capacity = int(v)
        if v := os.getenv("FRAUD_MIN_SAMPLES"):
            config.baseline.min_samples = int(v)

        # Threshold overrides
        if v := os.getenv("FRAUD_ZSCORE_THRESHOLD"):
            config.thresholds.zscore_threshold = float(v)
        if v := os.getenv("FRAUD_VELOCITY_THRESHOLD"):
            config.thresholds.velocity_threshold = float(v)
        if v := os.getenv("FRAUD_HIGH_VALUE_THRESHOLD"):
            config.thresholds.high_value_threshold = float(v)

        # Scoring overrides
        if v := os.getenv("FRAUD_THRESHOLD"):
            config.scoring.fraud_threshold = int(v)

        if v := os.getenv("FRAUD_REMOTE_BASELINE_STATEMENT"):
            config.remote.baseline_statement = v

        return config


# Module-level default instance
default_config = FraudConfig()
