"""Tests for application and fraud scoring configuration."""

from src.config import Settings
from src.domains.fraud.config import FraudConfig


class TestSettings:
    def test_default_settings(self, monkeypatch):
        monkeypatch.delenv("REMOTE_MODEL_API_KEY", raising=False)
        settings = Settings(_env_file=None)
        assert settings.app_name == "txn-sentinel"
        assert settings.port == 8000
        assert settings.remote_model_api_key is None
        assert settings.stream_interval_seconds == 1.5
        assert settings.feed_limit == 50

    def test_settings_from_env(self, monkeypatch):
        monkeypatch.setenv("REMOTE_MODEL_API_KEY", "AIza-test")
        monkeypatch.setenv("REMOTE_MODEL_TIMEOUT_SECONDS", "3.5")
        monkeypatch.setenv("STREAM_ENABLED", "true")
        settings = Settings(_env_file=None)
        assert settings.remote_model_api_key == "AIza-test"
        assert settings.remote_model_timeout_seconds == 3.5
        assert settings.stream_enabled is True

    def test_database_url_default(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        settings = Settings(_env_file=None)
        assert "postgresql+asyncpg" in settings.database_url


class TestFraudConfig:
    def test_defaults(self):
        config = FraudConfig()
        assert config.baseline.history_capacity == 50
        assert config.baseline.min_samples == 5
        assert config.thresholds.zscore_threshold == 2.5
        assert config.thresholds.velocity_threshold == 0.8
        assert config.thresholds.high_value_threshold == 4500.0
        assert (
            config.weights.statistical_outlier,
            config.weights.high_velocity,
            config.weights.foreign_ip,
            config.weights.high_value,
        ) == (40, 30, 25, 10)
        assert config.scoring.fraud_threshold == 50

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("FRAUD_HISTORY_CAPACITY", "20")
        monkeypatch.setenv("FRAUD_ZSCORE_THRESHOLD", "3.0")
        monkeypatch.setenv("FRAUD_HIGH_VALUE_THRESHOLD", "10000")
        config = FraudConfig.from_env()
        assert config.baseline.history_capacity == 20
        assert config.thresholds.zscore_threshold == 3.0
        assert config.thresholds.high_value_threshold == 10000.0
        assert config.thresholds.velocity_threshold == 0.8
