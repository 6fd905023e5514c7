"""Scoring configuration and remote model status endpoints."""

from fastapi import APIRouter, Depends

from src.api.dependencies import get_coordinator
from src.config import settings
from src.domains.fraud.scorer import AnalysisCoordinator

router = APIRouter(prefix="/api/v1/fraud", tags=["fraud"])


@router.get("/rules")
async def list_rules(
    coordinator: AnalysisCoordinator = Depends(get_coordinator),  # noqa: B008
) -> dict:
    """Return rules in evaluation order with their weights and thresholds."""
    config = coordinator.heuristic.config
    rules = coordinator.heuristic.rules
    return {
        "rule_count": len(rules),
        "rules": [
            {
                "rule_id": rule.rule_id,
                "reason": rule.reason.value,
                "weight": rule.weight(config),
            }
            for rule in rules
        ],
        "thresholds": {
            "zscore": config.thresholds.zscore_threshold,
            "velocity": config.thresholds.velocity_threshold,
            "high_value": config.thresholds.high_value_threshold,
            "fraud": config.scoring.fraud_threshold,
        },
        "baseline": {
            "capacity": config.baseline.history_capacity,
            "min_samples": config.baseline.min_samples,
        },
    }


@router.get("/remote")
async def remote_model_status(
    coordinator: AnalysisCoordinator = Depends(get_coordinator),  # noqa: B008
) -> dict:
    return {
        "credential_configured": bool(settings.remote_model_api_key),
        "endpoint": settings.remote_model_endpoint,
        "timeout_seconds": settings.remote_model_timeout_seconds,
        **coordinator.remote.monitor.summary(),
    }
