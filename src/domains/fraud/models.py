"""Pydantic models for the fraud domain."""

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class AnalysisType(StrEnum):
    HEURISTIC = "heuristic"
    REMOTE_MODEL = "remote_model"


class TransactionOrigin(StrEnum):
    STREAM = "stream"
    MANUAL = "manual"


class RiskReason(StrEnum):
    STATISTICAL_OUTLIER = "Statistical Outlier"
    HIGH_VELOCITY = "High Velocity"
    FOREIGN_IP = "Foreign IP"
    HIGH_VALUE = "High Value"


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Transaction(BaseModel):
    amount: float = Field(gt=0)
    merchant: str
    location: str
    is_foreign_ip: bool = False
    # Precomputed burst/frequency signal supplied by the caller
    velocity: float = Field(default=0.0, ge=0.0, le=1.0)
    timestamp: datetime = Field(default_factory=_utcnow)


class AnalyzedTransaction(Transaction):
    risk_score: int = Field(ge=0, le=100)
    is_fraud: bool
    reasons: list[str] = []
    analysis_type: AnalysisType
    analyzed_at: datetime = Field(default_factory=_utcnow)
    origin: TransactionOrigin | None = None


class RuleResult(BaseModel):
    rule_name: str
    triggered: bool
    score: int = 0
    reason: RiskReason | None = None
    details: str = ""
    evidence: dict = Field(default_factory=dict)


class TransactionFeatures(BaseModel):
    z_score: float = 0.0
    baseline_count: int = 0


class RemoteVerdict(BaseModel):
    """Strict shape of the JSON verdict returned by the remote model."""

    model_config = ConfigDict(strict=True, extra="ignore")

    risk_score: int = Field(alias="riskScore", ge=0, le=100)
    is_fraud: bool = Field(alias="isFraud")
    reasons: list[str]


class ManualSubmission(BaseModel):
    amount: float = Field(gt=0)
    merchant: str = "Amazon"
    location: str = "New York, US"
    is_foreign_ip: bool = False
    velocity: float = Field(default=0.1, ge=0.0, le=1.0)

    def to_transaction(self) -> Transaction:
        return Transaction(
            amount=self.amount,
            merchant=self.merchant,
            location=self.location,
            is_foreign_ip=self.is_foreign_ip,
            velocity=self.velocity,
        )


class FeedStats(BaseModel):
    total: int = 0
    fraud: int = 0
    blocked_amount: float = 0.0


class FeedEntry(AnalyzedTransaction):
    id: int
    recorded_at: datetime | None = None
