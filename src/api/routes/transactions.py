"""Manual submission and live feed endpoints."""

import structlog
from fastapi import APIRouter, Depends, Header, Query
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.dependencies import get_coordinator
from src.config import settings
from src.db.database import get_session
from src.domains.fraud.models import ManualSubmission, TransactionOrigin
from src.domains.fraud.scorer import AnalysisCoordinator
from src.domains.fraud.sink import compute_feed_stats, persist_analyzed, recent_transactions

logger = structlog.get_logger()
router = APIRouter(prefix="/api/v1/transactions", tags=["transactions"])


@router.post("")
async def submit_transaction(
    submission: ManualSubmission,
    session: AsyncSession = Depends(get_session),  # noqa: B008
    coordinator: AnalysisCoordinator = Depends(get_coordinator),  # noqa: B008
    x_model_key: str | None = Header(default=None),
) -> dict:
    credential = x_model_key or settings.remote_model_api_key
    analyzed = await coordinator.analyze(
        submission.to_transaction(), TransactionOrigin.MANUAL, credential
    )

    persisted = True
    try:
        await persist_analyzed(session, analyzed)
    except Exception:
        persisted = False
        logger.exception("manual_submission_persist_error", risk_score=analyzed.risk_score)

    logger.info(
        "manual_transaction_analyzed",
        amount=analyzed.amount,
        risk_score=analyzed.risk_score,
        is_fraud=analyzed.is_fraud,
        analysis_type=analyzed.analysis_type.value,
        persisted=persisted,
    )

    return {**analyzed.model_dump(mode="json"), "persisted": persisted}


@router.get("/feed")
async def transaction_feed(
    session: AsyncSession = Depends(get_session),  # noqa: B008
    limit: int = Query(default=settings.feed_limit, ge=1, le=500),
) -> dict:
    entries = await recent_transactions(session, limit=limit)
    return {
        "items": [e.model_dump(mode="json") for e in entries],
        "limit": limit,
    }


@router.get("/stats")
async def transaction_stats(
    session: AsyncSession = Depends(get_session),  # noqa: B008
    limit: int = Query(default=settings.feed_limit, ge=1, le=500),
) -> dict:
    entries = await recent_transactions(session, limit=limit)
    return compute_feed_stats(entries).model_dump()
