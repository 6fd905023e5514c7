"""Persistence sink and live feed queries for analyzed transactions."""

from collections.abc import Sequence

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.models import AnalyzedTransactionRecord

from .models import AnalyzedTransaction, FeedEntry, FeedStats

logger = structlog.get_logger()


def to_record(analyzed: AnalyzedTransaction) -> AnalyzedTransactionRecord:
    # recorded_at is left to the database server default
    return AnalyzedTransactionRecord(
        amount=analyzed.amount,
        merchant=analyzed.merchant,
        location=analyzed.location,
        is_foreign_ip=analyzed.is_foreign_ip,
        velocity=analyzed.velocity,
        risk_score=analyzed.risk_score,
        is_fraud=analyzed.is_fraud,
        reasons=list(analyzed.reasons),
        analysis_type=analyzed.analysis_type.value,
        origin=analyzed.origin.value if analyzed.origin else None,
        created_at=analyzed.timestamp,
        analyzed_at=analyzed.analyzed_at,
    )


def to_feed_entry(row: AnalyzedTransactionRecord) -> FeedEntry:
    return FeedEntry(
        id=row.id,
        amount=row.amount,
        merchant=row.merchant,
        location=row.location,
        is_foreign_ip=row.is_foreign_ip,
        velocity=row.velocity,
        timestamp=row.created_at,
        risk_score=row.risk_score,
        is_fraud=row.is_fraud,
        reasons=list(row.reasons or []),
        analysis_type=row.analysis_type,
        origin=row.origin,
        analyzed_at=row.analyzed_at,
        recorded_at=row.recorded_at,
    )


async def persist_analyzed(
    session: AsyncSession, analyzed: AnalyzedTransaction
) -> AnalyzedTransactionRecord:
    """Write one analyzed transaction. Errors propagate to the caller."""
    row = to_record(analyzed)
    session.add(row)
    await session.commit()
    logger.debug(
        "analyzed_transaction_persisted",
        risk_score=analyzed.risk_score,
        analysis_type=analyzed.analysis_type.value,
    )
    return row


async def recent_transactions(session: AsyncSession, limit: int = 50) -> list[FeedEntry]:
    stmt = (
        select(AnalyzedTransactionRecord)
        .order_by(AnalyzedTransactionRecord.recorded_at.desc())
        .limit(limit)
    )
    result = await session.execute(stmt)
    return [to_feed_entry(row) for row in result.scalars().all()]


def compute_feed_stats(transactions: Sequence[AnalyzedTransaction]) -> FeedStats:
    flagged = [t for t in transactions if t.is_fraud]
    return FeedStats(
        total=len(transactions),
        fraud=len(flagged),
        blocked_amount=round(sum(t.amount for t in flagged), 2),
    )
