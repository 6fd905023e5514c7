"""Unit tests for origin-based routing in the analysis coordinator."""

from unittest.mock import AsyncMock

import pytest

from src.domains.fraud.models import AnalysisType, AnalyzedTransaction, TransactionOrigin
from src.domains.fraud.remote import RemoteModelAdapter
from src.domains.fraud.scorer import AnalysisCoordinator
from tests.conftest import make_transaction


def _remote_verdict(txn) -> AnalyzedTransaction:
    return AnalyzedTransaction(
        **txn.model_dump(),
        risk_score=80,
        is_fraud=True,
        reasons=["model says so"],
        analysis_type=AnalysisType.REMOTE_MODEL,
    )


@pytest.fixture
def remote(heuristic):
    adapter = RemoteModelAdapter(heuristic, endpoint="https://model.test")
    adapter.score_remote = AsyncMock(side_effect=lambda txn, key: _remote_verdict(txn))
    return adapter


@pytest.fixture
def coordinator(heuristic, remote):
    return AnalysisCoordinator(heuristic, remote)


class TestChoosePath:
    @pytest.mark.parametrize(
        ("origin", "credential", "expected"),
        [
            (TransactionOrigin.STREAM, None, AnalysisType.HEURISTIC),
            (TransactionOrigin.STREAM, "key", AnalysisType.HEURISTIC),
            (TransactionOrigin.MANUAL, None, AnalysisType.HEURISTIC),
            (TransactionOrigin.MANUAL, "", AnalysisType.HEURISTIC),
            (TransactionOrigin.MANUAL, "key", AnalysisType.REMOTE_MODEL),
        ],
    )
    def test_routing_table(self, origin, credential, expected):
        assert AnalysisCoordinator.choose_path(origin, credential) == expected


class TestAnalyze:
    @pytest.mark.asyncio
    async def test_stream_never_uses_remote(self, coordinator, remote, tracker):
        result = await coordinator.analyze(
            make_transaction(), TransactionOrigin.STREAM, credential="key"
        )
        assert result.analysis_type == AnalysisType.HEURISTIC
        assert result.origin == TransactionOrigin.STREAM
        remote.score_remote.assert_not_called()
        assert len(tracker) == 1

    @pytest.mark.asyncio
    async def test_manual_without_credential_uses_heuristic(self, coordinator, remote):
        result = await coordinator.analyze(make_transaction(), TransactionOrigin.MANUAL)
        assert result.analysis_type == AnalysisType.HEURISTIC
        assert result.origin == TransactionOrigin.MANUAL
        remote.score_remote.assert_not_called()

    @pytest.mark.asyncio
    async def test_manual_with_credential_uses_remote(self, coordinator, remote):
        txn = make_transaction(amount=42.0)
        result = await coordinator.analyze(txn, TransactionOrigin.MANUAL, credential="key")
        assert result.analysis_type == AnalysisType.REMOTE_MODEL
        assert result.origin == TransactionOrigin.MANUAL
        assert result.risk_score == 80
        remote.score_remote.assert_awaited_once_with(txn, "key")

    @pytest.mark.asyncio
    async def test_credential_reevaluated_per_call(self, coordinator, remote):
        await coordinator.analyze(make_transaction(), TransactionOrigin.MANUAL, credential="key")
        second = await coordinator.analyze(make_transaction(), TransactionOrigin.MANUAL)
        assert second.analysis_type == AnalysisType.HEURISTIC
        assert remote.score_remote.await_count == 1
