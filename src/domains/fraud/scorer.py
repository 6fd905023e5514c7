"""Analysis coordinator: routes each transaction to one scoring path."""

import structlog

from .models import AnalysisType, AnalyzedTransaction, Transaction, TransactionOrigin
from .remote import RemoteModelAdapter
from .rules_engine import HeuristicScorer

logger = structlog.get_logger()


class AnalysisCoordinator:
    """Chooses heuristic or remote scoring by transaction origin.

    Stream transactions always take the heuristic path. Manual submissions
    take the remote path only when a credential is supplied for that call.
    """

    def __init__(self, heuristic: HeuristicScorer, remote: RemoteModelAdapter) -> None:
        self._heuristic = heuristic
        self._remote = remote

    @property
    def heuristic(self) -> HeuristicScorer:
        return self._heuristic

    @property
    def remote(self) -> RemoteModelAdapter:
        return self._remote

    @staticmethod
    def choose_path(origin: TransactionOrigin, credential: str | None = None) -> AnalysisType:
        if origin == TransactionOrigin.MANUAL and credential:
            return AnalysisType.REMOTE_MODEL
        return AnalysisType.HEURISTIC

    async def analyze(
        self,
        transaction: Transaction,
        origin: TransactionOrigin,
        credential: str | None = None,
    ) -> AnalyzedTransaction:
        path = self.choose_path(origin, credential)
        logger.debug("analysis_path_selected", origin=origin.value, path=path.value)

        if path == AnalysisType.REMOTE_MODEL:
            analyzed = await self._remote.score_remote(transaction, credential)
        else:
            analyzed = self._heuristic.score(transaction)

        return analyzed.model_copy(update={"origin": origin})
