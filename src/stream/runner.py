"""Recurring background stream: generate, score, persist."""

import asyncio
import contextlib
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from src.domains.fraud.models import AnalyzedTransaction, TransactionOrigin
from src.domains.fraud.scorer import AnalysisCoordinator
from src.domains.fraud.sink import persist_analyzed

from .generator import StreamTransactionGenerator

logger = structlog.get_logger()

SessionFactory = Callable[[], AbstractAsyncContextManager[AsyncSession]]


class StreamRunner:
    """Runs one scoring-and-persist cycle per tick on the event loop.

    Stream transactions always take the heuristic path. Stopping lets an
    in-flight tick finish and schedules no further ticks.
    """

    def __init__(
        self,
        coordinator: AnalysisCoordinator,
        session_factory: SessionFactory,
        generator: StreamTransactionGenerator | None = None,
        interval_seconds: float = 1.5,
    ) -> None:
        self._coordinator = coordinator
        self._session_factory = session_factory
        self._generator = generator or StreamTransactionGenerator()
        self._interval = interval_seconds
        self._task: asyncio.Task | None = None
        self._running = False
        self._ticks = 0
        self._persist_failures = 0
        self._in_tick = False

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def interval_seconds(self) -> float:
        return self._interval

    @property
    def ticks(self) -> int:
        return self._ticks

    @property
    def persist_failures(self) -> int:
        return self._persist_failures

    async def run_once(self) -> AnalyzedTransaction:
        transaction = self._generator.generate()
        analyzed = await self._coordinator.analyze(transaction, TransactionOrigin.STREAM)
        self._ticks += 1

        # The tracker is already updated; a failed write does not roll it back
        try:
            async with self._session_factory() as session:
                await persist_analyzed(session, analyzed)
        except Exception:
            self._persist_failures += 1
            logger.exception("stream_persist_error", risk_score=analyzed.risk_score)

        return analyzed

    async def _loop(self) -> None:
        while self._running:
            self._in_tick = True
            try:
                await self.run_once()
            except Exception:
                logger.exception("stream_tick_error")
            finally:
                self._in_tick = False
            if not self._running:
                break
            await asyncio.sleep(self._interval)

    def start(self) -> bool:
        """Start ticking. Returns False if already running."""
        if self._running or (self._task is not None and not self._task.done()):
            return False
        self._running = True
        self._task = asyncio.create_task(self._loop())
        logger.info("stream_started", interval_seconds=self._interval)
        return True

    async def stop(self) -> bool:
        """Stop ticking. Returns False if not running."""
        if not self._running:
            return False
        self._running = False
        task = self._task
        if task is not None and not task.done():
            # A tick in progress runs to completion; only the idle sleep is cancelled
            if not self._in_tick:
                task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
        self._task = None
        logger.info("stream_stopped", ticks=self._ticks)
        return True

    def status(self) -> dict:
        snapshot = self._coordinator.heuristic.tracker.snapshot()
        return {
            "running": self._running,
            "interval_seconds": self._interval,
            "ticks": self._ticks,
            "persist_failures": self._persist_failures,
            "baseline": {
                "count": snapshot.count,
                "capacity": snapshot.capacity,
                "mean": snapshot.mean,
                "stddev": snapshot.stddev,
            },
        }
