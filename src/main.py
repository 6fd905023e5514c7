"""FastAPI application entry point for txn-sentinel."""

import contextlib
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.middleware.error_handler import global_exception_handler
from src.api.middleware.logging import StructuredLoggingMiddleware
from src.api.routes.fraud import router as fraud_router
from src.api.routes.health import router as health_router
from src.api.routes.stream import router as stream_router
from src.api.routes.transactions import router as transactions_router
from src.config import Settings, settings
from src.db.database import async_session_factory
from src.domains.fraud.baseline import RollingStatsTracker
from src.domains.fraud.config import FraudConfig
from src.domains.fraud.remote import RemoteModelAdapter
from src.domains.fraud.rules_engine import HeuristicScorer
from src.domains.fraud.scorer import AnalysisCoordinator
from src.shared.logging import setup_logging
from src.stream.generator import StreamTransactionGenerator
from src.stream.runner import StreamRunner

logger = structlog.get_logger()

# Track app start time for uptime calculation
APP_START_TIME: float = 0.0


def build_coordinator(app_settings: Settings, fraud_config: FraudConfig) -> AnalysisCoordinator:
    """Wire the single shared tracker into both scoring paths."""
    tracker = RollingStatsTracker(fraud_config.baseline)
    heuristic = HeuristicScorer(tracker, config=fraud_config)
    remote = RemoteModelAdapter(
        heuristic,
        endpoint=app_settings.remote_model_endpoint,
        timeout_seconds=app_settings.remote_model_timeout_seconds,
        config=fraud_config,
    )
    return AnalysisCoordinator(heuristic, remote)


def build_stream_runner(app_settings: Settings, coordinator: AnalysisCoordinator) -> StreamRunner:
    return StreamRunner(
        coordinator,
        session_factory=async_session_factory,
        generator=StreamTransactionGenerator(seed=app_settings.stream_seed),
        interval_seconds=app_settings.stream_interval_seconds,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: startup and shutdown logic."""
    global APP_START_TIME
    APP_START_TIME = time.time()
    setup_logging(settings.log_level, json_logs=not settings.debug)

    logger.info(
        "sentinel_starting",
        app_name=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        remote_model_configured=bool(settings.remote_model_api_key),
    )

    from src.db.database import init_db

    try:
        await init_db()
    except Exception:
        # Scoring still works; writes will fail and be logged per transaction
        logger.warning("database_init_failed", exc_info=True)

    runner: StreamRunner = app.state.stream_runner
    if settings.stream_enabled:
        runner.start()

    yield

    with contextlib.suppress(Exception):
        await runner.stop()
    logger.info("sentinel_shutting_down")


app = FastAPI(
    title="txn-sentinel",
    description="Real-time transaction monitoring with explainable fraud scoring",
    version=settings.app_version,
    lifespan=lifespan,
)

fraud_config = FraudConfig.from_env()
app.state.coordinator = build_coordinator(settings, fraud_config)
app.state.stream_runner = build_stream_runner(settings, app.state.coordinator)

# CORS for the dashboard during local development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.debug else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Structured logging middleware
app.add_middleware(StructuredLoggingMiddleware)

# Global exception handler
app.add_exception_handler(Exception, global_exception_handler)

# Register routers
app.include_router(health_router)
app.include_router(transactions_router)
app.include_router(stream_router)
app.include_router(fraud_router)


def get_uptime() -> int:
    """Get application uptime in seconds."""
    if APP_START_TIME == 0.0:
        return 0
    return int(time.time() - APP_START_TIME)
