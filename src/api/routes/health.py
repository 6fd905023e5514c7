"""Health and readiness endpoints."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from src.config import settings

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict:
    from src.main import get_uptime

    return {
        "status": "healthy",
        "version": settings.app_version,
        "uptime_seconds": get_uptime(),
    }


@router.get("/ready")
async def ready(request: Request) -> JSONResponse:
    db_ok = False

    try:
        from src.db.database import check_db

        db_ok = await check_db()
    except Exception:
        db_ok = False

    # Scoring works without the remote model, so it does not gate readiness
    runner = getattr(request.app.state, "stream_runner", None)
    status_code = 200 if db_ok else 503
    return JSONResponse(
        status_code=status_code,
        content={
            "status": "ready" if db_ok else "degraded",
            "database": db_ok,
            "remote_model_configured": bool(settings.remote_model_api_key),
            "stream_running": bool(runner and runner.is_running),
        },
    )
