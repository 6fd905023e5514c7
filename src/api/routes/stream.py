"""Background stream toggle."""

from fastapi import APIRouter, Depends

from src.api.dependencies import get_stream_runner
from src.stream.runner import StreamRunner

router = APIRouter(prefix="/api/v1/stream", tags=["stream"])


@router.get("")
async def stream_status(
    runner: StreamRunner = Depends(get_stream_runner),  # noqa: B008
) -> dict:
    return runner.status()


@router.post("/start")
async def start_stream(
    runner: StreamRunner = Depends(get_stream_runner),  # noqa: B008
) -> dict:
    started = runner.start()
    return {"changed": started, **runner.status()}


@router.post("/stop")
async def stop_stream(
    runner: StreamRunner = Depends(get_stream_runner),  # noqa: B008
) -> dict:
    stopped = await runner.stop()
    return {"changed": stopped, **runner.status()}
