"""Request-scoped access to the scoring components held on app.state."""

from fastapi import Request

from src.domains.fraud.scorer import AnalysisCoordinator
from src.stream.runner import StreamRunner


def get_coordinator(request: Request) -> AnalysisCoordinator:
    return request.app.state.coordinator


def get_stream_runner(request: Request) -> StreamRunner:
    return request.app.state.stream_runner
