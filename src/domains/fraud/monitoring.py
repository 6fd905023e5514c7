"""Remote model outcome tracking.

Every remote analysis ends either as a remote verdict or as a fallback to
the heuristic scorer. The monitor counts both, broken down by failure kind,
and keeps a sliding window of request latencies.
"""

import time
from collections import Counter, deque
from dataclasses import dataclass, field
from typing import Any

import numpy as np
import structlog

logger = structlog.get_logger()


@dataclass
class LatencyStats:
    p50_ms: float = 0.0
    p95_ms: float = 0.0
    max_ms: float = 0.0
    count: int = 0


@dataclass
class FallbackEvent:
    kind: str
    error: str
    timestamp: float = field(default_factory=time.time)


class RemoteModelMonitor:
    def __init__(self, window: int = 500) -> None:
        self._latencies: deque[float] = deque(maxlen=window)
        self._fallbacks: deque[FallbackEvent] = deque(maxlen=window)
        self._fallback_kinds: Counter[str] = Counter()
        self._successes = 0

    @property
    def successes(self) -> int:
        return self._successes

    @property
    def fallbacks(self) -> int:
        return sum(self._fallback_kinds.values())

    @property
    def fallback_kinds(self) -> dict[str, int]:
        return dict(self._fallback_kinds)

    @property
    def last_fallback(self) -> FallbackEvent | None:
        return self._fallbacks[-1] if self._fallbacks else None

    def record_success(self, latency_ms: float) -> None:
        self._successes += 1
        self._latencies.append(latency_ms)

    def record_fallback(self, kind: str, error: str, latency_ms: float | None = None) -> None:
        self._fallback_kinds[kind] += 1
        self._fallbacks.append(FallbackEvent(kind=kind, error=error))
        if latency_ms is not None:
            self._latencies.append(latency_ms)
        logger.debug("remote_model_fallback_recorded", kind=kind, total=self.fallbacks)

    def latency_stats(self) -> LatencyStats:
        if not self._latencies:
            return LatencyStats()
        latencies = np.array(self._latencies)
        return LatencyStats(
            p50_ms=round(float(np.percentile(latencies, 50)), 2),
            p95_ms=round(float(np.percentile(latencies, 95)), 2),
            max_ms=round(float(np.max(latencies)), 2),
            count=len(latencies),
        )

    def summary(self) -> dict[str, Any]:
        total = self._successes + self.fallbacks
        latency = self.latency_stats()
        last = self.last_fallback
        return {
            "requests": total,
            "successes": self._successes,
            "fallbacks": self.fallbacks,
            "fallback_rate": round(self.fallbacks / total, 4) if total else 0.0,
            "fallback_kinds": self.fallback_kinds,
            "latency": {
                "p50_ms": latency.p50_ms,
                "p95_ms": latency.p95_ms,
                "max_ms": latency.max_ms,
                "count": latency.count,
            },
            "last_fallback": (
                {"kind": last.kind, "error": last.error, "timestamp": last.timestamp}
                if last
                else None
            ),
        }
