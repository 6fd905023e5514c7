"""Rolling amount baseline used for statistical outlier detection.

One tracker instance is shared by every heuristic scoring call in the
process, so each analyzed transaction moves the baseline for the next one.
The instance is constructed once at startup and passed to the scorers;
tests construct their own to control the history.
"""

import math
from collections import deque
from dataclasses import dataclass

from .config import BaselineSettings


@dataclass
class BaselineSnapshot:
    count: int
    capacity: int
    mean: float
    stddev: float


class RollingStatsTracker:
    """Fixed-capacity FIFO of recent amounts with an on-demand z-score."""

    def __init__(self, settings: BaselineSettings | None = None) -> None:
        settings = settings or BaselineSettings()
        self._capacity = settings.history_capacity
        self._min_samples = settings.min_samples
        self._samples: deque[float] = deque(maxlen=self._capacity)

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def samples(self) -> tuple[float, ...]:
        return tuple(self._samples)

    def __len__(self) -> int:
        return len(self._samples)

    def _mean_and_stddev(self) -> tuple[float, float]:
        n = len(self._samples)
        if n == 0:
            return 0.0, 0.0
        mean = sum(self._samples) / n
        variance = sum((x - mean) ** 2 for x in self._samples) / n
        return mean, math.sqrt(variance)

    def observe_and_score(self, amount: float) -> float:
        """Score ``amount`` against the current history, then append it.

        Returns 0.0 while the history is shorter than the minimum sample
        count or has zero spread.
        """
        z_score = 0.0
        if len(self._samples) >= self._min_samples:
            # Identical samples can leave a 1-ulp residue in the float variance
            if max(self._samples) != min(self._samples):
                mean, stddev = self._mean_and_stddev()
                if stddev != 0:
                    z_score = (amount - mean) / stddev

        # deque(maxlen) evicts the oldest sample on overflow
        self._samples.append(amount)
        return z_score

    def snapshot(self) -> BaselineSnapshot:
        mean, stddev = self._mean_and_stddev()
        return BaselineSnapshot(
            count=len(self._samples),
            capacity=self._capacity,
            mean=round(mean, 4),
            stddev=round(stddev, 4),
        )
