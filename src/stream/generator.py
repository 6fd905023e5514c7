"""Simulated card transactions for the background stream."""

import random
from datetime import UTC, datetime

from src.domains.fraud.models import Transaction

NORMAL_MERCHANTS = ("Amazon", "Uber", "Starbucks", "Target", "Shell")
NORMAL_LOCATION = "New York, US"
ANOMALY_MERCHANT = "Unknown Vendor"
ANOMALY_LOCATION = "Lagos, NG"


class StreamTransactionGenerator:
    def __init__(self, anomaly_rate: float = 0.1, seed: int | None = None) -> None:
        self.anomaly_rate = anomaly_rate
        self._rng = random.Random(seed)

    def generate(self) -> Transaction:
        is_anomaly = self._rng.random() < self.anomaly_rate

        if is_anomaly:
            return Transaction(
                amount=round(self._rng.uniform(1_000, 6_000), 2),
                merchant=ANOMALY_MERCHANT,
                location=ANOMALY_LOCATION,
                is_foreign_ip=True,
                velocity=0.9,
                timestamp=datetime.now(UTC),
            )

        return Transaction(
            amount=round(self._rng.uniform(10, 210), 2),
            merchant=self._rng.choice(NORMAL_MERCHANTS),
            location=NORMAL_LOCATION,
            is_foreign_ip=False,
            velocity=0.1,
            timestamp=datetime.now(UTC),
        )

    def generate_batch(self, count: int) -> list[Transaction]:
        return [self.generate() for _ in range(count)]
