"""Remote reasoning-model adapter with heuristic fallback.

The adapter asks an external generative model for a JSON risk verdict.
Any failure along the way (transport, envelope, payload schema) is
converted into a RemoteModelError, logged, recorded in the monitor, and
answered with the heuristic scorer's result instead. Callers always get
an AnalyzedTransaction; ``analysis_type`` tells which tier produced it.
"""

import json
import re
import time
from datetime import UTC, datetime
from typing import Any

import httpx
import structlog
from pydantic import ValidationError

from .config import FraudConfig, default_config
from .models import AnalysisType, AnalyzedTransaction, RemoteVerdict, Transaction
from .monitoring import RemoteModelMonitor
from .rules_engine import HeuristicScorer

logger = structlog.get_logger()

_FENCE_RE = re.compile(r"^```[a-zA-Z]*\s*(.*?)\s*```$", re.DOTALL)


class RemoteModelError(Exception):
    """Remote model could not produce a usable verdict."""

    kind = "remote_error"


class RemoteTransportError(RemoteModelError):
    """Request failed to reach the model or got an error status back."""

    kind = "transport"


class RemoteTimeoutError(RemoteTransportError):
    """Request exceeded the configured timeout."""

    kind = "timeout"


class RemoteEnvelopeError(RemoteModelError):
    """Response body did not have the expected candidates/parts shape."""

    kind = "envelope"


class RemoteSchemaError(RemoteModelError):
    """Verdict text was not JSON or failed RemoteVerdict validation."""

    kind = "schema"


def build_prompt(transaction: Transaction, baseline_statement: str) -> str:
    return (
        "You are a fraud analyst reviewing a single card payment.\n"
        f"Amount: ${transaction.amount:,.2f}\n"
        f"Merchant: {transaction.merchant}\n"
        f"Location: {transaction.location}\n"
        f"Foreign IP: {'yes' if transaction.is_foreign_ip else 'no'}\n"
        f"Velocity score (0-1): {transaction.velocity:.2f}\n"
        f"Context: {baseline_statement}\n"
        "Respond with strict JSON only, no prose, with exactly these fields: "
        '"riskScore" (integer 0-100), "isFraud" (boolean), '
        '"reasons" (array of short strings).'
    )


def build_request_body(prompt: str) -> dict[str, Any]:
    return {"contents": [{"parts": [{"text": prompt}]}]}


def extract_payload_text(envelope: Any) -> str:
    """Pull ``candidates[0].content.parts[0].text`` out of a response envelope."""
    try:
        text = envelope["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as e:
        raise RemoteEnvelopeError(f"unexpected response envelope: {e!r}") from e
    if not isinstance(text, str):
        raise RemoteEnvelopeError("response text is not a string")
    return text


def strip_code_fence(text: str) -> str:
    stripped = text.strip()
    match = _FENCE_RE.match(stripped)
    if match:
        return match.group(1).strip()
    return stripped


def parse_verdict(text: str) -> RemoteVerdict:
    try:
        payload = json.loads(strip_code_fence(text))
    except json.JSONDecodeError as e:
        raise RemoteSchemaError(f"payload is not JSON: {e.msg}") from e
    if not isinstance(payload, dict):
        raise RemoteSchemaError("payload is not a JSON object")
    try:
        return RemoteVerdict.model_validate(payload)
    except ValidationError as e:
        raise RemoteSchemaError(f"payload failed validation: {e.error_count()} error(s)") from e


class RemoteModelAdapter:
    """Delegates risk evaluation to the remote model, degrading to heuristics."""

    def __init__(
        self,
        heuristic: HeuristicScorer,
        endpoint: str,
        timeout_seconds: float = 10.0,
        config: FraudConfig | None = None,
        monitor: RemoteModelMonitor | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._heuristic = heuristic
        self._endpoint = endpoint
        self._timeout = timeout_seconds
        self._config = config or default_config
        self._monitor = monitor or RemoteModelMonitor(window=self._config.remote.latency_window)
        self._client = client

    @property
    def monitor(self) -> RemoteModelMonitor:
        return self._monitor

    async def _post(self, body: dict[str, Any], credential: str) -> httpx.Response:
        params = {"key": credential}
        if self._client is not None:
            return await self._client.post(
                self._endpoint, params=params, json=body, timeout=self._timeout
            )
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            return await client.post(self._endpoint, params=params, json=body)

    async def _request_verdict(self, transaction: Transaction, credential: str) -> RemoteVerdict:
        prompt = build_prompt(transaction, self._config.remote.baseline_statement)
        try:
            response = await self._post(build_request_body(prompt), credential)
        except httpx.TimeoutException as e:
            raise RemoteTimeoutError(f"remote model timed out after {self._timeout}s") from e
        except (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError) as e:
            raise RemoteTransportError(f"{type(e).__name__}: {e}") from e

        if response.is_error:
            raise RemoteTransportError(f"remote model returned HTTP {response.status_code}")

        try:
            envelope = response.json()
        except ValueError as e:
            raise RemoteEnvelopeError("response body is not JSON") from e

        return parse_verdict(extract_payload_text(envelope))

    async def score_remote(self, transaction: Transaction, credential: str) -> AnalyzedTransaction:
        """Analyze with the remote model; on any failure return the heuristic result."""
        start = time.perf_counter()
        try:
            verdict = await self._request_verdict(transaction, credential)
        except RemoteModelError as e:
            latency_ms = (time.perf_counter() - start) * 1000
            logger.warning(
                "remote_model_fallback",
                kind=e.kind,
                error=str(e),
                amount=transaction.amount,
                latency_ms=round(latency_ms, 2),
            )
            self._monitor.record_fallback(e.kind, str(e), latency_ms)
            return self._heuristic.score(transaction)

        latency_ms = (time.perf_counter() - start) * 1000
        self._monitor.record_success(latency_ms)

        analyzed = AnalyzedTransaction(
            **transaction.model_dump(include=set(Transaction.model_fields)),
            risk_score=verdict.risk_score,
            is_fraud=verdict.is_fraud,
            reasons=list(verdict.reasons),
            analysis_type=AnalysisType.REMOTE_MODEL,
            analyzed_at=datetime.now(UTC),
        )
        logger.info(
            "remote_model_scored",
            amount=transaction.amount,
            risk_score=verdict.risk_score,
            is_fraud=verdict.is_fraud,
            latency_ms=round(latency_ms, 2),
        )
        return analyzed
