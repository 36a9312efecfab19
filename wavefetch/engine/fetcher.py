"""SingleFetcher — one logical GET with status mapping, decoding and retry.

Per attempt:
1. acquire the rate gate (if any)
2. GET the request URL with its static headers
3. map request faults and non-200 statuses to FetchError subclasses
   (a body that fails content-encoding is a DecodeError, never retried)
4. decode the body through the injected decoder

Retry wraps steps 1-3 only. A decode failure on a 200 body is a protocol
violation and is raised immediately, as is cancellation at any point.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

import httpx
import structlog
from pydantic import TypeAdapter, ValidationError

from wavefetch.engine.rate_gate import RateGate
from wavefetch.errors import (
    ClientError,
    ConfigError,
    DecodeError,
    FetchError,
    Forbidden,
    NotFound,
    RateLimited,
    RetriesExhausted,
    ServerError,
    TransportFailure,
    Unauthorized,
    UnknownStatus,
)
from wavefetch.models.envelopes import Envelope, ErrorEnvelope
from wavefetch.models.request import EndpointRequest

logger = structlog.get_logger().bind(component="fetcher")

D = TypeVar("D")

Decoder = Callable[[bytes], D]
StatusInterpreter = Callable[[int, bytes], "FetchError | None"]
Sleep = Callable[[float], Awaitable[Any]]


@dataclass(frozen=True)
class RetryPolicy:
    """Fixed-interval retry. `max_attempts` counts the first try."""

    interval: float = 1.0
    max_attempts: int = 1

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ConfigError(f"max_attempts must be >= 1, got {self.max_attempts}")
        if self.interval < 0:
            raise ConfigError(f"retry interval must be >= 0, got {self.interval}")


NO_RETRY = RetryPolicy()


# ── Status interpretation ─────────────────────────────────────────────────────

_STATUS_ERRORS: dict[int, type[FetchError]] = {
    401: Unauthorized,
    403: Forbidden,
    404: NotFound,
    429: RateLimited,
    500: ServerError,
}


def default_status_interpreter(status: int, body: bytes) -> FetchError | None:
    """Fixed status → error mapping. Only 200 counts as success."""
    if status == 200:
        return None
    if status == 400:
        try:
            envelope = ErrorEnvelope.model_validate_json(body)
        except ValidationError as e:
            return ClientError(f"can not unmarshal body: {e.error_count()} validation error(s)")
        return ClientError(envelope.errors.message, envelope.errors.code)
    error_cls = _STATUS_ERRORS.get(status)
    if error_cls is not None:
        return error_cls()
    return UnknownStatus(status)


# ── Decoders ──────────────────────────────────────────────────────────────────

def raw_decoder(body: bytes) -> bytes:
    """Pass-through for export endpoints (CSV and friends)."""
    return body


def envelope_decoder(type_: Any) -> Decoder:
    """Unwrap `{"success": ..., "data": ...}` and validate `data` as `type_`."""
    adapter = TypeAdapter(Envelope[type_])

    def decode(body: bytes) -> Any:
        try:
            return adapter.validate_json(body).data
        except ValidationError as e:
            raise DecodeError(f"solscan: unexpected response body: {e}") from e

    return decode


def json_decoder(type_: Any) -> Decoder:
    """Validate a bare (un-enveloped) JSON body as `type_`."""
    adapter = TypeAdapter(type_)

    def decode(body: bytes) -> Any:
        try:
            return adapter.validate_json(body)
        except ValidationError as e:
            raise DecodeError(f"solscan: unexpected response body: {e}") from e

    return decode


# ── Fetcher ───────────────────────────────────────────────────────────────────

class SingleFetcher(Generic[D]):
    """Fetch one resource; retries per `retry`, never on decode failures."""

    def __init__(
        self,
        request: EndpointRequest,
        decoder: Decoder,
        *,
        http: httpx.AsyncClient,
        gate: RateGate | None = None,
        status_interpreter: StatusInterpreter = default_status_interpreter,
        retry: RetryPolicy | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.request = request
        self.decoder = decoder
        self.http = http
        self.gate = gate
        self.status_interpreter = status_interpreter
        self.retry = retry or NO_RETRY
        self._sleep = sleep

    def url(self) -> str:
        return self.request.url()

    async def fetch(self) -> D:
        if self.retry.max_attempts == 1:
            body = await self._attempt()
            return self._decode(body)

        last_error: FetchError | None = None
        for attempt in range(1, self.retry.max_attempts + 1):
            if attempt > 1:
                await self._sleep(self.retry.interval)
            try:
                body = await self._attempt()
            except FetchError as e:
                if not e.retryable:
                    raise
                last_error = e
                if attempt < self.retry.max_attempts:
                    logger.warning(
                        "fetch_retry",
                        url=self.url(),
                        attempt=attempt,
                        max_attempts=self.retry.max_attempts,
                        error=str(e),
                    )
                continue
            return self._decode(body)

        assert last_error is not None
        logger.error(
            "fetch_failed",
            url=self.url(),
            attempts=self.retry.max_attempts,
            error=str(last_error),
        )
        raise RetriesExhausted(last_error, self.retry.max_attempts)

    async def _attempt(self) -> bytes:
        """One gate + GET + status check. Returns the raw 200 body."""
        if self.gate is not None:
            await self.gate.acquire()
        try:
            response = await self.http.get(self.url(), headers=self.request.headers)
        except httpx.DecodingError as e:
            raise DecodeError(f"solscan: can not decode body: {e}") from e
        except httpx.RequestError as e:
            raise TransportFailure(f"solscan: {type(e).__name__}: {e}") from e
        error = self.status_interpreter(response.status_code, response.content)
        if error is not None:
            raise error
        return response.content

    def _decode(self, body: bytes) -> D:
        try:
            return self.decoder(body)
        except DecodeError:
            raise
        except (ValueError, TypeError, KeyError) as e:
            # ValueError covers json.JSONDecodeError and pydantic ValidationError
            raise DecodeError(f"solscan: can not decode body: {e}") from e

