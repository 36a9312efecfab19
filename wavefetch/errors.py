"""Error taxonomy for the fetch engine.

Every failure the engine surfaces is a FetchError subclass. `retryable`
tells SingleFetcher whether another attempt makes sense:

    status / transport failures  → retryable
    DecodeError, ConfigError     → terminal (contract faults, not transience)

Cancellation is plain asyncio.CancelledError and is never wrapped.
"""

from __future__ import annotations


class FetchError(Exception):
    """Base class for all engine errors."""

    retryable: bool = False

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.__class__.__name__)
        self.message = message or self.__class__.__name__


# ── Status-classified failures ────────────────────────────────────────────────

class StatusError(FetchError):
    """A non-200 response, classified by status code."""

    retryable = True
    status: int = 0

    def __init__(self, message: str = "") -> None:
        super().__init__(message or f"solscan: {self.status} {self.__class__.__name__.lower()}")


class Unauthorized(StatusError):
    status = 401

    def __init__(self) -> None:
        super().__init__("solscan: 401 unauthorized")


class Forbidden(StatusError):
    status = 403

    def __init__(self) -> None:
        super().__init__("solscan: 403 forbidden")


class NotFound(StatusError):
    status = 404

    def __init__(self) -> None:
        super().__init__("solscan: 404 not found")


class RateLimited(StatusError):
    status = 429

    def __init__(self) -> None:
        super().__init__("solscan: 429 too many requests")


class ServerError(StatusError):
    status = 500

    def __init__(self) -> None:
        super().__init__("solscan: 500 internal server error")


class ClientError(StatusError):
    """400 Bad Request, with the upstream's structured message when present."""

    status = 400

    def __init__(self, message: str, code: int | None = None) -> None:
        detail = f"code: {code}, message: {message}" if code is not None else message
        super().__init__(f"solscan: 400 bad request: {detail}")
        self.detail = message
        self.code = code


class UnknownStatus(StatusError):
    def __init__(self, status: int) -> None:
        self.status = status
        super().__init__(f"solscan: {status} unknown error")


# ── Other failures ───────────────────────────────────────────────────────────

class TransportFailure(FetchError):
    """Connection error, timeout, or any other transport-level fault."""

    retryable = True


class DecodeError(FetchError):
    """A 200 response whose body does not match the expected shape."""


class ConfigError(FetchError):
    """Caller misconfiguration (zero page size, bad parameter list, ...)."""


class RetriesExhausted(FetchError):
    """Every attempt failed; `last_error` holds the final underlying error."""

    def __init__(self, last_error: FetchError, attempts: int) -> None:
        super().__init__(f"solscan: failed to get response after {attempts} attempts: {last_error}")
        self.last_error = last_error
        self.attempts = attempts
