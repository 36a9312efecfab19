"""RateGate — the shared rate budget every outbound request passes through.

Wraps aiolimiter's AsyncLimiter (a leaky bucket): up to `capacity`
acquisitions go through immediately, after which slots free up continuously
at `capacity / period` per second. Waiting suspends only the calling task,
and cancelling that task abandons the wait.

Gates are built explicitly and handed to clients; two gates never share
state, so independently limited API tiers get one gate each.
"""

from __future__ import annotations

from aiolimiter import AsyncLimiter
import structlog

from wavefetch.errors import ConfigError

logger = structlog.get_logger().bind(component="rate_gate")


class RateGate:
    """Token-bucket gate of `capacity` slots refilled over `period` seconds."""

    def __init__(self, capacity: int, period: float = 60.0, name: str = "") -> None:
        if capacity < 1:
            raise ConfigError(f"rate gate capacity must be >= 1, got {capacity}")
        if period <= 0:
            raise ConfigError(f"rate gate period must be > 0, got {period}")
        self.capacity = capacity
        self.period = period
        self.name = name or f"{capacity}/{period:g}s"
        self._limiter = AsyncLimiter(capacity, period)

    @classmethod
    def per_minute(cls, requests: int, fraction: float = 1.0, name: str = "") -> RateGate:
        """Gate allowing `requests * fraction` acquisitions per minute (at least one)."""
        return cls(max(1, int(requests * fraction)), 60.0, name=name)

    async def acquire(self) -> None:
        """Block until a slot is available. Raises CancelledError if cancelled."""
        if not self._limiter.has_capacity():
            logger.debug("rate_gate_wait", gate=self.name)
        await self._limiter.acquire()

    async def __aenter__(self) -> None:
        await self.acquire()

    async def __aexit__(self, *exc) -> None:
        return None

    def __repr__(self) -> str:
        return f"RateGate({self.name!r})"
