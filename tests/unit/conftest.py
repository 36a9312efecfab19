"""Unit-test conftest — FakePageServer, FakeUnit, and shared fixtures.

All fixtures here are available to every test under tests/unit/ without import.
Nothing here opens a socket: HTTP goes through httpx.MockTransport.
"""

from __future__ import annotations

import asyncio
from typing import Any

import httpx
import pytest

from wavefetch.models.request import EndpointRequest


# ─────────────────────────────────────────────────────────────────────────────
# FakePageServer — a paged Solscan-like endpoint behind httpx.MockTransport
# ─────────────────────────────────────────────────────────────────────────────

class FakePageServer:
    """Configurable fake paged endpoint.

    Args:
        page_items:  Items served per page number (missing pages serve 0 items).
        shape:       "list" → data is a bare list; "items" / "data" → data is
                     `{"items"|"data": [...], "total": n}`.
        totals:      Per-page `total` for the "items" / "data" shapes.
        delays:      Seconds to sleep before answering a page.
        statuses:    Per-page status. An int is served on every request; a list
                     is consumed one status per request, then 200 from then on.

    Items look like `{"trans_id": "3-0", "address": "3-0", "tx_hash": "3-0",
    "block_id": 3}` so any of the Solscan item models can decode them and the
    order is visible in the decoded result.
    """

    def __init__(
        self,
        page_items: dict[int, int] | None = None,
        *,
        shape: str = "list",
        totals: dict[int, int] | None = None,
        delays: dict[int, float] | None = None,
        statuses: dict[int, int | list[int]] | None = None,
    ) -> None:
        self.page_items = page_items or {}
        self.shape = shape
        self.totals = totals or {}
        self.delays = delays or {}
        self.statuses = {p: (list(s) if isinstance(s, list) else s) for p, s in (statuses or {}).items()}
        self.requests: list[httpx.Request] = []
        self.in_flight = 0
        self.max_in_flight = 0

    @property
    def pages_requested(self) -> list[int]:
        """Page numbers in the order requests arrived."""
        return [_page_of(r) for r in self.requests]

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        page = _page_of(request)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            delay = self.delays.get(page, 0.0)
            if delay > 0:
                await asyncio.sleep(delay)
        finally:
            self.in_flight -= 1

        status = self._status_for(page)
        if status != 200:
            body = {"success": False, "errors": {"code": 1100, "message": f"page {page} failed"}}
            return httpx.Response(status, json=body)
        return httpx.Response(200, json={"success": True, "data": self._payload(page)})

    def _status_for(self, page: int) -> int:
        status = self.statuses.get(page, 200)
        if isinstance(status, list):
            return status.pop(0) if status else 200
        return status

    def _payload(self, page: int) -> Any:
        items = [
            {"trans_id": f"{page}-{i}", "address": f"{page}-{i}", "tx_hash": f"{page}-{i}", "block_id": page}
            for i in range(self.page_items.get(page, 0))
        ]
        if self.shape == "list":
            return items
        return {self.shape: items, "total": self.totals.get(page, 0)}


def _page_of(request: httpx.Request) -> int:
    return int(request.url.params.get("page", 1))


# ─────────────────────────────────────────────────────────────────────────────
# FakeUnit — a scripted FetchUnit for ConcurrentBatchRunner tests
# ─────────────────────────────────────────────────────────────────────────────

class UnitTracker:
    """Shared bookkeeping for a batch of FakeUnits."""

    def __init__(self) -> None:
        self.started: list[int] = []
        self.finished: list[int] = []
        self.cancelled: list[int] = []
        self.events: list[tuple[str, int]] = []
        self.in_flight = 0
        self.max_in_flight = 0

    def unit(self, index: int, *, value: Any = None, delay: float = 0.0, raises: Exception | None = None):
        return FakeUnit(self, index, value=index if value is None else value, delay=delay, raises=raises)


class FakeUnit:
    def __init__(self, tracker: UnitTracker, index: int, *, value: Any, delay: float, raises: Exception | None):
        self.tracker = tracker
        self.index = index
        self.value = value
        self.delay = delay
        self.raises = raises

    def url(self) -> str:
        return f"https://api.test/unit?page={self.index}"

    async def fetch(self) -> Any:
        t = self.tracker
        t.started.append(self.index)
        t.events.append(("start", self.index))
        t.in_flight += 1
        t.max_in_flight = max(t.max_in_flight, t.in_flight)
        try:
            if self.delay > 0:
                await asyncio.sleep(self.delay)
            if self.raises is not None:
                raise self.raises
            t.finished.append(self.index)
            t.events.append(("end", self.index))
            return self.value
        except asyncio.CancelledError:
            t.cancelled.append(self.index)
            raise
        finally:
            t.in_flight -= 1


# ─────────────────────────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────────────────────────

@pytest.fixture
def page_server():
    """Factory: `page_server({1: 100, 2: 50}, shape="items", ...)`."""
    return FakePageServer


@pytest.fixture
def tracker():
    return UnitTracker()


@pytest.fixture
def base_request():
    """A transfers-style request with a placeholder `page` to be overwritten."""
    return EndpointRequest(
        base_url="https://api.test/v2.0",
        path="/account/transfer",
        params=(("address", "Acc1"), ("page", "1"), ("page_size", "100")),
        headers={"content-type": "application/json", "token": "t0k"},
    )
