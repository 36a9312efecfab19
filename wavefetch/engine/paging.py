"""PagingOrchestrator — "up to N items, P per page, from page S" as one fetch.

1. page_count = ceil(total_size / page_size)
2. one request per page: the base request with `page` = start_page + offset
3. ConcurrentBatchRunner with the shape's short-page predicate and reducer
4. items concatenated in page order, capped at total_size

Without PagingParams the base request is fetched once, unpaged.
"""

from __future__ import annotations

import asyncio
import math
from typing import Any, Generic, TypeVar

import httpx
import structlog
from pydantic import BaseModel, Field

from wavefetch.engine import shapes
from wavefetch.engine.batch import ConcurrentBatchRunner
from wavefetch.engine.fetcher import (
    Decoder,
    RetryPolicy,
    SingleFetcher,
    Sleep,
    StatusInterpreter,
    default_status_interpreter,
)
from wavefetch.engine.rate_gate import RateGate
from wavefetch.engine.shapes import PageShape
from wavefetch.errors import ConfigError
from wavefetch.models.request import EndpointRequest

logger = structlog.get_logger().bind(component="paging")

D = TypeVar("D")

PAGE_PARAM = "page"


class PagingParams(BaseModel):
    """How much to fetch and how wide each wave may be."""

    start_page: int = Field(default=1, description="1-based index of the first page")
    total_size: int = Field(description="Maximum number of items to return")
    page_size: int = Field(description="Items the endpoint returns per full page")
    max_concurrency: int = Field(default=1, description="Pages fetched per wave")

    def page_count(self) -> int:
        if self.total_size < 0:
            raise ConfigError(f"total_size must be >= 0, got {self.total_size}")
        if self.page_size <= 0:
            raise ConfigError(f"page_size must be > 0, got {self.page_size}")
        return math.ceil(self.total_size / self.page_size)


class PagingOrchestrator(Generic[D]):
    """Plan, fan out and merge a paged query. `fetch()` returns the merged result."""

    def __init__(
        self,
        request: EndpointRequest,
        decoder: Decoder,
        *,
        http: httpx.AsyncClient,
        shape: PageShape = PageShape.LIST,
        paging: PagingParams | None = None,
        gate: RateGate | None = None,
        retry: RetryPolicy | None = None,
        status_interpreter: StatusInterpreter = default_status_interpreter,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.request = request
        self.decoder = decoder
        self.http = http
        self.shape = shape
        self.paging = paging
        self.gate = gate
        self.retry = retry
        self.status_interpreter = status_interpreter
        self._sleep = sleep

    def url(self) -> str:
        return self.request.url()

    def plan(self) -> list[EndpointRequest]:
        """One request per page, `page` overwritten; empty when nothing is wanted."""
        if self.paging is None:
            return [self.request]
        pages = self.paging.page_count()
        return [
            self.request.with_param(PAGE_PARAM, self.paging.start_page + offset)
            for offset in range(pages)
        ]

    async def fetch(self) -> Any:
        if self.paging is None:
            return await self._unit(self.request).fetch()

        requests = self.plan()
        logger.debug(
            "paging_plan",
            url=self.url(),
            pages=len(requests),
            start_page=self.paging.start_page,
            total_size=self.paging.total_size,
            page_size=self.paging.page_size,
        )
        if not requests:
            return shapes.empty_result(self.shape)

        runner = ConcurrentBatchRunner(
            [self._unit(r) for r in requests],
            shapes.reducer(self.shape, self.paging.total_size),
            max_concurrency=self.paging.max_concurrency,
            finish_checker=shapes.finish_checker(self.shape, self.paging.page_size),
        )
        return await runner.fetch()

    def _unit(self, request: EndpointRequest) -> SingleFetcher[D]:
        return SingleFetcher(
            request,
            self.decoder,
            http=self.http,
            gate=self.gate,
            status_interpreter=self.status_interpreter,
            retry=self.retry,
            sleep=self._sleep,
        )
