"""ConcurrentBatchRunner — bounded fan-out in sequential waves.

Units are split into waves of `max_concurrency`, in order. Each wave runs
concurrently and is awaited as a whole before the next one starts:

    wave 0: units[0:C]   ── barrier ──>   wave 1: units[C:2C]   ── ...

If any result in a finished wave satisfies the finish predicate, later waves
are never scheduled. Results land in positional slots, so the reducer always
sees request order no matter which request answered first. The first failure
cancels the rest of its wave and is re-raised; nothing partial is returned.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence
from typing import Any, Generic, Protocol, TypeVar

import structlog

from wavefetch.errors import ConfigError

logger = structlog.get_logger().bind(component="batch")

D = TypeVar("D")
R = TypeVar("R")
D_co = TypeVar("D_co", covariant=True)


class FetchUnit(Protocol[D_co]):
    """Anything that can fetch one result. SingleFetcher is the usual one."""

    def url(self) -> str: ...

    async def fetch(self) -> D_co: ...


class ConcurrentBatchRunner(Generic[D, R]):
    """Run `units` in waves of `max_concurrency` and reduce the slot array."""

    def __init__(
        self,
        units: Sequence[FetchUnit[D]],
        reducer: Callable[[list[D | None]], R],
        *,
        max_concurrency: int = 1,
        finish_checker: Callable[[D], bool] | None = None,
    ) -> None:
        if max_concurrency < 0:
            raise ConfigError(f"max_concurrency must be >= 1, got {max_concurrency}")
        self.units = list(units)
        self.reducer = reducer
        self.max_concurrency = max_concurrency or 1
        self.finish_checker = finish_checker

    def url(self) -> str:
        return self.units[0].url() if self.units else ""

    async def fetch(self) -> R:
        total = len(self.units)
        results: list[D | None] = [None] * total

        for start in range(0, total, self.max_concurrency):
            end = min(start + self.max_concurrency, total)
            logger.info(
                "wave_start",
                start=start,
                end=end,
                total=total,
                url=self.units[start].url(),
            )
            wave = await _run_wave(self.units[start:end])
            results[start:end] = wave

            if self.finish_checker is not None and any(self.finish_checker(d) for d in wave):
                if end < total:
                    logger.info("wave_finished_early", end=end, skipped=total - end)
                break

        return self.reducer(results)


async def _run_wave(units: Sequence[FetchUnit[Any]]) -> list[Any]:
    """Run one wave concurrently; on any failure cancel the siblings and re-raise."""
    tasks = [asyncio.ensure_future(unit.fetch()) for unit in units]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
