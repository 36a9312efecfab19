"""Live smoke tests against the real Solscan API.

Run with:
    WAVEFETCH_TEST_LIVE=1 WAVEFETCH_AUTH_TOKEN=... pytest tests/live/ -v
"""

from __future__ import annotations

import os

import pytest

from wavefetch.client import RateBudgets, SolscanClient

pytestmark = [
    pytest.mark.live,
    pytest.mark.skipif(
        not os.getenv("WAVEFETCH_TEST_LIVE"),
        reason="Set WAVEFETCH_TEST_LIVE=1 (and WAVEFETCH_AUTH_TOKEN) to run live API tests",
    ),
]

# Wrapped SOL mint; always has holders
WSOL = "So11111111111111111111111111111111111111112"


@pytest.mark.asyncio
async def test_chain_info():
    async with SolscanClient() as client:
        info = await client.chain_info()
    assert info.block_height > 0


@pytest.mark.asyncio
async def test_token_holders_paged():
    budgets = RateBudgets.from_settings()
    async with SolscanClient(rate_gate=budgets.v2) as client:
        result = await client.token_holders_paged(WSOL, total_size=80, max_concurrency=2)
    assert len(result.items) == 80
    assert result.total >= 80
    ranks = [h.rank for h in result.items]
    assert ranks == sorted(ranks)
