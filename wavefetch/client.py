"""Async Solscan client built on the fetch engine.

Each operation is a thin mapping: endpoint path + params builder + decoder
(+ page shape for paged variants). Fan-out, retry, rate budgeting and merging
all live in wavefetch.engine.

Rate budgets are explicit objects. Build them once per process and hand the
matching tier's gate to every client that should share it:

    budgets = RateBudgets.from_settings()
    async with SolscanClient(token, rate_gate=budgets.v2) as client:
        transfers = await client.account_transfers_paged(addr, total_size=500)
"""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from wavefetch.config import settings
from wavefetch.engine import (
    PageShape,
    PagingOrchestrator,
    PagingParams,
    RateGate,
    RetryPolicy,
    SingleFetcher,
    envelope_decoder,
    raw_decoder,
)
from wavefetch.engine.fetcher import Decoder
from wavefetch.errors import ConfigError
from wavefetch.models.envelopes import TotalPage
from wavefetch.models.params import (
    AccountTransactionsParams,
    AccountTransfersExportParams,
    AccountTransfersParams,
    NFTNewsParams,
    TokenHoldersParams,
    build_params,
)
from wavefetch.models.request import EndpointRequest
from wavefetch.models.solscan import (
    APIUsage,
    ChainInfo,
    NFTInfo,
    TokenHolder,
    TokenMeta,
    Transaction,
    Transfer,
)

logger = structlog.get_logger().bind(component="solscan_client")


class RateBudgets:
    """The two independently limited Solscan API tiers."""

    def __init__(self, v2: RateGate, v3: RateGate) -> None:
        self.v2 = v2
        self.v3 = v3

    @classmethod
    def from_settings(cls) -> RateBudgets:
        return cls(
            v2=RateGate.per_minute(settings.v2_requests_per_minute, settings.rate_budget_fraction, name="v2"),
            v3=RateGate.per_minute(settings.v3_requests_per_minute, settings.rate_budget_fraction, name="v3"),
        )

    def for_tier(self, tier: str) -> RateGate:
        if tier == "v2":
            return self.v2
        if tier == "v3":
            return self.v3
        raise ConfigError(f"unknown API tier: {tier!r} (expected 'v2' or 'v3')")


class SolscanClient:
    """Async client for the Solscan public and pro APIs.

    A single httpx client is shared by every request this client makes;
    pass `http` to supply your own (it is then not closed by `close()`).

    Without `rate_gate` the client gets its own V2-tier gate from settings.
    Clients that must share one budget need to be handed the same gate.
    """

    def __init__(
        self,
        auth_token: str | None = None,
        rate_gate: RateGate | None = None,
        http: httpx.AsyncClient | None = None,
        public_base_url: str | None = None,
        pro_base_url: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self.auth_token = auth_token or settings.auth_token
        if rate_gate is None:
            rate_gate = RateGate.per_minute(
                settings.v2_requests_per_minute, settings.rate_budget_fraction, name="v2"
            )
        self.rate_gate = rate_gate
        self.public_base_url = (public_base_url or settings.public_base_url).rstrip("/")
        self.pro_base_url = (pro_base_url or settings.pro_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self.paging_retry = RetryPolicy(
            interval=settings.retry_interval,
            max_attempts=settings.paging_max_attempts,
        )
        self.default_max_concurrency = settings.default_max_concurrency
        self._client = http
        self._owns_client = http is None

    @property
    def headers(self) -> dict[str, str]:
        return {"content-type": "application/json", "token": self.auth_token}

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout)
            self._owns_client = True
        return self._client

    async def close(self) -> None:
        if self._owns_client and self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> SolscanClient:
        return self

    async def __aexit__(self, *exc) -> None:
        await self.close()

    # ── Plumbing ──────────────────────────────────────────────────────────

    def _request(self, base_url: str, path: str, params: tuple = ()) -> EndpointRequest:
        return EndpointRequest(base_url=base_url, path=path, params=params, headers=self.headers)

    async def _get(self, request: EndpointRequest, decoder: Decoder) -> Any:
        fetcher = SingleFetcher(
            request,
            decoder,
            http=await self._get_client(),
            gate=self.rate_gate,
        )
        return await fetcher.fetch()

    async def _paged(
        self,
        request: EndpointRequest,
        item_type: type,
        shape: PageShape,
        *,
        page_size: int,
        total_size: int,
        start_page: int,
        max_concurrency: int | None,
    ) -> Any:
        page_type = list[item_type] if shape is PageShape.LIST else TotalPage[item_type]
        orchestrator = PagingOrchestrator(
            request,
            envelope_decoder(page_type),
            http=await self._get_client(),
            shape=shape,
            paging=PagingParams(
                start_page=start_page,
                total_size=total_size,
                page_size=page_size,
                max_concurrency=self.default_max_concurrency if max_concurrency is None else max_concurrency,
            ),
            gate=self.rate_gate,
            retry=self.paging_retry,
        )
        return await orchestrator.fetch()

    # ── Chain / monitor ───────────────────────────────────────────────────

    async def chain_info(self) -> ChainInfo:
        """Current block height, epoch and slot (public API)."""
        return await self._get(
            self._request(self.public_base_url, "chaininfo"),
            envelope_decoder(ChainInfo),
        )

    async def api_usage(self) -> APIUsage:
        return await self._get(
            self._request(self.pro_base_url, "/monitor/usage"),
            envelope_decoder(APIUsage),
        )

    # ── Account ───────────────────────────────────────────────────────────

    async def account_transfers(
        self,
        address: str,
        params: AccountTransfersParams | None = None,
    ) -> list[Transfer]:
        return await self._get(
            self._request(self.pro_base_url, "/account/transfer", build_params(params, "address", address)),
            envelope_decoder(list[Transfer]),
        )

    async def account_transfers_paged(
        self,
        address: str,
        total_size: int,
        start_page: int = 1,
        max_concurrency: int | None = None,
        params: AccountTransfersParams | None = None,
    ) -> list[Transfer]:
        """Up to `total_size` transfers, fetched in concurrent waves of pages."""
        params = params or AccountTransfersParams()
        return await self._paged(
            self._request(self.pro_base_url, "/account/transfer", build_params(params, "address", address)),
            Transfer,
            PageShape.LIST,
            page_size=int(params.page_size),
            total_size=total_size,
            start_page=start_page,
            max_concurrency=max_concurrency,
        )

    async def account_transactions(
        self,
        address: str,
        params: AccountTransactionsParams | None = None,
    ) -> list[Transaction]:
        return await self._get(
            self._request(self.pro_base_url, "/account/transactions", build_params(params, "address", address)),
            envelope_decoder(list[Transaction]),
        )

    async def account_transactions_paged(
        self,
        address: str,
        total_size: int,
        params: AccountTransactionsParams | None = None,
    ) -> list[Transaction]:
        """Cursor paging: each page's last tx hash becomes the next `before`.

        The cursor makes pages strictly sequential, so this does not fan out.
        """
        params = params or AccountTransactionsParams()
        limit = int(params.limit)
        pages = PagingParams(total_size=total_size, page_size=limit).page_count()

        txs: list[Transaction] = []
        before = params.before
        for _ in range(pages):
            page = await self.account_transactions(address, params.model_copy(update={"before": before}))
            txs.extend(page)
            logger.debug("transactions_page", address=address, before=before, count=len(page))
            if len(page) < limit:
                break
            before = page[-1].tx_hash
        return txs[:total_size]

    async def account_transfers_export(
        self,
        address: str,
        params: AccountTransfersExportParams | None = None,
    ) -> bytes:
        """Raw CSV export; the body is returned untouched."""
        return await self._get(
            self._request(self.pro_base_url, "/account/transfer/export", build_params(params, "address", address)),
            raw_decoder,
        )

    # ── Token ─────────────────────────────────────────────────────────────

    async def token_meta(self, address: str) -> TokenMeta:
        return await self._get(
            self._request(self.pro_base_url, "/token/meta", build_params(None, "address", address)),
            envelope_decoder(TokenMeta),
        )

    async def token_holders(
        self,
        address: str,
        params: TokenHoldersParams | None = None,
    ) -> TotalPage[TokenHolder]:
        return await self._get(
            self._request(self.pro_base_url, "/token/holders", build_params(params, "address", address)),
            envelope_decoder(TotalPage[TokenHolder]),
        )

    async def token_holders_paged(
        self,
        address: str,
        total_size: int,
        start_page: int = 1,
        max_concurrency: int | None = None,
        params: TokenHoldersParams | None = None,
    ) -> TotalPage[TokenHolder]:
        """Holders under `items`, with the largest reported `total`."""
        params = params or TokenHoldersParams()
        return await self._paged(
            self._request(self.pro_base_url, "/token/holders", build_params(params, "address", address)),
            TokenHolder,
            PageShape.ITEMS_TOTAL,
            page_size=int(params.page_size),
            total_size=total_size,
            start_page=start_page,
            max_concurrency=max_concurrency,
        )

    # ── NFT ───────────────────────────────────────────────────────────────

    async def nft_news(self, params: NFTNewsParams | None = None) -> TotalPage[NFTInfo]:
        return await self._get(
            self._request(self.pro_base_url, "/nft/news", build_params(params)),
            envelope_decoder(TotalPage[NFTInfo]),
        )

    async def nft_news_paged(
        self,
        total_size: int,
        start_page: int = 1,
        max_concurrency: int | None = None,
        params: NFTNewsParams | None = None,
    ) -> TotalPage[NFTInfo]:
        """Newest NFTs under `data`, with the largest reported `total`."""
        params = params or NFTNewsParams()
        return await self._paged(
            self._request(self.pro_base_url, "/nft/news", build_params(params)),
            NFTInfo,
            PageShape.DATA_TOTAL,
            page_size=int(params.page_size),
            total_size=total_size,
            start_page=start_page,
            max_concurrency=max_concurrency,
        )
