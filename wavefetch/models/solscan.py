"""Solscan response models — decoded page items and single-object bodies."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class _Model(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ChainInfo(_Model):
    block_height: int = Field(default=0, alias="blockHeight")
    current_epoch: int = Field(default=0, alias="currentEpoch")
    absolute_slot: int = Field(default=0, alias="absoluteSlot")
    transaction_count: int = Field(default=0, alias="transactionCount")


class Transfer(_Model):
    block_id: int = 0
    trans_id: str = ""
    block_time: int = 0
    time: str = ""
    activity_type: str = ""
    from_address: str = ""
    to_address: str = ""
    token_address: str = ""
    token_decimals: int = 0
    amount: int = 0
    flow: str = ""


class TokenHolder(_Model):
    address: str = ""
    amount: int = 0
    decimals: int = 0
    owner: str = ""
    rank: int = 0


class NFTInfo(_Model):
    address: str = ""
    collection: str = ""
    collection_id: str = Field(default="", alias="collectionId")
    collection_key: str = Field(default="", alias="collectionKey")
    created_time: int = Field(default=0, alias="createdTime")
    data: dict[str, Any] = Field(default_factory=dict)
    meta: dict[str, Any] = Field(default_factory=dict)
    mint_tx: str = Field(default="", alias="mintTx")


class Transaction(_Model):
    slot: int = 0
    fee: int = 0
    status: str = ""
    signer: list[str] = Field(default_factory=list)
    block_time: int = 0
    tx_hash: str = ""
    parsed_instructions: list[dict[str, Any]] = Field(default_factory=list)
    program_ids: list[str] = Field(default_factory=list)
    time: str = ""


class TokenMeta(_Model):
    supply: str = ""
    address: str = ""
    name: str = ""
    symbol: str = ""
    icon: str = ""
    decimals: int = 0
    holder: int = 0
    creator: str = ""
    create_tx: str = ""
    created_time: int = 0
    first_mint_tx: str = ""
    first_mint_time: int = 0
    price: float = 0.0
    volume_24h: float = 0.0
    market_cap: float = 0.0
    market_cap_rank: int = 0
    price_change_24h: float = 0.0


class APIUsage(_Model):
    remaining_cus: int = 0
    usage_cus: int = 0
    total_requests_24h: int = 0
    success_rate_24h: float = 0.0
    total_cu_24h: int = 0
