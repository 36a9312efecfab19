"""Per-endpoint query parameter builders.

Each params model enumerates its own `(name, value)` pairs in `to_params()`.
Optional filters are emitted only when set; fields with an API default are
always emitted, falling back to that default. List-valued filters repeat
as `name[]`.
"""

from __future__ import annotations

from enum import Enum, IntEnum

from pydantic import BaseModel, Field

from wavefetch.errors import ConfigError

Pairs = list[tuple[str, str]]


# ── Enums ─────────────────────────────────────────────────────────────────────

class TinyPageSize(IntEnum):
    S12 = 12
    S24 = 24
    S36 = 36


class SmallPageSize(IntEnum):
    S10 = 10
    S20 = 20
    S30 = 30
    S40 = 40


class LargePageSize(IntEnum):
    S10 = 10
    S20 = 20
    S30 = 30
    S40 = 40
    S60 = 60
    S100 = 100


class Flow(str, Enum):
    IN = "in"
    OUT = "out"


class SortBy(str, Enum):
    BLOCK_TIME = "block_time"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class AccountActivityType(str, Enum):
    TRANSFER = "ACTIVITY_SPL_TRANSFER"
    BURN = "ACTIVITY_SPL_BURN"
    MINT = "ACTIVITY_SPL_MINT"
    CREATE_ACCOUNT = "ACTIVITY_SPL_CREATE_ACCOUNT"


class NFTNewsFilter(str, Enum):
    CREATED_TIME = "created_time"


# ── Helpers ───────────────────────────────────────────────────────────────────

def _fmt(value: object) -> str:
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _opt(pairs: Pairs, name: str, value: object) -> None:
    """Append `name` only when `value` is set (non-empty, non-zero, not False)."""
    if value is None or value == "" or value is False:
        return
    pairs.append((name, _fmt(value)))


def _many(pairs: Pairs, name: str, values: list | None) -> None:
    for v in values or []:
        pairs.append((f"{name}[]", _fmt(v)))


def build_params(optional: BaseModel | None, *required: str) -> tuple[tuple[str, str], ...]:
    """Optional params (if any) followed by `key, value, key, value, ...` pairs."""
    if len(required) % 2 != 0:
        raise ConfigError("required params must be a key, value, key, value... list")
    pairs: Pairs = list(optional.to_params()) if optional is not None else []
    for i in range(0, len(required), 2):
        pairs.append((required[i], required[i + 1]))
    return tuple(pairs)


# ── Transfer filters (shared by list + export) ────────────────────────────────

class _TransferFilters(BaseModel):
    activity_type: list[AccountActivityType] = Field(default_factory=list)
    token_account: str = ""
    from_address: str = ""
    to_address: str = ""
    token: str = ""
    amount_range: list[float] = Field(default_factory=list)
    block_time_range: list[int] = Field(default_factory=list)
    exclude_amount_zero: bool = False
    flow: Flow | None = None

    def _filter_pairs(self) -> Pairs:
        pairs: Pairs = []
        _many(pairs, "activity_type", self.activity_type)
        _opt(pairs, "token_account", self.token_account)
        _opt(pairs, "from", self.from_address)
        _opt(pairs, "to", self.to_address)
        _opt(pairs, "token", self.token)
        _many(pairs, "amount", self.amount_range)
        _many(pairs, "block_time", self.block_time_range)
        _opt(pairs, "exclude_amount_zero", self.exclude_amount_zero)
        _opt(pairs, "flow", self.flow)
        return pairs


class AccountTransfersParams(_TransferFilters):
    sort_by: SortBy = SortBy.BLOCK_TIME
    sort_order: SortOrder = SortOrder.DESC
    page: int = 1
    page_size: LargePageSize = LargePageSize.S100

    def to_params(self) -> Pairs:
        pairs = self._filter_pairs()
        pairs.append(("sort_by", _fmt(self.sort_by)))
        pairs.append(("sort_order", _fmt(self.sort_order)))
        pairs.append(("page", _fmt(self.page or 1)))
        pairs.append(("page_size", _fmt(self.page_size)))
        return pairs


class AccountTransfersExportParams(_TransferFilters):
    def to_params(self) -> Pairs:
        return self._filter_pairs()


class TokenHoldersParams(BaseModel):
    from_amount: str = ""
    to_amount: str = ""
    page: int = 1
    page_size: SmallPageSize = SmallPageSize.S40

    def to_params(self) -> Pairs:
        pairs: Pairs = []
        _opt(pairs, "from_amount", self.from_amount)
        _opt(pairs, "to_amount", self.to_amount)
        pairs.append(("page", _fmt(self.page or 1)))
        pairs.append(("page_size", _fmt(self.page_size)))
        return pairs


class NFTNewsParams(BaseModel):
    filter: NFTNewsFilter = NFTNewsFilter.CREATED_TIME
    page: int = 1
    page_size: TinyPageSize = TinyPageSize.S36

    def to_params(self) -> Pairs:
        return [
            ("filter", _fmt(self.filter)),
            ("page", _fmt(self.page or 1)),
            ("page_size", _fmt(self.page_size)),
        ]


class AccountTransactionsParams(BaseModel):
    """Cursor-paged: `before` is the last tx hash of the previous page."""

    before: str = ""
    limit: SmallPageSize = SmallPageSize.S40

    def to_params(self) -> Pairs:
        pairs: Pairs = []
        _opt(pairs, "before", self.before)
        pairs.append(("limit", _fmt(self.limit)))
        return pairs
