"""Response envelopes shared by every Solscan endpoint."""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    """Standard success wrapper: `{"success": true, "data": ...}`."""

    success: bool = True
    data: T


class ErrorDetail(BaseModel):
    code: int | None = None
    message: str = ""


class ErrorEnvelope(BaseModel):
    """Body of a 400 response: `{"success": false, "errors": {...}}`."""

    success: bool = False
    errors: ErrorDetail = Field(default_factory=ErrorDetail)


class TotalPage(BaseModel, Generic[T]):
    """A page that reports a grand total next to its items.

    Endpoints put the page items either under `items` or under `data`;
    which one is live is decided by the endpoint's PageShape.
    """

    items: list[T] = Field(default_factory=list)
    data: list[T] = Field(default_factory=list)
    total: int = 0
