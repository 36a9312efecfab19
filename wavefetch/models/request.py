"""EndpointRequest — the immutable description of one GET.

A paging orchestrator derives one variant per page via `with_param("page", n)`;
every other field is shared untouched.
"""

from __future__ import annotations

from urllib.parse import urlencode

from pydantic import BaseModel, Field

QueryParams = tuple[tuple[str, str], ...]


class EndpointRequest(BaseModel):
    """Base URL + path + ordered multi-map query + static headers."""

    base_url: str = Field(description="Scheme and host, optionally with a version prefix")
    path: str = Field(default="", description="Resource path; surrounding slashes are ignored")
    params: QueryParams = Field(
        default=(),
        description="Ordered (key, value) pairs; keys may repeat for array values",
    )
    headers: dict[str, str] = Field(default_factory=dict)

    model_config = {"frozen": True}

    def url(self) -> str:
        ul = f"{self.base_url.rstrip('/')}/{self.path.strip('/')}"
        if self.params:
            ul += "?" + urlencode(self.params)
        return ul

    def get_param(self, key: str) -> str | None:
        """First value for `key`, or None."""
        for k, v in self.params:
            if k == key:
                return v
        return None

    def with_param(self, key: str, value: object) -> EndpointRequest:
        """Copy with every `key` occurrence replaced by one `(key, value)` pair.

        A key that was present keeps its position; a new key is appended.
        """
        params: list[tuple[str, str]] = []
        placed = False
        for k, v in self.params:
            if k != key:
                params.append((k, v))
            elif not placed:
                params.append((key, str(value)))
                placed = True
        if not placed:
            params.append((key, str(value)))
        return self.model_copy(update={"params": tuple(params)})
