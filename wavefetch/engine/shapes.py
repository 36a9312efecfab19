"""PageShape — the three envelope shapes a paged endpoint can return.

    LIST         page is a bare list                 → merged list
    ITEMS_TOTAL  page is TotalPage with `items`      → TotalPage(items, max total)
    DATA_TOTAL   page is TotalPage with `data`       → TotalPage(data, max total)

Finish predicates and reducers are written once here and selected per
endpoint by shape, so paging code never needs to know which one it has.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from enum import Enum
from typing import Any

from wavefetch.errors import ConfigError
from wavefetch.models.envelopes import TotalPage


class PageShape(str, Enum):
    LIST = "list"
    ITEMS_TOTAL = "items_total"
    DATA_TOTAL = "data_total"


def page_items(shape: PageShape, page: Any) -> list:
    """Items carried by one decoded page. `None` (never fetched) has none."""
    if page is None:
        return []
    if shape is PageShape.LIST:
        return list(page)
    if shape is PageShape.ITEMS_TOTAL:
        return page.items
    if shape is PageShape.DATA_TOTAL:
        return page.data
    raise ConfigError(f"unknown page shape: {shape!r}")


def empty_result(shape: PageShape) -> Any:
    if shape is PageShape.LIST:
        return []
    return TotalPage()


def finish_checker(shape: PageShape, page_size: int) -> Callable[[Any], bool]:
    """Predicate: the page came back short, so nothing follows it."""

    def is_last_page(page: Any) -> bool:
        return len(page_items(shape, page)) < page_size

    return is_last_page


def reducer(shape: PageShape, total_size: int) -> Callable[[Sequence[Any]], Any]:
    """Merge pages in order and cap the merged items at `total_size`.

    Slots left empty by an early stop are skipped. Total-reporting shapes
    keep the largest `total` any page reported.
    """

    def reduce(results: Sequence[Any]) -> Any:
        merged: list = []
        total = 0
        for page in results:
            if page is None:
                continue
            merged.extend(page_items(shape, page))
            if shape is not PageShape.LIST:
                total = max(total, page.total)
        merged = merged[:total_size]

        if shape is PageShape.LIST:
            return merged
        if shape is PageShape.ITEMS_TOTAL:
            return TotalPage(items=merged, total=total)
        return TotalPage(data=merged, total=total)

    return reduce
