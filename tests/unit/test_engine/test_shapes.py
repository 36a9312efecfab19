"""Page shapes — item extraction, short-page predicate and reducers."""

from __future__ import annotations

import pytest

from wavefetch.engine import shapes
from wavefetch.engine.shapes import PageShape
from wavefetch.models.envelopes import TotalPage


def test_missing_page_has_no_items():
    for shape in PageShape:
        assert shapes.page_items(shape, None) == []


def test_page_items_reads_the_live_field():
    page = TotalPage(items=[1, 2], data=[3], total=9)
    assert shapes.page_items(PageShape.ITEMS_TOTAL, page) == [1, 2]
    assert shapes.page_items(PageShape.DATA_TOTAL, page) == [3]
    assert shapes.page_items(PageShape.LIST, [4, 5]) == [4, 5]


@pytest.mark.parametrize(
    "shape,page,is_last",
    [
        (PageShape.LIST, [1, 2, 3], False),
        (PageShape.LIST, [1, 2], True),
        (PageShape.LIST, [], True),
        (PageShape.ITEMS_TOTAL, TotalPage(items=[1, 2, 3], total=10), False),
        (PageShape.ITEMS_TOTAL, TotalPage(data=[1, 2, 3], total=10), True),
        (PageShape.DATA_TOTAL, TotalPage(data=[1, 2, 3], total=10), False),
        (PageShape.DATA_TOTAL, TotalPage(data=[1], total=10), True),
    ],
)
def test_short_page_is_last(shape, page, is_last):
    assert shapes.finish_checker(shape, 3)(page) is is_last


def test_list_reducer_skips_empty_slots_and_truncates():
    reduce = shapes.reducer(PageShape.LIST, 4)
    assert reduce([[1, 2], None, [3, 4, 5], None]) == [1, 2, 3, 4]


def test_items_reducer_keeps_max_total():
    reduce = shapes.reducer(PageShape.ITEMS_TOTAL, 10)
    merged = reduce([TotalPage(items=[1], total=5), TotalPage(items=[2], total=7), None])
    assert merged.items == [1, 2]
    assert merged.data == []
    assert merged.total == 7


def test_data_reducer_merges_under_data():
    reduce = shapes.reducer(PageShape.DATA_TOTAL, 2)
    merged = reduce([TotalPage(data=["a", "b"], total=3), TotalPage(data=["c"], total=3)])
    assert merged.data == ["a", "b"]
    assert merged.items == []
    assert merged.total == 3


def test_reducer_on_all_empty_slots():
    assert shapes.reducer(PageShape.LIST, 5)([None, None]) == []
    assert shapes.reducer(PageShape.ITEMS_TOTAL, 5)([None]) == TotalPage()


def test_empty_result_per_shape():
    assert shapes.empty_result(PageShape.LIST) == []
    assert shapes.empty_result(PageShape.ITEMS_TOTAL) == TotalPage()
    assert shapes.empty_result(PageShape.DATA_TOTAL) == TotalPage()
