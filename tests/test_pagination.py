import math

import pytest

from clinic_api.services.pagination import filter_by_substring, paginate, parse_int


@pytest.mark.parametrize("n,limit", [(0, 10), (1, 10), (10, 10), (11, 10), (25, 7), (3, 1)])
def test_total_pages_and_page_size(n, limit):
    items = list(range(n))
    first = paginate(items, 1, limit)

    assert first.total == n
    assert first.total_pages == max(math.ceil(n / limit), 1)

    seen = []
    for page in range(1, first.total_pages + 1):
        result = paginate(items, page, limit)
        assert len(result.data) <= limit
        seen.extend(result.data)
    assert seen == items


def test_returns_requested_slice():
    result = paginate(list(range(25)), 2, 10)
    assert result.data == list(range(10, 20))
    assert result.page == 2


def test_page_past_the_end_is_empty():
    result = paginate(list(range(5)), 4, 2)
    assert result.data == []
    assert result.page == 4
    assert result.total_pages == 3


@pytest.mark.parametrize("page", [0, "0", "abc", None, "", -3])
def test_bad_page_defaults_to_first(page):
    assert paginate(list(range(30)), page, 10).page == 1


def test_zero_or_garbage_limit_defaults_to_ten():
    items = list(range(30))
    assert len(paginate(items, 1, 0).data) == 10
    assert len(paginate(items, 1, "nope").data) == 10


def test_negative_limit_clamps_to_one():
    result = paginate(list(range(3)), 1, -5)
    assert result.data == [0]
    assert result.total_pages == 3


def test_parse_int_reads_leading_digits():
    assert parse_int("3abc", 1) == 3
    assert parse_int(" 12 ", 1) == 12
    assert parse_int(2.9, 1) == 2
    assert parse_int(True, 7) == 7


def test_filter_by_substring_is_case_insensitive():
    rows = [{"name": "Jane Smith"}, {"name": "John Doe"}, {"name": None}]
    assert filter_by_substring(rows, "name", "SMI") == [{"name": "Jane Smith"}]
    assert filter_by_substring(rows, "name", "") == rows
