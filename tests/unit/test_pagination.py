import pytest

from reviews_api.core.constants import MAX_OFFSET
from reviews_api.core.pagination import normalize_pagination, parse_int


@pytest.mark.parametrize(
    "raw, expected",
    [("12", 12), (" 7 ", 7), ("-3", -3), ("1.5", None), ("abc", None), ("", None), (None, None)],
)
def test_parse_int(raw, expected):
    assert parse_int(raw) == expected


@pytest.mark.parametrize(
    "page, limit, expected",
    [
        (None, None, (1, 50)),
        ("2", "10", (2, 10)),
        ("0", "500", (1, 200)),
        ("x", "0", (1, 1)),
    ],
)
def test_normalize_pagination(page, limit, expected):
    params = normalize_pagination(page, limit)
    assert (params.page, params.limit) == expected


def test_skip_follows_page_and_limit():
    assert normalize_pagination("4", "25").skip == 75


@pytest.mark.parametrize("limit", ["1", "50", "200"])
def test_huge_page_keeps_skip_within_max_offset(limit):
    params = normalize_pagination("99999999999999999999", limit)
    assert params.skip <= MAX_OFFSET
    assert params.page == MAX_OFFSET // params.limit + 1
