import pytest

from grid_console.app.query_state import QueryState, SortDirection
from grid_console.app.ui.filters import DateRange, clean_filters, clean_search_term
from grid_console.app.ui.pagination import PaginationSummary, shift_page


def test_query_state_rejects_invalid_page_and_limit() -> None:
    with pytest.raises(ValueError):
        QueryState(page=0)
    with pytest.raises(ValueError):
        QueryState(limit=0)


def test_setters_reset_page_except_with_page() -> None:
    state = QueryState(page=4, sort_column="contest_date")

    assert state.with_page(5).page == 5
    assert state.with_sort("contest_name", SortDirection.ASC).page == 1
    assert state.with_filters({"place": "Tokyo"}).page == 1
    assert state.with_search("kobe").page == 1
    assert state.with_deleted(True).page == 1
    assert state.page == 4


def test_to_params_includes_filters_and_search() -> None:
    state = QueryState(sort_column="order_date", sort_direction=SortDirection.DESC).with_filters(
        {"product_name": "Entry"}
    ).with_search("sato")

    assert state.to_params() == {
        "page": 1,
        "limit": 50,
        "sortBy": "order_date",
        "sortOrder": "desc",
        "product_name": "Entry",
        "search": "sato",
    }
    assert "q" in state.to_params(search_key="q")


def test_states_with_same_filters_compare_equal() -> None:
    first = QueryState().with_filters({"b": "2", "a": "1"})
    second = QueryState().with_filters({"a": "1", "b": "2"})

    assert first == second


def test_flipped_direction() -> None:
    assert SortDirection.ASC.flipped() is SortDirection.DESC
    assert SortDirection.DESC.flipped() is SortDirection.ASC


def test_clean_filters_drops_empty_values_and_strips() -> None:
    cleaned = clean_filters({"place": " Tokyo ", "product_name": "", "valid_only": False, "shopify_id_filter": None})

    assert cleaned == {"place": "Tokyo"}


def test_clean_filters_keeps_date_range_only_with_both_bounds() -> None:
    date_range = DateRange()

    assert clean_filters({"startDate": "2024-01-01"}, date_range) == {}
    assert clean_filters({"endDate": "2024-01-31", "place": "Osaka"}, date_range) == {"place": "Osaka"}
    assert clean_filters({"startDate": "2024-01-01", "endDate": "2024-01-31"}, date_range) == {
        "startDate": "2024-01-01",
        "endDate": "2024-01-31",
    }


def test_clean_search_term() -> None:
    assert clean_search_term("  kobe ") == "kobe"
    assert clean_search_term("   ") is None
    assert clean_search_term(None) is None


def test_shift_page_bounds() -> None:
    assert shift_page(4, 1, 5) == 5
    assert shift_page(5, 1, 5) is None
    assert shift_page(1, -1, 5) is None
    assert shift_page(3, 0, 5) is None


def test_pagination_summary_flags() -> None:
    summary = PaginationSummary(page=1, total_pages=3, total=120)

    assert summary.has_next is True
    assert summary.has_prev is False
    assert summary.label() == "Page 1 / 3 (120 total)"
