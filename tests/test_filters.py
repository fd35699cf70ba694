"""Tests for the filter/search projection and category options."""

from __future__ import annotations

import pytest

from core.data import FALLBACK_EXPENSES
from core.filters import (
    ALL_CATEGORIES,
    ExpenseFilters,
    apply_filters,
    category_options,
    filter_expenses,
    normalize_filters,
)
from core.models import Expense


MIXED = (
    Expense(10, "Team Lunch", 4200, "Food", "2025-01-02"),
    Expense(11, "food truck", 900, "Snacks", "2025-01-03"),
    Expense(12, "Metro Card", 3000, "Transport", "2025-01-04"),
    Expense(13, "Café au lait", 450, "Food", "2025-01-05"),
    Expense(14, "Road trip", 12000, "food", "2025-01-06"),
)


def _ids(expenses) -> list[int]:
    return [expense.id for expense in expenses]


def test_no_filters_returns_dataset_unchanged_and_ordered() -> None:
    assert filter_expenses(FALLBACK_EXPENSES, ALL_CATEGORIES, "") == FALLBACK_EXPENSES
    assert filter_expenses(MIXED) == MIXED


def test_category_filter_on_fallback_returns_food_records_in_order() -> None:
    visible = filter_expenses(FALLBACK_EXPENSES, "Food", "")

    assert _ids(visible) == [1, 4, 6, 9, 12, 15, 18]
    assert all(expense.category == "Food" for expense in visible)


def test_category_filter_is_exact_and_case_sensitive() -> None:
    assert _ids(filter_expenses(MIXED, "Food", "")) == [10, 13]
    assert _ids(filter_expenses(MIXED, "food", "")) == [14]
    assert filter_expenses(MIXED, "Foo", "") == ()


def test_search_uber_matches_single_record() -> None:
    visible = filter_expenses(FALLBACK_EXPENSES, ALL_CATEGORIES, "uber")

    assert len(visible) == 1
    assert visible[0].id == 5
    assert visible[0].title == "Uber Ride"


def test_transport_with_search_e_matches_titles_containing_e() -> None:
    visible = filter_expenses(FALLBACK_EXPENSES, "Transport", "e")

    # Gas Station and Car Wash contain no "e"; neither does "Transport".
    assert _ids(visible) == [5, 8, 10, 13, 16]


def test_search_matches_title_or_category_case_insensitively() -> None:
    assert _ids(filter_expenses(MIXED, ALL_CATEGORIES, "FOOD")) == [10, 11, 13, 14]
    assert _ids(filter_expenses(MIXED, ALL_CATEGORIES, "lunch")) == [10]
    assert _ids(filter_expenses(MIXED, ALL_CATEGORIES, "port")) == [12]


def test_search_term_is_literal_not_regex() -> None:
    data = (
        Expense(1, "a.b", 100, "Misc", "2025-01-01"),
        Expense(2, "axb", 100, "Misc", "2025-01-01"),
    )

    assert _ids(filter_expenses(data, ALL_CATEGORIES, "a.b")) == [1]
    assert filter_expenses(data, ALL_CATEGORIES, "(") == ()


def test_whitespace_search_term_is_matched_literally() -> None:
    assert _ids(filter_expenses(MIXED, ALL_CATEGORIES, " ")) == [10, 11, 12, 13, 14]
    assert _ids(filter_expenses(MIXED, ALL_CATEGORIES, "  ")) == []


def test_search_results_satisfy_substring_condition_exactly() -> None:
    term = "ti"
    visible = filter_expenses(FALLBACK_EXPENSES, ALL_CATEGORIES, term)
    expected = [
        e for e in FALLBACK_EXPENSES if term in e.title.lower() or term in e.category.lower()
    ]

    assert list(visible) == expected


@pytest.mark.parametrize("category", ["All", "Food", "Transport", "Entertainment", "Health", "Missing"])
@pytest.mark.parametrize("term", ["", "e", "ride", "TICKET", "zzz"])
def test_category_and_search_compose_by_intersection(category: str, term: str) -> None:
    combined = filter_expenses(FALLBACK_EXPENSES, category, term)
    staged = filter_expenses(filter_expenses(FALLBACK_EXPENSES, category, ""), ALL_CATEGORIES, term)
    reversed_order = filter_expenses(filter_expenses(FALLBACK_EXPENSES, ALL_CATEGORIES, term), category, "")

    assert combined == staged == reversed_order


def test_filtering_is_idempotent() -> None:
    first = filter_expenses(FALLBACK_EXPENSES, "Entertainment", "t")
    second = filter_expenses(FALLBACK_EXPENSES, "Entertainment", "t")

    assert first == second
    assert filter_expenses(first, "Entertainment", "t") == first


def test_empty_dataset_yields_empty_results() -> None:
    assert filter_expenses((), ALL_CATEGORIES, "") == ()
    assert filter_expenses([], "Food", "lunch") == ()
    assert category_options([]) == [ALL_CATEGORIES]


def test_no_match_yields_empty_tuple() -> None:
    assert filter_expenses(FALLBACK_EXPENSES, "Health", "pizza") == ()


def test_category_options_from_fallback() -> None:
    assert category_options(FALLBACK_EXPENSES) == ["All", "Food", "Transport", "Entertainment", "Health"]


def test_category_options_are_distinct_in_first_occurrence_order() -> None:
    options = category_options(MIXED)

    assert options[0] == ALL_CATEGORIES
    assert options[1:] == ["Food", "Snacks", "Transport", "food"]
    assert len(set(options)) == len(options)


def test_normalize_filters_defaults() -> None:
    assert normalize_filters({}) == ExpenseFilters()
    assert normalize_filters(None) == ExpenseFilters(selected_category="All", search_term="")
    assert normalize_filters({"selected_category": None, "search_term": None}) == ExpenseFilters()
    assert normalize_filters({"selected_category": "  "}).selected_category == ALL_CATEGORIES


def test_normalize_filters_keeps_values_verbatim() -> None:
    filters = normalize_filters({"selected_category": "Food", "search_term": " Lunch "})

    assert filters == ExpenseFilters(selected_category="Food", search_term=" Lunch ")
    assert _ids(apply_filters(FALLBACK_EXPENSES, ExpenseFilters("Food", "lunch"))) == [1]
