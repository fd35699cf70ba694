from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

import pandas as pd

from core.models import Expense, expenses_to_frame


ALL_CATEGORIES = "All"


@dataclass(frozen=True)
class ExpenseFilters:
    selected_category: str = ALL_CATEGORIES
    search_term: str = ""


def _as_category(value: Optional[object]) -> str:
    if value is None:
        return ALL_CATEGORIES
    out = str(value)
    if not out.strip():
        return ALL_CATEGORIES
    return out


def normalize_filters(raw: Optional[dict]) -> ExpenseFilters:
    raw = raw or {}
    selected_category = _as_category(raw.get("selected_category"))
    # Matched literally: whitespace is part of the term.
    search_term = raw.get("search_term")
    search_term = "" if search_term is None else str(search_term)
    return ExpenseFilters(selected_category=selected_category, search_term=search_term)


def filter_expenses(
    expenses: Iterable[Expense],
    selected_category: str = ALL_CATEGORIES,
    search_term: str = "",
) -> Tuple[Expense, ...]:
    """Return the expenses passing both the category and the search filter.

    The category check is an exact, case-sensitive match and is skipped for
    the "All" sentinel. The search check keeps records whose title or category
    contains ``search_term`` case-insensitively and is skipped for an empty
    term. Dataset order is preserved.
    """
    expenses = tuple(expenses)
    if not expenses:
        return ()

    df = expenses_to_frame(expenses)
    mask = pd.Series(True, index=df.index)

    if selected_category != ALL_CATEGORIES:
        mask &= df["category"] == selected_category

    if search_term:
        q = search_term.lower()
        mask &= (
            df["title"].astype(str).str.lower().str.contains(q, regex=False, na=False)
            | df["category"].astype(str).str.lower().str.contains(q, regex=False, na=False)
        )

    return tuple(e for e, keep in zip(expenses, mask.tolist()) if keep)


def apply_filters(expenses: Iterable[Expense], filters: ExpenseFilters) -> Tuple[Expense, ...]:
    return filter_expenses(expenses, filters.selected_category, filters.search_term)


def category_options(expenses: Iterable[Expense]) -> List[str]:
    """"All" followed by each distinct category in first-occurrence order."""
    df = expenses_to_frame(expenses)
    if df.empty:
        return [ALL_CATEGORIES]
    return [ALL_CATEGORIES] + [str(c) for c in df["category"].drop_duplicates().tolist()]
