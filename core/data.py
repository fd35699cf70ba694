from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass, field
from datetime import datetime
from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

import requests

from core import config
from core.filters import ExpenseFilters, apply_filters, category_options, normalize_filters
from core.models import EXPENSE_COLUMNS, Expense


logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parents[1] / "data"
STATIC_DATASET_PATH = DATA_DIR / "mockExpenses.json"

LOAD_FAILED_MESSAGE = "Failed to load expenses. Please try again later."

_ISO_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


FALLBACK_EXPENSES: Tuple[Expense, ...] = (
    Expense(1, "Lunch", 1500, "Food", "2025-03-25"),
    Expense(2, "Gas Station", 2500, "Transport", "2025-03-24"),
    Expense(3, "Movie Tickets", 1200, "Entertainment", "2025-03-23"),
    Expense(4, "Grocery Shopping", 3500, "Food", "2025-03-22"),
    Expense(5, "Uber Ride", 800, "Transport", "2025-03-21"),
    Expense(6, "Coffee", 300, "Food", "2025-03-20"),
    Expense(7, "Netflix Subscription", 1500, "Entertainment", "2025-03-19"),
    Expense(8, "Bus Fare", 200, "Transport", "2025-03-18"),
    Expense(9, "Dinner at Restaurant", 4500, "Food", "2025-03-17"),
    Expense(10, "Parking Fee", 500, "Transport", "2025-03-16"),
    Expense(11, "Concert Tickets", 8000, "Entertainment", "2025-03-15"),
    Expense(12, "Breakfast", 800, "Food", "2025-03-14"),
    Expense(13, "Taxi Ride", 1200, "Transport", "2025-03-13"),
    Expense(14, "Gym Membership", 2500, "Health", "2025-03-12"),
    Expense(15, "Pizza Delivery", 2200, "Food", "2025-03-11"),
    Expense(16, "Train Ticket", 1800, "Transport", "2025-03-10"),
    Expense(17, "Spotify Premium", 1200, "Entertainment", "2025-03-09"),
    Expense(18, "Smoothie", 600, "Food", "2025-03-08"),
    Expense(19, "Car Wash", 1500, "Transport", "2025-03-07"),
    Expense(20, "Theater Show", 6500, "Entertainment", "2025-03-06"),
)


# ---------------- Errors ----------------
class ExpenseLoadError(Exception):
    """Base class for failures while acquiring the expense dataset."""

    kind = "load"


class RetrievalError(ExpenseLoadError):
    """Transport failure or non-success response from the source."""

    kind = "retrieval"


class ParseError(ExpenseLoadError):
    """Payload received but not a well-formed sequence of expenses."""

    kind = "parse"


# ---------------- Load status ----------------
@dataclass(frozen=True)
class Loading:
    state = "loading"


@dataclass(frozen=True)
class Ready:
    expenses: Tuple[Expense, ...]
    state = "ready"


@dataclass(frozen=True)
class Failed:
    message: str
    expenses: Tuple[Expense, ...] = field(default=FALLBACK_EXPENSES)
    state = "failed"


LoadStatus = Union[Loading, Ready, Failed]


def active_expenses(status: LoadStatus) -> Tuple[Expense, ...]:
    if isinstance(status, (Ready, Failed)):
        return status.expenses
    return ()


def status_message(status: LoadStatus) -> Optional[str]:
    return status.message if isinstance(status, Failed) else None


# ---------------- Parsing ----------------
def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _require_text(item: dict, key: str, index: int) -> str:
    value = item[key]
    if not isinstance(value, str) or not value:
        raise ParseError(f"item {index}: {key!r} must be a non-empty string")
    return value


def _require_iso_date(value: object, index: int) -> str:
    if not isinstance(value, str) or not _ISO_DATE_RE.fullmatch(value):
        raise ParseError(f"item {index}: 'date' must be YYYY-MM-DD, got {value!r}")
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError as exc:
        raise ParseError(f"item {index}: 'date' is not a calendar date: {value!r}") from exc
    return value


def parse_expense(item: object, index: int = 0) -> Expense:
    if not isinstance(item, dict):
        raise ParseError(f"item {index}: expected an object, got {type(item).__name__}")
    missing = [col for col in EXPENSE_COLUMNS if col not in item]
    if missing:
        raise ParseError(f"item {index}: missing fields {missing}")

    if not _is_int(item["id"]):
        raise ParseError(f"item {index}: 'id' must be an integer")
    amount = item["amount"]
    if not _is_int(amount):
        raise ParseError(f"item {index}: 'amount' must be an integer")
    if amount < 0:
        raise ParseError(f"item {index}: 'amount' must be non-negative")

    return Expense(
        id=item["id"],
        title=_require_text(item, "title", index),
        amount=amount,
        category=_require_text(item, "category", index),
        date=_require_iso_date(item["date"], index),
    )


def parse_expenses(payload: object) -> Tuple[Expense, ...]:
    """Validate a decoded JSON payload into an ordered, immutable dataset."""
    if not isinstance(payload, list):
        raise ParseError(f"expected a JSON array, got {type(payload).__name__}")

    expenses = tuple(parse_expense(item, i) for i, item in enumerate(payload))

    seen = set()
    for expense in expenses:
        if expense.id in seen:
            raise ParseError(f"duplicate expense id {expense.id}")
        seen.add(expense.id)
    return expenses


# ---------------- Retrieval ----------------
def fetch_expenses(url: str, timeout: float = config.DEFAULT_REQUEST_TIMEOUT) -> Tuple[Expense, ...]:
    try:
        resp = requests.get(url, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as exc:
        raise RetrievalError(f"GET {url} failed: {exc}") from exc

    try:
        payload = resp.json()
    except (ValueError, RecursionError) as exc:
        raise ParseError(f"GET {url} returned a non-JSON body") from exc
    return parse_expenses(payload)


class ExpenseLoader:
    """Single-shot loader for the session dataset.

    ``status`` is ``Loading`` until ``load()`` settles it to ``Ready`` or
    ``Failed``. Once settled it never changes; later ``load()`` calls return
    the settled status without retrying.
    """

    def __init__(
        self,
        source_url: Optional[str] = None,
        *,
        delay: Optional[float] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.source_url = source_url or config.expenses_source_url()
        self.delay = config.expenses_load_delay() if delay is None else delay
        self.timeout = config.expenses_request_timeout() if timeout is None else timeout
        self._status: LoadStatus = Loading()

    @property
    def status(self) -> LoadStatus:
        return self._status

    def load(self) -> LoadStatus:
        if not isinstance(self._status, Loading):
            return self._status

        if self.delay > 0:
            time.sleep(self.delay)

        try:
            expenses = fetch_expenses(self.source_url, timeout=self.timeout)
        except ExpenseLoadError as exc:
            logger.warning(
                "expense load failed kind=%s url=%s: %s; using %d fallback expenses",
                exc.kind,
                self.source_url,
                exc,
                len(FALLBACK_EXPENSES),
            )
            self._status = Failed(LOAD_FAILED_MESSAGE, FALLBACK_EXPENSES)
        else:
            logger.info("loaded %d expenses from %s", len(expenses), self.source_url)
            self._status = Ready(expenses)
        return self._status


# ---------------- Public API (Streamlit parity + FastAPI use) ----------------
@lru_cache(maxsize=4)
def _load_expense_data_cached(source_url: str) -> Dict[str, object]:
    status = ExpenseLoader(source_url, delay=0).load()
    expenses = active_expenses(status)
    return {
        "source_url": source_url,
        "status": status,
        "expenses": expenses,
        "categories": category_options(expenses),
    }


def load_expense_data(source_url: Optional[str] = None) -> Dict[str, object]:
    return _load_expense_data_cached(source_url or config.expenses_source_url())


def build_data_context(status: LoadStatus, source_url: Optional[str] = None) -> Dict[str, object]:
    """Context dict for an already-settled status (used by the Streamlit session)."""
    expenses = active_expenses(status)
    return {
        "source_url": source_url,
        "status": status,
        "expenses": expenses,
        "categories": category_options(expenses),
    }


def prepare_context(filters: dict | ExpenseFilters, data_ctx: Dict[str, object]) -> Dict[str, object]:
    expenses: Tuple[Expense, ...] = tuple(data_ctx.get("expenses", ()) or ())
    filt = filters if isinstance(filters, ExpenseFilters) else normalize_filters(filters)

    return {
        "filters": filt,
        "status": data_ctx.get("status", Loading()),
        "expenses": expenses,
        "filtered_expenses": apply_filters(expenses, filt),
        "categories": data_ctx.get("categories") or category_options(expenses),
    }
