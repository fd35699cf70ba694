from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, Iterable, List

import pandas as pd


EXPENSE_COLUMNS = ["id", "title", "amount", "category", "date"]


@dataclass(frozen=True)
class Expense:
    id: int
    title: str
    amount: int  # minor units (cents)
    category: str
    date: str  # YYYY-MM-DD

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


def expenses_to_frame(expenses: Iterable[Expense]) -> pd.DataFrame:
    """Tabular view of a dataset, one row per expense in dataset order."""
    records: List[Dict[str, object]] = [e.to_dict() for e in expenses]
    if not records:
        return pd.DataFrame(columns=EXPENSE_COLUMNS)
    return pd.DataFrame.from_records(records, columns=EXPENSE_COLUMNS)
