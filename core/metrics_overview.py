from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, Tuple

import pandas as pd

from core.charts import spend_by_category_chart, to_vega_spec
from core.data import Failed, Loading, status_message
from core.filters import ExpenseFilters
from core.models import Expense, expenses_to_frame


def compute_overview(filters: ExpenseFilters, ctx: Dict[str, Any]) -> Dict[str, Any]:
    status = ctx.get("status", Loading())
    expenses: Tuple[Expense, ...] = ctx.get("expenses", ()) or ()
    visible: Tuple[Expense, ...] = ctx.get("filtered_expenses", ()) or ()

    visible_df: pd.DataFrame = expenses_to_frame(visible)
    visible_total = int(visible_df["amount"].sum()) if not visible_df.empty else 0

    return {
        "filters": asdict(filters),
        "status": {"state": status.state, "message": status_message(status)},
        "using_fallback": isinstance(status, Failed),
        "categories": list(ctx.get("categories", []) or []),
        "rows": visible_df.to_dict(orient="records"),
        "counts": {"visible": len(visible), "total": len(expenses)},
        "is_empty": not visible,
        "visible_amount_total": visible_total,
        "charts": {"spend_by_category": to_vega_spec(spend_by_category_chart(visible_df))},
    }
