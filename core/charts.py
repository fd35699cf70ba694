from __future__ import annotations

from typing import Any, Dict

import altair as alt
import pandas as pd

alt.data_transformers.disable_max_rows()


def to_vega_spec(chart: alt.Chart) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def spend_by_category_chart(expenses_df: pd.DataFrame) -> alt.Chart:
    if expenses_df.empty:
        data = pd.DataFrame({"category": pd.Series(dtype=str), "amount_usd": pd.Series(dtype=float)})
    else:
        data = (
            expenses_df.groupby("category", sort=False)["amount"]
            .sum()
            .reset_index()
            .assign(amount_usd=lambda d: d["amount"].astype(float) / 100.0)
        )
    return (
        alt.Chart(data)
        .mark_bar()
        .encode(
            x=alt.X("category:N", title="Category", sort=None),
            y=alt.Y("amount_usd:Q", title="Spend (USD)", axis=alt.Axis(format="$,.2f")),
            tooltip=["category", alt.Tooltip("amount_usd:Q", title="Spend", format="$,.2f")],
        )
    )
