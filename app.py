import pandas as pd
import streamlit as st
from typing import Optional

from core.charts import spend_by_category_chart
from core.data import ExpenseLoader, Failed, build_data_context, prepare_context
from core.filters import ALL_CATEGORIES
from core.formatting import format_currency, format_date
from core.models import expenses_to_frame


# ---------- UI / layout helpers ----------
def inject_base_styles():
    if st.session_state.get("_base_css_injected"):
        return
    st.markdown(
        """
        <style>
        .app-top-bar {padding: 6px 0 4px;border-bottom: 1px solid #e5e7eb;margin-bottom: 10px;}
        .app-top-bar .page-title {font-size: 2.4rem;font-weight: 700;color: #1976d2;}
        .chip-row {display: flex;flex-wrap: wrap;gap: 6px;margin-top: 6px;}
        .chip {background: #f3f4f6;border: 1px solid #e5e7eb;border-radius: 14px;padding: 4px 10px;font-size: 0.85rem;color: #374151;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.session_state["_base_css_injected"] = True


def format_filter_summary(selected_category: str, search_term: str) -> str:
    cat_chip = "Category: All" if selected_category == ALL_CATEGORIES else f"Category: {selected_category}"
    search_chip = f"Search: “{search_term}”" if search_term else "Search: none"
    return "".join([f"<span class='chip'>{txt}</span>" for txt in [cat_chip, search_chip]])


def render_page_header(title: str, filter_summary_html: str, export_df: Optional[pd.DataFrame] = None, export_name: str = "expenses.csv"):
    inject_base_styles()
    c1, c2 = st.columns([8, 2])
    with c1:
        st.markdown(
            f"<div class='app-top-bar'><div class='page-title'>{title}</div></div>",
            unsafe_allow_html=True,
        )
    with c2:
        if export_df is not None and not export_df.empty:
            st.download_button(
                "Export CSV",
                data=export_df.to_csv(index=False).encode("utf-8"),
                file_name=export_name,
                mime="text/csv",
            )
    st.markdown(f"<div class='chip-row'>{filter_summary_html}</div>", unsafe_allow_html=True)


def display_table(df: pd.DataFrame) -> pd.DataFrame:
    out = df[["title", "amount", "category", "date"]].copy()
    out["amount"] = out["amount"].map(format_currency)
    out["date"] = out["date"].map(format_date)
    return out.rename(columns={"title": "Title", "amount": "Amount", "category": "Category", "date": "Date"})


# ---------- UI setup ----------
st.set_page_config(page_title="Expense Viewer", layout="wide")
inject_base_styles()

# One load per browser session; never retried within it.
if "load_status" not in st.session_state:
    loader = ExpenseLoader()
    with st.spinner("Loading Expenses... Please wait while we fetch your data"):
        st.session_state["load_status"] = loader.load()
    st.session_state["source_url"] = loader.source_url

status = st.session_state["load_status"]
data_ctx = build_data_context(status, st.session_state.get("source_url"))

if isinstance(status, Failed):
    st.error(status.message)
    st.caption("Using fallback data for demonstration")

# ----- Sidebar: filters -----
with st.sidebar:
    st.markdown("### Filters")
    selected_category = st.selectbox("Filter by Category", options=data_ctx["categories"], index=0)
    search_term = st.text_input("Search by title or category", "")

ctx = prepare_context({"selected_category": selected_category, "search_term": search_term}, data_ctx)
expenses = ctx["expenses"]
filtered_expenses = ctx["filtered_expenses"]
filtered_df = expenses_to_frame(filtered_expenses)

render_page_header(
    "Expense Viewer",
    format_filter_summary(selected_category, search_term),
    export_df=filtered_df,
)

if filtered_df.empty:
    st.info("No expenses found matching your criteria")
else:
    st.dataframe(display_table(filtered_df), hide_index=True, use_container_width=True)
    st.altair_chart(spend_by_category_chart(filtered_df), use_container_width=True)

st.caption(f"Showing {len(filtered_expenses)} of {len(expenses)} expenses")
