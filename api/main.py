from __future__ import annotations

import logging
import math

import numpy as np
import pandas as pd
from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse, Response

from api.schemas import ExpenseFiltersModel, LoadStatusResponse, MetaCategoriesResponse
from core.config import cors_allow_origins
from core.data import (
    STATIC_DATASET_PATH,
    Failed,
    load_expense_data,
    prepare_context,
    status_message,
)
from core.filters import ExpenseFilters, normalize_filters
from core.metrics_overview import compute_overview
from core.models import expenses_to_frame


app = FastAPI(title="Expense Viewer API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_allow_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _filters_from_model(model: ExpenseFiltersModel) -> ExpenseFilters:
    return normalize_filters(model.model_dump())


def _error(exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": str(exc), "type": type(exc).__name__})


def _json(data: object) -> JSONResponse:
    """Return JSON with safe encoding for pandas/numpy objects."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return None
        if math.isnan(out) or math.isinf(out):
            return None
        return out

    return JSONResponse(
        content=jsonable_encoder(
            data,
            custom_encoder={
                type(pd.NA): lambda _: None,
                np.integer: int,
                float: _safe_float,
                np.floating: _safe_float,
                np.bool_: bool,
                np.ndarray: lambda arr: arr.tolist(),
            },
        )
    )


@app.get("/mockExpenses.json")
async def static_expenses():
    # Runs on the event loop; the cached load fetches this route from handler threads.
    return FileResponse(STATIC_DATASET_PATH, media_type="application/json")


@app.get("/meta/status", response_model=LoadStatusResponse)
def meta_status():
    try:
        data_ctx = load_expense_data()
        status = data_ctx["status"]
        return LoadStatusResponse(
            state=status.state,
            message=status_message(status),
            using_fallback=isinstance(status, Failed),
            total=len(data_ctx.get("expenses", ())),
        )
    except Exception as exc:
        logger.exception("meta_status failed")
        return _error(exc)


@app.get("/meta/categories", response_model=MetaCategoriesResponse)
def meta_categories():
    try:
        data_ctx = load_expense_data()
        return MetaCategoriesResponse(categories=list(data_ctx.get("categories", [])))
    except Exception as exc:
        logger.exception("meta_categories failed")
        return _error(exc)


@app.post("/expenses")
def expenses(filters: ExpenseFiltersModel):
    try:
        data_ctx = load_expense_data()
        f = _filters_from_model(filters)
        ctx = prepare_context(f, data_ctx)
        return _json(compute_overview(f, ctx))
    except Exception as exc:
        logger.exception("expenses failed")
        return _error(exc)


@app.post("/export/expenses")
def export_expenses(filters: ExpenseFiltersModel):
    data_ctx = load_expense_data()
    f = _filters_from_model(filters)
    ctx = prepare_context(f, data_ctx)

    export_df = expenses_to_frame(ctx["filtered_expenses"])
    csv_bytes = export_df.to_csv(index=False).encode("utf-8")
    return Response(
        content=csv_bytes,
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=expenses.csv"},
    )
