from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel


class ExpenseFiltersModel(BaseModel):
    selected_category: str = "All"
    search_term: str = ""


class LoadStatusResponse(BaseModel):
    state: str
    message: Optional[str] = None
    using_fallback: bool = False
    total: int = 0


class MetaCategoriesResponse(BaseModel):
    categories: List[str]
