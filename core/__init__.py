"""Core (UI-agnostic) expense viewer logic.

This package contains:
- the expense model and its tabular (pandas) view
- data loading with the embedded fallback dataset
- filter normalization, the filter/search projection and category options
- page compute functions (JSON-serializable payloads)
- chart helpers (Altair -> Vega-Lite spec dict)
"""
