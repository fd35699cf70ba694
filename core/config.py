"""Configuration helpers for environment variables."""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv


logger = logging.getLogger(__name__)


DEFAULT_SOURCE_URL = "http://127.0.0.1:8000/mockExpenses.json"
DEFAULT_LOAD_DELAY = 1.5
DEFAULT_REQUEST_TIMEOUT = 10.0
DEFAULT_CORS_ORIGINS = ["http://localhost:8501", "http://127.0.0.1:8501"]


def _should_load_dotenv() -> bool:
    app_env = os.getenv("APP_ENV", "dev").strip().lower()
    return app_env in {"dev", "local"}


if _should_load_dotenv():
    load_dotenv()


def get_env(name: str, default: str | None = None) -> str | None:
    """Return a raw environment value or default."""
    return os.getenv(name, default)


def _non_negative_float(name: str, default: float, *, allow_zero: bool = True) -> float:
    raw = (get_env(name, "") or "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("invalid_config_value name=%s value=%r; using default %s", name, raw, default)
        return default
    if value < 0 or (value == 0 and not allow_zero):
        logger.warning("out_of_range_config_value name=%s value=%r; using default %s", name, raw, default)
        return default
    return value


def expenses_source_url() -> str:
    """Return the location the expense dataset is retrieved from."""
    return (get_env("EXPENSES_SOURCE_URL", "") or "").strip() or DEFAULT_SOURCE_URL


def expenses_load_delay() -> float:
    """Return the pause (seconds) before the retrieval attempt."""
    return _non_negative_float("EXPENSES_LOAD_DELAY", DEFAULT_LOAD_DELAY)


def expenses_request_timeout() -> float:
    return _non_negative_float("EXPENSES_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT, allow_zero=False)


def cors_allow_origins() -> list[str]:
    """Return CORS allowed origins from env, defaulting to the local viewer."""
    raw_origins = get_env("CORS_ALLOW_ORIGINS", "") or ""
    parsed_origins = [origin.strip() for origin in raw_origins.split(",") if origin.strip()]
    return parsed_origins or list(DEFAULT_CORS_ORIGINS)
