"""Tests for environment-driven configuration helpers."""

from core import config


def test_source_url_defaults_to_local_static_resource(monkeypatch) -> None:
    monkeypatch.delenv("EXPENSES_SOURCE_URL", raising=False)

    assert config.expenses_source_url() == "http://127.0.0.1:8000/mockExpenses.json"


def test_source_url_from_env(monkeypatch) -> None:
    monkeypatch.setenv("EXPENSES_SOURCE_URL", " https://cdn.example.com/expenses.json ")

    assert config.expenses_source_url() == "https://cdn.example.com/expenses.json"


def test_load_delay_default_and_override(monkeypatch) -> None:
    monkeypatch.delenv("EXPENSES_LOAD_DELAY", raising=False)
    assert config.expenses_load_delay() == 1.5

    monkeypatch.setenv("EXPENSES_LOAD_DELAY", "0")
    assert config.expenses_load_delay() == 0.0


def test_invalid_load_delay_falls_back_to_default(monkeypatch) -> None:
    monkeypatch.setenv("EXPENSES_LOAD_DELAY", "soon")
    assert config.expenses_load_delay() == config.DEFAULT_LOAD_DELAY

    monkeypatch.setenv("EXPENSES_LOAD_DELAY", "-2")
    assert config.expenses_load_delay() == config.DEFAULT_LOAD_DELAY


def test_request_timeout_rejects_zero(monkeypatch) -> None:
    monkeypatch.setenv("EXPENSES_REQUEST_TIMEOUT", "0")
    assert config.expenses_request_timeout() == config.DEFAULT_REQUEST_TIMEOUT

    monkeypatch.setenv("EXPENSES_REQUEST_TIMEOUT", "2.5")
    assert config.expenses_request_timeout() == 2.5


def test_cors_allow_origins_defaults(monkeypatch) -> None:
    monkeypatch.delenv("CORS_ALLOW_ORIGINS", raising=False)

    assert config.cors_allow_origins() == ["http://localhost:8501", "http://127.0.0.1:8501"]


def test_cors_allow_origins_parses_comma_separated_list(monkeypatch) -> None:
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "https://a.com, https://b.com,")

    assert config.cors_allow_origins() == ["https://a.com", "https://b.com"]
