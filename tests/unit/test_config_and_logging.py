"""Unit tests for settings parsing and log formatting."""

from __future__ import annotations

import json
import logging

import pytest

from app.config import Settings
from app.core.logging import JSONExtrasFormatter, setup_logging


def test_database_url_is_normalized_to_asyncpg() -> None:
    settings = Settings(database_url="postgres://user:pass@db:5432/lookpost")

    assert settings.database_url == "postgresql+asyncpg://user:pass@db:5432/lookpost"


def test_cors_origins_accept_comma_separated_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example")

    assert Settings().cors_origins == ["https://a.example", "https://b.example"]


def test_cors_origins_accept_json_list(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CORS_ORIGINS", '["https://a.example"]')

    assert Settings().cors_origins == ["https://a.example"]


def test_default_language_is_hyphenated(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DEFAULT_LANGUAGE", " pt_BR ")

    assert Settings().default_language == "pt-BR"


def test_lookpost_defaults() -> None:
    settings = Settings()

    assert settings.default_language == "pt"
    assert settings.filter_state_ttl_seconds == 90 * 24 * 60 * 60


def test_formatter_appends_extras_as_json() -> None:
    formatter = JSONExtrasFormatter(datefmt="%Y-%m-%d %H:%M:%S")
    record = logging.LogRecord(
        name="app.services.lookpost",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Campaign validated",
        args=(),
        exc_info=None,
    )
    record.campaign_id = "camp-1"
    record.corrected_fields = ["governance (initialized)"]

    line = formatter.format(record)

    assert "| INFO     | app.services.lookpost | Campaign validated" in line
    extras = json.loads(line[line.index("{"):])
    assert extras == {"campaign_id": "camp-1", "corrected_fields": ["governance (initialized)"]}


def test_setup_logging_is_idempotent() -> None:
    name = "lookpost-test-logger"
    setup_logging("DEBUG", logger_names=(name,))
    setup_logging("DEBUG", logger_names=(name,))

    logger = logging.getLogger(name)
    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG
    assert logger.propagate is False
