"""Tests for infrastructure settings."""

from unittest.mock import MagicMock

from ledger.infrastructure import settings as settings_module
from ledger.infrastructure.settings import DEFAULT_PAGE_LENGTH, LedgerSettings


def _isolate(monkeypatch) -> MagicMock:
    logger = MagicMock()
    monkeypatch.setattr(settings_module.dotenv, "load_dotenv", lambda: None)
    monkeypatch.setattr(settings_module, "get_app_logger", lambda: logger)
    return logger


def test_from_env_reads_url_and_page_length(monkeypatch) -> None:
    _isolate(monkeypatch)
    monkeypatch.setenv("LEDGER_DB_URL", "sqlite:///ledger.db")
    monkeypatch.setenv("LEDGER_PAGE_LENGTH", "20")

    settings = LedgerSettings.from_env()

    assert settings == LedgerSettings(db_url="sqlite:///ledger.db", page_length=20)


def test_from_env_defaults_when_unset(monkeypatch) -> None:
    _isolate(monkeypatch)
    monkeypatch.delenv("LEDGER_DB_URL", raising=False)
    monkeypatch.delenv("LEDGER_PAGE_LENGTH", raising=False)

    settings = LedgerSettings.from_env()

    assert settings.db_url is None
    assert settings.page_length == DEFAULT_PAGE_LENGTH


def test_invalid_page_length_falls_back_with_warning(monkeypatch) -> None:
    logger = _isolate(monkeypatch)
    monkeypatch.setenv("LEDGER_PAGE_LENGTH", "many")

    assert LedgerSettings.from_env().page_length == DEFAULT_PAGE_LENGTH
    logger.warning.assert_called_once()


def test_non_positive_page_length_falls_back(monkeypatch) -> None:
    logger = _isolate(monkeypatch)
    monkeypatch.setenv("LEDGER_PAGE_LENGTH", "0")

    assert LedgerSettings.from_env().page_length == DEFAULT_PAGE_LENGTH
    logger.warning.assert_called_once()
