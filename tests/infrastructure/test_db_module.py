"""Tests for the infrastructure.db module."""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from ledger.domain.exceptions import TransientError, ValidationError
from ledger.infrastructure import db as db_module


def test_get_env_var_reads_environment(monkeypatch):
    """_get_env_var should load .env and return the requested value."""
    monkeypatch.setattr(db_module.dotenv, "load_dotenv", lambda: None)
    monkeypatch.setenv("LEDGER_DB_URL", "postgresql://example")

    assert db_module._get_env_var("LEDGER_DB_URL") == "postgresql://example"


def test_get_env_var_raises_when_missing(monkeypatch):
    """Missing env vars should raise a RuntimeError."""
    monkeypatch.setattr(db_module.dotenv, "load_dotenv", lambda: None)
    monkeypatch.delenv("LEDGER_DB_URL", raising=False)

    with pytest.raises(RuntimeError, match="LEDGER_DB_URL"):
        db_module._get_env_var("LEDGER_DB_URL")


def test_create_engine_passes_pool_configuration(monkeypatch):
    """_create_engine should configure QueuePool with health checks."""
    captured = {}

    def fake_create_engine(db_url, **kwargs):
        captured["db_url"] = db_url
        captured["kwargs"] = kwargs
        return "engine"

    monkeypatch.setattr(db_module, "create_engine", fake_create_engine)

    engine = db_module._create_engine("postgresql://ledger")

    assert engine == "engine"
    assert captured["db_url"] == "postgresql://ledger"
    assert captured["kwargs"]["poolclass"] is db_module.QueuePool
    assert captured["kwargs"]["pool_size"] == 5
    assert captured["kwargs"]["max_overflow"] == 5
    assert captured["kwargs"]["pool_pre_ping"] is True
    assert captured["kwargs"]["future"] is True


def test_sqlite_engines_enforce_foreign_keys(tmp_path):
    engine = db_module.create_ledger_engine(f"sqlite:///{tmp_path / 'fk.db'}")

    with engine.connect() as conn:
        enabled = conn.exec_driver_sql("PRAGMA foreign_keys").scalar()

    engine.dispose()
    assert enabled == 1


def test_get_ledger_engine_caches_engine(monkeypatch):
    """get_ledger_engine should memoize the created engine."""
    monkeypatch.setattr(db_module, "_ledger_engine", None)
    created = []

    def fake_create_engine(url):
        created.append(url)
        return f"engine:{url}"

    monkeypatch.setattr(db_module, "_create_engine", fake_create_engine)
    monkeypatch.setattr(db_module.dotenv, "load_dotenv", lambda: None)
    monkeypatch.setenv("LEDGER_DB_URL", "postgresql://ledger")

    engine_one = db_module.get_ledger_engine()
    engine_two = db_module.get_ledger_engine()

    assert engine_one is engine_two
    assert engine_one == "engine:postgresql://ledger"
    assert created == ["postgresql://ledger"]


def test_adapters_return_engines(monkeypatch):
    """Both adapters should hand out the engine they wrap."""
    monkeypatch.setattr(db_module, "get_ledger_engine", lambda: "ledger_engine")
    engine = MagicMock()

    assert db_module.SqlAlchemyDatabaseEngineAdapter().get_ledger_engine() == "ledger_engine"
    assert db_module.EngineDatabaseAdapter(engine).get_ledger_engine() is engine


def test_translate_db_errors_maps_integrity_errors():
    with pytest.raises(ValidationError) as excinfo:
        with db_module.translate_db_errors("Entry insert"):
            raise IntegrityError("INSERT", {}, Exception("FOREIGN KEY constraint failed"))

    assert excinfo.value.message == "Entry insert violates a store constraint"
    assert "FOREIGN KEY" in excinfo.value.details["error"]


def test_translate_db_errors_maps_connection_errors():
    with pytest.raises(TransientError):
        with db_module.translate_db_errors("Entry listing"):
            raise OperationalError("SELECT", {}, Exception("server closed"))


def test_translate_db_errors_leaves_other_errors_alone():
    with pytest.raises(KeyError):
        with db_module.translate_db_errors("Entry listing"):
            raise KeyError("x")
