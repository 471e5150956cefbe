"""Tests for the infrastructure.db module."""

import pytest

from datasheet_finance.infrastructure import db as db_module


def test_get_env_var_reads_environment(monkeypatch):
    """_get_env_var should load .env and return the requested value."""
    monkeypatch.setattr(db_module.dotenv, "load_dotenv", lambda: None)
    monkeypatch.setenv("DATASHEET_DB_URL", "sqlite:///finance.db")

    assert db_module._get_env_var("DATASHEET_DB_URL") == "sqlite:///finance.db"


def test_get_env_var_raises_when_missing(monkeypatch):
    """Missing env vars should raise a RuntimeError."""
    monkeypatch.setattr(db_module.dotenv, "load_dotenv", lambda: None)
    monkeypatch.delenv("DATASHEET_DB_URL", raising=False)

    with pytest.raises(RuntimeError):
        db_module._get_env_var("DATASHEET_DB_URL")


def test_create_engine_passes_pool_configuration(monkeypatch):
    """_create_engine should configure QueuePool with health checks."""
    captured = {}

    def fake_create_engine(db_url, **kwargs):
        captured["db_url"] = db_url
        captured["kwargs"] = kwargs
        return "engine"

    monkeypatch.setattr(db_module, "create_engine", fake_create_engine)

    engine = db_module._create_engine("postgresql://datasheet")

    assert engine == "engine"
    assert captured["db_url"] == "postgresql://datasheet"
    assert captured["kwargs"]["poolclass"] is db_module.QueuePool
    assert captured["kwargs"]["pool_size"] == 5
    assert captured["kwargs"]["max_overflow"] == 5
    assert captured["kwargs"]["pool_pre_ping"] is True
    assert captured["kwargs"]["future"] is True


def test_create_engine_skips_pool_for_sqlite(monkeypatch):
    """SQLite URLs keep the dialect's default pool."""
    captured = {}

    def fake_create_engine(db_url, **kwargs):
        captured["kwargs"] = kwargs
        return "engine"

    monkeypatch.setattr(db_module, "create_engine", fake_create_engine)

    db_module._create_engine("sqlite:///finance.db")

    assert captured["kwargs"] == {"future": True}


def test_get_datasheet_engine_caches_engine(monkeypatch):
    """get_datasheet_engine should memoize the created engine."""
    monkeypatch.setattr(db_module, "_datasheet_engine", None)
    created = []

    def fake_create_engine(url):
        created.append(url)
        return f"engine:{url}"

    monkeypatch.setattr(db_module, "_create_engine", fake_create_engine)
    monkeypatch.setattr(db_module.dotenv, "load_dotenv", lambda: None)
    monkeypatch.setenv("DATASHEET_DB_URL", "postgresql://datasheet")

    engine_one = db_module.get_datasheet_engine()
    engine_two = db_module.get_datasheet_engine()

    assert engine_one is engine_two
    assert engine_one == "engine:postgresql://datasheet"
    assert created == ["postgresql://datasheet"]


def test_adapter_prefers_injected_engine(monkeypatch):
    """The adapter should return an injected engine or the global one."""
    monkeypatch.setattr(db_module, "get_datasheet_engine", lambda: "global")

    default_adapter = db_module.SqlAlchemyDatabaseEngineAdapter()
    injected_adapter = db_module.SqlAlchemyDatabaseEngineAdapter(
        engine="injected"
    )

    assert default_adapter.get_datasheet_engine() == "global"
    assert injected_adapter.get_datasheet_engine() == "injected"
