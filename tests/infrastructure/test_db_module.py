"""Tests for the infrastructure.db module."""

import pytest

from src.infrastructure import db as db_module


def test_get_env_var_reads_environment(monkeypatch):
    """_get_env_var should load .env and return the requested value."""
    monkeypatch.setattr(db_module.dotenv, "load_dotenv", lambda: None)
    monkeypatch.setenv("REPORTS_DB_URL", "postgresql://example")

    assert db_module._get_env_var("REPORTS_DB_URL") == "postgresql://example"


def test_get_env_var_raises_when_missing(monkeypatch):
    """Missing env vars should raise a RuntimeError."""
    monkeypatch.setattr(db_module.dotenv, "load_dotenv", lambda: None)
    monkeypatch.delenv("REPORTS_DB_URL", raising=False)

    with pytest.raises(RuntimeError, match="REPORTS_DB_URL"):
        db_module._get_env_var("REPORTS_DB_URL")


def test_create_engine_passes_pool_configuration(monkeypatch):
    """Server databases should get a QueuePool with health checks."""
    captured = {}

    def fake_create_engine(db_url, **kwargs):
        captured["db_url"] = db_url
        captured["kwargs"] = kwargs
        return "engine"

    monkeypatch.setattr(db_module, "create_engine", fake_create_engine)

    engine = db_module._create_engine("postgresql://reports")

    assert engine == "engine"
    assert captured["db_url"] == "postgresql://reports"
    assert captured["kwargs"]["poolclass"] is db_module.QueuePool
    assert captured["kwargs"]["pool_size"] == 5
    assert captured["kwargs"]["max_overflow"] == 5
    assert captured["kwargs"]["pool_pre_ping"] is True
    assert captured["kwargs"]["future"] is True


def test_create_engine_shares_sqlite_across_threads(monkeypatch):
    """SQLite URLs should disable the same-thread check."""
    captured = {}

    def fake_create_engine(db_url, **kwargs):
        captured["kwargs"] = kwargs
        return "engine"

    monkeypatch.setattr(db_module, "create_engine", fake_create_engine)

    db_module._create_engine("sqlite:///reports.db")

    assert "poolclass" not in captured["kwargs"]
    assert captured["kwargs"]["connect_args"] == {"check_same_thread": False}


def test_get_reports_engine_caches_engine(monkeypatch):
    """get_reports_engine should memoize the created engine."""
    db_module._reports_engine = None
    created = []

    def fake_create_engine(url):
        created.append(url)
        return f"engine:{url}"

    monkeypatch.setattr(db_module, "_create_engine", fake_create_engine)
    monkeypatch.setattr(db_module.dotenv, "load_dotenv", lambda: None)
    monkeypatch.setenv("REPORTS_DB_URL", "postgresql://reports")

    engine_one = db_module.get_reports_engine()
    engine_two = db_module.get_reports_engine()

    assert engine_one is engine_two
    assert engine_one == "engine:postgresql://reports"
    assert created == ["postgresql://reports"]
    db_module._reports_engine = None


def test_adapter_returns_global_engine(monkeypatch):
    """SqlAlchemyDatabaseEngineAdapter should proxy the global helper."""
    monkeypatch.setattr(
        db_module,
        "get_reports_engine",
        lambda: "reports_engine",
    )

    adapter = db_module.SqlAlchemyDatabaseEngineAdapter()

    assert adapter.get_reports_engine() == "reports_engine"


def test_adapter_prefers_injected_engine(monkeypatch):
    monkeypatch.setattr(
        db_module,
        "get_reports_engine",
        lambda: pytest.fail("global engine should not be used"),
    )

    adapter = db_module.SqlAlchemyDatabaseEngineAdapter(engine="scratch")

    assert adapter.get_reports_engine() == "scratch"
