import threading
import time

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import inspect, text
from sqlalchemy.exc import OperationalError

from app.core.errors import StoreUnavailableError
from app.db import init as store_init
from app.db.session import engine
from app.main import app


def test_create_schema_is_idempotent():
    store_init.create_schema(engine)
    store_init.create_schema(engine)

    insp = inspect(engine)
    columns = {c["name"] for c in insp.get_columns("employees")}
    assert columns == {"id", "emp_number", "emp_name", "created_at", "updated_at"}
    unique = [ix for ix in insp.get_indexes("employees") if ix["unique"]]
    assert any(ix["column_names"] == ["emp_number"] for ix in unique)


def test_additive_column_check_backfills_updated_at():
    with engine.begin() as conn:
        conn.execute(text("DROP TABLE employees"))
        conn.execute(
            text(
                "CREATE TABLE employees ("
                "id INTEGER PRIMARY KEY, "
                "emp_number TEXT NOT NULL, "
                "emp_name TEXT NOT NULL, "
                "created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP)"
            )
        )
        conn.execute(text("INSERT INTO employees (emp_number, emp_name) VALUES ('E100', 'Alice Smith')"))

    store_init.create_schema(engine)

    with engine.connect() as conn:
        row = conn.execute(text("SELECT created_at, updated_at FROM employees")).one()
    assert row.updated_at == row.created_at


def test_ready_store_is_not_initialized_again(monkeypatch):
    calls = []
    monkeypatch.setattr(store_init, "create_schema", lambda eng: calls.append(eng))

    store_init.ensure_store_ready()
    store_init.ensure_store_ready()
    assert calls == []
    assert store_init.is_store_ready()


def test_concurrent_first_callers_share_one_initialization(monkeypatch):
    calls = []

    def slow_create_schema(eng):
        calls.append(eng)
        time.sleep(0.05)

    monkeypatch.setattr(store_init, "create_schema", slow_create_schema)
    store_init.reset_store_state()

    start = threading.Barrier(8)
    errors = []

    def worker():
        start.wait()
        try:
            store_init.ensure_store_ready()
        except Exception as exc:  # pragma: no cover - surfaced by the assertion below
            errors.append(exc)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert len(calls) == 1
    assert store_init.is_store_ready()


def test_initialization_failure_raises_and_can_retry(monkeypatch):
    def broken(eng):
        raise OperationalError("CREATE TABLE", {}, Exception("connection refused"))

    monkeypatch.setattr(store_init, "create_schema", broken)
    store_init.reset_store_state()

    with pytest.raises(StoreUnavailableError):
        store_init.ensure_store_ready()
    assert not store_init.is_store_ready()

    monkeypatch.setattr(store_init, "create_schema", lambda eng: None)
    store_init.ensure_store_ready()
    assert store_init.is_store_ready()


def test_routes_report_failed_initialization(monkeypatch):
    def broken(eng):
        raise OperationalError("CREATE TABLE", {}, Exception("connection refused"))

    monkeypatch.setattr(store_init, "create_schema", broken)
    store_init.reset_store_state()

    client = TestClient(app)
    r = client.get("/api/employees")
    assert r.status_code == 500
    assert r.json() == {"error": "API failed to initialize."}


def test_startup_fails_when_store_cannot_initialize(monkeypatch):
    def broken(eng):
        raise OperationalError("CREATE TABLE", {}, Exception("connection refused"))

    monkeypatch.setattr(store_init, "create_schema", broken)
    store_init.reset_store_state()

    with pytest.raises(StoreUnavailableError):
        with TestClient(app):
            pass


def test_startup_initializes_store(monkeypatch):
    store_init.reset_store_state()
    with TestClient(app) as client:
        assert store_init.is_store_ready()
        r = client.get("/api/employees")
        assert r.status_code == 200
