"""
One-time store initialization.

The employees table, its unique index and the additive `updated_at` column
check are applied once per process. Concurrent first callers block on the
same lock and observe the single outcome; after a failure the next caller
tries again.
"""
import logging
import threading

from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from app.core.errors import StoreUnavailableError
from app.db.base import Base
from app.db.session import engine as default_engine
from app.models.employee import Employee

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_ready = False


def create_schema(engine: Engine) -> None:
    """Idempotent DDL: safe to run against an empty or an existing database."""
    table = Employee.__table__
    Base.metadata.create_all(bind=engine, tables=[table], checkfirst=True)

    with engine.begin() as conn:
        columns = {c["name"] for c in inspect(conn).get_columns(table.name)}
        if "updated_at" not in columns:
            # Tables created before updated_at existed: add nullable, backfill, then tighten.
            col_type = table.c.updated_at.type.compile(dialect=conn.dialect)
            conn.execute(text(f"ALTER TABLE {table.name} ADD COLUMN updated_at {col_type}"))
            conn.execute(text(f"UPDATE {table.name} SET updated_at = created_at WHERE updated_at IS NULL"))
            if conn.dialect.name == "postgresql":
                conn.execute(text(f"ALTER TABLE {table.name} ALTER COLUMN updated_at SET DEFAULT now()"))
                conn.execute(text(f"ALTER TABLE {table.name} ALTER COLUMN updated_at SET NOT NULL"))
            logger.info("Added missing updated_at column to %s", table.name)

        conn.execute(
            text(f"CREATE UNIQUE INDEX IF NOT EXISTS employees_emp_number_key ON {table.name} (emp_number)")
        )


def ensure_store_ready(engine: Engine | None = None) -> None:
    global _ready
    if _ready:
        return
    with _lock:
        if _ready:
            return
        try:
            create_schema(engine or default_engine)
        except SQLAlchemyError as exc:
            logger.exception("Failed to prepare database")
            raise StoreUnavailableError("API failed to initialize.") from exc
        _ready = True
        logger.info("Employee store ready")


def reset_store_state() -> None:
    """Forget a completed initialization (tests drop and recreate the table)."""
    global _ready
    with _lock:
        _ready = False


def is_store_ready() -> bool:
    return _ready
