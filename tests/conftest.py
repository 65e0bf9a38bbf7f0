import os
import tempfile

# Point the app at a throwaway SQLite file unless a real database was provided.
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite:///" + os.path.join(tempfile.mkdtemp(prefix="employee-registry-"), "test.db"),
)

import pytest

from app.main import app
from app.db.base import Base
from app.db.init import ensure_store_ready, reset_store_state
from app.db.session import SessionLocal, engine


@pytest.fixture(autouse=True)
def fresh_store():
    """
    Every test starts from an empty, freshly initialized employees table.

    Dropping the table also resets the id sequence, so the first insert in
    each test gets id=1.
    """
    Base.metadata.drop_all(bind=engine)
    reset_store_state()
    ensure_store_ready()
    yield
    app.dependency_overrides.clear()


@pytest.fixture()
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
