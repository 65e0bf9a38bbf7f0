from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.core.config import Settings, settings


def engine_options(cfg: Settings) -> dict:
    url = cfg.database_url
    connect_args: dict = {}
    backend = url.get_backend_name()
    if backend == "postgresql" and cfg.is_managed_store:
        connect_args["sslmode"] = cfg.PGSSLMODE
    elif backend == "sqlite":
        # sync routes run on the threadpool
        connect_args["check_same_thread"] = False
    return {"pool_pre_ping": True, "connect_args": connect_args}


engine = create_engine(settings.database_url, **engine_options(settings))

SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
)

def get_db():
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
