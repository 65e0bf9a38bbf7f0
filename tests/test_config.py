from app.core.config import Settings
from app.db.session import engine_options


def make_settings(**overrides) -> Settings:
    base = {
        "DATABASE_URL": None,
        "NEON_DATABASE_URL": None,
        "PGUSER": None,
        "PGPASSWORD": None,
        "USER": None,
    }
    base.update(overrides)
    return Settings(_env_file=None, **base)


def test_local_store_from_discrete_settings():
    cfg = make_settings(PGHOST="db.local", PGPORT=6543, PGDATABASE="registry", PGUSER="alice", PGPASSWORD="pw")
    url = cfg.database_url
    assert not cfg.is_managed_store
    assert url.host == "db.local"
    assert url.port == 6543
    assert url.database == "registry"
    assert url.username == "alice"
    assert url.password == "pw"
    assert "sslmode" not in engine_options(cfg)["connect_args"]


def test_local_user_falls_back_to_os_user_then_postgres():
    assert make_settings(USER="bob").database_url.username == "bob"
    assert make_settings().database_url.username == "postgres"


def test_managed_store_uses_tls():
    cfg = make_settings(DATABASE_URL="postgres://u:p@ep-cool.neon.tech/registry")
    assert cfg.is_managed_store
    assert cfg.database_url.drivername == "postgresql"
    assert cfg.database_url.host == "ep-cool.neon.tech"
    assert engine_options(cfg)["connect_args"] == {"sslmode": "require"}


def test_neon_url_is_a_fallback():
    cfg = make_settings(NEON_DATABASE_URL="postgresql://u:p@neon.example/db")
    assert cfg.database_url.host == "neon.example"

    cfg = make_settings(DATABASE_URL="postgresql://u:p@primary.example/db", NEON_DATABASE_URL="postgresql://u:p@neon.example/db")
    assert cfg.database_url.host == "primary.example"


def test_sqlite_store_options():
    cfg = make_settings(DATABASE_URL="sqlite:///./registry.db")
    assert engine_options(cfg)["connect_args"] == {"check_same_thread": False}


def test_origin_settings():
    cfg = make_settings(
        CLIENT_ORIGIN="https://a.example.com",
        ALLOWED_ORIGINS="https://b.example.com,https://c.example.com",
        VERCEL_BRANCH_URL="registry-git-dev.vercel.app",
    )
    assert "https://a.example.com" in cfg.configured_origins
    assert cfg.deployment_origins == ["https://registry-git-dev.vercel.app"]
    assert cfg.trusted_suffixes == [".vercel.app"]
    assert cfg.PORT == 4000
