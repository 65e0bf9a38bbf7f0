from pathlib import Path
import os
from pydantic_settings import BaseSettings, SettingsConfigDict
import sqlalchemy as sa

BASE_DIR = Path(__file__).resolve().parents[2]  # repo root

ENV_FILE = os.getenv("ENV_FILE", str(BASE_DIR / ".env"))

# Vite dev server and preview ports
DEFAULT_ORIGINS = [
    "http://localhost:5173",
    "http://localhost:4173",
    "http://127.0.0.1:5173",
    "http://127.0.0.1:4173",
    "https://localhost:5173",
    "https://localhost:4173",
    "https://127.0.0.1:5173",
    "https://127.0.0.1:4173",
]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=ENV_FILE, extra="ignore")

    APP_ENV: str = "local"
    LOG_LEVEL: str = "INFO"

    HOST: str = "0.0.0.0"
    PORT: int = 4000

    # Managed store: a full connection string, reached over TLS
    DATABASE_URL: str | None = None
    NEON_DATABASE_URL: str | None = None
    PGSSLMODE: str = "require"

    # Local store
    PGHOST: str = "localhost"
    PGPORT: int = 5432
    PGDATABASE: str = "postgres"
    PGUSER: str | None = None
    PGPASSWORD: str | None = None
    USER: str | None = None

    # Extra permitted caller origins, comma and/or whitespace separated
    CLIENT_ORIGIN: str | None = None
    CLIENT_ORIGINS: str | None = None
    ALLOWED_ORIGINS: str | None = None
    FRONTEND_ORIGIN: str | None = None
    FRONTEND_URL: str | None = None
    SITE_URL: str | None = None
    APP_URL: str | None = None
    URL: str | None = None
    NEXT_PUBLIC_SITE_URL: str | None = None

    # Deployment hostnames (no scheme)
    VERCEL_URL: str | None = None
    VERCEL_BRANCH_URL: str | None = None
    NEXT_PUBLIC_VERCEL_URL: str | None = None

    TRUSTED_ORIGIN_SUFFIXES: str = ".vercel.app"

    @property
    def connection_string(self) -> str | None:
        raw = self.DATABASE_URL or self.NEON_DATABASE_URL
        if not raw:
            return None
        # Hosted providers hand out postgres:// which SQLAlchemy no longer accepts
        if raw.startswith("postgres://"):
            raw = "postgresql://" + raw[len("postgres://"):]
        return raw

    @property
    def is_managed_store(self) -> bool:
        return self.connection_string is not None

    @property
    def database_url(self) -> sa.engine.URL:
        """Connection URL for the store: the full connection string when set, else the PG* parts."""
        if self.connection_string:
            return sa.engine.make_url(self.connection_string)
        return sa.engine.URL.create(
            "postgresql",
            username=self.PGUSER or self.USER or "postgres",
            password=self.PGPASSWORD,
            host=self.PGHOST,
            port=self.PGPORT,
            database=self.PGDATABASE,
        )

    @property
    def configured_origins(self) -> list[str | None]:
        return [
            self.CLIENT_ORIGIN,
            self.CLIENT_ORIGINS,
            self.ALLOWED_ORIGINS,
            self.FRONTEND_ORIGIN,
            self.FRONTEND_URL,
            self.SITE_URL,
            self.APP_URL,
            self.URL,
            self.NEXT_PUBLIC_SITE_URL,
        ]

    @property
    def deployment_origins(self) -> list[str]:
        hosts = [self.VERCEL_URL, self.VERCEL_BRANCH_URL, self.NEXT_PUBLIC_VERCEL_URL]
        return [f"https://{h}" for h in hosts if h]

    @property
    def trusted_suffixes(self) -> list[str]:
        return [s.strip().lower() for s in self.TRUSTED_ORIGIN_SUFFIXES.replace(",", " ").split() if s.strip()]


settings = Settings()
