"""Connection settings, async SQLAlchemy engine factory and identifier checks."""

from __future__ import annotations

import re

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy import URL, make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

DEFAULT_PORT = 5432

# Optionally schema-qualified SQL identifier: "models" or "public.models".
_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?")


def validate_identifier(name: str) -> str:
    """Return *name* unchanged if it is safe to interpolate into SQL text.

    Table and column names cannot be bound as parameters, so anything that
    is not a plain identifier is rejected with ValueError.
    """
    if not isinstance(name, str) or not _IDENTIFIER.fullmatch(name):
        raise ValueError(f"invalid SQL identifier: {name!r}")
    return name


class Settings(BaseSettings):
    """PostgreSQL connection settings.

    Each field falls back to the POSTGRES_* environment variable of the same
    name, then to the local development default.  DATABASE_URL, when set,
    takes precedence over the individual fields.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    postgres_host: str = "localhost"
    postgres_port: int = DEFAULT_PORT
    postgres_db: str = "postgres"
    postgres_user: str = "postgres"
    postgres_password: str = "postgres"
    database_url: str | None = None

    @field_validator("postgres_port")
    @classmethod
    def _default_zero_port(cls, v: int) -> int:
        return v or DEFAULT_PORT

    def url(self) -> URL:
        if self.database_url:
            return make_url(self.database_url)
        return URL.create(
            "postgresql+asyncpg",
            username=self.postgres_user,
            password=self.postgres_password,
            host=self.postgres_host,
            port=self.postgres_port,
            database=self.postgres_db or None,
        )


def create_engine(url: str | URL) -> AsyncEngine:
    """Build an AsyncEngine.  No connection is opened until first use.

    asyncpg sessions are pinned to UTC so timestamps read back unchanged.
    """
    url = make_url(url)
    kwargs: dict = {"echo": False, "pool_pre_ping": True}
    if url.get_driver_name() == "asyncpg":
        kwargs["connect_args"] = {"server_settings": {"timezone": "UTC"}}
    return create_async_engine(url, **kwargs)
