"""Runtime settings for a single service, read from `.env` and the environment."""

from __future__ import annotations

import os
import re

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator
from sqlalchemy.engine import URL

# Optionally schema-qualified: `products` or `products_schema.products`.
_TABLE_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*(\.[a-zA-Z_][a-zA-Z0-9_]*)?$")


class ServiceConfig(BaseModel):
    """Typed service configuration."""

    model_config = ConfigDict(extra="ignore")

    service_name: str
    host: str = "0.0.0.0"
    port: int
    database_url: str
    db_pool_size: int = 10
    db_max_overflow: int = 0
    db_pool_timeout_seconds: float = 30.0
    log_level: str = "INFO"
    allowed_origins: list[str] = Field(default_factory=lambda: ["*"])
    expose_error_detail: bool = False
    table_name: str

    @field_validator("table_name")
    @classmethod
    def validate_table_name(cls, value: str) -> str:
        if not _TABLE_RE.match(value):
            raise ValueError(f"Unsafe SQL identifier: {value!r}")
        return value

    @field_validator("port", "db_pool_size", "db_pool_timeout_seconds")
    @classmethod
    def validate_positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("Value must be greater than 0.")
        return value

    @field_validator("db_max_overflow")
    @classmethod
    def validate_non_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError("Value must not be negative.")
        return value


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "y", "on"}:
        return True
    if value in {"0", "false", "no", "n", "off"}:
        return False
    raise ValueError(f"{name} must be boolean-like, got {raw!r}")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return float(raw)


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


def database_url_from_env() -> str:
    """`DATABASE_URL` if set, otherwise a PostgreSQL URL built from the libpq variables."""

    explicit = os.getenv("DATABASE_URL")
    if explicit:
        return explicit

    url = URL.create(
        "postgresql+psycopg2",
        username=os.getenv("PGUSER", "postgres"),
        password=os.getenv("PGPASSWORD") or None,
        host=os.getenv("PGHOST", "localhost"),
        port=_env_int("PGPORT", 5432),
        database=os.getenv("PGDATABASE", "postgres"),
    )
    return url.render_as_string(hide_password=False)


def load_service_config(
    *,
    service_name: str,
    default_port: int,
    table_env: str,
    default_table: str,
    expose_error_detail: bool = False,
    load_env: bool = True,
) -> ServiceConfig:
    """Load one service's configuration from `.env` and the process environment."""

    if load_env:
        load_dotenv()

    return ServiceConfig.model_validate(
        {
            "service_name": service_name,
            "host": os.getenv("HOST", "0.0.0.0"),
            "port": _env_int("PORT", default_port),
            "database_url": database_url_from_env(),
            "db_pool_size": _env_int("DB_POOL_SIZE", 10),
            "db_max_overflow": _env_int("DB_MAX_OVERFLOW", 0),
            "db_pool_timeout_seconds": _env_float("DB_POOL_TIMEOUT_SECONDS", 30.0),
            "log_level": os.getenv("LOG_LEVEL", "INFO"),
            "allowed_origins": _env_list("ALLOWED_ORIGINS", ["*"]),
            "expose_error_detail": _env_bool("EXPOSE_ERROR_DETAIL", expose_error_detail),
            "table_name": os.getenv(table_env, default_table),
        }
    )
