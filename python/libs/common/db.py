"""Pooled database access shared by the services.

Each call checks a connection out of the engine's pool, runs exactly one
parameterized statement inside its own transaction and returns the
connection before handing rows back. SQLAlchemy errors never leave this
module; they are re-raised as `StoreError`.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.sql.elements import TextClause

from common.config import ServiceConfig
from common.errors import StoreError

Statement = str | TextClause


def _as_clause(statement: Statement) -> TextClause:
    return text(statement) if isinstance(statement, str) else statement


class DatabaseClient:
    """Minimal SQLAlchemy wrapper around a bounded connection pool."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    @classmethod
    def from_config(cls, config: ServiceConfig) -> DatabaseClient:
        engine = create_engine(
            config.database_url,
            pool_size=config.db_pool_size,
            max_overflow=config.db_max_overflow,
            pool_timeout=config.db_pool_timeout_seconds,
            pool_pre_ping=True,
        )
        return cls(engine)

    @property
    def engine(self) -> Engine:
        return self._engine

    @contextmanager
    def _transaction(self) -> Iterator[Connection]:
        try:
            with self._engine.begin() as connection:
                yield connection
        except SQLAlchemyError as exc:
            raise StoreError(str(getattr(exc, "orig", None) or exc)) from exc

    def fetch_all(
        self, statement: Statement, params: Mapping[str, Any] | None = None
    ) -> list[dict[str, Any]]:
        with self._transaction() as connection:
            rows = connection.execute(_as_clause(statement), dict(params or {})).mappings().all()
        return [dict(row) for row in rows]

    def fetch_one(
        self, statement: Statement, params: Mapping[str, Any] | None = None
    ) -> dict[str, Any] | None:
        with self._transaction() as connection:
            row = connection.execute(_as_clause(statement), dict(params or {})).mappings().first()
        return dict(row) if row is not None else None

    def fetch_scalar(self, statement: Statement, params: Mapping[str, Any] | None = None) -> Any:
        with self._transaction() as connection:
            return connection.execute(_as_clause(statement), dict(params or {})).scalar_one()

    def close(self) -> None:
        self._engine.dispose()


def get_database_client(request: Request) -> DatabaseClient:
    """FastAPI dependency: the client built for this application."""

    return request.app.state.db
