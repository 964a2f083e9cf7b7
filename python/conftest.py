from __future__ import annotations

from collections.abc import Iterator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from common.errors import StoreError


class BrokenDatabase:
    """Stands in for a client whose store is unreachable."""

    def __init__(self, message: str = "connection refused") -> None:
        self.message = message

    def _fail(self, *_, **__):
        raise StoreError(self.message)

    fetch_all = fetch_one = fetch_scalar = _fail

    def close(self) -> None:
        return None


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    # One shared in-memory database for every thread TestClient uses.
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    yield engine
    engine.dispose()


@pytest.fixture
def broken_db() -> BrokenDatabase:
    return BrokenDatabase()
