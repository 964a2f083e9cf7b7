"""SQL for the users table. One statement per operation."""

from __future__ import annotations

from typing import Any

from sqlalchemy import text

from common.db import DatabaseClient
from common.errors import StoreError


class UserStore:
    def __init__(self, db: DatabaseClient, table: str) -> None:
        self._db = db
        self._list = text(f"SELECT id, name, email FROM {table} ORDER BY id ASC")
        self._get = text(f"SELECT id, name, email FROM {table} WHERE id = :id")
        self._insert = text(
            f"INSERT INTO {table} (name, email) VALUES (:name, :email) RETURNING id, name, email"
        )
        self._update = text(
            f"UPDATE {table} SET name = COALESCE(:name, name), email = COALESCE(:email, email) "
            "WHERE id = :id RETURNING id, name, email"
        )
        self._delete = text(f"DELETE FROM {table} WHERE id = :id RETURNING id, name, email")

    def list(self) -> list[dict[str, Any]]:
        return self._db.fetch_all(self._list)

    def get(self, user_id: str) -> dict[str, Any] | None:
        return self._db.fetch_one(self._get, {"id": user_id})

    def create(self, name: str, email: str) -> dict[str, Any]:
        row = self._db.fetch_one(self._insert, {"name": name, "email": email})
        if row is None:
            raise StoreError("insert returned no row")
        return row

    def update(
        self, user_id: str, name: str | None = None, email: str | None = None
    ) -> dict[str, Any] | None:
        return self._db.fetch_one(self._update, {"id": user_id, "name": name, "email": email})

    def delete(self, user_id: str) -> dict[str, Any] | None:
        return self._db.fetch_one(self._delete, {"id": user_id})
