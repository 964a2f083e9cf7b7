"""SQL for the products table. One statement per operation."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from sqlalchemy import Numeric, bindparam, text

from common.db import DatabaseClient
from common.errors import StoreError

_PRICE = bindparam("price", type_=Numeric(10, 2))


class ProductStore:
    def __init__(self, db: DatabaseClient, table: str) -> None:
        self._db = db
        self._list = text(f"SELECT id, name, price FROM {table} ORDER BY id ASC")
        self._get = text(f"SELECT id, name, price FROM {table} WHERE id = :id")
        self._insert = text(
            f"INSERT INTO {table} (name, price) VALUES (:name, :price) RETURNING id, name, price"
        ).bindparams(_PRICE)
        self._update = text(
            f"UPDATE {table} SET name = COALESCE(:name, name), price = COALESCE(:price, price) "
            "WHERE id = :id RETURNING id, name, price"
        ).bindparams(_PRICE)
        self._delete = text(f"DELETE FROM {table} WHERE id = :id RETURNING id, name, price")

    def list(self) -> list[dict[str, Any]]:
        return self._db.fetch_all(self._list)

    def get(self, product_id: str) -> dict[str, Any] | None:
        return self._db.fetch_one(self._get, {"id": product_id})

    def create(self, name: str, price: Decimal) -> dict[str, Any]:
        row = self._db.fetch_one(self._insert, {"name": name, "price": price})
        if row is None:
            raise StoreError("insert returned no row")
        return row

    def update(
        self, product_id: str, name: str | None = None, price: Decimal | None = None
    ) -> dict[str, Any] | None:
        # None keeps the stored value.
        return self._db.fetch_one(self._update, {"id": product_id, "name": name, "price": price})

    def delete(self, product_id: str) -> dict[str, Any] | None:
        return self._db.fetch_one(self._delete, {"id": product_id})
