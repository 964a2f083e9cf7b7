"""Shared Pydantic models used across Python services."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, Field, PlainSerializer

# NUMERIC(10,2) in the store, plain JSON number on the wire.
Price = Annotated[
    Decimal,
    Field(max_digits=10, decimal_places=2),
    PlainSerializer(float, return_type=float, when_used="json"),
]


def _round_cents(value: Decimal) -> Decimal:
    return value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


# Incoming prices are rounded the way the NUMERIC(10,2) column rounds them.
PriceIn = Annotated[Decimal, AfterValidator(_round_cents)]


class UserBase(BaseModel):
    name: str
    email: str


class User(UserBase):
    id: int


class UserPayload(BaseModel):
    """Body of POST/PUT /users. Omitted fields stay None."""

    name: str | None = None
    email: str | None = None


class UserDeleted(BaseModel):
    message: str
    user: User


class ProductBase(BaseModel):
    name: str
    price: Price


class Product(ProductBase):
    id: int


class ProductPayload(BaseModel):
    """Body of POST/PUT /products. Omitted fields stay None."""

    name: str | None = None
    price: PriceIn | None = None


class ProductDeleted(BaseModel):
    message: str
    product: Product


class HealthResponse(BaseModel):
    status: str
    service: str


class DbHealthResponse(BaseModel):
    ok: bool
    error: str | None = None


class ErrorResponse(BaseModel):
    error: str
    detail: Any | None = None
