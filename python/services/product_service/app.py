"""Product Service — FastAPI application for managing products."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, FastAPI, Request

from common.config import ServiceConfig, load_service_config
from common.db import DatabaseClient, get_database_client
from common.errors import BadRequest, NotFound
from common.models import ErrorResponse, Product, ProductDeleted, ProductPayload
from common.service import create_service_app, run
from product_service.store import ProductStore

SERVICE_NAME = "products-api"
DEFAULT_PORT = 4002


def get_product_store(
    request: Request, db: Annotated[DatabaseClient, Depends(get_database_client)]
) -> ProductStore:
    return ProductStore(db, request.app.state.config.table_name)


StoreDep = Annotated[ProductStore, Depends(get_product_store)]

router = APIRouter(tags=["products"])
_not_found = {404: {"model": ErrorResponse}}


@router.get("/products", response_model=list[Product])
def list_products(store: StoreDep):
    return store.list()


@router.get("/products/{product_id}", response_model=Product, responses=_not_found)
def get_product(product_id: str, store: StoreDep):
    row = store.get(product_id)
    if row is None:
        raise NotFound("Product not found")
    return row


@router.post(
    "/products",
    response_model=Product,
    status_code=201,
    responses={400: {"model": ErrorResponse}},
)
def create_product(store: StoreDep, payload: ProductPayload | None = None):
    payload = payload or ProductPayload()
    if not payload.name or payload.price is None:
        raise BadRequest("name & price required")
    return store.create(payload.name, payload.price)


@router.put("/products/{product_id}", response_model=Product, responses=_not_found)
def update_product(product_id: str, store: StoreDep, payload: ProductPayload | None = None):
    payload = payload or ProductPayload()
    row = store.update(product_id, name=payload.name, price=payload.price)
    if row is None:
        raise NotFound("Product not found")
    return row


@router.delete("/products/{product_id}", response_model=ProductDeleted, responses=_not_found)
def delete_product(product_id: str, store: StoreDep):
    row = store.delete(product_id)
    if row is None:
        raise NotFound("Product not found")
    return ProductDeleted(message="Product deleted", product=row)


def load_config() -> ServiceConfig:
    return load_service_config(
        service_name=SERVICE_NAME,
        default_port=DEFAULT_PORT,
        table_env="PRODUCTS_TABLE",
        default_table="products_schema.products",
    )


def create_app(config: ServiceConfig | None = None, db: DatabaseClient | None = None) -> FastAPI:
    return create_service_app(
        config=config or load_config(),
        title="Product Service",
        version="0.2.0",
        routers=[router],
        db=db,
    )


app = create_app()


def main() -> None:
    run(app, app.state.config)


if __name__ == "__main__":
    main()
