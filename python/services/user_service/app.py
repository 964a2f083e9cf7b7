"""User Service — FastAPI application for managing users."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, FastAPI, Request

from common.config import ServiceConfig, load_service_config
from common.db import DatabaseClient, get_database_client
from common.errors import BadRequest, NotFound, expose_store_detail
from common.models import ErrorResponse, User, UserDeleted, UserPayload
from common.service import create_service_app, run
from user_service.store import UserStore

SERVICE_NAME = "users-api"
DEFAULT_PORT = 4001


def get_user_store(
    request: Request, db: Annotated[DatabaseClient, Depends(get_database_client)]
) -> UserStore:
    return UserStore(db, request.app.state.config.table_name)


StoreDep = Annotated[UserStore, Depends(get_user_store)]

router = APIRouter(tags=["users"])
_not_found = {404: {"model": ErrorResponse}}


@router.post(
    "/users",
    response_model=User,
    status_code=201,
    responses={400: {"model": ErrorResponse}},
    dependencies=[Depends(expose_store_detail)],
)
def create_user(store: StoreDep, payload: UserPayload | None = None):
    payload = payload or UserPayload()
    if not payload.name or not payload.email:
        raise BadRequest("name & email required")
    return store.create(payload.name, payload.email)


@router.get("/users", response_model=list[User], dependencies=[Depends(expose_store_detail)])
def list_users(store: StoreDep):
    return store.list()


@router.get("/users/{user_id}", response_model=User, responses=_not_found)
def get_user(user_id: str, store: StoreDep):
    row = store.get(user_id)
    if row is None:
        raise NotFound("User not found")
    return row


@router.put("/users/{user_id}", response_model=User, responses=_not_found)
def update_user(user_id: str, store: StoreDep, payload: UserPayload | None = None):
    # A missing body updates nothing, same as products.
    payload = payload or UserPayload()
    row = store.update(user_id, name=payload.name, email=payload.email)
    if row is None:
        raise NotFound("User not found")
    return row


@router.delete("/users/{user_id}", response_model=UserDeleted, responses=_not_found)
def delete_user(user_id: str, store: StoreDep):
    row = store.delete(user_id)
    if row is None:
        raise NotFound("User not found")
    return UserDeleted(message="User deleted", user=row)


def load_config() -> ServiceConfig:
    return load_service_config(
        service_name=SERVICE_NAME,
        default_port=DEFAULT_PORT,
        table_env="USERS_TABLE",
        default_table="users_schema.users",
        expose_error_detail=True,
    )


def create_app(config: ServiceConfig | None = None, db: DatabaseClient | None = None) -> FastAPI:
    return create_service_app(
        config=config or load_config(),
        title="User Service",
        version="0.1.0",
        routers=[router],
        db=db,
    )


app = create_app()


def main() -> None:
    run(app, app.state.config)


if __name__ == "__main__":
    main()
