"""Liveness and store-readiness endpoints mounted on every service."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from common.db import DatabaseClient, get_database_client
from common.errors import StoreError
from common.models import DbHealthResponse, HealthResponse

DBDep = Annotated[DatabaseClient, Depends(get_database_client)]


def build_health_router(service_name: str) -> APIRouter:
    router = APIRouter(tags=["health"])

    @router.get("/health", response_model=HealthResponse)
    def health():
        return HealthResponse(status="ok", service=service_name)

    @router.get(
        "/db/health",
        response_model=DbHealthResponse,
        response_model_exclude_none=True,
        responses={500: {"model": DbHealthResponse}},
    )
    def db_health(db: DBDep):
        try:
            value = db.fetch_scalar("SELECT 1 AS ok")
        except StoreError as exc:
            return JSONResponse(status_code=500, content={"ok": False, "error": exc.message})
        return DbHealthResponse(ok=value == 1)

    return router
