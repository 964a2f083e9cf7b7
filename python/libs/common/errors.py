"""Error taxonomy shared by the services and its mapping onto HTTP responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    status_code = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class BadRequest(ServiceError):
    status_code = 400


class NotFound(ServiceError):
    status_code = 404


class StoreError(ServiceError):
    """The store could not be reached or rejected the statement."""

    status_code = 500


def _error_body(error: str, detail: object | None = None) -> dict[str, object]:
    body: dict[str, object] = {"error": error}
    if detail is not None:
        body["detail"] = detail
    return body


def expose_store_detail(request: Request) -> None:
    """Route dependency: let store error text reach the client on this route."""

    request.state.expose_store_detail = True


def register_error_handlers(app: FastAPI, *, expose_detail: bool = False) -> None:
    """Translate service errors into the `{"error": ...}` envelope.

    Store error text goes into `detail` only when `expose_detail` is set and
    the route opted in through `expose_store_detail`.
    """

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
        logger.error("%s %s error: %s", request.method, request.url.path, exc.message)
        opted_in = getattr(request.state, "expose_store_detail", False)
        detail = exc.message if expose_detail and opted_in else None
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body("Internal server error", detail),
        )

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=_error_body(exc.message))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content=_error_body("invalid request body", jsonable_encoder(exc.errors())),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )
