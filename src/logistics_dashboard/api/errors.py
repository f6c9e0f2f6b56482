"""Exception handlers mapping dashboard errors to JSON responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..errors import (
    DashboardError,
    EntityNotFoundError,
    EntityValidationError,
    OptimizationFailedError,
    OptimizationInProgressError,
)

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str, details: list[dict] | None = None) -> JSONResponse:
    body: dict = {"error": message}
    if details is not None:
        body["details"] = details
    return JSONResponse(status_code=status_code, content=body)


async def _validation_error(request: Request, exc: EntityValidationError) -> JSONResponse:
    return _error(status.HTTP_400_BAD_REQUEST, exc.message, [issue.to_dict() for issue in exc.issues])


async def _request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ()) if part != "body") or "body",
            "message": str(error.get("msg", "Invalid value")),
        }
        for error in exc.errors()
    ]
    return _error(status.HTTP_400_BAD_REQUEST, "Invalid request", details)


async def _not_found(request: Request, exc: EntityNotFoundError) -> JSONResponse:
    return _error(status.HTTP_404_NOT_FOUND, exc.message)


async def _in_progress(request: Request, exc: OptimizationInProgressError) -> JSONResponse:
    return _error(status.HTTP_409_CONFLICT, exc.message)


async def _optimization_failed(request: Request, exc: OptimizationFailedError) -> JSONResponse:
    return _error(status.HTTP_502_BAD_GATEWAY, exc.message)


async def _dashboard_error(request: Request, exc: DashboardError) -> JSONResponse:
    logger.error("Unhandled dashboard error on %s %s: %s", request.method, request.url.path, exc.message)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error")


async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)}, headers=exc.headers)


async def _unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unexpected error on %s %s", request.method, request.url.path)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(EntityValidationError, _validation_error)
    app.add_exception_handler(RequestValidationError, _request_validation_error)
    app.add_exception_handler(EntityNotFoundError, _not_found)
    app.add_exception_handler(OptimizationInProgressError, _in_progress)
    app.add_exception_handler(OptimizationFailedError, _optimization_failed)
    app.add_exception_handler(DashboardError, _dashboard_error)
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(Exception, _unexpected_error)
