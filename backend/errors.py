"""Map domain errors to HTTP responses."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from core.errors import (
    CoasterForgeError,
    EnrichmentFailed,
    EnrichmentNotPersisted,
    NotFound,
    NotFoundOrForbidden,
    Unauthenticated,
)

STATUS_CODES = {
    Unauthenticated: 401,
    NotFoundOrForbidden: 404,
    NotFound: 404,
    EnrichmentFailed: 502,
    EnrichmentNotPersisted: 409,
}


def status_for(exc: CoasterForgeError) -> int:
    for cls in type(exc).__mro__:
        if cls in STATUS_CODES:
            return STATUS_CODES[cls]
    return 400


async def coasterforge_error_handler(request: Request, exc: CoasterForgeError) -> JSONResponse:
    body = {"detail": str(exc)}
    if isinstance(exc, EnrichmentNotPersisted):
        body["content"] = exc.content
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthenticated) else None
    return JSONResponse(status_code=status_for(exc), content=body, headers=headers)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CoasterForgeError, coasterforge_error_handler)
