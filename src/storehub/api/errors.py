"""
storehub.api.errors

Mapping from domain failures to HTTP responses.

Responsibilities:
- Choose a status code per `storehub.errors` type.
- Render a stable `{"error": code, "detail": message}` body.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
)

from storehub.errors import (
    AccessDenied,
    ConflictError,
    EntityInactive,
    InvalidCredentials,
    InvalidToken,
    NotFound,
    StorehubError,
)
from storehub.observability.logging import get_logger

log = get_logger(__name__)

_STATUS_BY_TYPE: dict[type[StorehubError], int] = {
    InvalidCredentials: HTTP_401_UNAUTHORIZED,
    InvalidToken: HTTP_401_UNAUTHORIZED,
    EntityInactive: HTTP_403_FORBIDDEN,
    AccessDenied: HTTP_403_FORBIDDEN,
    NotFound: HTTP_404_NOT_FOUND,
    ConflictError: HTTP_409_CONFLICT,
}


def status_for(exc: StorehubError) -> int:
    # Walk the MRO so subclasses (EmailTaken -> ConflictError) inherit a status.
    for cls in type(exc).__mro__:
        status = _STATUS_BY_TYPE.get(cls)
        if status is not None:
            return status
    return HTTP_400_BAD_REQUEST


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StorehubError)
    async def _handle_domain_error(request: Request, exc: StorehubError) -> JSONResponse:
        status = status_for(exc)
        log.info("request_rejected", error=exc.code, status_code=status)
        headers = {"WWW-Authenticate": "Bearer"} if status == HTTP_401_UNAUTHORIZED else None
        return JSONResponse(status_code=status, content=exc.to_dict(), headers=headers)
