"""
Error taxonomy and FastAPI exception handlers.

Services and guards raise ``ApiError``; nothing below the router layer builds
HTTP responses itself. Storage errors are translated to the nearest kind by the
code that triggered them, so raw driver messages never reach a caller.
"""
from __future__ import annotations

import enum
from collections import defaultdict

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.logging import get_logger
from app.models.common import ErrorResponse

logger = get_logger(__name__)


class ErrorKind(str, enum.Enum):
    UNAUTHORIZED = "UNAUTHORIZED"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    TENANT_REQUIRED = "TENANT_REQUIRED"
    VALIDATION = "VALIDATION"
    INTERNAL = "INTERNAL"


STATUS_CODES = {
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.TENANT_REQUIRED: status.HTTP_400_BAD_REQUEST,
    ErrorKind.VALIDATION: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class ApiError(Exception):
    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self.kind]


def _render(kind: ErrorKind, message: str, fields: dict | None = None) -> JSONResponse:
    body = ErrorResponse(error=kind.value, message=message, fields=fields)
    return JSONResponse(
        status_code=STATUS_CODES[kind],
        content=jsonable_encoder(body, exclude_none=True),
    )


def _field_name(loc: tuple) -> str:
    # ("body", "confirmPassword") -> "confirmPassword"; ("query", "limit") -> "limit"
    parts = [str(p) for p in loc if p not in ("body", "query", "path", "header", "cookie")]
    return ".".join(parts) or "__root__"


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return _render(exc.kind, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields: dict[str, list[str]] = defaultdict(list)
    for err in exc.errors():
        fields[_field_name(tuple(err.get("loc", ())))].append(err.get("msg", "Invalid value."))
    return _render(ErrorKind.VALIDATION, "Invalid input.", dict(fields))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _render(ErrorKind.INTERNAL, "Internal server error.")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
