from typing import Any

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from labtrack.db.session import DatabaseNotConfigured
from labtrack.middleware.tracing import TRACE_ID_CTX_VAR


def status_to_code(status_code: int) -> str:
    mapping = {
        400: "BAD_REQUEST",
        401: "UNAUTHORIZED",
        403: "FORBIDDEN",
        404: "NOT_FOUND",
        405: "METHOD_NOT_ALLOWED",
        409: "CONFLICT",
        413: "PAYLOAD_TOO_LARGE",
        415: "UNSUPPORTED_MEDIA_TYPE",
        422: "UNPROCESSABLE_ENTITY",
        429: "TOO_MANY_REQUESTS",
        500: "INTERNAL_SERVER_ERROR",
        502: "BAD_GATEWAY",
        503: "SERVICE_UNAVAILABLE",
    }
    return mapping.get(status_code, f"HTTP_{status_code}")


def error_body(status_code: int, message: str, details: Any = None) -> dict:
    return {
        "code": status_to_code(status_code),
        "message": message,
        "details": details,
        "trace_id": TRACE_ID_CTX_VAR.get(),
    }


async def handle_http_exception(request: Request, exc: StarletteHTTPException):
    detail: Any = exc.detail
    message = detail if isinstance(detail, str) else "HTTP error"
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.status_code, message, detail),
        headers=getattr(exc, "headers", None),
    )


async def handle_validation_exception(request: Request, exc: RequestValidationError):
    code = status.HTTP_422_UNPROCESSABLE_ENTITY
    return JSONResponse(
        status_code=code,
        content=error_body(code, "Request validation failed", jsonable_encoder(exc.errors())),
    )


async def handle_database_not_configured(request: Request, exc: DatabaseNotConfigured):
    code = status.HTTP_503_SERVICE_UNAVAILABLE
    return JSONResponse(status_code=code, content=error_body(code, str(exc)))


async def handle_unhandled_exception(request: Request, exc: Exception):
    code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return JSONResponse(
        status_code=code,
        content=error_body(code, "An unexpected error occurred", str(exc)),
    )


def register_exception_handlers(app) -> None:
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_validation_exception)
    app.add_exception_handler(DatabaseNotConfigured, handle_database_not_configured)
    app.add_exception_handler(Exception, handle_unhandled_exception)
