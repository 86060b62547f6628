"""Structured error responses for resource errors and unexpected failures."""
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
import structlog

from .errors import ResourceError
from .middleware import get_correlation_id

log = structlog.get_logger()


def error_body(request: Request, error: str, message: str, status_code: int) -> dict:
    return {
        "error": error,
        "message": message,
        "status_code": status_code,
        "correlation_id": get_correlation_id(),
        "path": str(request.url.path),
    }


async def resource_error_handler(request: Request, exc: ResourceError) -> JSONResponse:
    if exc.status_code >= 500:
        log.error("resource.error", code=exc.code, message=exc.message, path=request.url.path)
    else:
        log.warning("resource.error", code=exc.code, message=exc.message, path=request.url.path)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(request, exc.code, exc.message, exc.status_code),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed request fields are reported like any other invalid argument
    errors = exc.errors()
    message = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg', 'invalid')}" for err in errors
    ) or "invalid request"
    log.warning("request.invalid", message=message, path=request.url.path)
    return JSONResponse(status_code=400, content=error_body(request, "InvalidArgument", message, 400))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log.error(
        "unhandled.exception",
        error=str(exc),
        error_type=exc.__class__.__name__,
        path=request.url.path,
        exc_info=exc,
    )
    return JSONResponse(
        status_code=500,
        content=error_body(request, "InternalServerError", "An unexpected error occurred", 500),
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Turns unexpected exceptions into a structured 500 response.

    Must sit inside CorrelationIdMiddleware and CORSMiddleware so the
    error response still carries their headers.
    """

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            return await unhandled_error_handler(request, exc)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ResourceError, resource_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
