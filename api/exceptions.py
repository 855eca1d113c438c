"""Centralized exception handlers for the API."""
import math

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from key_handler.exceptions import BaseAppException, CooldownError, ErrorCode
from key_handler.utils.logging import get_context_logger
from api.error_codes import get_http_status

logger = get_context_logger("api_exceptions")


def _error_body(request: Request, code: str, message: str) -> dict:
    content = {"error": code, "message": message}
    trace_id = getattr(request.state, "trace_id", None)
    if trace_id:
        content["trace_id"] = trace_id
    return content


def handle_app_exception(request: Request, exc: BaseAppException) -> JSONResponse:
    """
    Handle all application exceptions.

    Client errors carry the exception message; server errors (5xx) only
    carry the default message so store and upstream internals stay private.
    """
    status_code, default_message = get_http_status(exc.error_code)

    if status_code >= 500:
        logger.error(
            f"{exc.__class__.__name__}: {exc.message}",
            extra={
                "trace_id": getattr(request.state, "trace_id", None),
                "path": request.url.path,
                "error_code": exc.error_code.value,
            }
        )
        message = default_message
    else:
        message = str(exc) or default_message

    content = _error_body(request, exc.error_code.value, message)
    headers = None

    if isinstance(exc, CooldownError):
        content["retryAfterMs"] = exc.retry_after_ms
        headers = {"Retry-After": str(max(1, math.ceil(exc.retry_after_ms / 1000)))}

    return JSONResponse(status_code=status_code, content=content, headers=headers)


def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed path, query or body values are client errors, not 422s."""
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid input") if errors else "Invalid input"
    return JSONResponse(
        status_code=400,
        content=_error_body(request, ErrorCode.INVALID_INPUT.value, message)
    )


def handle_unexpected_exception(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected exceptions that weren't caught by custom handlers.

    Logs the full exception and returns a generic error to the client.
    """
    trace_id = getattr(request.state, "trace_id", "unknown")

    logger.exception(
        "Unexpected exception in API",
        extra={
            "trace_id": trace_id,
            "path": request.url.path,
            "method": request.method,
            "exception_type": type(exc).__name__,
        }
    )

    return JSONResponse(
        status_code=500,
        content=_error_body(request, ErrorCode.INTERNAL_ERROR.value, "An unexpected error occurred")
    )


def register_exception_handlers(app):
    """
    Register all exception handlers with the FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(BaseAppException, handle_app_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(Exception, handle_unexpected_exception)
