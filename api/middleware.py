"""Middleware for the API."""
import time
import uuid
from fastapi import Request

from key_handler.utils.client_identity import resolve_client_identity
from key_handler.utils.logging import get_context_logger

logger = get_context_logger("api_middleware")


async def request_logging_middleware(request: Request, call_next):
    """
    Attach request context and log every request once.

    Sets request.state.trace_id (from X-Trace-ID or freshly generated) and
    request.state.client_identity (forwarded-for aware, normalized), then
    writes one structured entry with method, path, status and duration.
    """
    trace_id = request.headers.get("X-Trace-ID") or str(uuid.uuid4())
    request.state.trace_id = trace_id

    client_identity = resolve_client_identity(
        request.headers.get("x-forwarded-for"),
        request.client.host if request.client else None
    )
    request.state.client_identity = client_identity

    start_time = time.time()
    response = await call_next(request)
    duration_ms = (time.time() - start_time) * 1000

    log_data = {
        "trace_id": trace_id,
        "method": request.method,
        "path": request.url.path,
        "status_code": response.status_code,
        "duration_ms": round(duration_ms, 2),
        "success": 200 <= response.status_code < 400,
        "client_identity": client_identity,
    }

    if response.status_code >= 500:
        logger.error("request_completed", extra=log_data)
    elif response.status_code >= 400:
        logger.warning("request_completed", extra=log_data)
    else:
        logger.info("request_completed", extra=log_data)

    response.headers["X-Trace-ID"] = trace_id
    return response
