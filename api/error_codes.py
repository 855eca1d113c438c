"""Centralized error code to HTTP status mapping."""
from key_handler.exceptions import ErrorCode

# Map internal error codes to HTTP status codes and user-friendly messages
ERROR_CODE_MAP = {
    ErrorCode.INVALID_INPUT: {
        "status": 400,
        "message": "Invalid input"
    },
    ErrorCode.MISSING_FIELDS: {
        "status": 400,
        "message": "Required fields are missing"
    },
    ErrorCode.BOT_DETECTED: {
        "status": 400,
        "message": "Request rejected"
    },
    ErrorCode.UNAUTHORIZED: {
        "status": 401,
        "message": "Authentication required"
    },
    ErrorCode.RESOURCE_NOT_FOUND: {
        "status": 404,
        "message": "Resource not found"
    },
    ErrorCode.ALREADY_CLAIMED: {
        "status": 409,
        "message": "Key has already been claimed"
    },
    ErrorCode.DUPLICATE_KEY: {
        "status": 409,
        "message": "Key already exists"
    },
    ErrorCode.COOLDOWN: {
        "status": 429,
        "message": "Too many requests"
    },
    ErrorCode.DATABASE_ERROR: {
        "status": 500,
        "message": "Database operation failed"
    },
    ErrorCode.CONFIGURATION_ERROR: {
        "status": 500,
        "message": "Server is not configured for this operation"
    },
    ErrorCode.UPSTREAM_ERROR: {
        "status": 502,
        "message": "Upstream service error"
    },
    ErrorCode.INTERNAL_ERROR: {
        "status": 500,
        "message": "Internal server error"
    },
}


def get_http_status(error_code: ErrorCode) -> tuple[int, str]:
    """
    Get HTTP status code and message for an error code.

    Args:
        error_code: Internal error code

    Returns:
        Tuple of (status_code, message)
    """
    mapping = ERROR_CODE_MAP.get(error_code, {
        "status": 500,
        "message": "Internal server error"
    })

    return mapping["status"], mapping["message"]
