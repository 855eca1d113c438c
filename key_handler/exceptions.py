"""
Exception definitions for key handling.
Defines custom exceptions used by the claim, curation and cover services.
"""
from enum import Enum
from typing import Optional, Dict, Any


class ErrorCode(str, Enum):
    """Standardized error codes. The value is what clients see in the `error` field."""
    # Validation errors
    INVALID_INPUT = "invalid_input"
    MISSING_FIELDS = "missing_fields"
    BOT_DETECTED = "bot_detected"

    # Resource errors
    RESOURCE_NOT_FOUND = "not_found"
    ALREADY_CLAIMED = "already_claimed"
    DUPLICATE_KEY = "duplicate_key"

    # Authentication errors
    UNAUTHORIZED = "unauthorized"

    # Throttling
    COOLDOWN = "cooldown"

    # Dependency errors
    DATABASE_ERROR = "database_error"
    UPSTREAM_ERROR = "upstream_error"

    # Configuration errors
    CONFIGURATION_ERROR = "configuration_error"

    # System errors
    INTERNAL_ERROR = "internal_error"


class BaseAppException(Exception):
    """Base exception for all application exceptions."""
    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        original_exception: Optional[Exception] = None,
        details: Optional[Dict[str, Any]] = None,
        **kwargs
    ):
        self.message = message
        self.error_code = error_code
        self.original_exception = original_exception
        self.details = details or {}

        for key, value in kwargs.items():
            self.details[key] = value

        if original_exception:
            self.details["original_error"] = str(original_exception)

        super().__init__(self.message)


class ValidationError(BaseAppException):
    """Exception raised for client-correctable input errors."""
    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        error_code: ErrorCode = ErrorCode.INVALID_INPUT,
        **kwargs
    ):
        details = kwargs.pop("details", {}) or {}
        if field:
            details["field"] = field

        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
            **kwargs
        )


class BotSuspectedError(BaseAppException):
    """Exception raised when the honeypot field was filled in or left out."""
    def __init__(
        self,
        message: str = "Automated submission detected",
        error_code: ErrorCode = ErrorCode.BOT_DETECTED,
        **kwargs
    ):
        super().__init__(message=message, error_code=error_code, **kwargs)


class ResourceNotFoundError(BaseAppException):
    """Exception raised when a resource is not found."""
    def __init__(
        self,
        message: str,
        resource_type: Optional[str] = None,
        resource_id: Optional[Any] = None,
        error_code: ErrorCode = ErrorCode.RESOURCE_NOT_FOUND,
        **kwargs
    ):
        details = kwargs.pop("details", {}) or {}
        if resource_type:
            details["resource_type"] = resource_type
        if resource_id is not None:
            details["resource_id"] = str(resource_id)

        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
            **kwargs
        )


class AlreadyClaimedError(BaseAppException):
    """Exception raised when a key exists but was claimed before this request won."""
    def __init__(
        self,
        message: str,
        key_id: Optional[int] = None,
        error_code: ErrorCode = ErrorCode.ALREADY_CLAIMED,
        **kwargs
    ):
        details = kwargs.pop("details", {}) or {}
        if key_id is not None:
            details["key_id"] = key_id

        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
            **kwargs
        )


class DuplicateError(BaseAppException):
    """Exception raised when inserting a secret that already exists."""
    def __init__(
        self,
        message: str,
        resource_type: Optional[str] = None,
        error_code: ErrorCode = ErrorCode.DUPLICATE_KEY,
        **kwargs
    ):
        details = kwargs.pop("details", {}) or {}
        if resource_type:
            details["resource_type"] = resource_type

        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
            **kwargs
        )


class CooldownError(BaseAppException):
    """Exception raised when a client identity is throttled."""
    def __init__(
        self,
        message: str,
        retry_after_ms: int,
        error_code: ErrorCode = ErrorCode.COOLDOWN,
        **kwargs
    ):
        self.retry_after_ms = retry_after_ms
        details = kwargs.pop("details", {}) or {}
        details["retry_after_ms"] = retry_after_ms

        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
            **kwargs
        )


class UnauthorizedError(BaseAppException):
    """Exception raised for a missing or mismatched operator credential."""
    def __init__(
        self,
        message: str = "Admin token missing or invalid",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
        **kwargs
    ):
        super().__init__(message=message, error_code=error_code, **kwargs)


class ConfigurationError(BaseAppException):
    """Exception raised when a required setting is absent."""
    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        error_code: ErrorCode = ErrorCode.CONFIGURATION_ERROR,
        **kwargs
    ):
        details = kwargs.pop("details", {}) or {}
        if config_key:
            details["config_key"] = config_key

        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
            **kwargs
        )


class DatabaseError(BaseAppException):
    """Exception raised for key store errors."""
    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        error_code: ErrorCode = ErrorCode.DATABASE_ERROR,
        **kwargs
    ):
        details = kwargs.pop("details", {}) or {}
        if operation:
            details["operation"] = operation

        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
            **kwargs
        )


class UpstreamError(BaseAppException):
    """Exception raised when the external cover search fails."""
    def __init__(
        self,
        message: str,
        upstream: Optional[str] = None,
        error_code: ErrorCode = ErrorCode.UPSTREAM_ERROR,
        **kwargs
    ):
        details = kwargs.pop("details", {}) or {}
        if upstream:
            details["upstream"] = upstream

        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
            **kwargs
        )
