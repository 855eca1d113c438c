"""Logging utilities with context."""
import logging
import json
import os
import sys
import traceback
import socket
from datetime import datetime, timezone
from typing import Dict, Any, Optional, Union

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = os.environ.get("LOG_FORMAT", "json")  # 'json' or 'text'
HOSTNAME = socket.gethostname()
SERVICE_NAME = os.environ.get("SERVICE_NAME", "key_handler")
ENVIRONMENT = os.environ.get("ENVIRONMENT", "development")

# Field names containing any of these are redacted in JSON output
SENSITIVE_FIELDS = {
    "password", "token", "secret", "steam_key", "credential", "pwd", "authorization"
}

# Attributes every LogRecord carries; everything else came in through `extra`
_RECORD_ATTRIBUTES = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Formatter for JSON-structured logs."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": self._safe_str(record.getMessage()),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "service": SERVICE_NAME,
            "hostname": HOSTNAME,
            "environment": ENVIRONMENT,
        }

        if record.exc_info:
            try:
                log_data["exception"] = {
                    "exception_type": record.exc_info[0].__name__,
                    "exception_message": str(record.exc_info[1]),
                    "traceback": traceback.format_exception(*record.exc_info)
                }
            except (AttributeError, TypeError) as e:
                log_data["exception"] = {
                    "exception_type": "unknown",
                    "format_error": str(e)
                }

        for key, value in record.__dict__.items():
            if key in _RECORD_ATTRIBUTES or key.startswith("_") or key in log_data:
                continue
            try:
                json.dumps({key: value})
                log_data[key] = value
            except (TypeError, ValueError):
                log_data[key] = self._safe_str(value)

        self._redact_sensitive_data(log_data)

        try:
            return json.dumps(log_data)
        except (TypeError, ValueError):
            return json.dumps({
                "message": "Error serializing log data",
                "original_message": self._safe_str(log_data)
            })

    def _safe_str(self, obj: Any) -> str:
        """Safely convert any object to string."""
        try:
            return str(obj)
        except Exception:
            return "<<Error converting to string>>"

    def _redact_sensitive_data(self, data: Any) -> None:
        """Recursively redact sensitive data."""
        if isinstance(data, dict):
            for key, value in list(data.items()):
                is_sensitive = any(s in str(key).lower() for s in SENSITIVE_FIELDS)
                if is_sensitive and isinstance(value, (str, int, float)):
                    data[key] = "********"
                else:
                    self._redact_sensitive_data(value)
        elif isinstance(data, list):
            for item in data:
                self._redact_sensitive_data(item)


class TextFormatter(logging.Formatter):
    """Formatter for human-readable text logs."""

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s [%(levelname)s] %(name)s - %(message)s"
        )


class ContextAdapter(logging.LoggerAdapter):
    """Logger adapter that adds context to all log messages."""

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        """Process log message, adding context."""
        if "extra" not in kwargs:
            kwargs["extra"] = {}

        for key, value in self.extra.items():
            if key not in kwargs["extra"]:
                kwargs["extra"][key] = value

        return msg, kwargs


def configure_logging(level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """
    Configure global logging settings.

    Replaces any handlers on the root logger with a single stdout handler.

    Args:
        level: Log level name, defaults to LOG_LEVEL
        log_format: 'json' or 'text', defaults to LOG_FORMAT
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    log_level = getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO)
    root_logger.setLevel(log_level)

    if (log_format or LOG_FORMAT).lower() == "json":
        formatter = JsonFormatter()
    else:
        formatter = TextFormatter()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)


def get_context_logger(
    name: str,
    trace_id: Optional[str] = None,
    **additional_context
) -> logging.LoggerAdapter:
    """
    Get a logger with consistent context.

    Args:
        name: Logger name
        trace_id: Trace ID for request tracking
        additional_context: Additional context key-value pairs

    Returns:
        Logger adapter with context
    """
    context = {k: v for k, v in additional_context.items() if v is not None}
    if trace_id:
        context["trace_id"] = trace_id

    return ContextAdapter(logging.getLogger(name), context)


def with_context(
    logger_obj: Union[logging.Logger, logging.LoggerAdapter],
    **context
) -> logging.LoggerAdapter:
    """Create a new logger with additional context merged in."""
    if isinstance(logger_obj, ContextAdapter):
        merged = dict(logger_obj.extra)
        merged.update(context)
        return ContextAdapter(logger_obj.logger, merged)
    if isinstance(logger_obj, logging.LoggerAdapter):
        return ContextAdapter(logger_obj.logger, context)
    return ContextAdapter(logger_obj, context)
