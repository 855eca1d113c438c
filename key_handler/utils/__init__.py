"""
Utility functions for the key handler.
"""
from .logging import configure_logging, get_context_logger, with_context
from .datetime_utils import get_current_datetime, ensure_timezone_aware, format_iso
from .client_identity import resolve_client_identity, normalize_ip

__all__ = [
    # Logging
    "configure_logging",
    "get_context_logger",
    "with_context",

    # Datetime
    "get_current_datetime",
    "ensure_timezone_aware",
    "format_iso",

    # Client identity
    "resolve_client_identity",
    "normalize_ip",
]
