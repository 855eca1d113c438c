"""
Services for key handling.
"""
from key_handler.services import key_store
from key_handler.services.claim_limiter import ClaimLimiter
from key_handler.services.claim_service import claim_key, check_honeypot
from key_handler.services.curation_service import add_key, list_keys, remove_key, verify_admin_token
from key_handler.services.cover_service import CoverResolver, CoverMatch

__all__ = [
    "key_store",
    "ClaimLimiter",
    "claim_key",
    "check_honeypot",
    "add_key",
    "list_keys",
    "remove_key",
    "verify_admin_token",
    "CoverResolver",
    "CoverMatch",
]
