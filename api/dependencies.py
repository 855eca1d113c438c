"""Shared FastAPI dependencies."""
from typing import Optional

from fastapi import Header, Request

from key_handler.config import Settings
from key_handler.services.claim_limiter import ClaimLimiter
from key_handler.services.cover_service import CoverResolver
from key_handler.services.curation_service import verify_admin_token
from key_handler.utils.client_identity import resolve_client_identity


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_claim_limiter(request: Request) -> ClaimLimiter:
    return request.app.state.claim_limiter


def get_cover_resolver(request: Request) -> CoverResolver:
    return request.app.state.cover_resolver


def get_trace_id(request: Request) -> Optional[str]:
    return getattr(request.state, "trace_id", None)


def get_client_identity(request: Request) -> str:
    """Identity set by the logging middleware, derived here if it did not run."""
    identity = getattr(request.state, "client_identity", None)
    if identity:
        return identity
    return resolve_client_identity(
        request.headers.get("x-forwarded-for"),
        request.client.host if request.client else None
    )


def require_admin(
    request: Request,
    x_admin_token: Optional[str] = Header(None, alias="x-admin-token"),
) -> None:
    """Gate for curation routes. Fails closed when no token is configured."""
    verify_admin_token(get_settings(request).admin_token, x_admin_token)
