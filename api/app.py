"""FastAPI application factory and configuration."""
import os
from typing import Optional

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from api.middleware import request_logging_middleware
from api.exceptions import register_exception_handlers
from api.routes import keys, claim, admin, cover, health
from key_handler.config import Settings
from key_handler.services.claim_limiter import ClaimLimiter
from key_handler.services.cover_service import CoverResolver
from key_handler.utils.logging import get_context_logger
from key_handler.version import __version__

logger = get_context_logger("api_app")


def create_app(
    settings: Optional[Settings] = None,
    claim_limiter: Optional[ClaimLimiter] = None,
    cover_resolver: Optional[CoverResolver] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    The store is not touched here; main.py binds the engine before serving
    and tests override get_db.

    Args:
        settings: Service settings, read from the environment when omitted
        claim_limiter: Limiter to use instead of one built from settings
        cover_resolver: Resolver to use instead of one built from settings

    Returns:
        Configured FastAPI application instance
    """
    settings = settings or Settings.from_env()

    app = FastAPI(
        title="Key Giveaway API",
        version=__version__,
        description="First-come distribution of redemption keys"
    )

    app.state.settings = settings
    app.state.claim_limiter = claim_limiter or ClaimLimiter(
        attempt_window_seconds=settings.claim_attempt_window_seconds,
        success_cooldown_seconds=settings.claim_success_cooldown_seconds,
    )
    app.state.cover_resolver = cover_resolver or CoverResolver(
        search_url=settings.cover_search_url,
        image_template=settings.cover_image_template,
        timeout_seconds=settings.cover_timeout_seconds,
    )

    app.middleware("http")(request_logging_middleware)

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(keys.router)
    app.include_router(claim.router)
    app.include_router(admin.router)
    app.include_router(cover.router)

    # Front-end last so API paths win; html=True serves index.html for "/"
    if settings.static_dir and os.path.isdir(settings.static_dir):
        app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")
        logger.info(f"Static files mounted from {settings.static_dir}")

    return app
