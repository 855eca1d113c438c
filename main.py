"""Application entry point."""
import sys

import uvicorn

from api.app import create_app
from db.db import init_db, init_engine
from key_handler.config import Settings
from key_handler.utils.logging import configure_logging, get_context_logger

configure_logging()
logger = get_context_logger("main")

settings = Settings.from_env()

if not settings.database_url:
    logger.critical("DATABASE_URL is not set, refusing to start")
    sys.exit(1)

if not settings.admin_token:
    logger.warning("ADMIN_TOKEN is not set, admin endpoints will reject every request")

init_engine(settings.database_url, settings.database_auth_token)
init_db()

# Create the application
app = create_app(settings)

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.port,
        log_level="info"
    )
