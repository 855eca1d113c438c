"""
Runtime configuration for the key giveaway service.

Values come from the process environment. A local .env file is loaded
first for development; in production the file is usually absent and the
real environment wins.
"""
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

DEFAULT_PORT = 3000
DEFAULT_ATTEMPT_WINDOW_SECONDS = 10
DEFAULT_SUCCESS_COOLDOWN_SECONDS = 30 * 60
DEFAULT_COVER_SEARCH_URL = "https://store.steampowered.com/api/storesearch/"
DEFAULT_COVER_IMAGE_TEMPLATE = "https://cdn.akamai.steamstatic.com/steam/apps/{app_id}/header.jpg"
DEFAULT_COVER_TIMEOUT_SECONDS = 5.0


@dataclass
class Settings:
    """Service settings. Construct directly in tests, use from_env() elsewhere."""
    database_url: Optional[str] = None
    database_auth_token: Optional[str] = None
    admin_token: Optional[str] = None
    port: int = DEFAULT_PORT
    claim_attempt_window_seconds: float = DEFAULT_ATTEMPT_WINDOW_SECONDS
    claim_success_cooldown_seconds: float = DEFAULT_SUCCESS_COOLDOWN_SECONDS
    cover_search_url: str = DEFAULT_COVER_SEARCH_URL
    cover_image_template: str = DEFAULT_COVER_IMAGE_TEMPLATE
    cover_timeout_seconds: float = DEFAULT_COVER_TIMEOUT_SECONDS
    static_dir: Optional[str] = "public"

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            load_env_file: Read a .env file into the environment first

        Returns:
            Populated Settings instance
        """
        if load_env_file:
            load_dotenv()

        return cls(
            database_url=os.getenv("DATABASE_URL") or None,
            database_auth_token=os.getenv("DATABASE_AUTH_TOKEN") or None,
            admin_token=os.getenv("ADMIN_TOKEN") or None,
            port=int(os.getenv("PORT", str(DEFAULT_PORT))),
            claim_attempt_window_seconds=float(
                os.getenv("CLAIM_ATTEMPT_WINDOW_SECONDS", str(DEFAULT_ATTEMPT_WINDOW_SECONDS))
            ),
            claim_success_cooldown_seconds=float(
                os.getenv("CLAIM_SUCCESS_COOLDOWN_SECONDS", str(DEFAULT_SUCCESS_COOLDOWN_SECONDS))
            ),
            cover_search_url=os.getenv("COVER_SEARCH_URL", DEFAULT_COVER_SEARCH_URL),
            cover_image_template=os.getenv("COVER_IMAGE_TEMPLATE", DEFAULT_COVER_IMAGE_TEMPLATE),
            cover_timeout_seconds=float(
                os.getenv("COVER_TIMEOUT_SECONDS", str(DEFAULT_COVER_TIMEOUT_SECONDS))
            ),
            static_dir=os.getenv("STATIC_DIR", "public"),
        )
