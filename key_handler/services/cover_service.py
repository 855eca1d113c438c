"""
Cover image lookup.

Maps a free-text game title to a store app id and a header image URL via
the Steam store search endpoint. Shares no state with the claim path; any
failure here surfaces as UpstreamError or ResourceNotFoundError and
nothing else.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from key_handler.config import DEFAULT_COVER_IMAGE_TEMPLATE, DEFAULT_COVER_SEARCH_URL
from key_handler.exceptions import ResourceNotFoundError, UpstreamError, ValidationError
from key_handler.utils.logging import get_context_logger

logger = get_context_logger("cover_service")


@dataclass
class CoverMatch:
    app_id: int
    matched_title: str
    header_image_url: str


class CoverResolver:
    """Resolves titles against the external search surface."""

    def __init__(
        self,
        search_url: str = DEFAULT_COVER_SEARCH_URL,
        image_template: str = DEFAULT_COVER_IMAGE_TEMPLATE,
        timeout_seconds: float = 5.0,
        session: Optional[requests.Session] = None
    ):
        self.search_url = search_url
        self.image_template = image_template
        self.timeout_seconds = timeout_seconds
        self._http = session or requests.Session()

    def _search(self, title: str) -> Dict[str, Any]:
        try:
            response = self._http.get(
                self.search_url,
                params={"term": title, "l": "english", "cc": "US"},
                timeout=self.timeout_seconds,
            )
            response.raise_for_status()
            return response.json()
        except requests.RequestException as e:
            logger.warning(f"Cover search request failed: {e}")
            raise UpstreamError("Cover search failed", upstream="store_search", original_exception=e)
        except ValueError as e:
            logger.warning("Cover search returned a non-JSON body")
            raise UpstreamError("Cover search returned invalid JSON", upstream="store_search", original_exception=e)

    def resolve(self, title: Optional[str]) -> CoverMatch:
        """
        Resolve a title to its first search match.

        Raises:
            ValidationError: Title missing or blank
            ResourceNotFoundError: Search returned no items
            UpstreamError: Network failure or unexpected response shape
        """
        title = (title or "").strip()
        if not title:
            raise ValidationError("title is required", field="title")

        data = self._search(title)
        if not isinstance(data, dict):
            raise UpstreamError("Unexpected cover search response", upstream="store_search")

        items = data.get("items") or []
        if not items:
            raise ResourceNotFoundError("No cover found for title", resource_type="cover")

        first = items[0]
        try:
            app_id = int(first["id"])
            matched_title = str(first["name"])
        except (KeyError, TypeError, ValueError) as e:
            raise UpstreamError("Unexpected cover search item", upstream="store_search", original_exception=e)

        return CoverMatch(
            app_id=app_id,
            matched_title=matched_title,
            header_image_url=self.image_template.format(app_id=app_id),
        )
