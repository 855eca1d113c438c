"""Cover image lookup routes."""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_cover_resolver
from api.models.responses import CoverResponse
from key_handler.services.cover_service import CoverResolver

router = APIRouter(prefix="/api", tags=["cover"])


@router.get("/cover", response_model=CoverResponse)
@router.get("/steam/cover", response_model=CoverResponse, include_in_schema=False)
def resolve_cover(
    title: Optional[str] = Query(None, description="Game title to look up"),
    resolver: CoverResolver = Depends(get_cover_resolver),
):
    """Best-effort title to header image lookup."""
    match = resolver.resolve(title)
    return CoverResponse(
        app_id=match.app_id,
        matched_title=match.matched_title,
        header_image_url=match.header_image_url,
    )
