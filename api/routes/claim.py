"""Claim route."""
from typing import Optional

from fastapi import APIRouter, Body, Depends, Path
from sqlalchemy.orm import Session

from api.dependencies import get_claim_limiter, get_client_identity, get_trace_id
from api.models.requests import ClaimRequest
from api.models.responses import ClaimResponse
from db.db import get_db
from db.models.keys import KEY_ID_MAX
from key_handler.services.claim_limiter import ClaimLimiter
from key_handler.services.claim_service import claim_key

router = APIRouter(prefix="/api", tags=["claim"])


@router.post("/claim/{key_id}", response_model=ClaimResponse)
def claim(
    key_id: int = Path(..., ge=1, le=KEY_ID_MAX),
    body: Optional[ClaimRequest] = Body(None),
    db: Session = Depends(get_db),
    limiter: ClaimLimiter = Depends(get_claim_limiter),
    client_identity: str = Depends(get_client_identity),
    trace_id: Optional[str] = Depends(get_trace_id),
):
    """
    Claim a key. The body must carry an empty `website` field.

    200 with the secret for the winner; 400 bot_detected, 404 not_found,
    409 already_claimed or 429 cooldown otherwise.
    """
    secret = claim_key(
        db=db,
        key_id=key_id,
        client_identity=client_identity,
        decoy=body.website if body is not None else None,
        limiter=limiter,
        trace_id=trace_id,
    )
    return ClaimResponse(secret=secret)
