"""Operator curation routes. Every route requires the x-admin-token header."""
from typing import List, Optional

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from api.dependencies import get_trace_id, require_admin
from api.models.requests import AddKeyRequest
from api.models.responses import AddKeyResponse, KeyRecord, OkResponse
from db.db import get_db
from db.models.keys import KEY_ID_MAX
from key_handler.services.curation_service import add_key, list_keys, remove_key

router = APIRouter(prefix="/api/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@router.get("/keys", response_model=List[KeyRecord])
def list_all_keys(db: Session = Depends(get_db)):
    """All keys, unclaimed first, each group by ascending id."""
    return list_keys(db)


@router.post("/add", response_model=AddKeyResponse)
def add(
    payload: AddKeyRequest,
    db: Session = Depends(get_db),
    trace_id: Optional[str] = Depends(get_trace_id),
):
    key_id = add_key(db, payload.title, payload.image_url, payload.secret, trace_id=trace_id)
    return AddKeyResponse(id=key_id)


@router.delete("/keys/{key_id}", response_model=OkResponse)
def delete(
    key_id: int = Path(..., ge=1, le=KEY_ID_MAX),
    db: Session = Depends(get_db),
    trace_id: Optional[str] = Depends(get_trace_id),
):
    remove_key(db, key_id, trace_id=trace_id)
    return OkResponse()
