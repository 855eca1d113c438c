"""Public inventory routes."""
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from api.models.responses import KeySummary
from db.db import get_db
from key_handler.services import key_store

router = APIRouter(prefix="/api", tags=["keys"])


@router.get("/keys", response_model=List[KeySummary])
def list_available_keys(db: Session = Depends(get_db)):
    """List unclaimed keys in ascending id order. Secrets are never included."""
    return key_store.list_unclaimed(db)
