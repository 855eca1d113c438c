"""Health check routes."""
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from db.db import get_db
from key_handler.version import __version__

router = APIRouter(tags=["health"])


@router.get("/healthz")
def healthcheck(db: Session = Depends(get_db)):
    """
    Health check endpoint.

    Tests key store connectivity; 503 when the store cannot be reached.
    """
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError:
        return JSONResponse(
            status_code=503,
            content={"status": "unhealthy", "database": "disconnected"}
        )

    return {"status": "healthy", "database": "connected", "version": __version__}


@router.get("/ready")
def readiness():
    return {"status": "ready"}
