"""
Key store operations.

Every read and write of the keys table goes through this module. The
claim transition is a single conditional UPDATE so that the database, not
the application, decides which of several concurrent claimants wins.
"""
from datetime import datetime
from typing import Optional, List

from sqlalchemy import select, update, delete
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError, IntegrityError

from db.models.keys import KeyModel
from key_handler.exceptions import (
    DatabaseError, DuplicateError, ResourceNotFoundError, ValidationError, ErrorCode
)
from key_handler.utils.logging import get_context_logger
from key_handler.utils.datetime_utils import get_current_datetime

logger = get_context_logger("key_store")


def _database_error(db: Session, operation: str, exc: SQLAlchemyError) -> DatabaseError:
    db.rollback()
    # str(exc) carries bound parameters, secrets included
    reason = getattr(exc, "orig", None) or type(exc).__name__
    logger.error(f"Key store failure during {operation}: {reason}", extra={"operation": operation})
    return DatabaseError(
        f"Key store operation failed: {operation}",
        operation=operation,
        original_exception=exc
    )


def insert_key(db: Session, title: str, image_url: str, secret: str) -> int:
    """
    Insert a new key record.

    Args:
        db: Database session
        title: Display name
        image_url: Display image reference
        secret: Redemption code, unique across all records

    Returns:
        The id assigned by the store

    Raises:
        ValidationError: If any field is empty
        DuplicateError: If the secret already exists
        DatabaseError: On any other store failure
    """
    for field, value in (("title", title), ("imageUrl", image_url), ("secret", secret)):
        if not value:
            raise ValidationError(
                f"{field} must not be empty",
                field=field,
                error_code=ErrorCode.MISSING_FIELDS
            )

    key = KeyModel(title=title, image_url=image_url, secret=secret, claimed=False)
    try:
        db.add(key)
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.info("Rejected key insert with duplicate secret")
        raise DuplicateError(
            "A key with this secret already exists",
            resource_type="key",
            original_exception=e
        )
    except SQLAlchemyError as e:
        raise _database_error(db, "insert_key", e)

    logger.info("Inserted key", extra={"key_id": key.id})
    return key.id


def list_unclaimed(db: Session) -> List[dict]:
    """List unclaimed keys, oldest first. Secrets are never selected."""
    try:
        rows = db.execute(
            select(KeyModel.id, KeyModel.title, KeyModel.image_url)
            .where(KeyModel.claimed == False)  # noqa: E712
            .order_by(KeyModel.id.asc())
        ).all()
    except SQLAlchemyError as e:
        raise _database_error(db, "list_unclaimed", e)

    return [{"id": row.id, "title": row.title, "image_url": row.image_url} for row in rows]


def list_all(db: Session) -> List[KeyModel]:
    """List every key: unclaimed first, then claimed, each group by ascending id."""
    try:
        return list(
            db.execute(
                select(KeyModel).order_by(KeyModel.claimed.asc(), KeyModel.id.asc())
            ).scalars().all()
        )
    except SQLAlchemyError as e:
        raise _database_error(db, "list_all", e)


def try_claim(db: Session, key_id: int, now: Optional[datetime] = None) -> bool:
    """
    Atomically mark a key as claimed if it is still unclaimed.

    This is the only write that changes claim state. The WHERE clause
    carries the claimed = false condition, so two concurrent callers on the
    same id cannot both affect the row.

    Returns:
        True if exactly one row transitioned to claimed
    """
    now = now or get_current_datetime()
    try:
        result = db.execute(
            update(KeyModel)
            .where(KeyModel.id == key_id, KeyModel.claimed == False)  # noqa: E712
            .values(claimed=True, claimed_at=now)
            .execution_options(synchronize_session=False)
        )
        won = result.rowcount == 1
        db.commit()
    except SQLAlchemyError as e:
        raise _database_error(db, "try_claim", e)

    return won


def key_exists(db: Session, key_id: int) -> bool:
    try:
        return db.execute(
            select(KeyModel.id).where(KeyModel.id == key_id)
        ).first() is not None
    except SQLAlchemyError as e:
        raise _database_error(db, "key_exists", e)


def fetch_secret(db: Session, key_id: int) -> str:
    """
    Read the secret of a key. Only called after a winning try_claim.

    Raises:
        ResourceNotFoundError: If the key no longer exists
    """
    try:
        secret = db.execute(
            select(KeyModel.secret).where(KeyModel.id == key_id)
        ).scalar_one_or_none()
    except SQLAlchemyError as e:
        raise _database_error(db, "fetch_secret", e)

    if secret is None:
        raise ResourceNotFoundError("Key not found", resource_type="key", resource_id=key_id)
    return secret


def delete_key(db: Session, key_id: int) -> bool:
    """Delete a key regardless of claim state. Returns whether a row existed."""
    try:
        result = db.execute(
            delete(KeyModel)
            .where(KeyModel.id == key_id)
            .execution_options(synchronize_session=False)
        )
        deleted = result.rowcount == 1
        db.commit()
    except SQLAlchemyError as e:
        raise _database_error(db, "delete_key", e)

    if deleted:
        logger.info("Deleted key", extra={"key_id": key_id})
    return deleted
