"""
Operator-side inventory management.

All functions assume the caller already passed verify_admin_token().
"""
import secrets
from typing import List, Optional

from sqlalchemy.orm import Session

from db.models.keys import KeyModel
from key_handler.exceptions import (
    ConfigurationError, ResourceNotFoundError, UnauthorizedError, ValidationError, ErrorCode
)
from key_handler.services import key_store
from key_handler.utils.logging import get_context_logger


def verify_admin_token(configured_token: Optional[str], provided_token: Optional[str]) -> None:
    """
    Check an operator credential.

    Raises:
        ConfigurationError: No token configured, curation fails closed
        UnauthorizedError: Token absent or mismatched, both reported alike
    """
    if not configured_token:
        raise ConfigurationError("Admin token is not configured", config_key="ADMIN_TOKEN")
    if not provided_token or not secrets.compare_digest(
        provided_token.encode("utf-8"), configured_token.encode("utf-8")
    ):
        raise UnauthorizedError()


def add_key(
    db: Session,
    title: Optional[str],
    image_url: Optional[str],
    secret: Optional[str],
    trace_id: Optional[str] = None
) -> int:
    """
    Add a key to the inventory after trimming every field.

    Returns:
        Id of the new key

    Raises:
        ValidationError: A field is missing or blank (missing_fields)
        DuplicateError: The secret is already in the inventory
    """
    fields = {
        "title": (title or "").strip(),
        "imageUrl": (image_url or "").strip(),
        "secret": (secret or "").strip(),
    }
    missing = [name for name, value in fields.items() if not value]
    if missing:
        raise ValidationError(
            "title, imageUrl and secret are required",
            error_code=ErrorCode.MISSING_FIELDS,
            details={"missing": missing}
        )

    key_id = key_store.insert_key(db, fields["title"], fields["imageUrl"], fields["secret"])
    get_context_logger("curation_service", trace_id=trace_id).info(
        "Operator added key", extra={"key_id": key_id}
    )
    return key_id


def list_keys(db: Session) -> List[KeyModel]:
    return key_store.list_all(db)


def remove_key(db: Session, key_id: int, trace_id: Optional[str] = None) -> None:
    """
    Delete a key, claimed or not.

    Raises:
        ResourceNotFoundError: No key with that id
    """
    if not key_store.delete_key(db, key_id):
        raise ResourceNotFoundError("Key not found", resource_type="key", resource_id=key_id)
    get_context_logger("curation_service", trace_id=trace_id).info(
        "Operator deleted key", extra={"key_id": key_id}
    )
