"""
Claim coordination.

A claim runs four gates in order: honeypot, limiter, conditional update,
secret read. Only the conditional update mutates the store, and only the
request whose update affected the row ever sees the secret.
"""
from typing import Any, Optional

from sqlalchemy.orm import Session

from key_handler.exceptions import (
    AlreadyClaimedError, BotSuspectedError, ResourceNotFoundError
)
from key_handler.services import key_store
from key_handler.services.claim_limiter import ClaimLimiter
from key_handler.utils.logging import get_context_logger
from key_handler.utils.datetime_utils import get_current_datetime


def check_honeypot(decoy: Any) -> None:
    """
    Reject submissions whose decoy field is absent or filled in.

    Raises:
        BotSuspectedError: If the decoy is missing or non-blank
    """
    if decoy is None:
        raise BotSuspectedError("Decoy field missing from claim request")
    if str(decoy).strip() != "":
        raise BotSuspectedError("Decoy field was filled in")


def claim_key(
    db: Session,
    key_id: int,
    client_identity: str,
    decoy: Any,
    limiter: ClaimLimiter,
    trace_id: Optional[str] = None
) -> str:
    """
    Claim a key for one client.

    Args:
        db: Database session
        key_id: Key to claim
        client_identity: Normalized client identity for throttling
        decoy: Value of the honeypot field, None if the body lacked it
        limiter: Claim limiter instance
        trace_id: Trace ID for logging

    Returns:
        The key's secret, only for the request that won the claim

    Raises:
        BotSuspectedError: Honeypot tripped, nothing recorded
        CooldownError: Identity throttled, store untouched
        ResourceNotFoundError: No key with that id
        AlreadyClaimedError: Key exists but is already claimed
    """
    logger = get_context_logger("claim_service", trace_id=trace_id, key_id=key_id)

    try:
        check_honeypot(decoy)
    except BotSuspectedError:
        logger.warning("Honeypot tripped", extra={"client_identity": client_identity})
        raise

    limiter.check_and_record(client_identity, trace_id=trace_id)

    if not key_store.try_claim(db, key_id, get_current_datetime()):
        if not key_store.key_exists(db, key_id):
            raise ResourceNotFoundError("Key not found", resource_type="key", resource_id=key_id)
        logger.info("Claim lost, key already claimed")
        raise AlreadyClaimedError("Key has already been claimed", key_id=key_id)

    limiter.record_success(client_identity)
    logger.info("Key claimed", extra={"client_identity": client_identity})

    return key_store.fetch_secret(db, key_id)
