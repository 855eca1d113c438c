# ============================================================================
# FILE: test/key_handler_services/test_claim_service.py
# Tests for key_handler/services/claim_service.py
# ============================================================================

import pytest
from unittest.mock import MagicMock, patch

from key_handler.services.claim_service import claim_key, check_honeypot
from key_handler.exceptions import (
    AlreadyClaimedError, BotSuspectedError, CooldownError, ResourceNotFoundError, ErrorCode
)


class TestHoneypot:

    @pytest.mark.parametrize("decoy", ["", "   ", "\t"])
    def test_blank_decoy_passes(self, decoy):
        check_honeypot(decoy)

    @pytest.mark.parametrize("decoy", [None, "http://spam", 0, "x"])
    def test_missing_or_filled_decoy_rejected(self, decoy):
        with pytest.raises(BotSuspectedError) as exc_info:
            check_honeypot(decoy)
        assert exc_info.value.error_code == ErrorCode.BOT_DETECTED


class TestClaimKey:

    def test_winning_claim_returns_secret(self, db_session, make_key, limiter):
        key = make_key(secret="XXXX-1111")

        secret = claim_key(db_session, key.id, "1.1.1.1", "", limiter)

        assert secret == "XXXX-1111"
        db_session.refresh(key)
        assert key.claimed is True
        assert key.claimed_at is not None

    def test_already_claimed(self, db_session, make_key, limiter):
        """✓ Second claimant → AlreadyClaimedError, no secret"""
        key = make_key()
        claim_key(db_session, key.id, "1.1.1.1", "", limiter)

        with pytest.raises(AlreadyClaimedError):
            claim_key(db_session, key.id, "2.2.2.2", "", limiter)

    def test_not_found(self, db_session, limiter):
        with pytest.raises(ResourceNotFoundError):
            claim_key(db_session, 404, "1.1.1.1", "", limiter)

    def test_bot_rejected_before_limiter_and_store(self, db_session, make_key, limiter):
        """✓ Honeypot short-circuits: no throttle record, key untouched"""
        key = make_key()

        with pytest.raises(BotSuspectedError):
            claim_key(db_session, key.id, "1.1.1.1", "http://spam", limiter)

        assert limiter.remaining_ms("1.1.1.1") == 0
        db_session.refresh(key)
        assert key.claimed is False

    def test_throttled_attempt_never_reaches_store(self, limiter):
        limiter.check_and_record("1.1.1.1")
        db = MagicMock()

        with pytest.raises(CooldownError):
            claim_key(db, 1, "1.1.1.1", "", limiter)

        db.execute.assert_not_called()

    def test_failed_claim_does_not_start_success_cooldown(self, db_session, limiter, clock):
        with pytest.raises(ResourceNotFoundError):
            claim_key(db_session, 404, "1.1.1.1", "", limiter)

        clock.advance(10)
        assert limiter.remaining_ms("1.1.1.1") == 0

    def test_success_starts_long_cooldown(self, db_session, make_key, limiter, clock):
        first, second = make_key(), make_key()
        claim_key(db_session, first.id, "1.1.1.1", "", limiter)
        clock.advance(60)

        with pytest.raises(CooldownError):
            claim_key(db_session, second.id, "1.1.1.1", "", limiter)

        db_session.refresh(second)
        assert second.claimed is False

    def test_lost_race_reported_as_already_claimed(self, db_session, make_key, limiter):
        """✓ Zero-row update on an existing id → AlreadyClaimedError"""
        key = make_key()
        with patch("key_handler.services.claim_service.key_store.try_claim", return_value=False):
            with pytest.raises(AlreadyClaimedError):
                claim_key(db_session, key.id, "1.1.1.1", "", limiter)
