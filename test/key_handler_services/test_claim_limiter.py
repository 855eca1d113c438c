# ============================================================================
# FILE: test/key_handler_services/test_claim_limiter.py
# Tests for key_handler/services/claim_limiter.py
# ============================================================================

import threading

import pytest

from key_handler.services.claim_limiter import ClaimLimiter
from key_handler.exceptions import CooldownError, ErrorCode


class TestAttemptWindow:
    """Every admitted attempt opens the short window."""

    def test_first_attempt_admitted(self, limiter):
        limiter.check_and_record("1.2.3.4")
        assert limiter.remaining_ms("1.2.3.4") == 10_000

    def test_second_attempt_inside_window_throttled(self, limiter, clock):
        """✓ Second attempt within 10s → CooldownError with positive retry"""
        limiter.check_and_record("1.2.3.4")
        clock.advance(3)

        with pytest.raises(CooldownError) as exc_info:
            limiter.check_and_record("1.2.3.4")

        assert exc_info.value.error_code == ErrorCode.COOLDOWN
        assert exc_info.value.retry_after_ms == 7_000

    def test_rejected_attempt_does_not_extend_window(self, limiter, clock):
        limiter.check_and_record("1.2.3.4")
        clock.advance(5)
        with pytest.raises(CooldownError):
            limiter.check_and_record("1.2.3.4")

        clock.advance(5)
        limiter.check_and_record("1.2.3.4")

    def test_identities_are_independent(self, limiter):
        limiter.check_and_record("1.2.3.4")
        limiter.check_and_record("5.6.7.8")


class TestSuccessCooldown:
    """Only a winning claim opens the long window."""

    def test_success_blocks_for_long_window(self, limiter, clock):
        limiter.check_and_record("1.2.3.4")
        limiter.record_success("1.2.3.4")
        clock.advance(60)

        with pytest.raises(CooldownError) as exc_info:
            limiter.check_and_record("1.2.3.4")

        assert exc_info.value.retry_after_ms == (1800 - 60) * 1000

    def test_success_cooldown_expires(self, limiter, clock):
        limiter.check_and_record("1.2.3.4")
        limiter.record_success("1.2.3.4")
        clock.advance(1800)

        limiter.check_and_record("1.2.3.4")

    def test_failed_attempts_never_start_long_cooldown(self, limiter, clock):
        for _ in range(3):
            limiter.check_and_record("1.2.3.4")
            clock.advance(10)

        assert limiter.remaining_ms("1.2.3.4") == 0

    def test_reset_clears_state(self, limiter):
        limiter.check_and_record("1.2.3.4")
        limiter.record_success("1.2.3.4")
        limiter.reset()
        assert limiter.remaining_ms("1.2.3.4") == 0


class TestConcurrentAttempts:

    def test_same_identity_only_one_admitted(self):
        """✓ Simultaneous attempts from one identity → exactly one passes"""
        limiter = ClaimLimiter(attempt_window_seconds=60, success_cooldown_seconds=60)
        barrier = threading.Barrier(8)
        admitted = []
        rejected = []

        def attempt():
            barrier.wait()
            try:
                limiter.check_and_record("9.9.9.9")
                admitted.append(1)
            except CooldownError:
                rejected.append(1)

        threads = [threading.Thread(target=attempt) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(admitted) == 1
        assert len(rejected) == 7
