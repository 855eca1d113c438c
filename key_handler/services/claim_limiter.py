"""
Per-client claim throttling.

Two windows are tracked per client identity:

- attempt window (short, default 10 s): every attempt the limiter admits
  records its time, so a client can try at most once per window whatever
  the outcome. Rejected attempts do not move the timer.
- success cooldown (long, default 30 min): recorded only by
  record_success(), so a client that wins a key cannot win another until
  the cooldown passes.

State lives in process memory and is never expired; stale entries simply
age past both windows. Swap in another implementation with the same
check_and_record / record_success interface to share state between
processes.
"""
import math
import threading
import time
from typing import Callable, Dict, Optional

from key_handler.exceptions import CooldownError
from key_handler.utils.logging import get_context_logger, with_context

logger = get_context_logger("claim_limiter")

DEFAULT_ATTEMPT_WINDOW_SECONDS = 10
DEFAULT_SUCCESS_COOLDOWN_SECONDS = 30 * 60


class ClaimLimiter:
    """In-memory throttle keyed by client identity."""

    def __init__(
        self,
        attempt_window_seconds: float = DEFAULT_ATTEMPT_WINDOW_SECONDS,
        success_cooldown_seconds: float = DEFAULT_SUCCESS_COOLDOWN_SECONDS,
        clock: Callable[[], float] = time.monotonic
    ):
        self.attempt_window_seconds = attempt_window_seconds
        self.success_cooldown_seconds = success_cooldown_seconds
        self._clock = clock
        self._last_attempt: Dict[str, float] = {}
        self._last_success: Dict[str, float] = {}
        self._lock = threading.Lock()

    def _remaining(self, last: Optional[float], window: float, now: float) -> float:
        if last is None:
            return 0.0
        return max(0.0, window - (now - last))

    def remaining_ms(self, identity: str) -> int:
        """Milliseconds until the identity may attempt again (0 if it may now)."""
        with self._lock:
            return self._remaining_ms_locked(identity, self._clock())

    def _remaining_ms_locked(self, identity: str, now: float) -> int:
        remaining = max(
            self._remaining(self._last_attempt.get(identity), self.attempt_window_seconds, now),
            self._remaining(self._last_success.get(identity), self.success_cooldown_seconds, now),
        )
        return math.ceil(remaining * 1000)

    def check_and_record(self, identity: str, trace_id: Optional[str] = None) -> None:
        """
        Admit an attempt or raise.

        The check and the timestamp write happen under one lock, so two
        simultaneous attempts from the same identity cannot both pass.

        Raises:
            CooldownError: If either window is still open for the identity
        """
        with self._lock:
            now = self._clock()
            retry_after_ms = self._remaining_ms_locked(identity, now)
            if retry_after_ms > 0:
                with_context(logger, trace_id=trace_id).info(
                    "Claim attempt throttled",
                    extra={"client_identity": identity, "retry_after_ms": retry_after_ms}
                )
                raise CooldownError(
                    "Too many claim attempts, try again later",
                    retry_after_ms=retry_after_ms
                )
            self._last_attempt[identity] = now

    def record_success(self, identity: str) -> None:
        """Start the long cooldown for an identity that just won a key."""
        with self._lock:
            self._last_success[identity] = self._clock()

    def reset(self) -> None:
        with self._lock:
            self._last_attempt.clear()
            self._last_success.clear()
