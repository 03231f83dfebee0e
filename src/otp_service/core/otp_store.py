"""In-memory OTP store with expiry — one pending challenge per contact."""

from __future__ import annotations

import logging
import secrets
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

from otp_service.errors import ChallengeExpired, ChallengeNotFound, CodeMismatch

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


@dataclass(frozen=True)
class Challenge:
    """A pending verification: the code sent to *contact* and when it lapses."""

    contact: str
    code: str
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now > self.expires_at


class OTPStore:
    """Thread-safe in-memory challenge store.

    Each entry maps ``contact → Challenge``.  Expired entries are reaped
    lazily when the contact is next verified, or in bulk by
    :meth:`purge_expired` when a sweeper is configured.
    """

    def __init__(self, clock: Clock = time.time) -> None:
        self._clock = clock
        self._store: dict[str, Challenge] = {}
        self._lock = threading.Lock()

    def put(self, contact: str, code: str, ttl: float) -> Challenge:
        """Store *code* for *contact*, replacing any unconsumed challenge."""
        challenge = Challenge(contact=contact, code=code, expires_at=self._clock() + ttl)
        with self._lock:
            replaced = contact in self._store
            self._store[contact] = challenge
        logger.info(
            "Challenge stored for %s (expires at %.0f%s)",
            contact,
            challenge.expires_at,
            ", superseding previous" if replaced else "",
        )
        return challenge

    def consume(self, contact: str, code: str) -> None:
        """Verify *code* for *contact* and delete the challenge on success.

        Raises
        ------
        ChallengeNotFound
            No challenge is stored for *contact*.
        ChallengeExpired
            The challenge lapsed; it is removed as a side effect.
        CodeMismatch
            Wrong code; the challenge is kept so the caller may retry.
        """
        with self._lock:
            challenge = self._store.get(contact)
            if challenge is None:
                raise ChallengeNotFound()
            if challenge.is_expired(self._clock()):
                del self._store[contact]
                logger.info("OTP expired for %s", contact)
                raise ChallengeExpired()
            if not secrets.compare_digest(code.encode(), challenge.code.encode()):
                logger.info("OTP mismatch for %s", contact)
                raise CodeMismatch()
            del self._store[contact]
        logger.info("OTP consumed for %s", contact)

    def get(self, contact: str) -> Challenge | None:
        """Return the stored challenge for *contact* without reaping it."""
        with self._lock:
            return self._store.get(contact)

    def purge_expired(self) -> int:
        """Remove every expired challenge and return how many were dropped."""
        now = self._clock()
        with self._lock:
            expired = [c for c, ch in self._store.items() if ch.is_expired(now)]
            for contact in expired:
                del self._store[contact]
        if expired:
            logger.info("Purged %d expired challenge(s)", len(expired))
        return len(expired)

    @property
    def pending_count(self) -> int:
        """Number of stored challenges (useful for monitoring)."""
        return len(self._store)
