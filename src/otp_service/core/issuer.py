"""Challenge issuer — generates a code, stores it and dispatches delivery."""

from __future__ import annotations

import asyncio
import logging
import secrets
from dataclasses import dataclass

from otp_service.core.otp_store import OTPStore
from otp_service.errors import DeliveryFailed, UnsupportedMethod
from otp_service.gateways.base import DeliveryError, EmailGateway, SMSGateway

logger = logging.getLogger(__name__)

METHOD_SMS = "sms"
METHOD_EMAIL = "email"
SUPPORTED_METHODS = frozenset({METHOD_SMS, METHOD_EMAIL})


def generate_code() -> str:
    """Return a random 6-digit code in the range 100000–999999."""
    return str(100000 + secrets.randbelow(900000))


@dataclass(frozen=True)
class IssuedChallenge:
    """Confirmation returned once a code has been delivered."""

    contact: str
    method: str
    expires_at: float


class ChallengeIssuer:
    """Issues OTP challenges over SMS or email.

    Flow
    ----
    1. Reject unsupported delivery methods before anything is stored.
    2. Generate a fresh code and store it, superseding any pending one.
    3. Hand the code to the channel's gateway, bounded by a timeout.

    A delivery failure leaves the stored challenge in place; the caller
    simply requests a new code.
    """

    def __init__(
        self,
        store: OTPStore,
        sms_gateway: SMSGateway,
        email_gateway: EmailGateway,
        *,
        app_name: str,
        ttl_seconds: float = 600,
        delivery_timeout: float = 10.0,
    ) -> None:
        self._store = store
        self._sms = sms_gateway
        self._email = email_gateway
        self._app_name = app_name
        self._ttl = ttl_seconds
        self._timeout = delivery_timeout

    async def issue(self, contact: str, method: str) -> IssuedChallenge:
        """Create and deliver a challenge for *contact* via *method*."""
        if method not in SUPPORTED_METHODS:
            raise UnsupportedMethod()

        code = generate_code()
        challenge = self._store.put(contact, code, self._ttl)

        try:
            await asyncio.wait_for(self._dispatch(contact, method, code), self._timeout)
        except asyncio.TimeoutError:
            logger.error("OTP delivery to %s via %s timed out after %ss", contact, method, self._timeout)
            raise DeliveryFailed()
        except DeliveryError as exc:
            logger.error("OTP delivery to %s via %s failed: %s", contact, method, exc)
            raise DeliveryFailed() from exc
        except Exception as exc:
            logger.exception("Unexpected error delivering OTP to %s via %s", contact, method)
            raise DeliveryFailed() from exc

        logger.info("OTP sent to %s via %s", contact, method)
        return IssuedChallenge(contact=contact, method=method, expires_at=challenge.expires_at)

    # ── Private helpers ──────────────────────────────────

    async def _dispatch(self, contact: str, method: str, code: str) -> None:
        body = f"Your OTP for {self._app_name} is: {code}"
        if method == METHOD_SMS:
            await self._sms.send(contact, body)
        else:
            await self._email.send(contact, f"OTP Verification - {self._app_name}", body)
