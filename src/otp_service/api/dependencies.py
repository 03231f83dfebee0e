"""Request-scoped dependencies — component lookup and the rate-limit guard."""

from __future__ import annotations

import logging

from fastapi import Request

from otp_service.core.issuer import ChallengeIssuer
from otp_service.core.otp_store import OTPStore
from otp_service.core.rate_limiter import SlidingWindowRateLimiter
from otp_service.errors import RateLimited

logger = logging.getLogger(__name__)


def get_store(request: Request) -> OTPStore:
    return request.app.state.otp_store


def get_issuer(request: Request) -> ChallengeIssuer:
    return request.app.state.issuer


def get_rate_limiter(request: Request) -> SlidingWindowRateLimiter:
    return request.app.state.rate_limiter


def caller_identity(request: Request) -> str:
    """Network identity of the caller (client IP)."""
    return request.client.host if request.client else "unknown"


def enforce_otp_rate_limit(request: Request) -> None:
    """Reject the request with ``RateLimited`` once the caller's window is full."""
    caller = caller_identity(request)
    info = get_rate_limiter(request).check(caller)
    if not info.allowed:
        raise RateLimited(retry_after=info.retry_after)
    logger.debug("Rate limit ok for %s (%d remaining)", caller, info.remaining)
