"""OTP API router — issue and verify one-time passcodes.

Endpoints
---------
POST /api/request-otp   → generate and deliver a code (rate limited)
POST /api/verify-otp    → check a code and consume it
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from otp_service.api.dependencies import enforce_otp_rate_limit, get_issuer, get_store
from otp_service.core.issuer import ChallengeIssuer
from otp_service.core.otp_store import OTPStore
from otp_service.errors import ValidationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["otp"])


# ── Request / response models ────────────────────────────

class OTPRequest(BaseModel):
    contact: str | None = None
    method: str | None = None


class OTPVerifyRequest(BaseModel):
    contact: str | None = None
    otp: str | None = None


class SuccessResponse(BaseModel):
    success: bool = True
    message: str


# ── Endpoints ────────────────────────────────────────────

@router.post(
    "/request-otp",
    response_model=SuccessResponse,
    dependencies=[Depends(enforce_otp_rate_limit)],
)
async def request_otp(
    body: OTPRequest, issuer: ChallengeIssuer = Depends(get_issuer)
) -> SuccessResponse:
    """Send a fresh code to *contact* by SMS or email."""
    if not body.contact or not body.method:
        raise ValidationError("Contact and method are required")

    issued = await issuer.issue(body.contact, body.method)
    return SuccessResponse(message=f"OTP sent to {issued.contact}")


@router.post("/verify-otp", response_model=SuccessResponse)
async def verify_otp(
    body: OTPVerifyRequest, store: OTPStore = Depends(get_store)
) -> SuccessResponse:
    """Validate a code for *contact*; a match consumes the challenge."""
    if not body.contact or not body.otp:
        raise ValidationError("Contact and OTP are required")

    store.consume(body.contact, body.otp)
    logger.info("OTP verified for %s", body.contact)
    return SuccessResponse(message="OTP verified successfully")
