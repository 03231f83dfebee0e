"""Error taxonomy surfaced to API callers.

Every error carries the HTTP status it maps to and a human-readable
message.  None of them are retried internally.
"""

from __future__ import annotations


class OTPServiceError(Exception):
    """Base class for all caller-visible failures."""

    status_code: int = 400
    message: str = "Request failed"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(OTPServiceError):
    """Missing or malformed request fields."""


class UnsupportedMethod(OTPServiceError):
    message = "Invalid method. Use sms or email"


class RateLimited(OTPServiceError):
    status_code = 429
    message = "Too many OTP requests, please try again later"

    def __init__(self, retry_after: int | None = None) -> None:
        super().__init__()
        self.retry_after = retry_after


class ChallengeNotFound(OTPServiceError):
    message = "OTP not found or expired"


class ChallengeExpired(OTPServiceError):
    message = "OTP has expired"


class CodeMismatch(OTPServiceError):
    message = "Invalid OTP"


class DeliveryFailed(OTPServiceError):
    status_code = 500
    message = "Failed to send OTP"
