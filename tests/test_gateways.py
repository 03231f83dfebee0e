"""Tests for the Twilio and SMTP gateways — provider errors become DeliveryError."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import aiosmtplib
import httpx
import pytest

from otp_service.gateways.base import DeliveryError
from otp_service.gateways.smtp_email import SMTPEmailGateway
from otp_service.gateways.twilio_sms import TwilioSMSGateway


def _twilio(handler) -> TwilioSMSGateway:
    return TwilioSMSGateway(
        account_sid="AC123",
        auth_token="secret",
        from_number="+15550000000",
        transport=httpx.MockTransport(handler),
    )


# ── Twilio ───────────────────────────────────────────────

@pytest.mark.asyncio
async def test_twilio_posts_message():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201, json={"sid": "SM1", "status": "queued"})

    await _twilio(handler).send("+15551234567", "Your OTP for Acme is: 123456")

    request = seen[0]
    assert request.method == "POST"
    assert request.url.path == "/2010-04-01/Accounts/AC123/Messages.json"
    assert request.headers["authorization"].startswith("Basic ")
    form = dict(httpx.QueryParams(request.content.decode()))
    assert form == {
        "To": "+15551234567",
        "From": "+15550000000",
        "Body": "Your OTP for Acme is: 123456",
    }


@pytest.mark.asyncio
async def test_twilio_accepts_empty_created_body():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(201, text="")

    await _twilio(handler).send("+15551234567", "Your OTP for Acme is: 123456")


@pytest.mark.asyncio
async def test_twilio_rejection_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"code": 21211, "message": "Invalid 'To' number"})

    with pytest.raises(DeliveryError, match="400"):
        await _twilio(handler).send("bogus", "hi")


@pytest.mark.asyncio
async def test_twilio_transport_error_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(DeliveryError):
        await _twilio(handler).send("+15551234567", "hi")


# ── SMTP ─────────────────────────────────────────────────

@pytest.fixture
def smtp_gateway():
    return SMTPEmailGateway(
        hostname="smtp.example.com",
        port=587,
        sender="noreply@example.com",
        username="noreply@example.com",
        password="pw",
    )


@pytest.mark.asyncio
async def test_smtp_sends_message(smtp_gateway):
    with patch("otp_service.gateways.smtp_email.aiosmtplib.send", new_callable=AsyncMock) as send:
        await smtp_gateway.send("alice@example.com", "OTP Verification - Acme", "Your OTP is: 1")

    send.assert_awaited_once()
    msg = send.await_args.args[0]
    assert msg["To"] == "alice@example.com"
    assert msg["From"] == "noreply@example.com"
    assert msg["Subject"] == "OTP Verification - Acme"
    assert msg.get_content().strip() == "Your OTP is: 1"
    assert send.await_args.kwargs["hostname"] == "smtp.example.com"
    assert send.await_args.kwargs["start_tls"] is True


@pytest.mark.asyncio
async def test_smtp_error_raises(smtp_gateway):
    with patch(
        "otp_service.gateways.smtp_email.aiosmtplib.send",
        new_callable=AsyncMock,
        side_effect=aiosmtplib.SMTPException("auth failed"),
    ):
        with pytest.raises(DeliveryError, match="auth failed"):
            await smtp_gateway.send("alice@example.com", "s", "b")
