"""Twilio SMS gateway — sends messages through the Twilio REST API."""

from __future__ import annotations

import logging

import httpx

from otp_service.gateways.base import DeliveryError, SMSGateway

logger = logging.getLogger(__name__)


class TwilioSMSGateway(SMSGateway):
    """Async wrapper around Twilio's ``Messages.json`` endpoint."""

    def __init__(
        self,
        account_sid: str,
        auth_token: str,
        from_number: str,
        base_url: str = "https://api.twilio.com/2010-04-01",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._account_sid = account_sid
        self._auth_token = auth_token
        self._from_number = from_number
        self._url = f"{base_url.rstrip('/')}/Accounts/{account_sid}/Messages.json"
        self._timeout = timeout
        self._transport = transport

    async def send(self, to_number: str, body: str) -> None:
        payload = {"To": to_number, "From": self._from_number, "Body": body}
        try:
            async with httpx.AsyncClient(
                auth=(self._account_sid, self._auth_token),
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                resp = await client.post(self._url, data=payload)
        except httpx.HTTPError as exc:
            raise DeliveryError(f"Twilio request error: {exc}") from exc

        if resp.status_code != 201:
            raise DeliveryError(f"Twilio rejected message: {resp.status_code} {resp.text}")

        try:
            sid = resp.json().get("sid")
        except ValueError:
            sid = None
        logger.info("SMS sent to %s (sid=%s)", to_number, sid)
