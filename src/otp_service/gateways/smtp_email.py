"""SMTP email gateway — sends OTP emails via async SMTP."""

from __future__ import annotations

import logging
from email.message import EmailMessage

import aiosmtplib

from otp_service.gateways.base import DeliveryError, EmailGateway

logger = logging.getLogger(__name__)


class SMTPEmailGateway(EmailGateway):
    """Sends plain-text emails using the configured SMTP server."""

    def __init__(
        self,
        hostname: str,
        port: int,
        sender: str,
        username: str = "",
        password: str = "",
        timeout: float = 10.0,
    ) -> None:
        self._hostname = hostname
        self._port = port
        self._sender = sender
        self._username = username
        self._password = password
        self._timeout = timeout

    async def send(self, to_address: str, subject: str, body: str) -> None:
        """Send a single email.

        Parameters
        ----------
        to_address:
            Recipient email address.
        subject:
            Subject line.
        body:
            Plain-text content.
        """
        msg = EmailMessage()
        msg["Subject"] = subject
        msg["From"] = self._sender
        msg["To"] = to_address
        msg.set_content(body)

        try:
            await aiosmtplib.send(
                msg,
                hostname=self._hostname,
                port=self._port,
                username=self._username or None,
                password=self._password or None,
                start_tls=True,
                timeout=self._timeout,
            )
        except aiosmtplib.SMTPException as exc:
            raise DeliveryError(f"SMTP error: {exc}") from exc

        logger.info("Email sent to %s", to_address)
