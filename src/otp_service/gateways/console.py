"""Console gateways — log messages instead of sending them (development)."""

from __future__ import annotations

import logging
from collections import deque

from otp_service.gateways.base import EmailGateway, SMSGateway

logger = logging.getLogger(__name__)


class ConsoleSMSGateway(SMSGateway):
    """Writes each SMS to the log so codes can be read from server output."""

    def __init__(self) -> None:
        self.sent: deque[tuple[str, str]] = deque(maxlen=100)

    async def send(self, to_number: str, body: str) -> None:
        self.sent.append((to_number, body))
        logger.info("📱 SMS to %s: %s", to_number, body)


class ConsoleEmailGateway(EmailGateway):
    """Writes each email to the log so codes can be read from server output."""

    def __init__(self) -> None:
        self.sent: deque[tuple[str, str, str]] = deque(maxlen=100)

    async def send(self, to_address: str, subject: str, body: str) -> None:
        self.sent.append((to_address, subject, body))
        logger.info("📧 Email to %s [%s]: %s", to_address, subject, body)
