"""Shared fixtures — a manually advanced clock and recording gateways."""

from __future__ import annotations

import pytest

from otp_service.gateways.console import ConsoleEmailGateway, ConsoleSMSGateway


class ManualClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def sms_gateway():
    return ConsoleSMSGateway()


@pytest.fixture
def email_gateway():
    return ConsoleEmailGateway()


def last_code(gateway) -> str:
    """Extract the code from the most recent message a gateway delivered."""
    body = gateway.sent[-1][-1]
    return body.rsplit(" ", 1)[-1]
