"""Gateway interfaces — abstract delivery channels the issuer depends on."""

from abc import ABC, abstractmethod


class DeliveryError(Exception):
    """Raised by a gateway when the provider did not accept the message."""


class SMSGateway(ABC):
    """Sends a plain-text SMS to a phone number."""

    @abstractmethod
    async def send(self, to_number: str, body: str) -> None:
        """Deliver *body* to *to_number*.

        Raises ``DeliveryError`` if the provider rejects the message.
        """


class EmailGateway(ABC):
    """Sends a plain-text email to a single recipient."""

    @abstractmethod
    async def send(self, to_address: str, subject: str, body: str) -> None:
        """Deliver an email to *to_address*.

        Raises ``DeliveryError`` if the provider rejects the message.
        """
