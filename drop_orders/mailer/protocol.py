"""Mailer protocol (transactional email provider interface)."""

from typing import Protocol

from drop_orders.mailer.models import OutboundEmail


class Mailer(Protocol):
    """Abstract interface for sending one email."""

    async def send(self, email: OutboundEmail) -> str:
        """Send the email; returns the provider's message id. Raises MailerError on failure."""
        ...
