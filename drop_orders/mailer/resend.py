"""Resend HTTP API mailer (async, httpx)."""

import httpx

from drop_orders.config import RESEND_API_URL, RESEND_TIMEOUT_SECONDS
from drop_orders.errors import MailerError
from drop_orders.mailer.models import OutboundEmail
from drop_orders.utils.logger import get_logger

logger = get_logger("drop_orders.mailer.resend")


class ResendMailer:
    """POSTs {from, to, subject, html} to the Resend emails endpoint with a bearer key.

    Pass http_client to share a connection pool (or a mock transport in tests); otherwise
    a short-lived client is opened per send.
    """

    def __init__(
        self,
        api_key: str,
        api_url: str = RESEND_API_URL,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = RESEND_TIMEOUT_SECONDS,
    ):
        if not api_key:
            raise ValueError("Resend API key is required")
        self._api_key = api_key
        self._api_url = api_url
        self._http_client = http_client
        self._timeout = timeout

    async def send(self, email: OutboundEmail) -> str:
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }
        try:
            if self._http_client is not None:
                response = await self._http_client.post(self._api_url, json=email.to_payload(), headers=headers)
            else:
                async with httpx.AsyncClient(timeout=httpx.Timeout(self._timeout)) as client:
                    response = await client.post(self._api_url, json=email.to_payload(), headers=headers)
        except httpx.HTTPError as e:
            raise MailerError(f"Resend request failed: {e}") from e

        if response.status_code >= 400:
            try:
                detail = response.json().get("message") or response.text
            except ValueError:
                detail = response.text
            logger.warning("mailer.resend.rejected", status_code=response.status_code, detail=detail)
            raise MailerError(f"Resend API error: {detail}", status_code=response.status_code)

        message_id = str(response.json().get("id", ""))
        logger.info("mailer.resend.sent", message_id=message_id, to=email.to, subject=email.subject)
        return message_id
