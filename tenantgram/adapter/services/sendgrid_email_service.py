import logging
from typing import Any, Dict, Optional

import httpx

from tenantgram.app.services.email_service import EmailError, IEmailService

logger = logging.getLogger(__name__)

SENDGRID_SEND_URL = "https://api.sendgrid.com/v3/mail/send"


class SendGridEmailService(IEmailService):
    """Plain-text email through the SendGrid v3 mail API."""

    def __init__(
        self,
        api_key: str,
        sender: str,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.sender = sender
        self.timeout = timeout
        self.transport = transport

    async def send_email(self, recipient: str, subject: str, body: str) -> None:
        """Raises EmailError on failure."""
        if not self.api_key:
            raise EmailError("sendgrid_not_configured: SENDGRID_API_KEY missing")
        if not self.sender:
            raise EmailError("sendgrid_not_configured: EMAIL_FROM missing")

        payload: Dict[str, Any] = {
            "personalizations": [{"to": [{"email": recipient}]}],
            "from": {"email": self.sender},
            "subject": subject,
            "content": [{"type": "text/plain", "value": body}],
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(SENDGRID_SEND_URL, json=payload, headers=headers)
        except httpx.HTTPError as e:
            raise EmailError(f"sendgrid_network_error:{type(e).__name__}:{e}") from e

        if response.status_code >= 300:
            raise EmailError(f"sendgrid_send_failed:{response.status_code}:{response.text}")

        logger.info(f"Email '{subject}' sent to {recipient}")
