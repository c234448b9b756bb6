"""Resend HTTP API client for transactional email.

Retries transient failures with a growing delay; without an API key the
client only logs what it would have sent.
"""

import asyncio
import logging
from typing import Optional

import httpx

from alphasafe.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)

RETRYABLE_STATUS = (429, 500, 502, 503, 504)


class EmailDeliveryError(Exception):
    """Email could not be delivered after all retries."""


class ResendClient:
    """Client for the Resend ``/emails`` endpoint."""

    def __init__(self, api_key: Optional[str] = None, base_url: Optional[str] = None, sender: Optional[str] = None):
        self.base_url = (base_url or settings.RESEND_API_URL).rstrip("/")
        self.api_key = settings.RESEND_API_KEY if api_key is None else api_key
        self.sender = sender or settings.EMAIL_FROM
        self.headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        self.max_retries = 3
        self.retry_delay = 2  # seconds

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    async def send_email(self, to: str, subject: str, html: str) -> dict:
        """Send one email. Returns the API response, or a simulation marker.

        Raises EmailDeliveryError once every attempt has failed.
        """
        if not self.enabled:
            logger.info(f"[EMAIL SIMULATION] to={to} subject={subject!r}")
            return {"simulated": True}

        url = f"{self.base_url}/emails"
        payload = {"from": self.sender, "to": [to], "subject": subject, "html": html}

        last_error = None
        for attempt in range(1, self.max_retries + 1):
            try:
                async with httpx.AsyncClient(timeout=15) as client:
                    response = await client.post(url, json=payload, headers=self.headers)
                    response.raise_for_status()
                    logger.info(f"Email sent to {to} (attempt {attempt})")
                    return response.json()
            except httpx.HTTPStatusError as e:
                last_error = e
                error_text = e.response.text[:200] if e.response.text else "No response body"
                logger.warning(
                    f"Resend API error (attempt {attempt}/{self.max_retries}): "
                    f"{e.response.status_code} - {error_text}"
                )
                if e.response.status_code not in RETRYABLE_STATUS:
                    break
            except httpx.HTTPError as e:
                last_error = e
                logger.warning(f"Resend API connection error (attempt {attempt}/{self.max_retries}): {e}")

            if attempt < self.max_retries:
                await asyncio.sleep(self.retry_delay * attempt)

        raise EmailDeliveryError(f"Failed to send email after {attempt} attempts: {last_error}")
