"""Notification email webhook client with exponential backoff retry logic"""

import asyncio
import logging
from typing import Any, Dict

import httpx

from budget_gateway.config import settings
from budget_gateway.domain.exceptions import NotificationError
from budget_gateway.infrastructure.observability.metrics import (
    notification_failure_counter,
    notification_latency_histogram,
)

logger = logging.getLogger(__name__)


class NotificationClient:
    """Client for the external email dispatch webhook"""

    def __init__(self, webhook_url: str | None = None, timeout: float | None = None):
        self.webhook_url = webhook_url or settings.notification_webhook_url
        self.timeout = timeout or settings.http_timeout_seconds
        self.max_retries = settings.webhook_max_retries
        self.backoff_base = settings.webhook_backoff_base

    async def send(self, payload: Dict[str, Any]) -> None:
        """
        Deliver a notification payload with retries.

        Retry strategy:
        - Exponential backoff: 1s, 2s, 4s, 8s (base * 2^(attempt-1))
        - Retries on 5xx/4xx responses and network failures

        Raises:
            NotificationError: After the final failed attempt
        """
        attempt = 0
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            while attempt < self.max_retries:
                try:
                    with notification_latency_histogram.time():
                        response = await client.post(self.webhook_url, json=payload)
                        response.raise_for_status()
                        return

                except (httpx.HTTPStatusError, httpx.RequestError) as e:
                    attempt += 1
                    notification_failure_counter.inc()

                    if attempt >= self.max_retries:
                        raise NotificationError(
                            f"Notification delivery failed after {attempt} attempts: {e}"
                        ) from e

                    backoff = self.backoff_base * (2 ** (attempt - 1))
                    await asyncio.sleep(backoff)

    async def send_debt_alert(self, email: str, risk_level: str, message: str) -> None:
        """Send a debt risk alert email; failures are logged, never raised (background task)"""
        payload = {
            "to": email,
            "subject": "Over-indebtedness alert",
            "message": message,
            "type": "debt_alert",
            "risk_level": risk_level,
        }
        try:
            await self.send(payload)
        except NotificationError as e:
            logger.error(f"Debt alert email not delivered: {e}", extra={"step": "notification_failed"})
