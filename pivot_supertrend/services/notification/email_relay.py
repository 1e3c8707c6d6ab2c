"""
Email Relay Notifier

Sends alert emails by POSTing JSON to an HTTP email relay.
"""

import asyncio
import logging
import re
from typing import Optional

import aiohttp

from pivot_supertrend.services.base import NotificationDispatchError
from pivot_supertrend.services.notification.interface import AlertMessage, Notifier

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class EmailRelayNotifier(Notifier):
    """Notifier backed by an HTTP email relay."""

    def __init__(
        self,
        relay_url: Optional[str],
        token: Optional[str] = None,
        sender: str = "alerts@pivot-supertrend.local",
        timeout_seconds: float = 10.0,
    ):
        self.relay_url = relay_url
        self.token = token
        self.sender = sender
        self.timeout_seconds = timeout_seconds
        self._session: Optional[aiohttp.ClientSession] = None

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure we have an active HTTP session."""
        if self._session is None or self._session.closed:
            headers = {"Content-Type": "application/json"}
            if self.token:
                headers["Authorization"] = f"Bearer {self.token}"
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout_seconds),
                headers=headers,
            )
        return self._session

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def notify(self, target: str, message: AlertMessage) -> None:
        if not EMAIL_PATTERN.match(target):
            raise NotificationDispatchError(target, f"Malformed email address: {target!r}")
        if not self.relay_url:
            raise NotificationDispatchError(target, "Email relay URL is not configured")

        payload = {
            "from": self.sender,
            "to": target,
            "subject": message.subject,
            "body": message.body,
        }

        session = await self._ensure_session()
        try:
            async with session.post(self.relay_url, json=payload) as response:
                if response.status >= 300:
                    detail = await response.text()
                    raise NotificationDispatchError(
                        target,
                        f"Email relay responded {response.status}: {detail[:200]}",
                    )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Email relay unreachable for {target}: {e}")
            raise NotificationDispatchError(target, f"Email relay unreachable: {e}") from e

        logger.info(f"Alert sent to {target}: {message.subject}")
