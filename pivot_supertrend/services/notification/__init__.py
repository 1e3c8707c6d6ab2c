"""
Notification Dispatch

CONTRACT:
    Input:  target + AlertMessage
    Output: None (raises NotificationDispatchError on failure)

RESPONSIBILITIES:
    - Render alerts for non-Hold signals
    - Deliver them through the email relay
    - Surface delivery failures; never retry
"""

from typing import Optional

from pivot_supertrend.core.config import settings
from pivot_supertrend.services.notification.interface import AlertMessage, Notifier
from pivot_supertrend.services.notification.formatting import format_alert
from pivot_supertrend.services.notification.email_relay import EmailRelayNotifier

# Singleton instance
_notifier_instance: Optional[Notifier] = None


def get_notifier() -> Notifier:
    """Get or create the configured notifier."""
    global _notifier_instance
    if _notifier_instance is None:
        _notifier_instance = EmailRelayNotifier(
            relay_url=settings.email_relay_url,
            token=settings.email_relay_token,
            sender=settings.email_sender,
            timeout_seconds=settings.notification_timeout_seconds,
        )
    return _notifier_instance


__all__ = [
    "AlertMessage",
    "Notifier",
    "EmailRelayNotifier",
    "format_alert",
    "get_notifier",
]
