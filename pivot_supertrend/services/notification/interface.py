"""
Notifier Interface

Defines the contract for the notification dispatch capability.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class AlertMessage:
    """Rendered alert."""

    subject: str
    body: str


class Notifier(ABC):
    """
    Notification Dispatch Contract.

    INPUT: target (e.g. an email address), AlertMessage

    RAISES: NotificationDispatchError when the target is malformed or
    unreachable. Implementations do not retry.
    """

    @abstractmethod
    async def notify(self, target: str, message: AlertMessage) -> None:
        """Deliver a message to the target."""
        pass

    async def close(self) -> None:
        """Release transport resources."""
        return None
