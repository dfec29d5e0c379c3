"""
Base Notifier interface.

This module defines the abstract base class that all notifiers must implement.
"""

from abc import ABC, abstractmethod

from discourse_relay.core.models import ParseMode


class Notifier(ABC):
    """Delivers a message to every chat subscribed to a theme."""

    @abstractmethod
    async def notify_all(self, theme: str, text: str, parse_mode: ParseMode = ParseMode.HTML) -> int:
        """
        Deliver ``text`` to all subscribers of ``theme``.

        Delivery is best effort: failures for individual chats are logged by the
        implementation and not raised.

        Returns:
            The number of chats the message was delivered to.
        """
        pass
