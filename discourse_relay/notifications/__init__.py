from discourse_relay.notifications.base import Notifier
from discourse_relay.notifications.factory import get_notifier
from discourse_relay.notifications.logging_notifier import LoggingNotifier
from discourse_relay.notifications.registry import SubscriberRegistry
from discourse_relay.notifications.telegram import TelegramClient, TelegramNotifier

__all__ = [
    "LoggingNotifier",
    "Notifier",
    "SubscriberRegistry",
    "TelegramClient",
    "TelegramNotifier",
    "get_notifier",
]
