"""
Notifier Factory.

Builds the notifier matching the current configuration.
"""

from __future__ import annotations

import structlog

from discourse_relay.core.config import config
from discourse_relay.notifications.base import Notifier
from discourse_relay.notifications.logging_notifier import LoggingNotifier
from discourse_relay.notifications.registry import SubscriberRegistry
from discourse_relay.notifications.telegram import TelegramClient, TelegramNotifier

logger = structlog.get_logger(__name__)


def get_notifier(registry: SubscriberRegistry | None = None) -> Notifier:
    """
    Get the notifier for the configured chat backend.

    Returns a TelegramNotifier when TELEGRAM_BOT_TOKEN is set, otherwise a
    LoggingNotifier.
    """
    if not config.telegram.bot_token:
        logger.warning("telegram_not_configured", fallback="LoggingNotifier")
        return LoggingNotifier()

    client = TelegramClient(
        bot_token=config.telegram.bot_token,
        base_url=config.telegram.api_base_url,
    )
    return TelegramNotifier(client, registry or SubscriberRegistry(config.telegram.subscriptions))
