from typing import Any

import httpx
import structlog

from discourse_relay.core.errors import NotificationDeliveryError
from discourse_relay.core.models import ParseMode
from discourse_relay.notifications.base import Notifier
from discourse_relay.notifications.registry import SubscriberRegistry

logger = structlog.get_logger(__name__)


class TelegramClient:
    """Minimal Telegram Bot API client for sending formatted messages."""

    def __init__(
        self,
        bot_token: str,
        base_url: str = "https://api.telegram.org",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.bot_token = bot_token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def send_formatted_message(
        self, chat_id: int | str, text: str, parse_mode: ParseMode = ParseMode.HTML
    ) -> dict[str, Any]:
        """
        Send ``text`` to ``chat_id`` via sendMessage.

        Raises:
            NotificationDeliveryError: If the request fails or Telegram answers ``ok: false``.
        """
        url = f"{self.base_url}/bot{self.bot_token}/sendMessage"
        body: dict[str, Any] = {"chat_id": chat_id, "text": text, "disable_web_page_preview": True}
        if parse_mode.value:
            body["parse_mode"] = parse_mode.value

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                response = await client.post(url, json=body)
            except (httpx.HTTPError, httpx.InvalidURL) as e:
                raise NotificationDeliveryError(chat_id, str(e) or e.__class__.__name__) from e

        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        if response.is_error or not data.get("ok", False):
            reason = data.get("description") or f"HTTP {response.status_code}"
            raise NotificationDeliveryError(chat_id, reason)

        return data.get("result", {})


class TelegramNotifier(Notifier):
    """Sends messages to every Telegram chat subscribed to a theme."""

    def __init__(self, client: TelegramClient, registry: SubscriberRegistry):
        self.client = client
        self.registry = registry

    async def notify_all(self, theme: str, text: str, parse_mode: ParseMode = ParseMode.HTML) -> int:
        chats = self.registry.subscribers(theme)
        if not chats:
            logger.info("no_subscribers", theme=theme)
            return 0

        delivered = 0
        for chat_id in chats:
            try:
                await self.client.send_formatted_message(chat_id, text, parse_mode)
                delivered += 1
            except NotificationDeliveryError as e:
                logger.warning("notification_delivery_failed", theme=theme, chat_id=chat_id, reason=e.reason)

        logger.info("notification_sent", theme=theme, delivered=delivered, subscribers=len(chats))
        return delivered
