from abc import ABC, abstractmethod

import structlog
from pydantic import ValidationError

from discourse_relay.core.errors import PayloadDecodeError
from discourse_relay.core.models import ParseMode, WebhookEvent, WebhookResponse
from discourse_relay.core.utils.logging import log_operation
from discourse_relay.discourse.formatter import MessageFormatter
from discourse_relay.discourse.models import DiscoursePayload
from discourse_relay.notifications.base import Notifier

logger = structlog.get_logger(__name__)


class EventHandler(ABC):
    """
    Abstract base class for all Discourse webhook event handlers.

    Each implementation decodes the event body, renders a message and hands it
    to the injected notifier. Handlers return a WebhookResponse whose detail is
    the formatted message.
    """

    def __init__(self, notifier: Notifier, formatter: MessageFormatter, theme: str):
        self.notifier = notifier
        self.formatter = formatter
        self.theme = theme

    @abstractmethod
    async def handle(self, event: WebhookEvent) -> WebhookResponse:
        """
        Process the incoming webhook event.

        Args:
            event: The WebhookEvent carrying the raw body and forum URL.

        Returns:
            A WebhookResponse containing the formatted message.
        """
        pass

    def decode(self, event: WebhookEvent) -> DiscoursePayload:
        """Decode the raw body, raising PayloadDecodeError on malformed input."""
        try:
            return DiscoursePayload.from_body(event.body, event.instance_url)
        except ValidationError as e:
            logger.error(
                "payload_decode_failed",
                event_type=event.event_type.value,
                delivery_id=event.delivery_id,
                error=str(e),
            )
            raise PayloadDecodeError(f"Invalid {event.event_type.value} payload: {e.error_count()} error(s)") from e

    async def publish(self, event: WebhookEvent, text: str) -> int:
        """Send the message to every chat subscribed to the forum theme."""
        async with log_operation("notify_subscribers", theme=self.theme, event_type=event.event_type.value):
            return await self.notifier.notify_all(self.theme, text, ParseMode.HTML)
