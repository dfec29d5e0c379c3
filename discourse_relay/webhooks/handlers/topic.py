import structlog

from discourse_relay.core.models import EventType, WebhookEvent, WebhookResponse
from discourse_relay.webhooks.handlers.base import EventHandler

logger = structlog.get_logger(__name__)


class TopicCreatedEventHandler(EventHandler):
    """Handler for topic_created events."""

    async def handle(self, event: WebhookEvent) -> WebhookResponse:
        payload = self.decode(event)
        log = logger.bind(
            event_type=EventType.TOPIC_CREATED.value,
            delivery_id=event.delivery_id,
            topic_id=payload.topic.id if payload.topic else None,
        )

        message = self.formatter.format(EventType.TOPIC_CREATED, payload)
        delivered = await self.publish(event, message)

        log.info("topic_created_notified", delivered=delivered)
        return WebhookResponse(status="ok", detail=message, event_type=EventType.TOPIC_CREATED.value)
