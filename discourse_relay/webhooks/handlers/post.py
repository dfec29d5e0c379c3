import structlog

from discourse_relay.core.config.discourse_config import DiscourseConfig
from discourse_relay.core.models import EventType, WebhookEvent, WebhookResponse
from discourse_relay.core.utils.logging import log_operation
from discourse_relay.discourse.client import DiscourseClient
from discourse_relay.discourse.formatter import MessageFormatter
from discourse_relay.discourse.models import DiscoursePayload
from discourse_relay.notifications.base import Notifier
from discourse_relay.webhooks.handlers.base import EventHandler

logger = structlog.get_logger(__name__)


class PostEventHandler(EventHandler):
    """
    Handler for post_created and post_edited events.

    Discourse may omit the topic from post payloads. When that happens and an
    API key is configured, the topic is fetched from the forum before the
    message is rendered; without a key the message names the forum instead.
    """

    def __init__(
        self,
        notifier: Notifier,
        formatter: MessageFormatter,
        theme: str,
        discourse_config: DiscourseConfig,
    ):
        super().__init__(notifier, formatter, theme)
        self.discourse_config = discourse_config

    async def handle(self, event: WebhookEvent) -> WebhookResponse:
        payload = self.decode(event)
        log = logger.bind(
            event_type=event.event_type.value,
            delivery_id=event.delivery_id,
            post_id=payload.post.id if payload.post else None,
        )

        payload = await self.enrich(payload)

        message = self.formatter.format(event.event_type, payload)
        delivered = await self.publish(event, message)

        log.info("post_event_notified", topic_known=payload.topic is not None, delivered=delivered)
        return WebhookResponse(status="ok", detail=message, event_type=event.event_type.value)

    async def enrich(self, payload: DiscoursePayload) -> DiscoursePayload:
        """Attach the post's topic when the payload omitted it and an API key is available."""
        post = payload.post
        if post is None or payload.topic is not None:
            return payload

        api_key = self.discourse_config.api_key
        if not api_key:
            logger.debug("topic_lookup_skipped", reason="no_api_key", topic_id=post.topic_id)
            return payload

        client = DiscourseClient(api_key, timeout=self.discourse_config.request_timeout)
        async with log_operation("topic_lookup", topic_id=post.topic_id):
            topic = await client.get_topic(payload.forum_url, post.topic_id, post.username)
        return payload.with_topic(topic)


SUPPORTED_POST_EVENTS = (EventType.POST_CREATED, EventType.POST_EDITED)
