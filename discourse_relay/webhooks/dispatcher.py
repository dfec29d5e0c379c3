import structlog

from discourse_relay.core.errors import RelayError
from discourse_relay.core.models import EventType, WebhookEvent, WebhookResponse
from discourse_relay.webhooks.handlers.base import EventHandler

logger = structlog.get_logger(__name__)


def resolve_event_type(event_name: str | None) -> EventType | None:
    """Map an X-Discourse-Event header value to an EventType, or None if unsupported."""
    if not event_name:
        return None
    try:
        return EventType(event_name.strip())
    except ValueError:
        return None


class WebhookDispatcher:
    """
    Dispatches webhook events to registered EventHandler instances.
    """

    def __init__(self):
        self._handlers: dict[EventType, EventHandler] = {}

    def register_handler(self, event_type: EventType, handler: EventHandler):
        """
        Registers a handler instance for a specific event type.

        Args:
            event_type: The EventType to handle (e.g., EventType.POST_CREATED).
            handler: An instance of a class that implements the EventHandler interface.
        """
        if event_type in self._handlers:
            logger.warning("handler_overridden", event_type=event_type.value)
        self._handlers[event_type] = handler
        logger.info("handler_registered", event_type=event_type.value, handler=handler.__class__.__name__)

    async def dispatch(self, event: WebhookEvent) -> WebhookResponse:
        """
        Looks up and executes the .handle() method of the appropriate handler
        for the given event.

        Raises:
            RelayError: Propagated from the handler after being logged.
        """
        handler_instance = self._handlers.get(event.event_type)

        if not handler_instance:
            logger.warning("no_handler_registered", event_type=event.event_type.value)
            return WebhookResponse(
                status="ignored",
                detail=f"No handler for event type {event.event_type.value}",
                event_type=event.event_type.value,
            )

        handler_name = handler_instance.__class__.__name__
        logger.info("dispatching_event", event_type=event.event_type.value, handler=handler_name)
        try:
            return await handler_instance.handle(event)
        except RelayError as e:
            logger.error(
                "handler_failed",
                event_type=event.event_type.value,
                handler=handler_name,
                delivery_id=event.delivery_id,
                error=str(e),
            )
            raise

    async def handle(
        self, event_type: str | None, instance_url: str, body: bytes, delivery_id: str | None = None
    ) -> str:
        """
        Handle one Discourse webhook and return the formatted message.

        Unsupported event types return an empty string without decoding the body
        or notifying anyone.
        """
        resolved = resolve_event_type(event_type)
        if resolved is None:
            logger.info("event_type_ignored", event_type=event_type)
            return ""

        response = await self.dispatch(WebhookEvent(resolved, instance_url, body, delivery_id=delivery_id))
        if response.status != "ok":
            return ""
        return response.detail or ""


# Shared instance, handlers are registered on application startup
dispatcher = WebhookDispatcher()
