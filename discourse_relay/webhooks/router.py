import structlog
from fastapi import APIRouter, Depends, HTTPException, Request

from discourse_relay.core.errors import MessageFormatError, PayloadDecodeError, TopicLookupError
from discourse_relay.core.models import WebhookEvent, WebhookResponse
from discourse_relay.webhooks.auth import verify_discourse_signature
from discourse_relay.webhooks.dispatcher import WebhookDispatcher, dispatcher, resolve_event_type

logger = structlog.get_logger(__name__)
router = APIRouter()

EVENT_HEADER = "X-Discourse-Event"
INSTANCE_HEADER = "X-Discourse-Instance"
EVENT_ID_HEADER = "X-Discourse-Event-Id"


# Dependency provider for the dispatcher instance.
# This makes it easy to manage its lifecycle and use it in tests.
def get_dispatcher() -> WebhookDispatcher:
    """Returns the shared WebhookDispatcher instance."""
    return dispatcher


@router.post("/discourse", summary="Endpoint for Discourse webhooks", response_model=WebhookResponse)
async def discourse_webhook_endpoint(
    request: Request,
    is_verified: bool = Depends(verify_discourse_signature),
    dispatcher_instance: WebhookDispatcher = Depends(get_dispatcher),
) -> WebhookResponse:
    """
    This endpoint receives topic and post events from a Discourse forum.

    - The signature dependency rejects unsigned requests when a secret is set.
    - The event type comes from X-Discourse-Event, the forum origin from
      X-Discourse-Instance; the raw body is decoded by the event handler.
    - Unsupported or missing event types are acknowledged without any work.
    """
    event_name = request.headers.get(EVENT_HEADER, "")
    instance_url = request.headers.get(INSTANCE_HEADER, "")
    delivery_id = request.headers.get(EVENT_ID_HEADER)
    log = logger.bind(event_name=event_name, instance=instance_url, delivery_id=delivery_id)

    event_type = resolve_event_type(event_name)
    if event_type is None:
        log.info("discourse_event_ignored")
        detail = (
            f"Event type '{event_name}' is received but not supported."
            if event_name
            else f"No {EVENT_HEADER} header, nothing to do."
        )
        return WebhookResponse(status="ignored", detail=detail, event_type=event_name or None)

    log.info("discourse_event_received")
    body = await request.body()
    event = WebhookEvent(event_type, instance_url, body, delivery_id=delivery_id)

    try:
        return await dispatcher_instance.dispatch(event)
    except PayloadDecodeError as e:
        raise HTTPException(status_code=400, detail=f"Invalid webhook payload: {e}") from e
    except MessageFormatError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    except TopicLookupError as e:
        raise HTTPException(status_code=502, detail=str(e)) from e
