from enum import Enum

from pydantic import BaseModel, Field


class EventType(Enum):
    """Supported Discourse event types."""

    TOPIC_CREATED = "topic_created"
    POST_CREATED = "post_created"
    POST_EDITED = "post_edited"


class ParseMode(str, Enum):
    """Text formatting modes understood by the chat delivery side."""

    HTML = "HTML"
    MARKDOWN = "MarkdownV2"
    PLAIN = ""


class WebhookEvent:
    """
    A representation of an incoming webhook event, before its body has been
    decoded into a typed payload.
    """

    def __init__(self, event_type: EventType, instance_url: str, body: bytes, delivery_id: str | None = None):
        self.event_type = event_type
        self.instance_url = instance_url.rstrip("/")
        self.body = body
        self.delivery_id = delivery_id


class WebhookResponse(BaseModel):
    """Standardized response model for all webhook handlers."""

    status: str = Field(..., description="Processing status: ok, ignored, error")
    detail: str | None = Field(None, description="Formatted message or error context")
    event_type: str | None = Field(None, description="Discourse event type")
