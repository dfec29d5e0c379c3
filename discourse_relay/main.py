import logging

from fastapi import FastAPI

from discourse_relay.core.config import config
from discourse_relay.core.models import EventType
from discourse_relay.core.utils.logging import setup_logging
from discourse_relay.discourse.formatter import MessageFormatter
from discourse_relay.notifications.base import Notifier
from discourse_relay.notifications.factory import get_notifier
from discourse_relay.webhooks.dispatcher import WebhookDispatcher, dispatcher
from discourse_relay.webhooks.handlers.post import SUPPORTED_POST_EVENTS, PostEventHandler
from discourse_relay.webhooks.handlers.topic import TopicCreatedEventHandler
from discourse_relay.webhooks.router import router as webhook_router

# --- Application Setup ---

setup_logging(config.logging)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="discourse-relay",
    description="Discourse forum notifications for chat subscribers.",
    version="0.1.0",
)

# --- Include Routers ---

app.include_router(webhook_router, prefix="/webhooks", tags=["Discourse Webhooks"])

# --- Root Endpoint ---


@app.get("/", tags=["Health Check"])
async def read_root():
    """A simple health check endpoint to confirm the service is running."""
    return {"status": "ok", "message": "discourse-relay is running."}


def register_handlers(target: WebhookDispatcher, notifier: Notifier) -> None:
    """Register one handler per supported Discourse event type."""
    formatter = MessageFormatter(
        locale=config.messages.locale,
        include_preview=config.messages.include_preview,
        preview_limit=config.messages.preview_limit,
    )
    theme = config.messages.theme

    post_handler = PostEventHandler(notifier, formatter, theme, config.discourse)
    for event_type in SUPPORTED_POST_EVENTS:
        target.register_handler(event_type, post_handler)
    target.register_handler(EventType.TOPIC_CREATED, TopicCreatedEventHandler(notifier, formatter, theme))


# --- Application Lifecycle ---


@app.on_event("startup")
async def startup_event():
    """Application startup logic."""
    logger.info("discourse-relay starting up...")
    config.validate()
    register_handlers(dispatcher, get_notifier())
    logger.info("Event handlers registered.")
