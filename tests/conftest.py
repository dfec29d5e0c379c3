"""
Pytest configuration: puts the project root on sys.path and provides shared
Discourse payloads, a spy notifier and a wired dispatcher.
"""

import sys
from pathlib import Path
from typing import Any

import pytest

ROOT = Path(__file__).resolve().parent.parent

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from discourse_relay.core.config.discourse_config import DiscourseConfig  # noqa: E402
from discourse_relay.core.models import EventType, ParseMode  # noqa: E402
from discourse_relay.discourse.formatter import MessageFormatter  # noqa: E402
from discourse_relay.notifications.base import Notifier  # noqa: E402
from discourse_relay.webhooks.dispatcher import WebhookDispatcher  # noqa: E402
from discourse_relay.webhooks.handlers.post import PostEventHandler  # noqa: E402
from discourse_relay.webhooks.handlers.topic import TopicCreatedEventHandler  # noqa: E402

FORUM_URL = "https://forum.example.com"
THEME = "discourse"


class SpyNotifier(Notifier):
    """Records every notify_all call instead of delivering anything."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, ParseMode]] = []

    async def notify_all(self, theme: str, text: str, parse_mode: ParseMode = ParseMode.HTML) -> int:
        self.calls.append((theme, text, parse_mode))
        return 1


@pytest.fixture(autouse=True)
def no_discourse_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    """Topic lookups stay disabled unless a test sets DISCOURSE_API_KEY itself."""
    monkeypatch.delenv("DISCOURSE_API_KEY", raising=False)


@pytest.fixture
def post_payload() -> dict[str, Any]:
    """post_created body with the topic embedded."""
    return {
        "post": {
            "id": 101,
            "name": "Alice Liddell",
            "username": "alice",
            "post_number": 3,
            "post_type": 1,
            "cooked": "<p>Here is the link I promised.</p>",
            "created_at": "2024-03-01T10:00:00.000Z",
            "updated_at": "2024-03-01T10:00:00.000Z",
            "topic_id": 42,
            "topic_slug": "foo",
            "display_username": "Alice Liddell",
            "admin": False,
            "staff": False,
            "user_id": 7,
        },
        "topic": {
            "id": 42,
            "title": "Foo",
            "created_at": "2024-02-28T09:00:00.000Z",
            "updated_at": "2024-03-01T10:00:00.000Z",
            "visible": True,
            "user_id": 3,
            "slug": "foo",
        },
    }


@pytest.fixture
def post_payload_without_topic(post_payload: dict[str, Any]) -> dict[str, Any]:
    return {"post": post_payload["post"]}


@pytest.fixture
def topic_payload() -> dict[str, Any]:
    """topic_created body; the top-level user is deliberately not the creator."""
    return {
        "topic": {
            "id": 42,
            "title": "Foo",
            "created_at": "2024-02-28T09:00:00.000Z",
            "updated_at": "2024-02-28T09:00:00.000Z",
            "visible": True,
            "user_id": 3,
            "slug": "foo",
            "details": {
                "created_by": {"id": 3, "username": "bob", "avatar_template": "/user_avatar/bob/{size}/1.png"},
            },
        },
        "user": {"id": 1, "username": "system", "name": "System"},
    }


@pytest.fixture
def forum_url() -> str:
    return FORUM_URL


@pytest.fixture
def spy_notifier() -> SpyNotifier:
    return SpyNotifier()


@pytest.fixture
def discourse_config() -> DiscourseConfig:
    return DiscourseConfig(webhook_secret="", request_timeout=5.0)


@pytest.fixture
def formatter() -> MessageFormatter:
    return MessageFormatter(locale="en")


@pytest.fixture
def wired_dispatcher(
    spy_notifier: SpyNotifier, formatter: MessageFormatter, discourse_config: DiscourseConfig
) -> WebhookDispatcher:
    """A dispatcher with all Discourse handlers registered against the spy notifier."""
    dispatcher = WebhookDispatcher()
    post_handler = PostEventHandler(spy_notifier, formatter, THEME, discourse_config)
    dispatcher.register_handler(EventType.POST_CREATED, post_handler)
    dispatcher.register_handler(EventType.POST_EDITED, post_handler)
    dispatcher.register_handler(EventType.TOPIC_CREATED, TopicCreatedEventHandler(spy_notifier, formatter, THEME))
    return dispatcher
