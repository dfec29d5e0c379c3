import html
import logging
import re

from discourse_relay.core.errors import MessageFormatError
from discourse_relay.core.models import EventType
from discourse_relay.discourse.models import DiscoursePayload, Post, Topic

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en"

# Visible text of each message, with the link anchor around the link phrase.
MESSAGE_TEMPLATES: dict[str, dict[str, str]] = {
    "en": {
        "post_created_in_topic": '@{username} posted a new <a href="{url}">link to "{title}"</a>',
        "post_created": '@{username} posted a new <a href="{url}">link to the forum</a>',
        "post_edited_in_topic": '@{username} updated a <a href="{url}">link to "{title}"</a>',
        "post_edited": '@{username} updated a <a href="{url}">link to the forum</a>',
        "topic_created": '@{username} created a new link <a href="{url}">"{title}"</a> on the forum',
    },
    "ru": {
        "post_created_in_topic": '@{username} написал новый <a href="{url}">пост в "{title}"</a>',
        "post_created": '@{username} написал новый <a href="{url}">пост на форум</a>',
        "post_edited_in_topic": '@{username} обновил <a href="{url}">пост в "{title}"</a>',
        "post_edited": '@{username} обновил <a href="{url}">пост на форуме</a>',
        "topic_created": '@{username} создал новый топик <a href="{url}">"{title}"</a> на форуме',
    },
}

PREVIEW_PLACEHOLDERS = {
    "en": "(open the link to read the full post)",
    "ru": "(откройте ссылку, чтобы прочитать пост целиком)",
}

# Block-level markup the chat renderer cannot display.
_BLOCK_MARKUP = re.compile(r"<\s*(div|blockquote)\b", re.IGNORECASE)
_TAG = re.compile(r"<[^>]+>")


def post_url(forum_url: str, post: Post) -> str:
    return f"{forum_url}/t/{post.topic_slug}/{post.topic_id}/{post.id}"


def topic_url(forum_url: str, topic: Topic) -> str:
    return f"{forum_url}/t/{topic.slug}/{topic.id}"


def render_preview(cooked: str, limit: int = 200, locale: str = DEFAULT_LOCALE) -> str:
    """
    Build a chat-safe preview of a post's rendered HTML.

    Previews containing <div> or <blockquote> markup are replaced by a fixed
    placeholder. Anything else is returned verbatim when it fits in ``limit``
    characters; longer previews are reduced to plain text and truncated.
    """
    if _BLOCK_MARKUP.search(cooked):
        return PREVIEW_PLACEHOLDERS.get(locale, PREVIEW_PLACEHOLDERS[DEFAULT_LOCALE])

    if len(cooked) <= limit:
        return cooked

    # Cut on unescaped text so no entity is split, then escape again for HTML parse mode.
    text = " ".join(html.unescape(_TAG.sub(" ", cooked)).split())
    if len(text) > limit:
        text = text[:limit].rstrip() + "…"
    return _escape(text)


class MessageFormatter:
    """Renders Discourse payloads into HTML chat messages."""

    def __init__(self, locale: str = DEFAULT_LOCALE, include_preview: bool = False, preview_limit: int = 200):
        if locale not in MESSAGE_TEMPLATES:
            logger.warning(f"Unknown message locale '{locale}', falling back to '{DEFAULT_LOCALE}'.")
            locale = DEFAULT_LOCALE
        self.locale = locale
        self.include_preview = include_preview
        self.preview_limit = preview_limit
        self._templates = MESSAGE_TEMPLATES[locale]

    def format(self, event_type: EventType, payload: DiscoursePayload) -> str:
        if event_type is EventType.TOPIC_CREATED:
            return self.format_topic_created(payload)
        return self.format_post(event_type, payload)

    def format_post(self, event_type: EventType, payload: DiscoursePayload) -> str:
        """Message for post_created / post_edited; links always use the post's own topic slug and id."""
        post = payload.post
        if post is None:
            raise MessageFormatError(f"{event_type.value} payload has no post")

        key = "post_created" if event_type is EventType.POST_CREATED else "post_edited"
        values = {
            "username": _escape(post.username),
            "url": html.escape(post_url(payload.forum_url, post)),
        }
        if payload.topic is not None:
            key = f"{key}_in_topic"
            values["title"] = _escape(payload.topic.title)

        message = self._templates[key].format(**values)
        if self.include_preview and post.cooked:
            message = f"{message}\n\n{render_preview(post.cooked, self.preview_limit, self.locale)}"
        return message

    def format_topic_created(self, payload: DiscoursePayload) -> str:
        """Message for topic_created; the author is the nested creator, not the top-level user."""
        topic = payload.topic
        if topic is None:
            raise MessageFormatError("topic_created payload has no topic")

        creator = topic.creator_username
        if creator is None:
            raise MessageFormatError(f"topic {topic.id} has no creator details")

        return self._templates["topic_created"].format(
            username=_escape(creator),
            url=html.escape(topic_url(payload.forum_url, topic)),
            title=_escape(topic.title),
        )


def _escape(value: str) -> str:
    return html.escape(value, quote=False)
