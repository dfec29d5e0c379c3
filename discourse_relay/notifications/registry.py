import structlog

logger = structlog.get_logger(__name__)


class SubscriberRegistry:
    """In-memory mapping of themes to subscribed chat ids."""

    def __init__(self, subscriptions: dict[str, list[int | str]] | None = None):
        self._subscriptions: dict[str, list[int | str]] = {}
        for theme, chats in (subscriptions or {}).items():
            for chat_id in chats:
                self.subscribe(theme, chat_id)

    def subscribe(self, theme: str, chat_id: int | str) -> bool:
        """Subscribe a chat to a theme. Returns False if it was already subscribed."""
        chats = self._subscriptions.setdefault(theme, [])
        if chat_id in chats:
            return False
        chats.append(chat_id)
        logger.info("chat_subscribed", theme=theme, chat_id=chat_id)
        return True

    def unsubscribe(self, theme: str, chat_id: int | str) -> bool:
        chats = self._subscriptions.get(theme, [])
        if chat_id not in chats:
            return False
        chats.remove(chat_id)
        logger.info("chat_unsubscribed", theme=theme, chat_id=chat_id)
        return True

    def subscribers(self, theme: str) -> list[int | str]:
        """Chat ids subscribed to ``theme``, in subscription order."""
        return list(self._subscriptions.get(theme, []))
