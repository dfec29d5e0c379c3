import structlog

from discourse_relay.core.models import ParseMode
from discourse_relay.notifications.base import Notifier

logger = structlog.get_logger(__name__)


class LoggingNotifier(Notifier):
    """Notifier used when no chat backend is configured: writes the message to the log."""

    async def notify_all(self, theme: str, text: str, parse_mode: ParseMode = ParseMode.HTML) -> int:
        logger.info("notification_logged", theme=theme, parse_mode=parse_mode.value, text=text)
        return 0
