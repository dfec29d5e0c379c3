"""
Main configuration class that composes all configs.
"""

import json
import logging
import os

from dotenv import load_dotenv

from discourse_relay.core.config.discourse_config import DiscourseConfig
from discourse_relay.core.config.logging_config import LoggingConfig
from discourse_relay.core.config.message_config import MessageConfig
from discourse_relay.core.config.telegram_config import TelegramConfig

# Load environment variables from a .env file
load_dotenv()

logger = logging.getLogger(__name__)


def _parse_chat_id(chat: object) -> int | str | None:
    """Numeric chat ids become ints, '@channel' usernames stay strings, anything else is rejected."""
    if isinstance(chat, bool):
        return None
    if isinstance(chat, int):
        return chat
    if isinstance(chat, str):
        chat = chat.strip()
        if chat.startswith("@") and len(chat) > 1:
            return chat
        try:
            return int(chat)
        except ValueError:
            return None
    return None


def _parse_subscriptions(raw: str) -> dict[str, list[int | str]]:
    """Parse TELEGRAM_SUBSCRIPTIONS, e.g. '{"discourse": [-1001, "@forum_channel"]}'."""
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("TELEGRAM_SUBSCRIPTIONS is not valid JSON, starting with no subscribers.")
        return {}

    if not isinstance(data, dict):
        logger.warning("TELEGRAM_SUBSCRIPTIONS must be a JSON object, starting with no subscribers.")
        return {}

    subscriptions: dict[str, list[int | str]] = {}
    for theme, chats in data.items():
        if not isinstance(chats, list):
            logger.warning(f"TELEGRAM_SUBSCRIPTIONS entry for '{theme}' is not a list, skipping it.")
            continue
        parsed: list[int | str] = []
        for chat in chats:
            chat_id = _parse_chat_id(chat)
            if chat_id is None:
                logger.warning(f"Skipping invalid chat id {chat!r} for theme '{theme}'.")
                continue
            parsed.append(chat_id)
        subscriptions[str(theme)] = parsed
    return subscriptions


class Config:
    """Main configuration class."""

    def __init__(self) -> None:
        self.discourse = DiscourseConfig(
            webhook_secret=os.getenv("DISCOURSE_WEBHOOK_SECRET", ""),
            request_timeout=float(os.getenv("DISCOURSE_REQUEST_TIMEOUT", "10")),
        )

        self.telegram = TelegramConfig(
            bot_token=os.getenv("TELEGRAM_BOT_TOKEN", ""),
            api_base_url=os.getenv("TELEGRAM_API_BASE_URL", "https://api.telegram.org"),
            subscriptions=_parse_subscriptions(os.getenv("TELEGRAM_SUBSCRIPTIONS", "{}")),
        )

        self.messages = MessageConfig(
            theme=os.getenv("NOTIFY_THEME", "discourse"),
            locale=os.getenv("MESSAGE_LOCALE", "en"),
            include_preview=os.getenv("INCLUDE_PREVIEW", "false").lower() == "true",
            preview_limit=int(os.getenv("PREVIEW_LIMIT", "200")),
        )

        self.logging = LoggingConfig(
            level=os.getenv("LOG_LEVEL", "INFO"),
            format=os.getenv("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
            file_path=os.getenv("LOG_FILE_PATH"),
        )

        # Development settings
        self.debug = os.getenv("DEBUG", "false").lower() == "true"
        self.environment = os.getenv("ENVIRONMENT", "development")

    def validate(self) -> bool:
        """Validate configuration."""
        errors = []

        if self.discourse.request_timeout <= 0:
            errors.append("DISCOURSE_REQUEST_TIMEOUT must be positive")

        if self.messages.locale not in ("en", "ru"):
            errors.append(f"MESSAGE_LOCALE '{self.messages.locale}' is not supported (en, ru)")

        if self.messages.preview_limit <= 0:
            errors.append("PREVIEW_LIMIT must be positive")

        if self.telegram.subscriptions and not self.telegram.bot_token:
            errors.append("TELEGRAM_BOT_TOKEN is required when TELEGRAM_SUBSCRIPTIONS is set")

        if errors:
            raise ValueError(f"Configuration errors: {', '.join(errors)}")

        return True


# Global config instance
config = Config()
