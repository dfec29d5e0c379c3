"""
Telegram configuration.
"""

from dataclasses import dataclass, field


@dataclass
class TelegramConfig:
    """Telegram bot configuration."""

    bot_token: str
    api_base_url: str = "https://api.telegram.org"
    # theme -> chat ids or @channel usernames
    subscriptions: dict[str, list[int | str]] = field(default_factory=dict)
