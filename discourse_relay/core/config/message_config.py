"""
Notification message configuration.
"""

from dataclasses import dataclass


@dataclass
class MessageConfig:
    """Message formatting configuration."""

    theme: str = "discourse"
    locale: str = "en"
    include_preview: bool = False
    preview_limit: int = 200
