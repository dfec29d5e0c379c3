"""
Discourse configuration.
"""

import os
from dataclasses import dataclass


@dataclass
class DiscourseConfig:
    """Discourse forum configuration."""

    webhook_secret: str
    request_timeout: float = 10.0
    api_key_env_var: str = "DISCOURSE_API_KEY"

    @property
    def api_key(self) -> str:
        """API key used for topic lookups, read from the environment on every access."""
        return os.getenv(self.api_key_env_var, "")
