"""
Utility modules for discourse-relay.
"""

from discourse_relay.core.utils.logging import log_operation

__all__ = [
    "log_operation",
]
