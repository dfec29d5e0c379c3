"""
Core error classes for discourse-relay.
"""


class RelayError(Exception):
    """Base class for errors raised while handling a Discourse event."""

    pass


class PayloadDecodeError(RelayError):
    """Raised when a webhook body or a topic lookup response cannot be decoded."""

    pass


class TopicLookupError(RelayError):
    """Raised when fetching topic details from the forum fails."""

    def __init__(self, topic_id: int, reason: str) -> None:
        self.topic_id = topic_id
        self.reason = reason
        super().__init__(f"Topic {topic_id} lookup failed: {reason}")


class MessageFormatError(RelayError):
    """Raised when a payload lacks an entity the message template needs."""

    pass


class NotificationDeliveryError(RelayError):
    """Raised when the chat API rejects or fails to deliver a message."""

    def __init__(self, chat_id: int | str, reason: str) -> None:
        self.chat_id = chat_id
        self.reason = reason
        super().__init__(f"Delivery to chat {chat_id} failed: {reason}")
