from discourse_relay.discourse.client import DiscourseClient
from discourse_relay.discourse.formatter import MessageFormatter, render_preview
from discourse_relay.discourse.models import DiscoursePayload, Post, Topic, TopicDetails, User, UserSummary

__all__ = [
    "DiscourseClient",
    "DiscoursePayload",
    "MessageFormatter",
    "Post",
    "Topic",
    "TopicDetails",
    "User",
    "UserSummary",
    "render_preview",
]
