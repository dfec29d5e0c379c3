from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class DiscourseModel(BaseModel):
    """Base for Discourse entities: immutable, unknown keys ignored, JSON nulls fall back to defaults."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class Post(DiscourseModel):
    """Discourse post entry from a webhook payload."""

    id: int = Field(0, description="Post ID")
    name: str = Field("", description="Author display name")
    username: str = Field("", description="Author username")
    post_number: int = Field(0, description="Ordinal number of the post within its topic")
    post_type: int = Field(0, description="Discourse post type code")
    cooked: str = Field("", description="Rendered post HTML")
    created_at: str = ""
    updated_at: str = ""
    topic_id: int = Field(0, description="Parent topic ID")
    topic_slug: str = Field("", description="Parent topic slug")
    display_username: str = ""
    admin: bool = False
    staff: bool = False
    user_id: int = 0


class UserSummary(DiscourseModel):
    """Short user record nested in topic details."""

    id: int = 0
    username: str = ""
    avatar_template: str = ""


class TopicDetails(DiscourseModel):
    created_by: UserSummary | None = None


class Topic(DiscourseModel):
    """Discourse topic, either from a webhook payload or from /t/{id}.json."""

    id: int = Field(0, description="Topic ID")
    title: str = Field("", description="Topic title")
    created_at: str = ""
    updated_at: str = ""
    visible: bool = True
    user_id: int = 0
    slug: str = Field("", description="URL slug")
    details: TopicDetails | None = None

    @property
    def creator_username(self) -> str | None:
        """Username of the topic creator, if the payload carried creation details."""
        if self.details and self.details.created_by:
            return self.details.created_by.username
        return None


class User(DiscourseModel):
    id: int = 0
    username: str = ""
    name: str = ""


class DiscoursePayload(DiscourseModel):
    """
    Decoded webhook body.

    ``forum_url`` never comes from the body: it is taken from the
    X-Discourse-Instance header and attached after decoding.
    """

    topic: Topic | None = None
    post: Post | None = None
    user: User | None = None
    forum_url: str = Field("", exclude=True)

    @classmethod
    def from_body(cls, body: bytes | str, forum_url: str) -> "DiscoursePayload":
        """Decode a raw webhook body. Raises pydantic.ValidationError on malformed input."""
        payload = cls.model_validate_json(body)
        return payload.model_copy(update={"forum_url": forum_url.rstrip("/")})

    def with_topic(self, topic: Topic) -> "DiscoursePayload":
        return self.model_copy(update={"topic": topic})
