import httpx
import structlog
from pydantic import ValidationError

from discourse_relay.core.errors import PayloadDecodeError, TopicLookupError
from discourse_relay.discourse.models import Topic

logger = structlog.get_logger(__name__)


class DiscourseClient:
    """
    A client for the Discourse REST API.

    Only the topic lookup used to fill in topics omitted from post webhooks
    is implemented. The forum origin is passed per call because it comes from
    the X-Discourse-Instance header of each webhook.
    """

    def __init__(self, api_key: str, timeout: float = 10.0, transport: httpx.AsyncBaseTransport | None = None):
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport

    async def get_topic(self, forum_url: str, topic_id: int, api_username: str) -> Topic:
        """
        Fetch topic details from ``{forum_url}/t/{topic_id}.json``.

        Raises:
            TopicLookupError: On transport errors, timeouts or non-2xx responses.
            PayloadDecodeError: If the response body is not a topic.
        """
        url = f"{forum_url.rstrip('/')}/t/{topic_id}.json"
        params = {"api_key": self.api_key, "api_username": api_username}

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                response = await client.get(url, params=params)
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                logger.error(
                    "topic_lookup_failed",
                    topic_id=topic_id,
                    status_code=e.response.status_code,
                    response_body=e.response.text,
                )
                raise TopicLookupError(topic_id, f"HTTP {e.response.status_code}") from e
            except (httpx.HTTPError, httpx.InvalidURL) as e:
                logger.error("topic_lookup_failed", topic_id=topic_id, error=str(e))
                raise TopicLookupError(topic_id, str(e) or e.__class__.__name__) from e

        try:
            topic = Topic.model_validate_json(response.content)
        except ValidationError as e:
            logger.error("topic_lookup_decode_failed", topic_id=topic_id, error=str(e))
            raise PayloadDecodeError(f"Topic {topic_id} response is not valid topic JSON") from e

        logger.info("topic_lookup_succeeded", topic_id=topic_id, title=topic.title)
        return topic
