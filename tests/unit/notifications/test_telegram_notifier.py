import json

import httpx
import pytest
import respx

from discourse_relay.core.errors import NotificationDeliveryError
from discourse_relay.core.models import ParseMode
from discourse_relay.notifications.registry import SubscriberRegistry
from discourse_relay.notifications.telegram import TelegramClient, TelegramNotifier

SEND_URL = "https://api.telegram.org/bottest-token/sendMessage"


@pytest.fixture
def telegram_client() -> TelegramClient:
    return TelegramClient(bot_token="test-token")


class TestTelegramClient:
    @pytest.mark.asyncio
    async def test_send_formatted_message(self, telegram_client: TelegramClient) -> None:
        async with respx.mock:
            route = respx.post(SEND_URL).mock(
                return_value=httpx.Response(200, json={"ok": True, "result": {"message_id": 9}})
            )

            result = await telegram_client.send_formatted_message(100, "<b>hi</b>", ParseMode.HTML)

            assert result == {"message_id": 9}
            sent = json.loads(route.calls.last.request.content)
            assert sent["chat_id"] == 100
            assert sent["text"] == "<b>hi</b>"
            assert sent["parse_mode"] == "HTML"

    @pytest.mark.asyncio
    async def test_plain_mode_omits_parse_mode(self, telegram_client: TelegramClient) -> None:
        async with respx.mock:
            route = respx.post(SEND_URL).mock(return_value=httpx.Response(200, json={"ok": True, "result": {}}))

            await telegram_client.send_formatted_message(100, "hi", ParseMode.PLAIN)

            assert "parse_mode" not in json.loads(route.calls.last.request.content)

    @pytest.mark.asyncio
    async def test_rejected_message_raises(self, telegram_client: TelegramClient) -> None:
        async with respx.mock:
            respx.post(SEND_URL).mock(
                return_value=httpx.Response(400, json={"ok": False, "description": "Bad Request: chat not found"})
            )

            with pytest.raises(NotificationDeliveryError) as exc_info:
                await telegram_client.send_formatted_message(100, "hi")

        assert exc_info.value.chat_id == 100
        assert "chat not found" in exc_info.value.reason

    @pytest.mark.asyncio
    async def test_non_object_reply_raises_delivery_error(self, telegram_client: TelegramClient) -> None:
        async with respx.mock:
            respx.post(SEND_URL).mock(return_value=httpx.Response(200, json=["unexpected"]))

            with pytest.raises(NotificationDeliveryError) as exc_info:
                await telegram_client.send_formatted_message(100, "hi")

        assert exc_info.value.reason == "HTTP 200"


class TestTelegramNotifier:
    @pytest.mark.asyncio
    async def test_delivers_to_every_subscriber(self, telegram_client: TelegramClient) -> None:
        registry = SubscriberRegistry({"discourse": [1, 2], "other": [3]})
        notifier = TelegramNotifier(telegram_client, registry)

        async with respx.mock:
            route = respx.post(SEND_URL).mock(return_value=httpx.Response(200, json={"ok": True, "result": {}}))

            delivered = await notifier.notify_all("discourse", "hello")

            assert delivered == 2
            chats = [json.loads(call.request.content)["chat_id"] for call in route.calls]
            assert chats == [1, 2]

    @pytest.mark.asyncio
    async def test_failed_chat_does_not_stop_delivery(self, telegram_client: TelegramClient) -> None:
        registry = SubscriberRegistry({"discourse": [1, 2]})
        notifier = TelegramNotifier(telegram_client, registry)

        async with respx.mock:
            respx.post(SEND_URL).mock(
                side_effect=[
                    httpx.ConnectError("boom"),
                    httpx.Response(200, json={"ok": True, "result": {}}),
                ]
            )

            delivered = await notifier.notify_all("discourse", "hello")

        assert delivered == 1

    @pytest.mark.asyncio
    async def test_no_subscribers(self, telegram_client: TelegramClient) -> None:
        notifier = TelegramNotifier(telegram_client, SubscriberRegistry())

        async with respx.mock:
            assert await notifier.notify_all("discourse", "hello") == 0
            assert len(respx.calls) == 0

    @pytest.mark.asyncio
    async def test_non_object_reply_does_not_stop_delivery(self, telegram_client: TelegramClient) -> None:
        registry = SubscriberRegistry({"discourse": [1, 2]})
        notifier = TelegramNotifier(telegram_client, registry)

        async with respx.mock:
            route = respx.post(SEND_URL).mock(
                side_effect=[
                    httpx.Response(200, json="not an object"),
                    httpx.Response(200, json={"ok": True, "result": {}}),
                ]
            )

            delivered = await notifier.notify_all("discourse", "hello")

            assert route.call_count == 2

        assert delivered == 1
