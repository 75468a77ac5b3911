"""Tests for the notification channel."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from chatapi_whatsapp.channel import ChatAPIChannel
from chatapi_whatsapp.clients.chatapi import ChatAPIClient
from chatapi_whatsapp.exceptions import ServiceError
from chatapi_whatsapp.models import ChatAPIMessage


def _notifiable(route: str | None = None) -> SimpleNamespace:
    return SimpleNamespace(route_notification_for=lambda channel: route)


def _notification(message: ChatAPIMessage) -> SimpleNamespace:
    return SimpleNamespace(to_chatapi=lambda notifiable: message)


@pytest.fixture
def chatapi() -> AsyncMock:
    client = AsyncMock(spec=ChatAPIClient)
    client.send_message.return_value = {"sent": True, "id": "text"}
    client.send_file.return_value = {"sent": True, "id": "file"}
    return client


class TestChatAPIChannel:
    @pytest.mark.asyncio
    async def test_sends_text_to_routed_recipient(self, chatapi) -> None:
        channel = ChatAPIChannel(client=chatapi)
        message = ChatAPIMessage.create("Your order shipped").to("10000000000")

        responses = await channel.send(_notifiable("17472822486"), _notification(message))

        chatapi.send_message.assert_awaited_once_with("17472822486", "Your order shipped")
        chatapi.send_file.assert_not_awaited()
        assert responses == [{"sent": True, "id": "text"}]

    @pytest.mark.asyncio
    async def test_falls_back_to_message_recipient(self, chatapi) -> None:
        channel = ChatAPIChannel(client=chatapi)
        message = ChatAPIMessage.create("Hi").to("17472822486")

        await channel.send(_notifiable(None), _notification(message))

        chatapi.send_message.assert_awaited_once_with("17472822486", "Hi")

    @pytest.mark.asyncio
    async def test_sends_text_then_file(self, chatapi) -> None:
        channel = ChatAPIChannel(client=chatapi)
        message = (
            ChatAPIMessage.create("Invoice attached")
            .to("17472822486")
            .file("https://example.com/invoice.pdf", "invoice.pdf", "application/pdf")
        )

        responses = await channel.send(_notifiable(), _notification(message))

        chatapi.send_file.assert_awaited_once_with(
            "17472822486", "https://example.com/invoice.pdf", "invoice.pdf", "application/pdf"
        )
        assert responses == [{"sent": True, "id": "text"}, {"sent": True, "id": "file"}]

    @pytest.mark.asyncio
    async def test_file_only(self, chatapi) -> None:
        channel = ChatAPIChannel(client=chatapi)
        message = ChatAPIMessage.create().to("1@c.us").file(b"raw", "raw.bin")

        await channel.send(_notifiable(), _notification(message))

        chatapi.send_message.assert_not_awaited()
        chatapi.send_file.assert_awaited_once_with("1@c.us", b"raw", "raw.bin", None)

    @pytest.mark.asyncio
    async def test_custom_route_name(self, chatapi) -> None:
        routes = []
        notifiable = SimpleNamespace(
            route_notification_for=lambda channel: routes.append(channel) or "17472822486"
        )
        channel = ChatAPIChannel(client=chatapi, route_name="whatsapp")

        await channel.send(notifiable, _notification(ChatAPIMessage.create("Hi")))

        assert routes == ["whatsapp"]

    @pytest.mark.asyncio
    async def test_errors_propagate(self, chatapi) -> None:
        chatapi.send_message.side_effect = ServiceError(401, "Wrong token")
        channel = ChatAPIChannel(client=chatapi)

        with pytest.raises(ServiceError):
            await channel.send(_notifiable("1"), _notification(ChatAPIMessage.create("Hi")))

    @pytest.mark.asyncio
    async def test_nothing_to_send(self, chatapi) -> None:
        channel = ChatAPIChannel(client=chatapi)

        responses = await channel.send(_notifiable("1"), _notification(ChatAPIMessage.create()))

        assert responses == []
        chatapi.send_message.assert_not_awaited()

    def test_builds_client_from_settings(self) -> None:
        channel = ChatAPIChannel()

        assert isinstance(channel.client, ChatAPIClient)
        assert channel.route_name == "chatapi"

    @pytest.mark.asyncio
    async def test_closes_the_client_it_built(self) -> None:
        async with ChatAPIChannel() as channel:
            pass

        assert channel.client.session.is_closed

    @pytest.mark.asyncio
    async def test_leaves_a_given_client_open(self, chatapi) -> None:
        channel = ChatAPIChannel(client=chatapi)

        await channel.aclose()

        chatapi.aclose.assert_not_awaited()
