"""Shared fixtures: a stub Chat API gateway behind httpx.MockTransport."""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from chatapi_whatsapp.clients.chatapi import ChatAPIClient

BASE_URL = "https://eu1.chat-api.com/instance12345"
TOKEN = "secret-token"


class GatewayStub:
    """Records every request and answers with a configurable response."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.body: Any = {"sent": True, "message": "ok"}
        self.content: bytes | None = None
        self.error: Exception | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> dict[str, Any]:
        return json.loads(self.last.content)


@pytest.fixture
def gateway() -> GatewayStub:
    return GatewayStub()


@pytest.fixture
def client(gateway: GatewayStub) -> ChatAPIClient:
    return ChatAPIClient(
        token=TOKEN,
        base_url=BASE_URL + "/",
        transport=httpx.MockTransport(gateway),
    )
