"""Shared fixtures: an in-memory editor API behind httpx.MockTransport."""

import asyncio
import json
from typing import Any

import httpx
import pytest

from mention_menu.client import MentionApiClient
from mention_menu.config import MentionMenuConfig
from mention_menu.models import Notification

API_URL = "https://editor.test/api"


class FakeEditorApi:
    """Serves suggestions.mention and documents.users from dicts.

    Attributes:
        suggestions: query -> {"users": [...], "documents": [...]}
        access: user id -> list of grant records
        gates: query -> Event the response waits on (to control ordering)
        failing: API methods that fail with a connection error
        calls: (method, payload) for every request received
    """

    def __init__(self) -> None:
        self.suggestions: dict[str, dict[str, Any]] = {}
        self.access: dict[str, list[dict[str, Any]]] = {}
        self.gates: dict[str, asyncio.Event] = {}
        self.failing: set[str] = set()
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.headers: list[httpx.Headers] = []

    def calls_to(self, method: str) -> list[dict[str, Any]]:
        return [payload for name, payload in self.calls if name == method]

    async def handler(self, request: httpx.Request) -> httpx.Response:
        method = request.url.path.rsplit("/", 1)[-1]
        payload = json.loads(request.content)
        self.calls.append((method, payload))
        self.headers.append(request.headers)

        if method in self.failing:
            raise httpx.ConnectError("connection refused", request=request)

        if method == "suggestions.mention":
            gate = self.gates.get(payload["query"])
            if gate is not None:
                await gate.wait()
            data = self.suggestions.get(payload["query"], {"users": [], "documents": []})
            return httpx.Response(200, json={"data": data})

        if method == "documents.users":
            return httpx.Response(200, json={"data": self.access.get(payload["userId"], [])})

        return httpx.Response(404, json={"error": "not_found"})


class CollectingNotifier:
    """Notifier that records what it is asked to show."""

    def __init__(self) -> None:
        self.notifications: list[Notification] = []

    async def notify(self, notification: Notification) -> None:
        self.notifications.append(notification)


@pytest.fixture
def fake_api() -> FakeEditorApi:
    return FakeEditorApi()


@pytest.fixture
def config() -> MentionMenuConfig:
    return MentionMenuConfig(api_url=API_URL)


@pytest.fixture
def api(fake_api: FakeEditorApi, config: MentionMenuConfig) -> MentionApiClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(fake_api.handler))
    return MentionApiClient(config, http_client=http)


@pytest.fixture
def notifier() -> CollectingNotifier:
    return CollectingNotifier()
