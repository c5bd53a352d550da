"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - client_config: Deterministic client configuration
    - backend: Scriptable in-process fake of the chat backend
    - service: SessionServiceClient wired to the fake backend
    - controller: ChatController wired to the fake backend
    - async_client: HTTPX client for the development backend app
"""

import asyncio
import itertools
import json
from collections.abc import AsyncIterator

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from src.api import create_app
from src.client import ClientConfig, SessionServiceClient
from src.controller import ChatController

USERNAME = "augmentix"
PASSWORD = "Augmentix@1"
BASE_URL = "http://test"


class FakeBackend:
    """Scriptable stand-in for the chat backend, served via httpx.MockTransport.

    Attributes:
        calls: Operation names in the order requests arrived
            ("create", "load", "send", "upload").
        requests: Raw requests, parallel to ``calls``.
        failures: Operation name -> "transport", "status" or "error".
        gates: Operation name -> event the handler waits on before answering.
        histories: Stored conversations returned by the load operation.
        reply: Content returned by the send operation.
        upload_message: Acknowledgement returned by the upload operation.
    """

    def __init__(self) -> None:
        self.calls: list[str] = []
        self.requests: list[httpx.Request] = []
        self.failures: dict[str, str] = {}
        self.gates: dict[str, asyncio.Event] = {}
        self.histories: dict[str, list[dict]] = {}
        self.reply = "Hello from the assistant"
        self.upload_message: str | None = "Files received"
        self._session_ids = (f"session-{n}" for n in itertools.count(1))

    def count(self, operation: str) -> int:
        return self.calls.count(operation)

    def sent_payloads(self) -> list[dict]:
        return [
            json.loads(request.content)
            for op, request in zip(self.calls, self.requests)
            if op == "send"
        ]

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path == "/api/chat/new":
            operation = "create"
        elif path.startswith("/api/chat/load/"):
            operation = "load"
        elif path == "/api/chat":
            operation = "send"
        elif path == "/api/files/upload":
            operation = "upload"
        else:
            return httpx.Response(404, json={"detail": "Not Found"})

        self.calls.append(operation)
        self.requests.append(request)

        if gate := self.gates.get(operation):
            await gate.wait()

        failure = self.failures.get(operation)
        if failure == "transport":
            raise httpx.ConnectError("Connection refused", request=request)
        if failure == "status":
            return httpx.Response(500, json={"detail": "Internal Server Error"})
        if failure == "error":
            return httpx.Response(200, json={"error": "Backend error"})

        if operation == "create":
            return httpx.Response(200, json={"sessionId": next(self._session_ids)})
        if operation == "load":
            session_id = path.removeprefix("/api/chat/load/")
            if session_id not in self.histories:
                return httpx.Response(200, json={"error": "Session not found"})
            return httpx.Response(200, json={"messages": self.histories[session_id]})
        if operation == "send":
            return httpx.Response(200, json={"content": self.reply})
        body = {} if self.upload_message is None else {"message": self.upload_message}
        return httpx.Response(200, json=body)


@pytest.fixture
def client_config() -> ClientConfig:
    """Return configuration with a fixed credential pair."""
    return ClientConfig(
        api_base_url=BASE_URL,
        request_timeout=5.0,
        auth_username=USERNAME,
        auth_password=PASSWORD,
    )


@pytest.fixture
def backend() -> FakeBackend:
    """Return a fresh fake backend with no scripted failures."""
    return FakeBackend()


@pytest.fixture
async def service(
    client_config: ClientConfig, backend: FakeBackend
) -> AsyncIterator[SessionServiceClient]:
    """Create a SessionServiceClient talking to the fake backend.

    Yields:
        Service client; its HTTP client is closed afterwards.
    """
    http = AsyncClient(transport=httpx.MockTransport(backend), base_url=BASE_URL)
    async with http:
        yield SessionServiceClient(client_config, http_client=http)


@pytest.fixture
def controller(
    client_config: ClientConfig, service: SessionServiceClient
) -> ChatController:
    """Create a logged-out controller talking to the fake backend."""
    return ChatController(config=client_config, service=service)


@pytest.fixture
async def async_client() -> AsyncIterator[AsyncClient]:
    """Create async HTTP client for the development backend.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=create_app())
    async with AsyncClient(transport=transport, base_url=BASE_URL) as client:
        yield client
