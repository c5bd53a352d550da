"""Integration tests for ChatController against the development backend.

No mocks: the controller's HTTP client is wired to the FastAPI app through
ASGITransport, so requests go through real routing and validation.
"""

from collections.abc import AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient

from src.api import create_app
from src.client import ClientConfig, SessionServiceClient
from src.controller import ChatController
from src.models import FileRef, Message
from tests.conftest import BASE_URL, PASSWORD, USERNAME


@pytest.fixture
async def live_controller(client_config: ClientConfig) -> AsyncIterator[ChatController]:
    """Create a controller talking to a fresh development backend.

    Yields:
        Logged-out ChatController.
    """
    transport = ASGITransport(app=create_app())
    async with AsyncClient(transport=transport, base_url=BASE_URL) as http:
        service = SessionServiceClient(client_config, http_client=http)
        yield ChatController(config=client_config, service=service)


class TestChatFlow:
    """End-to-end conversations."""

    async def test_login_and_chat(self, live_controller: ChatController) -> None:
        """Login creates a session and messages get echoed replies."""
        assert await live_controller.login(USERNAME, PASSWORD)
        await live_controller.submit("hello")
        await live_controller.submit("again")

        snapshot = live_controller.snapshot()
        assert snapshot.session_id is not None
        assert snapshot.messages == (
            Message.user("hello"),
            Message.assistant("You said: hello"),
            Message.user("again"),
            Message.assistant("You said: again"),
        )
        assert snapshot.busy is False

    async def test_resume_previous_session(self, live_controller: ChatController) -> None:
        """History of an earlier session is restored after a new chat."""
        await live_controller.login(USERNAME, PASSWORD)
        await live_controller.submit("remember me")
        first = live_controller.snapshot()

        await live_controller.new_chat()
        assert live_controller.snapshot().session_id != first.session_id
        assert live_controller.snapshot().messages == ()

        await live_controller.switch_session(first.session_id)

        resumed = live_controller.snapshot()
        assert resumed.session_id == first.session_id
        assert resumed.messages == first.messages

    async def test_resume_unknown_session_keeps_state(
        self, live_controller: ChatController
    ) -> None:
        """Loading an unknown session leaves the conversation as it was."""
        await live_controller.login(USERNAME, PASSWORD)
        await live_controller.submit("stay")
        before = live_controller.snapshot()

        await live_controller.switch_session("unknown-session")

        assert live_controller.snapshot() == before

    async def test_upload_then_chat(self, live_controller: ChatController) -> None:
        """Uploaded files are listed and chatting continues afterwards."""
        await live_controller.login(USERNAME, PASSWORD)
        await live_controller.upload_files([
            FileRef(name="a.txt", content=b"alpha", content_type="text/plain"),
            FileRef(name="b.txt", content=b"beta", content_type="text/plain"),
        ])
        await live_controller.submit("what did I upload?")

        snapshot = live_controller.snapshot()
        assert [f.name for f in snapshot.files] == ["a.txt", "b.txt"]
        assert snapshot.messages[:2] == (
            Message.user("Uploaded files: a.txt, b.txt"),
            Message.assistant("Received 2 file(s): a.txt, b.txt"),
        )
        assert snapshot.messages[-1] == Message.assistant("You said: what did I upload?")

    async def test_logout_then_login_starts_clean(
        self, live_controller: ChatController
    ) -> None:
        """A new login gets a new, empty session."""
        await live_controller.login(USERNAME, PASSWORD)
        await live_controller.submit("hi")
        old_session = live_controller.snapshot().session_id

        live_controller.logout()
        await live_controller.login(USERNAME, PASSWORD)

        snapshot = live_controller.snapshot()
        assert snapshot.session_id not in (None, old_session)
        assert snapshot.messages == ()
