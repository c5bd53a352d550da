"""HTTP client for the chat backend.

Thin, stateless wrapper around the four backend operations the controller
needs: create a session, load a session's history, send the conversation,
and upload files. Every call is a suspension point for the controller.

Failures are normalized into two exception types so callers can tell a
backend they could not reach apart from one that answered with an error:

- BackendUnavailableError: connection problems, timeouts, non-2xx statuses.
- BackendApplicationError: a well-formed response carrying an ``error`` field,
  or a body that does not match the expected schema.
"""

import logging
from collections.abc import Sequence
from typing import TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from src.client.config import ClientConfig, get_client_config
from src.models import FileRef, Message
from src.models.schemas import (
    ChatRequest,
    ChatResponse,
    HistoryResponse,
    NewSessionResponse,
    UploadResponse,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

NEW_SESSION_PATH = "/api/chat/new"
LOAD_HISTORY_PATH = "/api/chat/load/{session_id}"
SEND_MESSAGE_PATH = "/api/chat"
UPLOAD_FILES_PATH = "/api/files/upload"
UPLOAD_FIELD_NAME = "files[]"


class SessionServiceError(Exception):
    """Raised when a backend operation does not succeed."""

    pass


class BackendUnavailableError(SessionServiceError):
    """Raised on transport failures and non-2xx responses."""

    pass


class BackendApplicationError(SessionServiceError):
    """Raised when the backend reports an error or returns a malformed body."""

    pass


class SessionServiceClient:
    """Async client for the chat backend.

    Holds no conversation state. A single ``httpx.AsyncClient`` is reused for
    all requests; pass one in to control transport and lifecycle (tests use
    this with ``httpx.MockTransport`` or ``httpx.ASGITransport``).
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Optional client configuration.
                    Loads from environment if not provided.
            http_client: Optional preconfigured HTTP client. When omitted, one
                    is created from the config and closed by ``aclose``.
        """
        self._config = config or get_client_config()
        self._owns_http = http_client is None
        self._http = http_client or httpx.AsyncClient(
            base_url=self._config.api_base_url,
            timeout=self._config.request_timeout,
        )

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_http:
            await self._http.aclose()

    async def create_session(self) -> str:
        """Ask the backend for a new chat session.

        Returns:
            The server-assigned session id.
        """
        response = await self._request("POST", NEW_SESSION_PATH)
        data = self._parse(response, NewSessionResponse)
        return data.session_id

    async def load_history(self, session_id: str) -> list[Message]:
        """Load the stored conversation of an existing session.

        Args:
            session_id: Session to load.

        Returns:
            The session's messages, in order.
        """
        response = await self._request(
            "GET", LOAD_HISTORY_PATH.format(session_id=session_id)
        )
        data = self._parse(response, HistoryResponse)
        if data.error:
            raise BackendApplicationError(data.error)
        return data.messages

    async def send_message(
        self,
        session_id: str | None,
        messages: Sequence[Message],
    ) -> str:
        """Send the full conversation and return the assistant's reply.

        Args:
            session_id: Session the conversation belongs to, or None when no
                session could be acquired.
            messages: Full conversation including the newest user message.

        Returns:
            The assistant reply text.
        """
        payload = ChatRequest(session_id=session_id, messages=list(messages))
        response = await self._request(
            "POST",
            SEND_MESSAGE_PATH,
            json=payload.model_dump(mode="json", by_alias=True),
        )
        data = self._parse(response, ChatResponse)
        if data.error:
            raise BackendApplicationError(data.error)
        if data.content is None:
            raise BackendApplicationError("Response is missing the content field")
        return data.content

    async def upload_files(self, files: Sequence[FileRef]) -> str | None:
        """Upload files in a single multipart request.

        Args:
            files: Files to upload, sent in order under the ``files[]`` field.

        Returns:
            The server's acknowledgement text, if it sent one.
        """
        multipart = [
            (UPLOAD_FIELD_NAME, (f.name, f.content, f.content_type)) for f in files
        ]
        response = await self._request("POST", UPLOAD_FILES_PATH, files=multipart)
        data = self._parse(response, UploadResponse)
        return data.message

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        """Issue a request, mapping transport failures and bad statuses."""
        try:
            response = await self._http.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise BackendUnavailableError(
                f"HTTP {e.response.status_code} from {method} {url}"
            ) from e
        except httpx.RequestError as e:
            raise BackendUnavailableError(f"Connection failed: {e}") from e
        logger.debug(f"{method} {url} -> {response.status_code}")
        return response

    @staticmethod
    def _parse(response: httpx.Response, model: type[ModelT]) -> ModelT:
        """Validate a JSON response body against a wire model."""
        try:
            return model.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise BackendApplicationError(
                f"Malformed {model.__name__} from backend: {e}"
            ) from e
