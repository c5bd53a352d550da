from pydantic import BaseModel, ConfigDict, Field

from src.models import Message


class _WireModel(BaseModel):
    """Base for payloads exchanged with the chat backend (camelCase on the wire)."""

    model_config = ConfigDict(populate_by_name=True)


class NewSessionResponse(_WireModel):
    """Response of the create-session endpoint.

    Attributes:
        session_id: Server-assigned identifier of the new session.
    """

    session_id: str = Field(..., min_length=1, alias="sessionId")


class HistoryResponse(_WireModel):
    """Response of the load-history endpoint.

    Attributes:
        messages: Stored conversation, in order.
        error: Error message if the session could not be loaded.
    """

    messages: list[Message] = Field(default_factory=list)
    error: str | None = None


class ChatRequest(_WireModel):
    """Request payload for the send-message endpoint.

    Attributes:
        session_id: Session the conversation belongs to. May be null when no
            session could be created; the backend decides what to do with it.
        messages: Full conversation including the newest user message.
    """

    session_id: str | None = Field(None, alias="sessionId")
    messages: list[Message]


class ChatResponse(_WireModel):
    """Response of the send-message endpoint.

    Attributes:
        content: The assistant's reply.
        error: Error message if something went wrong.
    """

    content: str | None = None
    error: str | None = None


class UploadResponse(_WireModel):
    """Response of the file upload endpoint.

    Attributes:
        message: Optional acknowledgement text from the server.
    """

    message: str | None = None
