"""Pydantic models for the conversation held by the chat controller.

Provides immutable value types shared by the controller, the service client
and the presentation layer.

Models:
    - Role: Speaker of a message
    - Message: One turn in a conversation
    - FileRef: Client-side handle to a file attached to the conversation
    - ConversationSnapshot: Read-only view of the conversation state
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    """Speaker of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    """A single chat message in the conversation.

    Attributes:
        role: The speaker identifier (user or assistant).
        content: The message text.
    """

    model_config = ConfigDict(frozen=True)

    role: Role = Field(..., description="Message role: 'user' or 'assistant'")
    content: str = Field(..., description="The message content")

    @classmethod
    def user(cls, content: str) -> "Message":
        return cls(role=Role.USER, content=content)

    @classmethod
    def assistant(cls, content: str) -> "Message":
        return cls(role=Role.ASSISTANT, content=content)


class FileRef(BaseModel):
    """A file the user attached to the conversation.

    Attributes:
        name: Original file name.
        content: Raw file bytes.
        content_type: MIME type sent with the multipart upload.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Original filename")
    content: bytes = Field(..., description="Raw file content")
    content_type: str = Field(
        default="application/octet-stream", description="MIME type of the file"
    )


class ConversationSnapshot(BaseModel):
    """Point-in-time copy of the conversation state.

    Attributes:
        session_id: Current server-assigned session, if any.
        messages: Ordered conversation messages.
        files: Files confirmed by the upload endpoint, in upload order.
        busy: Whether a send round trip is outstanding.
    """

    model_config = ConfigDict(frozen=True)

    session_id: str | None = None
    messages: tuple[Message, ...] = ()
    files: tuple[FileRef, ...] = ()
    busy: bool = False
