"""Chat backend endpoints for local development and integration tests.

In-memory stand-in for the real chat service. Implements the four operations
the client uses with the same paths and payloads, and answers chat requests
with a deterministic echo instead of a model call.
"""

import logging
import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile, status

from src.models import Message, Role
from src.models.schemas import (
    ChatRequest,
    ChatResponse,
    HistoryResponse,
    NewSessionResponse,
    UploadResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])

# 10MB per uploaded file
MAX_UPLOAD_SIZE = 10 * 1024 * 1024


class SessionStore:
    """Conversations keyed by session id, kept in process memory."""

    def __init__(self) -> None:
        self._sessions: dict[str, list[Message]] = {}

    def create(self) -> str:
        session_id = uuid.uuid4().hex
        self._sessions[session_id] = []
        return session_id

    def get(self, session_id: str) -> list[Message] | None:
        return self._sessions.get(session_id)

    def save(self, session_id: str, messages: list[Message]) -> None:
        self._sessions[session_id] = list(messages)


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.sessions


StoreDep = Annotated[SessionStore, Depends(get_session_store)]


def build_reply(messages: list[Message]) -> str:
    """Produce the echo reply for the newest user message."""
    return f"You said: {messages[-1].content}"


@router.post("/chat/new", response_model=NewSessionResponse)
async def create_session(store: StoreDep) -> NewSessionResponse:
    """Create an empty chat session."""
    session_id = store.create()
    logger.info(f"Created session {session_id}")
    return NewSessionResponse(session_id=session_id)


@router.get("/chat/load/{session_id}", response_model=HistoryResponse)
async def load_history(session_id: str, store: StoreDep) -> HistoryResponse:
    """Return the stored conversation of a session.

    Unknown sessions are reported in the ``error`` field with status 200,
    the way the real backend does.
    """
    messages = store.get(session_id)
    if messages is None:
        return HistoryResponse(error=f"Session {session_id} not found")
    return HistoryResponse(messages=messages)


@router.post("/chat", response_model=ChatResponse)
async def send_message(payload: ChatRequest, store: StoreDep) -> ChatResponse:
    """Answer the newest user message and store the conversation.

    Raises:
        400: Conversation is empty or does not end with a user message.
    """
    if not payload.messages or payload.messages[-1].role is not Role.USER:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Conversation must end with a user message",
        )

    reply = Message.assistant(build_reply(payload.messages))

    if payload.session_id is not None and store.get(payload.session_id) is not None:
        store.save(payload.session_id, [*payload.messages, reply])
    else:
        logger.warning(f"Answering message for unknown session {payload.session_id}")

    return ChatResponse(content=reply.content)


@router.post("/files/upload", response_model=UploadResponse)
async def upload_files(
    files: Annotated[list[UploadFile], File(alias="files[]")],
) -> UploadResponse:
    """Accept one or more files sent under the ``files[]`` form field.

    Raises:
        400: A file has no name.
        413: A file exceeds the size limit.
    """
    names: list[str] = []
    for file in files:
        if not file.filename:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Filename is required",
            )
        content = await file.read()
        if len(content) > MAX_UPLOAD_SIZE:
            size_mb = len(content) / (1024 * 1024)
            raise HTTPException(
                status_code=status.HTTP_413_CONTENT_TOO_LARGE,
                detail=f"File size ({size_mb:.1f}MB) exceeds maximum allowed (10MB)",
            )
        names.append(file.filename)

    logger.info(f"Received {len(names)} file(s): {', '.join(names)}")
    return UploadResponse(message=f"Received {len(names)} file(s): {', '.join(names)}")
