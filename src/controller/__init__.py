"""Session and message orchestration.

Owns the single mutable conversation and the login gate, and mediates
between user intents and the backend client.

Responsibilities:
    - Login gate and logout reset
    - Session acquisition, resumption and the decision between them
    - Optimistic message submission with guaranteed busy cleanup
    - File uploads
    - Discarding results that arrive after the conversation moved on

The presentation layer only reads snapshots and forwards intents.
"""

from src.controller.auth import AuthGate
from src.controller.decision import SessionAction, decide_session_action
from src.controller.orchestrator import (
    DEFAULT_UPLOAD_ACK,
    SEND_FAILED_NOTICE,
    UPLOAD_FAILED_NOTICE,
    ChatController,
)
from src.controller.state import ConversationState

__all__ = [
    "DEFAULT_UPLOAD_ACK",
    "SEND_FAILED_NOTICE",
    "UPLOAD_FAILED_NOTICE",
    "AuthGate",
    "ChatController",
    "ConversationState",
    "SessionAction",
    "decide_session_action",
]
