"""Backend access for the chat controller.

Responsibilities:
    - Configuration loading (backend URL, timeout, login credential pair)
    - Stateless request/response calls: create session, load history,
      send message, upload files
    - Normalizing transport and application failures into typed errors

Holds no conversation state. All state lives in the controller.
"""

from src.client.config import ClientConfig, get_client_config
from src.client.session_service import (
    BackendApplicationError,
    BackendUnavailableError,
    SessionServiceClient,
    SessionServiceError,
)

__all__ = [
    "BackendApplicationError",
    "BackendUnavailableError",
    "ClientConfig",
    "SessionServiceClient",
    "SessionServiceError",
    "get_client_config",
]
