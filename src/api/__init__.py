"""Development chat backend built with FastAPI.

Serves the endpoints the chat client talks to, backed by process memory.

Endpoints:
    - GET /health: Service health status
    - POST /api/chat/new: Create a session
    - GET /api/chat/load/{id}: Session history
    - POST /api/chat: Chat reply for a conversation
    - POST /api/files/upload: Multipart file upload

Used for local runs and integration tests; production deployments point
the client at the real service instead.
"""

from src.api.app import app, create_app

__all__ = ["app", "create_app"]
