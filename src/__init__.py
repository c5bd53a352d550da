"""Chat client - session and message orchestration for a chat backend.

Combines httpx for backend calls, Pydantic for data validation,
NiceGUI for the chat interface, and FastAPI for a development backend.

Components:
    - client: Backend configuration and HTTP calls
    - controller: Conversation state, login gate and orchestration
    - models: Message, file and wire schemas
    - ui: Web interface for chat interactions
    - api: In-memory development backend
"""

__version__ = "0.1.0"
