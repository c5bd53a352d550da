"""Main application entry point.

Runs the NiceGUI chat interface, optionally mounted on the development
backend. Environment variables are loaded from .env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def run_integrated() -> None:
    """Run the development backend with NiceGUI mounted on the same server.

    FastAPI handles the /api routes, NiceGUI handles the UI.
    Point API_BASE_URL at this server (the default does).
    """
    import uvicorn
    from nicegui import ui

    from src.api.app import create_app
    from src.ui.chat_page import chat_page  # noqa: F401 - Registers the page

    app = create_app()

    ui.run_with(
        app,
        title="Chat",
        favicon="💬",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "chat-client-secret"),
    )

    port = int(os.getenv("PORT", "8000"))
    logger.info(f"Starting integrated server on http://localhost:{port}")
    logger.info(f"Backend API docs available at http://localhost:{port}/docs")

    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


def run_ui() -> None:
    """Run only the chat interface against the backend at API_BASE_URL."""
    from nicegui import ui

    from src.ui.chat_page import chat_page  # noqa: F401 - Registers the page

    logger.info(f"Using chat backend at {os.getenv('API_BASE_URL', 'http://localhost:8000')}")
    ui.run(
        title="Chat",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8080")),
        reload=False,
    )


def main() -> None:
    """Application entry point.

    Set RUN_MODE=ui to serve only the interface against an external backend.
    Default is integrated mode (development backend and UI on port 8000).
    """
    mode = os.getenv("RUN_MODE", "integrated").lower()

    logger.info(f"Starting chat client in {mode} mode")

    if mode == "ui":
        run_ui()
    else:
        run_integrated()


if __name__ in {"__main__", "__mp_main__"}:
    main()
