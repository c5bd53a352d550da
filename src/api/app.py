"""FastAPI application factory for the development chat backend.

Lifespan management, middleware, and router registration.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.routes import SessionStore
from src.api.routes import router as chat_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Log startup and shutdown of the development backend.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    logger.info("Starting development chat backend...")
    yield
    logger.info("Shutting down development chat backend...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Each application gets its own in-memory session store.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="Chat Backend (development)",
        description=(
            "In-memory stand-in for the chat service: creates sessions, "
            "stores and returns conversation history, echoes chat messages, "
            "and accepts multipart file uploads."
        ),
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    application.state.sessions = SessionStore()

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.include_router(chat_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "chat-backend"}

    return application


app = create_app()
