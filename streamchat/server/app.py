"""FastAPI application factory for the development backend.

Application entry point with lifespan management, middleware, and router
registration.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from streamchat.server.responder import EchoResponder, Responder
from streamchat.server.routes import router as chat_router
from streamchat.server.store import ConversationStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown lifecycle.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    logger.info(f"Starting chat backend with {type(app.state.responder).__name__}...")
    yield
    logger.info("Shutting down chat backend...")


def create_app(
    store: ConversationStore | None = None,
    responder: Responder | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        store: Conversation storage. A fresh in-memory store if not provided.
        responder: Reply generator. Echoes the user if not provided.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="streamchat development backend",
        description=(
            "Local backend speaking the streamchat protocol. Streams replies as "
            "line-framed JSON events and keeps conversations in memory."
        ),
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    application.state.store = store or ConversationStore()
    application.state.responder = responder or EchoResponder()

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["*"],
    )

    application.include_router(chat_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "streamchat"}

    return application


app = create_app()
