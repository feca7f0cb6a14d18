"""Main application entry point.

Runs the chat UI, either mounted on the development backend (one server,
port 8080) or on its own against an existing backend at API_BASE_URL.
Environment variables are loaded from .env file.
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


def default_api_base_url(port: int) -> str:
    """Point the UI at the integrated server on ``port`` unless API_BASE_URL is set.

    Must run before the first ClientConfig is created.

    Returns:
        The backend URL the UI will use.
    """
    return os.environ.setdefault("API_BASE_URL", f"http://localhost:{port}")


def run_integrated() -> None:
    """Run the development backend with the NiceGUI chat UI mounted on it.

    The UI talks to the backend over HTTP like any other client. Unless
    API_BASE_URL is set, it is pointed at this server.
    """
    import uvicorn
    from nicegui import ui

    from streamchat.server.app import create_app
    from streamchat.server.responder import EchoResponder

    port = int(os.getenv("PORT", "8080"))
    logger.info(f"Chat UI backend: {default_api_base_url(port)}")

    from streamchat.ui.chat_page import chat_page  # noqa: F401 - Registers the page

    app = create_app(responder=EchoResponder(delay=float(os.getenv("ECHO_DELAY", "0.05"))))

    # Mount NiceGUI onto FastAPI
    ui.run_with(
        app,
        title="streamchat",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "streamchat-secret"),
    )

    logger.info(f"Starting integrated server on http://localhost:{port}")
    logger.info(f"API docs available at http://localhost:{port}/docs")

    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


def run_ui() -> None:
    """Run only the NiceGUI chat UI against the backend at API_BASE_URL."""
    from nicegui import ui

    from streamchat.ui.chat_page import chat_page  # noqa: F401 - Registers the page

    port = int(os.getenv("UI_PORT", "8081"))
    logger.info(f"Starting chat UI on http://localhost:{port}")
    ui.run(title="streamchat", host=os.getenv("HOST", "0.0.0.0"), port=port, reload=False)


def main() -> None:
    """Application entry point.

    Set RUN_MODE=ui to run only the UI against an existing backend.
    Default is integrated mode (backend and UI on port 8080).
    """
    mode = os.getenv("RUN_MODE", "integrated").lower()

    logger.info(f"Starting streamchat in {mode} mode")

    if mode == "ui":
        run_ui()
    else:
        run_integrated()


if __name__ in {"__main__", "__mp_main__"}:
    main()
