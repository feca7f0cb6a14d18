"""Backend connection for one chat page.

NiceGUI reports every websocket drop as a disconnect, including short ones
the page reconnects from. A disconnect cancels the in-flight reply and
closes the HTTP client; the next use reopens a client and rebinds the
controller to it, so a page that reconnects keeps working.
"""

import logging
from collections.abc import Callable

from streamchat.chat.api_client import ChatApiClient
from streamchat.chat.config import ClientConfig
from streamchat.chat.controller import ChatController
from streamchat.stream.session import StreamSession

logger = logging.getLogger(__name__)


class PageConnection:
    """Owns the HTTP client and the ChatController of one page.

    Attributes:
        config: Backend settings used for every client.
        http: The current HTTP client.
        controller: The page's controller, bound to ``http``.
    """

    def __init__(
        self,
        config: ClientConfig,
        on_change: Callable[[], None] | None = None,
        **client_kwargs,
    ) -> None:
        """Initialize the connection.

        Args:
            config: Backend settings.
            on_change: Passed to the controller.
            **client_kwargs: Extra arguments for every HTTP client created.
        """
        self.config = config
        self._client_kwargs = client_kwargs
        self.http = config.create_http_client(**client_kwargs)
        self.controller = ChatController(
            ChatApiClient(self.http),
            StreamSession(self.http, config.stream_path),
            on_change=on_change,
        )

    def ensure_open(self) -> bool:
        """Reopen the HTTP client if it was closed.

        Returns:
            True if a new client was created.
        """
        if not self.http.is_closed:
            return False
        logger.info("Reopening backend HTTP client after disconnect")
        self.http = self.config.create_http_client(**self._client_kwargs)
        self.controller.api = ChatApiClient(self.http)
        self.controller.session = StreamSession(self.http, self.config.stream_path)
        return True

    async def suspend(self) -> None:
        """Cancel the in-flight reply and release the HTTP client."""
        self.controller.close()
        await self.http.aclose()
