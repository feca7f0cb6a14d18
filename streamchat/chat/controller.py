"""Controller for one chat view.

Owns the state the view renders: the conversation accumulator, the cached
conversation list and the in-flight reply stream. The UI calls into it and
re-renders from its ``on_change`` callback, so none of this state lives in
module globals.

Only one reply streams per view. Sending while a reply is in flight is
rejected. Switching to a new chat or to another conversation cancels the
in-flight stream before the view changes, so a reply never lands in a
conversation that is no longer displayed.
"""

import asyncio
import logging
from collections.abc import Callable

from streamchat.chat.accumulator import ConversationAccumulator
from streamchat.chat.api_client import ChatApiClient, ChatApiError
from streamchat.models.events import StreamEvent
from streamchat.models.schemas import Conversation
from streamchat.stream.session import StreamSession

logger = logging.getLogger(__name__)


class ChatController:
    """Coordinates stream sessions, conversation state and the conversation list."""

    def __init__(
        self,
        api: ChatApiClient,
        session: StreamSession,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            api: Client for the conversation list and history endpoints.
            session: Stream session used for every reply.
            on_change: Called after every state change the view should render.
        """
        self.api = api
        self.session = session
        self.on_change = on_change
        self.conversations: list[Conversation] = []
        self.accumulator = ConversationAccumulator(
            on_conversations_changed=self._mark_conversations_stale
        )
        self._stream_task: asyncio.Task[StreamEvent] | None = None
        self._conversations_stale = False

    @property
    def conversation_id(self) -> int | None:
        return self.accumulator.conversation_id

    @property
    def is_streaming(self) -> bool:
        return self.accumulator.is_busy

    async def send(self, text: str) -> StreamEvent | None:
        """Send a user message and stream the reply into the conversation.

        Args:
            text: The user's message.

        Returns:
            The terminal event of the reply, or None if the message was
            rejected or the stream was cancelled.
        """
        if self.accumulator.submit(text) is None:
            return None
        self._notify()

        task = asyncio.create_task(
            self.session.run(self.accumulator.conversation_id, text.strip(), self._apply)
        )
        self._stream_task = task
        try:
            terminal = await task
        except asyncio.CancelledError:
            current = asyncio.current_task()
            if current is not None and current.cancelling():
                raise
            logger.info("Reply stream cancelled")
            return None
        except Exception as e:
            logger.exception("Reply stream failed unexpectedly")
            if self.accumulator.fail(f"Unexpected error: {e}"):
                self._notify()
            return None
        finally:
            if self._stream_task is task:
                self._stream_task = None

        if self._conversations_stale:
            self._conversations_stale = False
            await self.refresh_conversations()
        return terminal

    async def refresh_conversations(self) -> bool:
        """Reload the conversation list; keeps the cached list on failure."""
        try:
            self.conversations = await self.api.list_conversations()
        except ChatApiError as e:
            logger.warning(f"Failed to load conversations: {e}")
            return False
        self._notify()
        return True

    async def open_conversation(self, conversation_id: int) -> bool:
        """Show an existing conversation, cancelling any in-flight reply.

        The current view, including its in-flight reply, is left untouched
        if the history cannot be loaded.
        """
        try:
            messages = await self.api.get_messages(conversation_id)
        except ChatApiError as e:
            logger.warning(f"Failed to load conversation {conversation_id}: {e}")
            return False
        self._cancel_stream()
        self.accumulator.reset(conversation_id, messages)
        self._notify()
        return True

    def new_chat(self) -> None:
        """Show an empty, not yet created conversation."""
        self._cancel_stream()
        self.accumulator.reset()
        self._notify()

    def close(self) -> None:
        self._cancel_stream()

    def _cancel_stream(self) -> None:
        if self._stream_task is not None and not self._stream_task.done():
            logger.info("Cancelling in-flight reply stream")
            self._stream_task.cancel()
        self._stream_task = None
        self._conversations_stale = False

    def _apply(self, event: StreamEvent) -> None:
        if self.accumulator.apply(event):
            self._notify()

    def _mark_conversations_stale(self, conversation_id: int) -> None:
        logger.debug(f"Conversation {conversation_id} is new to the list")
        self._conversations_stale = True

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change()
