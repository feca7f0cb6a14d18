"""One request/response exchange with the streaming chat endpoint.

A session posts the user's message, reads the response body chunk by chunk
and hands out stream events in the order their lines appeared. Whatever
happens on the wire, the last event a session delivers is its one and only
terminal event: the server's own ``done``/``error``, or a synthesized
ErrorEvent for rejected requests, transport failures and streams that end
early.
"""

import logging
from collections.abc import AsyncGenerator, Callable
from contextlib import aclosing

import httpx

from streamchat.models.events import ErrorEvent, StreamEvent
from streamchat.models.schemas import ChatRequest
from streamchat.stream.parser import StreamDecoder

logger = logging.getLogger(__name__)

STREAM_PATH = "/api/chat/stream"
INCOMPLETE_STREAM_ERROR = "Stream ended before the reply was complete"


def describe_transport_error(error: httpx.HTTPError) -> str:
    """Return a user-presentable description of a transport failure."""
    return str(error) or type(error).__name__


class StreamSession:
    """Streams assistant replies from the chat endpoint.

    The session is pull-based: ``events()`` reads the next chunk only when
    the consumer asks for the next event, so everything the consumer does
    with an event finishes before the transport is read again.

    Read stalls are bounded by the client's read timeout, which acts as
    the idle timeout. Cancelling the task that iterates a session closes
    the response, and nothing is delivered after that.
    """

    def __init__(self, client: httpx.AsyncClient, path: str = STREAM_PATH) -> None:
        """Initialize the session.

        Args:
            client: HTTP client, normally bound to the backend base URL.
            path: Streaming chat endpoint path.
        """
        self._client = client
        self._path = path

    async def events(
        self,
        conversation_id: int | None,
        message: str,
    ) -> AsyncGenerator[StreamEvent]:
        """Send ``message`` and yield the reply's stream events.

        Args:
            conversation_id: Conversation to continue, or None/0 for a new one.
            message: The user's message.

        Yields:
            Stream events in wire order. The last one is always terminal.
        """
        request = ChatRequest(conversation_id=conversation_id or 0, message=message)
        decoder = StreamDecoder()
        finished = False

        try:
            async with self._client.stream(
                "POST",
                self._path,
                json=request.model_dump(),
                headers={"Accept": "text/event-stream"},
            ) as response:
                if not response.is_success:
                    logger.warning(f"Chat stream rejected with HTTP {response.status_code}")
                    finished = True
                    yield ErrorEvent(error=f"Request failed: HTTP {response.status_code}")
                    return

                async for chunk in response.aiter_bytes():
                    for event in decoder.feed(chunk):
                        finished = event.is_terminal
                        yield event
                        if finished:
                            return

                for event in decoder.close():
                    finished = event.is_terminal
                    yield event
                    if finished:
                        return
        except httpx.HTTPError as e:
            if finished:
                logger.debug(f"Ignoring transport error after terminal event: {e!r}")
                return
            logger.warning(f"Chat stream transport failure: {e!r}")
            yield ErrorEvent(error=describe_transport_error(e))
            return

        logger.warning(
            f"Chat stream ended without a terminal event ({decoder.dropped_lines} dropped lines)"
        )
        yield ErrorEvent(error=INCOMPLETE_STREAM_ERROR)

    async def run(
        self,
        conversation_id: int | None,
        message: str,
        on_event: Callable[[StreamEvent], None],
    ) -> StreamEvent:
        """Stream a reply, pushing every event into ``on_event`` as it arrives.

        Args:
            conversation_id: Conversation to continue, or None/0 for a new one.
            message: The user's message.
            on_event: Called synchronously for each event, in order.

        Returns:
            The terminal event.
        """
        logger.info(f"Streaming reply for conversation {conversation_id or 'new'}")
        last: StreamEvent | None = None
        async with aclosing(self.events(conversation_id, message)) as events:
            async for event in events:
                on_event(event)
                last = event
        logger.info(f"Reply stream finished with '{last.type}'")
        return last
