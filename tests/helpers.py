"""Test helpers: event framing and a scripted backend for httpx.MockTransport."""

import asyncio
import json
from collections.abc import AsyncIterator

import httpx


def frame(payload: dict) -> bytes:
    """Encode one event the way the backend frames it."""
    return f"data: {json.dumps(payload, ensure_ascii=False)}\n\n".encode()


class StreamBackend:
    """Scripted chat backend for httpx.MockTransport.

    The streaming endpoint answers with ``status_code`` and a body made of
    ``chunks``, delivered one read at a time. ``error`` is raised after the
    last chunk, ``connect_error`` instead of answering at all. When
    ``hold_after`` is set, the body pauses after that many chunks until
    ``release`` is set.
    """

    def __init__(self) -> None:
        self.chunks: list[bytes] = []
        self.status_code = 200
        self.error: Exception | None = None
        self.connect_error: Exception | None = None
        self.hold_after: int | None = None
        self.release = asyncio.Event()
        self.chunks_sent = 0
        self.stream_requests: list[dict] = []
        self.conversations: list[dict] = []
        self.messages: dict[int, list[dict]] = {}
        self.list_calls = 0
        self.fail_listing = False

    async def _body(self) -> AsyncIterator[bytes]:
        for i, chunk in enumerate(self.chunks):
            if self.hold_after is not None and i == self.hold_after:
                await self.release.wait()
            self.chunks_sent += 1
            yield chunk
        if self.error is not None:
            raise self.error

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path == "/api/chat/stream":
            if self.connect_error is not None:
                raise self.connect_error
            self.stream_requests.append(json.loads(request.content))
            return httpx.Response(
                self.status_code,
                content=self._body(),
                headers={"content-type": "text/event-stream"},
            )
        if path == "/api/conversations":
            self.list_calls += 1
            if self.fail_listing:
                return httpx.Response(500, json={"error": "database unavailable"})
            return httpx.Response(200, json={"conversations": self.conversations})
        if path.startswith("/api/conversations/") and path.endswith("/messages"):
            conversation_id = int(path.split("/")[3])
            if conversation_id not in self.messages:
                return httpx.Response(404, json={"detail": "not found"})
            return httpx.Response(200, json={"messages": self.messages[conversation_id]})
        return httpx.Response(404)
