"""Reply generators for the development backend.

A responder receives the conversation history (ending with the new user
message) and yields the assistant reply as text fragments. Raising from a
responder ends the stream with an ``error`` event.
"""

import asyncio
from collections.abc import AsyncIterator
from typing import Protocol

from streamchat.models.schemas import Message, Role


class Responder(Protocol):
    def __call__(self, history: list[Message]) -> AsyncIterator[str]: ...


class EchoResponder:
    """Echoes the latest user message back, one word per fragment."""

    def __init__(self, delay: float = 0.0) -> None:
        """Initialize the responder.

        Args:
            delay: Seconds to wait between fragments, to make streaming visible.
        """
        self.delay = delay

    async def __call__(self, history: list[Message]) -> AsyncIterator[str]:
        last = next((m for m in reversed(history) if m.role == Role.USER), None)
        text = f"Echo: {last.content}" if last else "Hello!"
        for i, word in enumerate(text.split(" ")):
            if self.delay and i:
                await asyncio.sleep(self.delay)
            yield word if i == 0 else f" {word}"
