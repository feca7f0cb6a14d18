"""Conversation state machine for one chat view.

Phases:
    IDLE -> SENDING -> STREAMING -> FINALIZING -> FINALIZED
                   \\-> FAILED  (from SENDING or STREAMING)

IDLE, FINALIZED and FAILED are resting phases: a new message may be
submitted from any of them. Every session ends with exactly one new
message after the user's: the assistant reply, or an error message.
"""

import itertools
import logging
from collections.abc import Callable, Iterable
from enum import Enum

from streamchat.models.events import (
    ContentEvent,
    DoneEvent,
    ErrorEvent,
    StartEvent,
    StreamEvent,
)
from streamchat.models.schemas import Message, Role

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    """Lifecycle phase of the current exchange."""

    IDLE = "idle"
    SENDING = "sending"
    STREAMING = "streaming"
    FINALIZING = "finalizing"
    FINALIZED = "finalized"
    FAILED = "failed"


RESTING_PHASES = frozenset({Phase.IDLE, Phase.FINALIZED, Phase.FAILED})
IN_FLIGHT_PHASES = frozenset({Phase.SENDING, Phase.STREAMING})


class ConversationAccumulator:
    """Folds stream events into the message list of one conversation view.

    Attributes:
        conversation_id: Backend conversation id, None until one is known.
        messages: Finalized messages, oldest first.
        phase: Current lifecycle phase.
    """

    def __init__(
        self,
        conversation_id: int | None = None,
        messages: Iterable[Message] = (),
        on_conversations_changed: Callable[[int], None] | None = None,
    ) -> None:
        """Initialize the accumulator.

        Args:
            conversation_id: Conversation being displayed, if any.
            messages: Its existing history.
            on_conversations_changed: Called once after a reply finalizes
                in a conversation other than the one the session started
                in (typically a newly created one), with the new id.
        """
        self.on_conversations_changed = on_conversations_changed
        self.reset(conversation_id, messages)

    @property
    def streaming_content(self) -> str:
        """Everything received for the in-progress reply so far."""
        return self._buffer

    @property
    def is_busy(self) -> bool:
        return self.phase not in RESTING_PHASES

    def reset(
        self,
        conversation_id: int | None = None,
        messages: Iterable[Message] = (),
    ) -> None:
        """Switch the view to another conversation, dropping in-flight state."""
        self.conversation_id = conversation_id
        self.messages: list[Message] = list(messages)
        self.phase = Phase.IDLE
        self._buffer = ""
        self._started_with: int | None = conversation_id
        self._adopted_id: int | None = None
        self._ids = itertools.count(max((m.id for m in self.messages), default=0) + 1)

    def submit(self, text: str) -> Message | None:
        """Start an exchange with the user's ``text``.

        The user message is appended immediately, before the backend has
        seen it.

        Returns:
            The provisional user message, or None if the submission was
            rejected (blank text, or an exchange already in flight).
        """
        text = text.strip()
        if not text:
            return None
        if self.is_busy:
            logger.debug(f"Rejecting submit while {self.phase.value}")
            return None

        message = self._append(Role.USER, text)
        self._buffer = ""
        self._started_with = self.conversation_id
        self._adopted_id = None
        self.phase = Phase.SENDING
        return message

    def apply(self, event: StreamEvent) -> bool:
        """Fold one stream event into the conversation state.

        Returns:
            True if the event changed state, False if it was ignored
            because no exchange is in flight.
        """
        if self.phase not in IN_FLIGHT_PHASES:
            logger.debug(f"Ignoring '{event.type}' event while {self.phase.value}")
            return False

        if isinstance(event, StartEvent):
            self.phase = Phase.STREAMING
            self._adopt(event.conversation_id)
        elif isinstance(event, ContentEvent):
            self.phase = Phase.STREAMING
            self._buffer += event.content
        elif isinstance(event, DoneEvent):
            self._finalize(event.conversation_id)
        elif isinstance(event, ErrorEvent):
            self._fail(event.error)
        return True

    def fail(self, reason: str) -> bool:
        """End the in-flight exchange with a client-side failure."""
        return self.apply(ErrorEvent(error=reason))

    def _adopt(self, conversation_id: int | None) -> None:
        if not conversation_id:
            return
        self._adopted_id = conversation_id
        if self.conversation_id is None:
            self.conversation_id = conversation_id

    def _finalize(self, conversation_id: int | None) -> None:
        self.phase = Phase.FINALIZING
        if self._adopted_id is None:
            self._adopt(conversation_id)
        self._append(Role.ASSISTANT, self._buffer)
        self._buffer = ""
        self.phase = Phase.FINALIZED

        changed = self._adopted_id is not None and self._adopted_id != self._started_with
        if changed and self.on_conversations_changed is not None:
            self.on_conversations_changed(self._adopted_id)

    def _fail(self, error: str) -> None:
        # Partial content is discarded rather than committed as if complete.
        self._buffer = ""
        self._append(Role.ASSISTANT, error, is_error=True)
        self.phase = Phase.FAILED

    def _append(self, role: Role, content: str, is_error: bool = False) -> Message:
        message = Message(id=next(self._ids), role=role, content=content, is_error=is_error)
        self.messages.append(message)
        return message
