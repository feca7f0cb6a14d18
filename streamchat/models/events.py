"""Stream event variants carried by ``data:`` lines of a chat stream.

Each payload is a JSON object whose ``type`` field selects the variant.
``error`` and ``done`` are terminal: a stream carries exactly one of them,
and it is the last event a session delivers.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class _Event(BaseModel):
    model_config = ConfigDict(frozen=True)

    @property
    def is_terminal(self) -> bool:
        return False


class StartEvent(_Event):
    """The backend assigned or confirmed the conversation identifier."""

    type: Literal["start"] = "start"
    conversation_id: int


class ContentEvent(_Event):
    """An incremental text fragment of the assistant reply."""

    type: Literal["content"] = "content"
    content: str = ""


class ErrorEvent(_Event):
    """The reply failed. ``error`` is shown to the user verbatim."""

    type: Literal["error"] = "error"
    error: str = "Unknown error"

    @property
    def is_terminal(self) -> bool:
        return True


class DoneEvent(_Event):
    """The reply completed successfully."""

    type: Literal["done"] = "done"
    conversation_id: int | None = None

    @property
    def is_terminal(self) -> bool:
        return True


StreamEvent = Annotated[
    StartEvent | ContentEvent | ErrorEvent | DoneEvent,
    Field(discriminator="type"),
]

EVENT_TYPES = frozenset({"start", "content", "error", "done"})

stream_event_adapter: TypeAdapter[StreamEvent] = TypeAdapter(StreamEvent)
