from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Role(str, Enum):
    """Speaker of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    """A finalized chat message.

    Messages are immutable once created. Content still streaming in lives in
    the conversation accumulator's buffer, never on a Message.

    Attributes:
        id: Locally unique identifier.
        role: Who produced the message.
        content: The message text.
        created_at: Creation timestamp.
        is_error: True when the message reports a failed reply.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    role: Role
    content: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    is_error: bool = False


class Conversation(BaseModel):
    """Summary of a stored conversation, as listed by the backend.

    Attributes:
        id: Backend-assigned conversation identifier.
        title: Display title (derived from the first message).
        created_at: Creation timestamp.
    """

    id: int
    title: str = ""
    created_at: datetime


class ChatRequest(BaseModel):
    """Request payload for the streaming chat endpoint.

    Attributes:
        conversation_id: Existing conversation, or 0 to start a new one.
        message: The user's message.
    """

    conversation_id: int = Field(default=0, ge=0)
    message: str = Field(..., min_length=1)

    @field_validator("message", mode="before")
    @classmethod
    def strip_message(cls, v: str) -> str:
        """Strip whitespace from message before validation."""
        if isinstance(v, str):
            return v.strip()
        return v


class ConversationList(BaseModel):
    """Response body of the conversation listing endpoint."""

    conversations: list[Conversation] = Field(default_factory=list)


class MessageList(BaseModel):
    """Response body of the conversation history endpoint."""

    messages: list[Message] = Field(default_factory=list)
