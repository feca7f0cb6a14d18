"""Pydantic models for chat data and the streaming wire protocol.

Provides type safety and validation for everything crossing the HTTP
boundary, in both the client and the development backend.

Models:
    - Message: A finalized chat message
    - Conversation: Summary of a stored conversation
    - ChatRequest: Payload of the streaming chat endpoint
    - StartEvent, ContentEvent, ErrorEvent, DoneEvent: Stream event variants
"""

from streamchat.models.events import (
    EVENT_TYPES,
    ContentEvent,
    DoneEvent,
    ErrorEvent,
    StartEvent,
    StreamEvent,
    stream_event_adapter,
)
from streamchat.models.schemas import (
    ChatRequest,
    Conversation,
    ConversationList,
    Message,
    MessageList,
    Role,
)

__all__ = [
    "EVENT_TYPES",
    "ChatRequest",
    "ContentEvent",
    "Conversation",
    "ConversationList",
    "DoneEvent",
    "ErrorEvent",
    "Message",
    "MessageList",
    "Role",
    "StartEvent",
    "StreamEvent",
    "stream_event_adapter",
]
