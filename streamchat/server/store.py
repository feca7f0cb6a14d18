"""In-memory conversation storage for the development backend."""

import itertools
from datetime import UTC, datetime

from streamchat.models.schemas import Conversation, Message, Role

TITLE_MAX_LENGTH = 50


def make_title(message: str, max_length: int = TITLE_MAX_LENGTH) -> str:
    """Derive a conversation title from its first message."""
    if len(message) <= max_length:
        return message
    return message[:max_length] + "..."


class ConversationStore:
    """Conversations and their messages, kept in process memory.

    Conversations are listed most recently active first.
    """

    def __init__(self) -> None:
        self._conversations: dict[int, Conversation] = {}
        self._messages: dict[int, list[Message]] = {}
        self._conversation_ids = itertools.count(1)
        self._message_ids = itertools.count(1)

    def create(self, title: str) -> Conversation:
        conversation = Conversation(
            id=next(self._conversation_ids),
            title=title,
            created_at=datetime.now(UTC),
        )
        self._conversations[conversation.id] = conversation
        self._messages[conversation.id] = []
        return conversation

    def get(self, conversation_id: int) -> Conversation | None:
        return self._conversations.get(conversation_id)

    def list_conversations(self) -> list[Conversation]:
        return list(reversed(self._conversations.values()))

    def messages(self, conversation_id: int) -> list[Message]:
        return list(self._messages.get(conversation_id, []))

    def add_message(self, conversation_id: int, role: Role, content: str) -> Message:
        """Append a message and mark the conversation as most recently active.

        Raises:
            KeyError: If the conversation does not exist.
        """
        conversation = self._conversations.pop(conversation_id)
        self._conversations[conversation_id] = conversation
        message = Message(id=next(self._message_ids), role=role, content=content)
        self._messages[conversation_id].append(message)
        return message
