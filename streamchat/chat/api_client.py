"""Request/response calls to the chat backend's conversation endpoints."""

import httpx
from pydantic import ValidationError

from streamchat.models.schemas import Conversation, ConversationList, Message, MessageList


class ChatApiError(Exception):
    """Raised when a conversation endpoint call fails."""

    pass


class ChatApiClient:
    """Thin client for listing conversations and loading their history."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def list_conversations(self) -> list[Conversation]:
        """Fetch all conversations, as ordered by the backend.

        Raises:
            ChatApiError: On transport failure, error status or bad payload.
        """
        data = await self._get_json("/api/conversations")
        try:
            return ConversationList.model_validate(data).conversations
        except ValidationError as e:
            raise ChatApiError(f"Invalid conversation list: {e.error_count()} error(s)") from e

    async def get_messages(self, conversation_id: int) -> list[Message]:
        """Fetch the message history of one conversation.

        Raises:
            ChatApiError: On transport failure, error status or bad payload.
        """
        data = await self._get_json(f"/api/conversations/{conversation_id}/messages")
        try:
            return MessageList.model_validate(data).messages
        except ValidationError as e:
            raise ChatApiError(f"Invalid message history: {e.error_count()} error(s)") from e

    async def _get_json(self, path: str) -> object:
        try:
            response = await self._client.get(path)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            raise ChatApiError(f"HTTP {e.response.status_code} from {path}") from e
        except httpx.RequestError as e:
            raise ChatApiError(f"Connection failed: {e}") from e
        except ValueError as e:
            raise ChatApiError(f"Invalid JSON from {path}") from e
        except RuntimeError as e:
            # Raised by httpx for requests on a closed client
            raise ChatApiError(f"Client unavailable: {e}") from e
