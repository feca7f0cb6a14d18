"""Conversation state and backend access for the chat view.

Responsibilities:
    - Conversation state machine folding stream events into messages
    - View controller enforcing one in-flight reply per conversation view
    - Conversation list and history requests
    - Client configuration from the environment
    - Per-page HTTP client lifecycle across reconnects

Keeps all view state explicit and owned by the controller, so the UI
layer only renders it.
"""

from streamchat.chat.accumulator import ConversationAccumulator, Phase
from streamchat.chat.api_client import ChatApiClient, ChatApiError
from streamchat.chat.config import ClientConfig, get_client_config
from streamchat.chat.connection import PageConnection
from streamchat.chat.controller import ChatController

__all__ = [
    "ChatApiClient",
    "ChatApiError",
    "ChatController",
    "ClientConfig",
    "ConversationAccumulator",
    "PageConnection",
    "Phase",
    "get_client_config",
]
