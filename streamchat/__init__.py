"""streamchat - a chat client that streams assistant replies from an LLM backend.

Combines httpx for the streaming transport, Pydantic for wire models and
configuration, NiceGUI for the chat view, and FastAPI for a local
development backend that speaks the same protocol.

Components:
    - stream: byte decoding, line framing, event parsing, stream sessions
    - chat: conversation state machine, view controller, API client, config
    - models: message, conversation and stream event schemas
    - server: development backend emitting the streaming protocol
    - ui: web interface for chat interactions
"""

__version__ = "0.1.0"
