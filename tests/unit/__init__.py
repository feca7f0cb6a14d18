"""Unit tests for individual components in isolation.

Ensures fast execution with minimal dependencies.

Coverage:
    - stream/: Decoding, line framing, event parsing and stream sessions
    - chat/: Conversation state machine, controller, API client and config
    - server/: Conversation store and responders

Uses httpx.MockTransport in place of a real backend. Leverages
pytest-check for multiple assertions per test.
"""
