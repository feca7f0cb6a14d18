"""Integration tests for components working together as a system.

No mocks for core functionality - tests real interactions.

Coverage:
    - Streaming and conversation endpoints with real HTTP requests
    - StreamSession and ChatController against the running backend

Uses httpx ASGITransport, so no server process or network is needed.
"""
