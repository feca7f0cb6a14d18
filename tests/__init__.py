"""Test package for streamchat.

Unit tests cover isolated logic; integration tests drive the development
backend end to end.

Structure:
    - unit/: Individual function and class tests
    - integration/: Endpoint and client-stack workflow tests
    - helpers.py: Event framing and the scripted MockTransport backend

Leverages pytest with pytest-check for soft assertions.
"""
