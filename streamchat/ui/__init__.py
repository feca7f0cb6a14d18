"""NiceGUI interface - thin visualization layer for chat interactions.

Responsibilities:
    - Conversation list with new-chat and history navigation
    - Chat message display with progressive rendering of streaming replies
    - Distinct styling for failed replies

Contains no conversation logic. Renders the state owned by ChatController.
"""
