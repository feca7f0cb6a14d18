"""Development backend speaking the chat streaming protocol.

Lets the client run and be integration-tested without a real model
provider.

Endpoints:
    - POST /api/chat/stream: Stream a reply as line-framed JSON events
    - GET /api/conversations: List conversations
    - GET /api/conversations/{id}/messages: Conversation history
    - GET /health: Service health status
"""
