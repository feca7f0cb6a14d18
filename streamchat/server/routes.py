"""Chat streaming and conversation endpoints.

Streams replies as ``data: <json>\\n\\n`` frames: one ``start`` frame with
the conversation id, ``content`` frames with reply fragments, then a single
``done`` frame, or an ``error`` frame if the reply could not be produced.
"""

import logging
from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import StreamingResponse
from pydantic import BaseModel

from streamchat.models.events import ContentEvent, DoneEvent, ErrorEvent, StartEvent
from streamchat.models.schemas import (
    ChatRequest,
    Conversation,
    ConversationList,
    MessageList,
    Role,
)
from streamchat.server.responder import Responder
from streamchat.server.store import ConversationStore, make_title

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])


def get_store(request: Request) -> ConversationStore:
    return request.app.state.store


def get_responder(request: Request) -> Responder:
    return request.app.state.responder


StoreDep = Annotated[ConversationStore, Depends(get_store)]
ResponderDep = Annotated[Responder, Depends(get_responder)]


def _frame(event: BaseModel) -> str:
    return f"data: {event.model_dump_json()}\n\n"


def _get_conversation(store: ConversationStore, conversation_id: int) -> Conversation:
    """Look up a conversation.

    Raises:
        HTTPException: 404 if the conversation does not exist.
    """
    conversation = store.get(conversation_id)
    if conversation is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Conversation {conversation_id} not found",
        )
    return conversation


async def _reply_frames(
    store: ConversationStore,
    responder: Responder,
    conversation_id: int,
) -> AsyncGenerator[str]:
    """Generate the frames of one reply and store it once complete."""
    yield _frame(StartEvent(conversation_id=conversation_id))

    parts: list[str] = []
    try:
        async for fragment in responder(store.messages(conversation_id)):
            parts.append(fragment)
            yield _frame(ContentEvent(content=fragment))
    except Exception as e:
        logger.error(f"Reply generation failed for conversation {conversation_id}: {e}")
        yield _frame(ErrorEvent(error=f"Failed to generate response: {e}"))
        return

    store.add_message(conversation_id, Role.ASSISTANT, "".join(parts))
    yield _frame(DoneEvent(conversation_id=conversation_id))


@router.post("/chat/stream")
async def chat_stream(
    payload: ChatRequest,
    store: StoreDep,
    responder: ResponderDep,
) -> StreamingResponse:
    """Stream the assistant reply to a user message.

    A ``conversation_id`` of 0 starts a new conversation titled after the
    message.

    Raises:
        404: Unknown conversation id.
        422: Missing or blank message.
    """
    if payload.conversation_id:
        conversation = _get_conversation(store, payload.conversation_id)
    else:
        conversation = store.create(make_title(payload.message))
        logger.info(f"Created conversation {conversation.id}")

    store.add_message(conversation.id, Role.USER, payload.message)

    return StreamingResponse(
        _reply_frames(store, responder, conversation.id),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )


@router.get("/conversations", response_model=ConversationList)
async def list_conversations(store: StoreDep) -> ConversationList:
    """List conversations, most recently active first."""
    return ConversationList(conversations=store.list_conversations())


@router.get("/conversations/{conversation_id}/messages", response_model=MessageList)
async def get_conversation_messages(conversation_id: int, store: StoreDep) -> MessageList:
    """Return the message history of one conversation.

    Raises:
        404: Unknown conversation id.
    """
    _get_conversation(store, conversation_id)
    return MessageList(messages=store.messages(conversation_id))
