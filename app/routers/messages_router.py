"""
Chat message feed.

The UI posts user messages here; each one is stored unprocessed and handed
to a worker. Replies show up in the same conversation listing.
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.db import get_db
from app.infra.logging_config import get_logger
from app.models.chat_message import ChatMessage
from app.routers.utils.dependencies import get_chat_message_by_id
from app.schemas.chat import ChatMessageRead, InboundMessageCreate
from app.services.chat_message_service import ChatMessageService
from app.tasks.message_tasks import process_chat_message_task

logger = get_logger("messages_router")

router = APIRouter(prefix="/messages", tags=["messages"])


@router.post(
    "", response_model=ChatMessageRead, status_code=status.HTTP_202_ACCEPTED
)
def create_message(
    body: InboundMessageCreate,
    db: Session = Depends(get_db),
) -> ChatMessageRead:
    """Store a user message and enqueue it for processing."""
    message = ChatMessageService(db).create_inbound(body)
    process_chat_message_task.delay(str(message.id))
    logger.info("Enqueued message %s from %s", message.id, message.subscriber_identity)
    return ChatMessageRead.model_validate(message)


@router.get("", response_model=List[ChatMessageRead])
def list_messages(
    subscriber_identity: str = Query(..., min_length=1),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
) -> List[ChatMessageRead]:
    """Conversation for one subscriber, oldest first."""
    messages = ChatMessageService(db).get_conversation(
        subscriber_identity, skip=skip, limit=limit
    )
    return [ChatMessageRead.model_validate(m) for m in messages]


@router.get("/{id}", response_model=ChatMessageRead)
def get_message(
    message: ChatMessage = Depends(get_chat_message_by_id),
) -> ChatMessageRead:
    return ChatMessageRead.model_validate(message)
