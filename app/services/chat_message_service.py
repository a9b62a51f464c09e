"""
Service for the chat message store.

Inbound rows change state exactly once, through claim(); outbound rows are
insert-only.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import List, Optional
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.orm import Session

from app.models.chat_message import ChatMessage
from app.schemas.chat import InboundMessageCreate, MessageOrigin


class ChatMessageService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def create_inbound(self, data: InboundMessageCreate) -> ChatMessage:
        message = ChatMessage(
            text=data.text,
            origin=MessageOrigin.USER.value,
            subscriber_identity=data.subscriber_identity,
            processed=False,
        )
        self.db.add(message)
        self.db.commit()
        self.db.refresh(message)
        return message

    def create_outbound(self, subscriber_identity: str, text: str) -> ChatMessage:
        """Append an agent reply. Replies are born processed; nothing claims them."""
        now = datetime.now(timezone.utc)
        message = ChatMessage(
            text=text,
            origin=MessageOrigin.AGENT.value,
            subscriber_identity=subscriber_identity,
            processed=True,
            processed_at=now,
        )
        self.db.add(message)
        self.db.commit()
        self.db.refresh(message)
        return message

    def get_message(self, message_id: UUID) -> Optional[ChatMessage]:
        return self.db.query(ChatMessage).filter(ChatMessage.id == message_id).first()

    def get_conversation(
        self, subscriber_identity: str, skip: int = 0, limit: int = 100
    ) -> List[ChatMessage]:
        return (
            self.db.query(ChatMessage)
            .filter(ChatMessage.subscriber_identity == subscriber_identity)
            .order_by(ChatMessage.created_at.asc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def get_stale_unprocessed_ids(
        self, min_age_seconds: int, limit: int = 500
    ) -> List[UUID]:
        """User messages still unprocessed after min_age_seconds, oldest first."""
        cutoff = datetime.now(timezone.utc) - timedelta(seconds=min_age_seconds)
        rows = (
            self.db.query(ChatMessage.id)
            .filter(
                ChatMessage.origin == MessageOrigin.USER.value,
                ChatMessage.processed.is_(False),
                ChatMessage.subscriber_identity.isnot(None),
                ChatMessage.created_at <= cutoff,
            )
            .order_by(ChatMessage.created_at.asc())
            .limit(limit)
            .all()
        )
        return [row.id for row in rows]

    def claim(self, message_id: UUID) -> bool:
        """
        Atomically flip processed false -> true.

        A single conditional UPDATE; only the caller whose statement changed
        the row gets True, so concurrent observers never both reply.
        """
        result = self.db.execute(
            update(ChatMessage)
            .where(ChatMessage.id == message_id, ChatMessage.processed.is_(False))
            .values(processed=True, processed_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        return result.rowcount == 1

    def annotate_error(self, message_id: UUID, error: str) -> None:
        self.db.execute(
            update(ChatMessage)
            .where(ChatMessage.id == message_id)
            .values(error=error)
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
