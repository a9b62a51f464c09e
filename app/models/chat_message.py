"""
ChatMessage model: the message store shared by the chat UI and the gateway.

User messages arrive unprocessed; the gateway claims each one exactly once
(processed false -> true) and appends an agent reply for the same subscriber.
"""

from __future__ import annotations

import uuid

from sqlalchemy import Boolean, Column, DateTime, Index, String, Text, Uuid

from app.db import Base
from app.models.mixins import TimestampMixin


class ChatMessage(Base, TimestampMixin):
    """One row per message; origin is 'user' (inbound) or 'agent' (gateway reply)."""

    __tablename__ = "chat_messages"

    __table_args__ = (
        Index(
            "ix_chat_messages_identity_created",
            "subscriber_identity",
            "created_at",
        ),
        Index("ix_chat_messages_origin_processed", "origin", "processed"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    text = Column(Text, nullable=True)
    origin = Column(String(16), nullable=False)  # 'user' | 'agent'
    subscriber_identity = Column(String(64), nullable=True)
    processed = Column(Boolean, nullable=False, default=False)
    processed_at = Column(DateTime(timezone=True), nullable=True)
    error = Column(Text, nullable=True)
