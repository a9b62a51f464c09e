"""
Message contracts for the chat feed and the login gateway.

Inbound user messages and outbound agent replies share one store; these
schemas are what the API accepts and returns for them.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class MessageOrigin(str, Enum):
    """Who wrote a message."""

    USER = "user"
    AGENT = "agent"


class InboundMessageCreate(BaseModel):
    """A chat message typed by a logged-in subscriber."""

    subscriber_identity: str = Field(..., min_length=1, max_length=64)
    text: str = Field(..., min_length=1)


class ChatMessageRead(BaseModel):
    id: UUID
    text: Optional[str] = None
    origin: MessageOrigin
    subscriber_identity: Optional[str] = None
    processed: bool
    processed_at: Optional[datetime] = None
    error: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class LoginRequest(BaseModel):
    phone_number: Optional[str] = Field(None, alias="phoneNumber")

    model_config = ConfigDict(populate_by_name=True)


class LoginResponse(BaseModel):
    success: bool = True
    token: str
    phone_number: str = Field(..., alias="phoneNumber")

    model_config = ConfigDict(populate_by_name=True)


class HealthResponse(BaseModel):
    status: str = "OK"
    service: str = "Billing Gateway"
    timestamp: datetime
