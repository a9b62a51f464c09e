from uuid import UUID

from fastapi import Depends, HTTPException
from sqlalchemy.orm import Session

from app.adapters.billing_client import BillingClient
from app.core.app_state import state
from app.core.token_cache import TokenCache
from app.db import get_db
from app.models.chat_message import ChatMessage
from app.services.chat_message_service import ChatMessageService


def get_billing_client() -> BillingClient:
    """FastAPI dependency for the process-wide billing client."""
    return state.billing_client


def get_token_cache() -> TokenCache:
    """FastAPI dependency for the process-wide token cache."""
    return state.token_cache


def get_chat_message_by_id(
    id: UUID,
    db: Session = Depends(get_db),
) -> ChatMessage:
    """FastAPI dependency to get a chat message by ID."""
    message = ChatMessageService(db).get_message(id)
    if message is None:
        raise HTTPException(status_code=404, detail="Message not found")
    return message
