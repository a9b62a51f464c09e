"""
Run one inbound chat message through extract -> dispatch -> format.

The message is claimed before any work starts and always ends with an agent
reply, even when the pipeline itself blows up.
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.infra.logging_config import get_logger
from app.models.chat_message import ChatMessage
from app.schemas.chat import MessageOrigin
from app.services.billing_dispatcher import BillingDispatcher
from app.services.chat_message_service import ChatMessageService
from app.services.intent_extractor import IntentExtractor
from app.services.response_formatter import format_outcome, format_processing_error

logger = get_logger("message_processor")


def is_actionable(message: ChatMessage) -> bool:
    return (
        message.origin == MessageOrigin.USER.value
        and not message.processed
        and bool(message.subscriber_identity)
    )


class MessageProcessor:
    def __init__(
        self,
        db: Session,
        extractor: IntentExtractor,
        dispatcher: BillingDispatcher,
    ) -> None:
        self.message_service = ChatMessageService(db)
        self._extractor = extractor
        self._dispatcher = dispatcher

    def process(self, message_id: UUID) -> Optional[ChatMessage]:
        """
        Process a stored inbound message.

        Returns:
            The outbound reply, or None when the message was ignored,
            another worker already claimed it, or the reply could not be
            stored (the message then carries the storage error).
        """
        message = self.message_service.get_message(message_id)
        if message is None:
            logger.warning("Message %s not found", message_id)
            return None
        if not is_actionable(message):
            return None
        if not self.message_service.claim(message.id):
            logger.info("Message %s already claimed, skipping", message.id)
            return None

        identity = message.subscriber_identity
        logger.info("Processing message from %s: %r", identity, message.text)
        error: Optional[str] = None
        try:
            intent = self._extractor.extract(message.text or "", identity)
            outcome = self._dispatcher.dispatch(intent)
            reply_text = format_outcome(outcome)
        except Exception as e:
            logger.exception("Message processing error for %s", message.id)
            reply_text = format_processing_error(e)
            error = str(e) or type(e).__name__

        try:
            reply = self.message_service.create_outbound(identity, reply_text)
        except Exception as e:
            logger.exception("Could not store reply for %s", message.id)
            self.message_service.db.rollback()
            self.message_service.annotate_error(
                message.id, f"Reply not stored: {e}"
            )
            return None

        if error is not None:
            self.message_service.annotate_error(message.id, error)
        logger.info("Response sent to %s", identity)
        return reply
