from app.services.billing_dispatcher import BillingDispatcher
from app.services.chat_message_service import ChatMessageService
from app.services.intent_extractor import IntentExtractor
from app.services.message_processor import MessageProcessor

__all__ = [
    "BillingDispatcher",
    "ChatMessageService",
    "IntentExtractor",
    "MessageProcessor",
]
