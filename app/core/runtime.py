from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import Session

from app.core.app_state import AppState, state
from app.services.billing_dispatcher import BillingDispatcher
from app.services.intent_extractor import IntentExtractor
from app.services.message_processor import MessageProcessor


@dataclass
class Runtime:
    extractor: IntentExtractor
    dispatcher: BillingDispatcher

    def processor(self, db: Session) -> MessageProcessor:
        return MessageProcessor(db, self.extractor, self.dispatcher)


def build_runtime(app_state: AppState = state) -> Runtime:
    return Runtime(
        extractor=IntentExtractor(app_state.llm_runner),
        dispatcher=BillingDispatcher(app_state.billing_client, app_state.token_cache),
    )
