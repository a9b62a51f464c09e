"""Celery tasks that drive inbound chat messages through the billing pipeline."""

from __future__ import annotations

import threading
from typing import Optional
from uuid import UUID

from app.config import get_settings
from app.core.runtime import Runtime, build_runtime
from app.db import db_manager
from app.infra.celery_app import celery_app
from app.infra.logging_config import get_logger
from app.services.chat_message_service import ChatMessageService

logger = get_logger("message_tasks")

_runtime: Optional[Runtime] = None
_runtime_lock = threading.Lock()


def get_runtime() -> Runtime:
    global _runtime
    with _runtime_lock:
        if _runtime is None:
            _runtime = build_runtime()
        return _runtime


@celery_app.task(name="app.tasks.message_tasks.process_chat_message_task")
def process_chat_message_task(message_id_str: str) -> Optional[str]:
    """
    Process one inbound chat message and store the agent reply.

    Safe to deliver more than once: the message is claimed atomically, so
    only the first delivery produces a reply.

    Returns:
        Optional[str]: The reply message ID, or None when nothing was sent.
    """
    try:
        message_id = UUID(message_id_str)
    except ValueError:
        logger.warning("Invalid message id: %s", message_id_str)
        return None

    with db_manager.db_session() as db:
        reply = get_runtime().processor(db).process(message_id)

    return str(reply.id) if reply is not None else None


@celery_app.task(name="app.tasks.message_tasks.sweep_unprocessed_messages_task")
def sweep_unprocessed_messages_task(limit: int = 500) -> int:
    """Re-enqueue user messages whose processing task never ran."""
    min_age = get_settings().message_sweep_min_age_seconds
    with db_manager.db_session() as db:
        message_ids = ChatMessageService(db).get_stale_unprocessed_ids(
            min_age_seconds=min_age, limit=limit
        )

    for message_id in message_ids:
        process_chat_message_task.delay(str(message_id))

    if message_ids:
        logger.info("Re-enqueued %d unprocessed messages", len(message_ids))
    return len(message_ids)
