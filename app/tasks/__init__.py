# Import celery app first
from app.infra.celery_app import celery_app

# Initialize logging configuration for Celery workers
from app.infra.logging_config import LoggingConfig
from app.tasks.message_tasks import (
    process_chat_message_task,
    sweep_unprocessed_messages_task,
)

LoggingConfig()  # Initialize logging

__all__ = [
    "celery_app",
    "process_chat_message_task",
    "sweep_unprocessed_messages_task",
]
