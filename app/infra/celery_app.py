from celery import Celery

from app.config import get_settings

settings = get_settings()

celery_app = Celery(
    "billing_gateway",
    broker=settings.broker_url,
    include=["app.tasks.message_tasks"],
)

celery_app.conf.update(
    task_acks_late=True,
    task_ignore_result=True,
    worker_prefetch_multiplier=1,
    timezone="UTC",
    beat_schedule={
        "sweep-unprocessed-messages": {
            "task": "app.tasks.message_tasks.sweep_unprocessed_messages_task",
            "schedule": float(settings.message_sweep_interval_seconds),
        },
    },
)
