"""Celery application configuration"""

from celery import Celery
from host_console.config import settings

# Create Celery app
celery_app = Celery(
    "host_console",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=[
        "host_console.jobs.tasks",
    ],
)

# Configure Celery
celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_track_started=True,
    task_time_limit=60,
    worker_prefetch_multiplier=1,
    task_acks_late=True,
    task_reject_on_worker_lost=True,
)
