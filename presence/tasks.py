# presence/tasks.py
from celery import shared_task

from .services import cleanup_offline


@shared_task
def sweep_stale_presence():
    """
    Periodic sweep, scheduled by CELERY_BEAT_SCHEDULE.
    """
    return cleanup_offline()
