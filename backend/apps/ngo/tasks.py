import logging

from celery import shared_task
from celery.signals import worker_ready
from django.db import close_old_connections

from .services.maintenance import sweep_programs

logger = logging.getLogger(__name__)


@shared_task(name="apps.ngo.tasks.run_program_maintenance")
def run_program_maintenance():
    """Daily program sweep: start due programs, finish ended ones, purge expired.

    Failures are logged and swallowed so the beat schedule keeps firing.
    """
    try:
        return sweep_programs().as_dict()
    except Exception:
        logger.exception("Program maintenance run failed")
        return {"error": "maintenance failed"}
    finally:
        close_old_connections()


@worker_ready.connect
def queue_startup_maintenance(sender=None, **kwargs):
    logger.info("Worker ready; queueing program maintenance")
    run_program_maintenance.delay()
