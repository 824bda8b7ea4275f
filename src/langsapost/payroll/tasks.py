from __future__ import annotations

import logging

from celery import Celery
from celery.schedules import crontab

from ..container import build_container
from ..core.constants import DEFAULT_PAYROLL_RUN_DAY, DEFAULT_PAYROLL_RUN_HOUR
from ..logging_config import configure_logging
from ..main import load_settings

logger = logging.getLogger(__name__)

settings = load_settings()

celery_app = Celery("langsapost", broker=getattr(settings, "CELERY_BROKER_URL", "memory://"))
# crontab fires in server local time
celery_app.conf.enable_utc = False
celery_app.conf.beat_schedule = {
    "generate-monthly-payroll": {
        "task": "langsapost.payroll.tasks.generate_monthly_payroll",
        "schedule": crontab(
            minute=0,
            hour=int(getattr(settings, "PAYROLL_RUN_HOUR", DEFAULT_PAYROLL_RUN_HOUR)),
            day_of_month=int(getattr(settings, "PAYROLL_RUN_DAY", DEFAULT_PAYROLL_RUN_DAY)),
        ),
    }
}


@celery_app.task(name="langsapost.payroll.tasks.generate_monthly_payroll")
def generate_monthly_payroll() -> dict:
    """Periodic trigger: payroll for the calendar month before now."""
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    container = build_container(db_config=getattr(settings, "DB_CONFIG"), settings=settings)
    try:
        result = container.payroll_scheduler.run_periodic()
        # the web process never sees worker runs in its scheduler status
        container.activity_service.record(
            user_id=None,
            action="payroll.periodic_run",
            meta={"period": str(result.period), "state": result.state.value, **result.to_dict()["summary"]},
        )
        return result.to_dict()
    finally:
        container.close()
