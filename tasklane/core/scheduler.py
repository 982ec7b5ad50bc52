import logging
import os
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from tasklane.core.config import settings
from tasklane.core.database import SessionLocal
from tasklane.services.notification_rules import notification_rules

logger = logging.getLogger(__name__)

scheduler = AsyncIOScheduler()


def check_due_dates():
    # Plain function: APScheduler runs it in its thread pool, off the event loop
    db = SessionLocal()
    try:
        counts = notification_rules.run_due_date_sweep(db)
        logger.info(
            f"Due date sweep finished: {counts['near_overdue_count']} near-overdue, "
            f"{counts['overdue_count']} overdue"
        )
    except Exception as e:
        logger.error(f"Error running due date sweep: {e}", exc_info=True)
    finally:
        db.close()


def start_scheduler():
    if os.getenv("TESTING") == "true":
        logger.info("Scheduler disabled in test environment")
        return

    if not settings.SCHEDULER_ENABLED:
        logger.info("Scheduler disabled by configuration")
        return

    if not scheduler.running:
        scheduler.add_job(
            check_due_dates,
            'interval',
            minutes=settings.DUE_DATE_SWEEP_MINUTES,
            id='due_date_sweep',
            name='Notify assignees about near-overdue and overdue tasks',
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        scheduler.start()
        logger.info(f"Scheduler started with due date sweep every {settings.DUE_DATE_SWEEP_MINUTES} minutes")


def stop_scheduler():
    if scheduler.running:
        scheduler.shutdown()
        logger.info("Scheduler stopped")
