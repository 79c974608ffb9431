"""Background task scheduler using APScheduler."""

import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from payroll_api.config import get_settings

logger = logging.getLogger(__name__)

# Global scheduler instance
_scheduler: AsyncIOScheduler | None = None

DELIVERY_JOB_ID = "deliver_pending_messages"


async def deliver_pending_messages_job() -> None:
    """Background job to send unsent salary notifications."""
    from payroll_api.database import async_session_maker
    from payroll_api.services.email_service import EmailService
    from payroll_api.services.message_service import MessageService
    from payroll_api.utils.secure_logging import log_error

    logger.info("Starting scheduled message delivery")

    async with async_session_maker() as session:
        try:
            service = MessageService(session)
            report = await service.deliver_pending(EmailService())
            await session.commit()
            logger.info(
                f"Scheduled delivery completed: {len(report.sent)} sent, "
                f"{len(report.failed)} failed"
            )
        except Exception as e:
            log_error(logger, "Scheduled message delivery failed", e)
            await session.rollback()


def get_scheduler() -> AsyncIOScheduler | None:
    """Get the running scheduler, if any."""
    return _scheduler


async def start_scheduler() -> None:
    """Start the background task scheduler.

    Nothing is scheduled unless message delivery is enabled.
    """
    global _scheduler

    settings = get_settings()
    if not settings.message_delivery_enabled:
        logger.info("Message delivery disabled, scheduler not started")
        return
    if not settings.smtp_configured:
        logger.warning("Message delivery enabled but SMTP is not configured")

    _scheduler = AsyncIOScheduler()
    _scheduler.add_job(
        deliver_pending_messages_job,
        trigger=IntervalTrigger(minutes=settings.message_delivery_interval_minutes),
        id=DELIVERY_JOB_ID,
        name="Deliver pending salary messages",
        replace_existing=True,
        # One sweep at a time
        max_instances=1,
        coalesce=True,
    )
    _scheduler.start()
    logger.info(
        f"Background scheduler started, delivery every "
        f"{settings.message_delivery_interval_minutes} minutes"
    )


async def stop_scheduler() -> None:
    """Stop the background task scheduler."""
    global _scheduler

    if _scheduler:
        _scheduler.shutdown(wait=False)
        _scheduler = None
        logger.info("Background scheduler stopped")
