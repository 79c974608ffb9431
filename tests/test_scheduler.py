"""Tests for the background delivery scheduler."""

from conftest import FakeMailSender

from payroll_api import database
from payroll_api.config import Settings
from payroll_api.services import email_service
from payroll_api.services.message_service import MessageService
from payroll_api.services.payroll_service import PayrollService
from payroll_api.tasks import scheduler


def settings_with(**kwargs) -> Settings:
    return Settings(_env_file=None, database_url="sqlite://", **kwargs)


class TestStartScheduler:
    """Tests for start_scheduler and stop_scheduler."""

    async def test_disabled_by_default(self, monkeypatch):
        monkeypatch.setattr(scheduler, "get_settings", lambda: settings_with())
        await scheduler.start_scheduler()
        assert scheduler.get_scheduler() is None

    async def test_enabled_registers_delivery_job(self, monkeypatch):
        monkeypatch.setattr(
            scheduler,
            "get_settings",
            lambda: settings_with(message_delivery_enabled=True, message_delivery_interval_minutes=5),
        )
        await scheduler.start_scheduler()
        try:
            job = scheduler.get_scheduler().get_job(scheduler.DELIVERY_JOB_ID)
            assert job is not None
            assert job.max_instances == 1
        finally:
            await scheduler.stop_scheduler()
        assert scheduler.get_scheduler() is None


class TestDeliveryJob:
    """Tests for deliver_pending_messages_job."""

    async def test_job_delivers_and_commits(self, monkeypatch, session_maker, session, standard_rules, employment):
        payroll = PayrollService(session)
        await payroll.process_payslips(6, 2024)
        await payroll.approve_payslips(6, 2024)
        await MessageService(session).draft_messages_for_paid_payslips(6, 2024)
        await session.commit()

        sender = FakeMailSender()
        monkeypatch.setattr(database, "async_session_maker", session_maker)
        monkeypatch.setattr(email_service, "EmailService", lambda: sender)

        await scheduler.deliver_pending_messages_job()

        assert len(sender.sent) == 1
        async with session_maker() as fresh:
            assert (await MessageService(fresh).list_unsent()).total == 0

    async def test_job_survives_sender_errors(self, monkeypatch, session_maker, session, standard_rules, employment):
        payroll = PayrollService(session)
        await payroll.process_payslips(6, 2024)
        await payroll.approve_payslips(6, 2024)
        await MessageService(session).draft_messages_for_paid_payslips(6, 2024)
        await session.commit()

        monkeypatch.setattr(database, "async_session_maker", session_maker)
        monkeypatch.setattr(
            email_service, "EmailService", lambda: FakeMailSender(explode={"alice@example.com"})
        )

        await scheduler.deliver_pending_messages_job()

        async with session_maker() as fresh:
            assert (await MessageService(fresh).list_unsent()).total == 1
