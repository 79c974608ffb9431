"""Tests for salary notifications and their delivery."""

import pytest
from conftest import FakeMailSender, employee_payload, employment_payload

from payroll_api.exceptions import (
    EmployeeNotFoundError,
    InvalidPayPeriodError,
    MessageAlreadyExistsError,
    MessageNotFoundError,
    PayslipNotFoundError,
)
from payroll_api.models.dto.message import MessageCreate
from payroll_api.services.email_service import SALARY_NOTIFICATION_SUBJECT
from payroll_api.services.employee_service import EmployeeService
from payroll_api.services.employment_service import EmploymentService
from payroll_api.services.message_service import MessageService
from payroll_api.services.payroll_service import PayrollService


@pytest.fixture
async def paid_period(session, standard_rules, employment):
    """June 2024 processed and approved for the default employee."""
    payroll = PayrollService(session)
    result = await payroll.process_payslips(6, 2024)
    await payroll.approve_payslips(6, 2024)
    return result.created[0]


class TestDraftMessages:
    """Tests for draft_messages_for_paid_payslips."""

    async def test_draft_after_approval(self, session, paid_period):
        service = MessageService(session, organization_name="Rwanda Government")
        result = await service.draft_messages_for_paid_payslips(6, 2024)

        assert result.total == 1
        message = result.items[0]
        assert message.employee_code == paid_period.employee_code
        assert message.month == 6
        assert message.year == 2024
        assert not message.email_sent
        assert message.sent_at is None
        assert message.body == (
            "Dear Alice, your salary for 6/2024 from Rwanda Government amounting to "
            f"890000.00 has been credited to your account {paid_period.employee_code} successfully."
        )

    async def test_pending_payslips_get_no_message(self, session, standard_rules, employment):
        await PayrollService(session).process_payslips(6, 2024)

        result = await MessageService(session).draft_messages_for_paid_payslips(6, 2024)
        assert result.items == []

    async def test_drafting_twice_creates_nothing(self, session, paid_period):
        service = MessageService(session)
        await service.draft_messages_for_paid_payslips(6, 2024)

        second = await service.draft_messages_for_paid_payslips(6, 2024)
        assert second.total == 0
        assert (await service.list_by_period(6, 2024)).total == 1

    async def test_invalid_period(self, session):
        with pytest.raises(InvalidPayPeriodError):
            await MessageService(session).draft_messages_for_paid_payslips(13, 2024)


class TestCreateMessage:
    """Tests for create_message."""

    async def test_custom_body(self, session, paid_period):
        message = await MessageService(session).create_message(
            MessageCreate(payslip_code=paid_period.code, body="Bonus included this month.")
        )
        assert message.body == "Bonus included this month."
        assert message.employee_code == paid_period.employee_code
        assert (message.month, message.year) == (6, 2024)

    async def test_second_message_for_period_conflicts(self, session, paid_period):
        service = MessageService(session)
        await service.draft_messages_for_paid_payslips(6, 2024)

        with pytest.raises(MessageAlreadyExistsError):
            await service.create_message(MessageCreate(payslip_code=paid_period.code, body="Again"))

    async def test_unknown_payslip(self, session):
        with pytest.raises(PayslipNotFoundError):
            await MessageService(session).create_message(
                MessageCreate(payslip_code="pay-missing", body="Hello")
            )


class TestMessageQueries:
    """Listing and marking messages."""

    async def test_list_by_employee(self, session, paid_period):
        service = MessageService(session)
        await service.draft_messages_for_paid_payslips(6, 2024)

        result = await service.list_by_employee(paid_period.employee_code)
        assert result.total == 1

    async def test_list_by_unknown_employee(self, session):
        with pytest.raises(EmployeeNotFoundError):
            await MessageService(session).list_by_employee("emp-missing")

    async def test_mark_sent(self, session, paid_period):
        service = MessageService(session)
        drafted = (await service.draft_messages_for_paid_payslips(6, 2024)).items[0]

        marked = await service.mark_sent(drafted.code)
        assert marked.email_sent
        assert marked.sent_at is not None
        assert (await service.list_unsent()).items == []

        again = await service.mark_sent(drafted.code)
        assert again.sent_at == marked.sent_at

    async def test_mark_sent_missing(self, session):
        with pytest.raises(MessageNotFoundError):
            await MessageService(session).mark_sent("msg-missing")


class TestDeliverPending:
    """Tests for deliver_pending."""

    async def _two_unsent(self, session, paid_period) -> MessageService:
        other = await EmployeeService(session).create(employee_payload(email="bob@example.com"))
        await EmploymentService(session).create(employment_payload(other.code, "500000"))
        payroll = PayrollService(session)
        await payroll.process_payslips(6, 2024)
        await payroll.approve_payslips(6, 2024)

        service = MessageService(session)
        assert (await service.draft_messages_for_paid_payslips(6, 2024)).total == 2
        return service

    async def test_successful_delivery(self, session, paid_period):
        service = MessageService(session)
        drafted = (await service.draft_messages_for_paid_payslips(6, 2024)).items[0]
        sender = FakeMailSender()

        report = await service.deliver_pending(sender)
        assert report.attempted == 1
        assert report.sent == [drafted.code]
        assert report.failed == []
        assert sender.sent == [("alice@example.com", SALARY_NOTIFICATION_SUBJECT, drafted.body)]
        assert (await service.list_unsent()).total == 0

    async def test_rejected_message_stays_unsent(self, session, paid_period):
        service = await self._two_unsent(session, paid_period)

        report = await service.deliver_pending(FakeMailSender(reject={"bob@example.com"}))
        assert len(report.sent) == 1
        assert len(report.failed) == 1
        unsent = await service.list_unsent()
        assert [m.code for m in unsent.items] == report.failed

    async def test_sender_error_does_not_stop_sweep(self, session, paid_period):
        service = await self._two_unsent(session, paid_period)
        sender = FakeMailSender(explode={"alice@example.com"})

        report = await service.deliver_pending(sender)
        assert report.attempted == 2
        assert len(report.sent) == 1
        assert [to for to, _, _ in sender.sent] == ["bob@example.com"]
        assert (await service.list_unsent()).total == 1

    async def test_failed_message_retried_next_sweep(self, session, paid_period):
        service = MessageService(session)
        await service.draft_messages_for_paid_payslips(6, 2024)
        await service.deliver_pending(FakeMailSender(reject={"alice@example.com"}))

        report = await service.deliver_pending(FakeMailSender())
        assert len(report.sent) == 1
        assert (await service.list_unsent()).total == 0

    async def test_nothing_to_deliver(self, session):
        report = await MessageService(session).deliver_pending(FakeMailSender())
        assert report.attempted == 0
        assert report.sent == []
