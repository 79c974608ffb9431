"""Messages router - salary notifications."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status

from payroll_api.dependencies import get_mail_sender, get_message_service
from payroll_api.models.dto.message import (
    DeliveryReport,
    MessageCreate,
    MessageListResponse,
    MessageResponse,
)
from payroll_api.services.message_service import MailSender, MessageService

router = APIRouter()


@router.post("/draft", response_model=MessageListResponse, status_code=status.HTTP_201_CREATED)
async def draft_messages(
    month: Annotated[int, Query(ge=1, le=12)],
    year: Annotated[int, Query(ge=1900, le=9999)],
    service: Annotated[MessageService, Depends(get_message_service)],
) -> MessageListResponse:
    """Draft a salary notification for every PAID payslip of the period."""
    return await service.draft_messages_for_paid_payslips(month, year)


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def create_message(
    body: MessageCreate,
    service: Annotated[MessageService, Depends(get_message_service)],
) -> MessageResponse:
    """Draft a custom message for a payslip's employee and period."""
    return await service.create_message(body)


@router.get("/unsent", response_model=MessageListResponse)
async def list_unsent_messages(
    service: Annotated[MessageService, Depends(get_message_service)],
) -> MessageListResponse:
    """List messages awaiting delivery."""
    return await service.list_unsent()


@router.get("/employee/{employee_code}", response_model=MessageListResponse)
async def list_employee_messages(
    employee_code: str,
    service: Annotated[MessageService, Depends(get_message_service)],
) -> MessageListResponse:
    """List an employee's messages."""
    return await service.list_by_employee(employee_code)


@router.get("/month/{month}/year/{year}", response_model=MessageListResponse)
async def list_period_messages(
    month: Annotated[int, Path(ge=1, le=12)],
    year: Annotated[int, Path(ge=1900, le=9999)],
    service: Annotated[MessageService, Depends(get_message_service)],
) -> MessageListResponse:
    """List the messages of a pay period."""
    return await service.list_by_period(month, year)


@router.post("/deliver", response_model=DeliveryReport)
async def deliver_messages(
    service: Annotated[MessageService, Depends(get_message_service)],
    sender: Annotated[MailSender, Depends(get_mail_sender)],
) -> DeliveryReport:
    """Run one delivery sweep over unsent messages."""
    return await service.deliver_pending(sender)


@router.post("/{code}/sent", response_model=MessageResponse)
async def mark_message_sent(
    code: str,
    service: Annotated[MessageService, Depends(get_message_service)],
) -> MessageResponse:
    """Flag a message as delivered."""
    return await service.mark_sent(code)
