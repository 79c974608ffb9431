"""Message DTOs."""

from datetime import datetime

from pydantic import BaseModel, Field


class MessageCreate(BaseModel):
    """DTO for drafting a custom message tied to a payslip's period."""

    payslip_code: str = Field(min_length=1, max_length=32)
    body: str = Field(min_length=1, max_length=5000)


class MessageResponse(BaseModel):
    """Message response DTO."""

    code: str
    employee_code: str
    body: str
    month: int
    year: int
    email_sent: bool
    sent_at: datetime | None = None
    created_at: datetime

    class Config:
        """Pydantic config."""

        from_attributes = True


class MessageListResponse(BaseModel):
    """Message list response DTO."""

    items: list[MessageResponse]
    total: int


class DeliveryReport(BaseModel):
    """Outcome of one delivery sweep."""

    attempted: int = 0
    sent: list[str] = Field(default_factory=list, description="Codes of delivered messages")
    failed: list[str] = Field(default_factory=list, description="Codes left for the next sweep")
