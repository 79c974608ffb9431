"""Message ORM model."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from payroll_api.models.orm.base import Base, utcnow
from payroll_api.models.orm.employee import EmployeeORM


class MessageORM(Base):
    """Drafted salary notification awaiting (or past) e-mail delivery."""

    __tablename__ = "messages"

    code: Mapped[str] = mapped_column(String(32), primary_key=True)
    employee_code: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("employees.code", ondelete="RESTRICT"),
        nullable=False,
    )
    body: Mapped[str] = mapped_column(Text, nullable=False)
    month: Mapped[int] = mapped_column(Integer, nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    email_sent: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    sent_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )

    employee: Mapped[EmployeeORM] = relationship("EmployeeORM", lazy="select")

    __table_args__ = (
        UniqueConstraint("employee_code", "month", "year", name="uq_messages_employee_period"),
        Index("idx_messages_unsent", "email_sent"),
    )
