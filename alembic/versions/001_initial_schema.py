"""Initial schema

Revision ID: 001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

MONEY = sa.Numeric(19, 2)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    # Create employees table
    op.create_table(
        "employees",
        sa.Column("code", sa.String(32), nullable=False),
        sa.Column("first_name", sa.String(255), nullable=False),
        sa.Column("last_name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("mobile", sa.String(32), nullable=False),
        sa.Column("date_of_birth", sa.Date(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("roles", sa.JSON(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("code"),
        sa.UniqueConstraint("email"),
    )
    op.create_index("idx_employees_status", "employees", ["status"])
    op.create_index("idx_employees_name", "employees", ["last_name", "first_name"])

    # Create deductions table
    op.create_table(
        "deductions",
        sa.Column("code", sa.String(32), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("percentage", sa.Numeric(9, 4), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("code"),
        sa.UniqueConstraint("name"),
    )
    op.create_index(
        "uq_deductions_name_lower",
        "deductions",
        [sa.text("lower(name)")],
        unique=True,
    )

    # Create employments table
    op.create_table(
        "employments",
        sa.Column("code", sa.String(32), nullable=False),
        sa.Column("employee_code", sa.String(32), nullable=False),
        sa.Column("department", sa.String(255), nullable=False),
        sa.Column("position", sa.String(255), nullable=False),
        sa.Column("base_salary", MONEY, nullable=False),
        sa.Column("joining_date", sa.Date(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("code"),
        sa.ForeignKeyConstraint(["employee_code"], ["employees.code"], ondelete="RESTRICT"),
    )
    op.create_index("idx_employments_employee_code", "employments", ["employee_code"])
    op.create_index("idx_employments_status", "employments", ["status"])
    # At most one ACTIVE employment per employee
    op.create_index(
        "uq_employments_active_employee",
        "employments",
        ["employee_code"],
        unique=True,
        postgresql_where=sa.text("status = 'ACTIVE'"),
        sqlite_where=sa.text("status = 'ACTIVE'"),
    )

    # Create payslips table
    op.create_table(
        "payslips",
        sa.Column("code", sa.String(32), nullable=False),
        sa.Column("employee_code", sa.String(32), nullable=False),
        sa.Column("month", sa.Integer(), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("base_salary", MONEY, nullable=False),
        sa.Column("house_amount", MONEY, nullable=False),
        sa.Column("transport_amount", MONEY, nullable=False),
        sa.Column("employee_taxed_amount", MONEY, nullable=False),
        sa.Column("pension_amount", MONEY, nullable=False),
        sa.Column("medical_insurance_amount", MONEY, nullable=False),
        sa.Column("other_taxed_amount", MONEY, nullable=False),
        sa.Column("gross_salary", MONEY, nullable=False),
        sa.Column("net_salary", MONEY, nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("code"),
        sa.ForeignKeyConstraint(["employee_code"], ["employees.code"], ondelete="RESTRICT"),
        sa.UniqueConstraint("employee_code", "month", "year", name="uq_payslips_employee_period"),
    )
    op.create_index("idx_payslips_period", "payslips", ["year", "month"])
    op.create_index("idx_payslips_status", "payslips", ["status"])

    # Create messages table
    op.create_table(
        "messages",
        sa.Column("code", sa.String(32), nullable=False),
        sa.Column("employee_code", sa.String(32), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("month", sa.Integer(), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("email_sent", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("sent_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("code"),
        sa.ForeignKeyConstraint(["employee_code"], ["employees.code"], ondelete="RESTRICT"),
        sa.UniqueConstraint("employee_code", "month", "year", name="uq_messages_employee_period"),
    )
    op.create_index("idx_messages_unsent", "messages", ["email_sent"])

    # Create audit_logs table
    op.create_table(
        "audit_logs",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("action", sa.String(100), nullable=False),
        sa.Column("resource_type", sa.String(100), nullable=False),
        sa.Column("resource_code", sa.String(100), nullable=True),
        sa.Column("details", sa.JSON(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_audit_logs_created", "audit_logs", ["created_at"])
    op.create_index("idx_audit_logs_resource", "audit_logs", ["resource_type", "resource_code"])


def downgrade() -> None:
    op.drop_table("audit_logs")
    op.drop_table("messages")
    op.drop_table("payslips")
    op.drop_index("uq_employments_active_employee", table_name="employments")
    op.drop_table("employments")
    op.drop_index("uq_deductions_name_lower", table_name="deductions")
    op.drop_table("deductions")
    op.drop_table("employees")
