"""API routers package."""

from payroll_api.routers import deductions, employees, employments, messages, payslips

__all__ = [
    "deductions",
    "employees",
    "employments",
    "messages",
    "payslips",
]
