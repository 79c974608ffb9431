"""Domain-specific exceptions for the payroll API.

These exceptions keep service-layer failures independent of HTTP; the
error handlers in ``payroll_api.middleware.error_handler`` map each base
class to a status code.
"""

from typing import Any


class PayrollAPIError(Exception):
    """Base exception for all payroll API errors."""

    def __init__(self, message: str = "An error occurred", details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


# =============================================================================
# Resource Not Found Errors (404)
# =============================================================================


class NotFoundError(PayrollAPIError):
    """Base class for resource not found errors."""

    pass


class EmployeeNotFoundError(NotFoundError):
    """Raised when an employee cannot be found."""

    def __init__(self, code: str | None = None, email: str | None = None) -> None:
        details: dict[str, Any] = {}
        if code:
            details["employee_code"] = code
        if email:
            details["email"] = email
        super().__init__("Employee not found", details)


class EmploymentNotFoundError(NotFoundError):
    """Raised when an employment record cannot be found."""

    def __init__(self, code: str | None = None, employee_code: str | None = None) -> None:
        details: dict[str, Any] = {}
        if code:
            details["employment_code"] = code
        if employee_code:
            details["employee_code"] = employee_code
        super().__init__("Employment not found", details)


class DeductionNotFoundError(NotFoundError):
    """Raised when a deduction rule cannot be found."""

    def __init__(self, name: str | None = None) -> None:
        details = {"name": name} if name else {}
        super().__init__("Deduction not found", details)


class PayslipNotFoundError(NotFoundError):
    """Raised when a payslip cannot be found."""

    def __init__(self, code: str | None = None) -> None:
        details = {"payslip_code": code} if code else {}
        super().__init__("Payslip not found", details)


class MessageNotFoundError(NotFoundError):
    """Raised when a message cannot be found."""

    def __init__(self, code: str | None = None) -> None:
        details = {"message_code": code} if code else {}
        super().__init__("Message not found", details)


# =============================================================================
# Conflict Errors (409)
# =============================================================================


class ConflictError(PayrollAPIError):
    """Base class for resource conflict errors."""

    pass


class EmployeeAlreadyExistsError(ConflictError):
    """Raised when registering an email that is already taken."""

    def __init__(self, email: str | None = None) -> None:
        details = {"email": email} if email else {}
        super().__init__("Email already registered", details)


class EmployeeInUseError(ConflictError):
    """Raised when deleting an employee that still has payroll history."""

    def __init__(self, code: str | None = None) -> None:
        details = {"employee_code": code} if code else {}
        super().__init__("Employee has employment or payroll history", details)


class DeductionAlreadyExistsError(ConflictError):
    """Raised when a deduction name is already taken."""

    def __init__(self, name: str | None = None) -> None:
        details = {"name": name} if name else {}
        super().__init__("Deduction name already exists", details)


class DuplicateDeductionCategoryError(ConflictError):
    """Raised when two stored rules resolve to the same payroll category."""

    def __init__(self, category: str, names: list[str]) -> None:
        super().__init__(
            f"Several deduction rules map to {category}: {', '.join(names)}",
            {"category": category, "names": names},
        )


class ActiveEmploymentConflictError(ConflictError):
    """Raised when a concurrent request activated another employment first."""

    def __init__(self, employee_code: str | None = None) -> None:
        details = {"employee_code": employee_code} if employee_code else {}
        super().__init__("Employee already has an active employment", details)


class PayslipAlreadyExistsError(ConflictError):
    """Raised when a payslip already exists for an employee and period."""

    def __init__(self, employee_code: str, month: int, year: int) -> None:
        super().__init__(
            f"Payslip already exists for employee {employee_code} for {month}/{year}",
            {"employee_code": employee_code, "month": month, "year": year},
        )


class MessageAlreadyExistsError(ConflictError):
    """Raised when a message already exists for an employee and period."""

    def __init__(self, employee_code: str, month: int, year: int) -> None:
        super().__init__(
            f"Message already exists for employee {employee_code} for {month}/{year}",
            {"employee_code": employee_code, "month": month, "year": year},
        )


# =============================================================================
# Validation Errors (400)
# =============================================================================


class ValidationError(PayrollAPIError):
    """Base class for validation errors."""

    pass


class InvalidSalaryError(ValidationError):
    """Raised when a base salary is missing, zero or negative."""

    def __init__(self, employee_code: str | None = None) -> None:
        message = "Base salary must be greater than zero"
        if employee_code:
            message = f"Invalid base salary for employee {employee_code}"
        details = {"employee_code": employee_code} if employee_code else {}
        super().__init__(message, details)


class InvalidPercentageError(ValidationError):
    """Raised when a deduction percentage is not positive."""

    def __init__(self, name: str | None = None) -> None:
        details = {"name": name} if name else {}
        super().__init__("Deduction percentage must be greater than zero", details)


class InvalidPayPeriodError(ValidationError):
    """Raised when a month or year is out of range."""

    def __init__(self, month: int, year: int) -> None:
        super().__init__(
            "Invalid pay period: month must be 1-12 and year 1900-9999",
            {"month": month, "year": year},
        )


class MissingDeductionRuleError(ValidationError):
    """Raised when payroll runs without a rule for a required deduction category."""

    def __init__(self, missing: list[str]) -> None:
        super().__init__(
            f"Missing deduction rules: {', '.join(missing)}",
            {"missing": missing},
        )
