"""Payslip arithmetic.

Every derived amount is ``base_salary * percentage / 100`` computed on the
unrounded base salary and then quantized to two fractional digits with
ROUND_HALF_UP. Allowances (housing, transport) are added to the base salary
rounded to cents to form gross salary; withholdings are computed against base
salary, not gross, and subtracted from gross to form net salary.
"""

from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Decimal

from payroll_api.exceptions import InvalidSalaryError
from payroll_api.models.domain.deduction import DeductionCategory
from payroll_api.models.domain.payslip import PayslipBreakdown

CENT = Decimal("0.01")
HUNDRED = Decimal("100")
ZERO = Decimal("0")


def to_money(value: Decimal) -> Decimal:
    """Quantize a value to two fractional digits (half-up)."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def percentage_of(base: Decimal, percentage: Decimal) -> Decimal:
    """Compute ``base * percentage / 100`` rounded to cents.

    Args:
        base: Base amount
        percentage: Percent, e.g. ``Decimal("15")`` for 15%

    Returns:
        Amount with exactly two fractional digits
    """
    return to_money(base * percentage / HUNDRED)


def compute_breakdown(
    base_salary: Decimal,
    rates: Mapping[DeductionCategory, Decimal],
) -> PayslipBreakdown:
    """Derive all payslip amounts from a base salary.

    Args:
        base_salary: Positive base salary
        rates: Percentage per category; every category must be present

    Returns:
        PayslipBreakdown

    Raises:
        InvalidSalaryError: If base_salary is not positive
    """
    if base_salary is None or base_salary <= ZERO:
        raise InvalidSalaryError()

    house = percentage_of(base_salary, rates[DeductionCategory.HOUSING])
    transport = percentage_of(base_salary, rates[DeductionCategory.TRANSPORT])
    base = to_money(base_salary)
    gross = base + house + transport

    employee_tax = percentage_of(base_salary, rates[DeductionCategory.EMPLOYEE_TAX])
    pension = percentage_of(base_salary, rates[DeductionCategory.PENSION])
    medical = percentage_of(base_salary, rates[DeductionCategory.MEDICAL_INSURANCE])
    others = percentage_of(base_salary, rates[DeductionCategory.OTHERS])

    net = gross - employee_tax - pension - medical - others

    return PayslipBreakdown(
        base_salary=base,
        house_amount=house,
        transport_amount=transport,
        employee_taxed_amount=employee_tax,
        pension_amount=pension,
        medical_insurance_amount=medical,
        other_taxed_amount=others,
        gross_salary=gross,
        net_salary=net,
    )
