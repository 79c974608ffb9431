"""Deduction domain model."""

from decimal import Decimal
from enum import StrEnum

from pydantic import BaseModel, ConfigDict


def normalize_rule_name(name: str) -> str:
    """Collapse runs of whitespace and strip the ends of a rule name."""
    return " ".join(name.split())


class DeductionCategory(StrEnum):
    """Deduction categories recognized by the payroll engine.

    The value is the rule name stored in the deduction rule store.
    """

    HOUSING = "Housing"
    TRANSPORT = "Transport"
    EMPLOYEE_TAX = "Employee Tax"
    PENSION = "Pension"
    MEDICAL_INSURANCE = "Medical Insurance"
    OTHERS = "Others"

    @classmethod
    def from_rule_name(cls, name: str) -> "DeductionCategory | None":
        """Resolve a stored rule name to a category (case-insensitive)."""
        normalized = normalize_rule_name(name).lower()
        for category in cls:
            if category.value.lower() == normalized:
                return category
        return None


class DeductionRule(BaseModel):
    """Deduction rule domain model."""

    model_config = ConfigDict(from_attributes=True)

    code: str
    name: str
    percentage: Decimal

    @property
    def category(self) -> DeductionCategory | None:
        """Get the payroll category this rule feeds, if any."""
        return DeductionCategory.from_rule_name(self.name)
