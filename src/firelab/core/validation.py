"""
Input validation and reporting utilities for FireLab.

Provides a structured validation report for financial inputs. Validation
never raises: every failed check contributes one human-readable message.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from .specs import MAX_AGE_LIMIT, MAX_SAFE_VALUE, FinancialInputs

MSG_ALLOCATION = "Asset allocation must sum to 100%, currently {total:.2f}%"
MSG_NEGATIVE_WITHDRAWAL = "Withdrawal rate cannot be negative"
MSG_NEGATIVE_CURRENT_EXPENSES = "Current annual expenses cannot be negative"
MSG_NEGATIVE_FIRE_EXPENSES = "FIRE annual expenses cannot be negative"
MSG_NEGATIVE_LABOR_INCOME = "Annual labor income cannot be negative"
MSG_MAX_AGE_BELOW_CURRENT = "Maximum age must be greater than or equal to current age"
MSG_MAX_AGE_TOO_HIGH = f"Maximum age must be {MAX_AGE_LIMIT} or less"
MSG_TOO_LARGE = "Input values are too large for calculation"
MSG_TARGET_TOO_LARGE = "FIRE target is too large for calculation"


@dataclass
class ValidationReport:
    """
    Ordered list of validation failures for one set of inputs.

    An empty report means the inputs are valid.
    """

    errors: list[str] = field(default_factory=list)

    def has_errors(self) -> bool:
        return bool(self.errors)

    def is_valid(self) -> bool:
        return not self.has_errors()

    def get_exit_code(self) -> int:
        """
        Get appropriate CLI exit code.

        Returns:
            0: Valid
            1: Errors present
        """
        return 1 if self.has_errors() else 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "errors": list(self.errors),
            "is_valid": self.is_valid(),
            "exit_code": self.get_exit_code(),
        }

    def __str__(self) -> str:
        if self.is_valid():
            return "✅ Validation passed"
        lines = ["❌ Validation failed"]
        lines.extend(f"  - {error}" for error in self.errors)
        return "\n".join(lines)


def _too_large(value: float) -> bool:
    return not math.isfinite(value) or abs(value) > MAX_SAFE_VALUE


def validate_inputs(
    inputs: FinancialInputs, current_year: int | None = None
) -> ValidationReport:
    """
    Check financial inputs for structural and numeric sanity.

    All checks run independently and every failure is collected in a fixed
    order; the magnitude check runs last.

    Args:
        inputs: Financial inputs to check
        current_year: Calendar year the projection starts in (default: today)

    Returns:
        ValidationReport with zero or more error messages
    """
    if current_year is None:
        current_year = date.today().year
    current_age = inputs.current_age(current_year)

    report = ValidationReport()
    errors = report.errors

    if not inputs.allocation_is_valid():
        errors.append(MSG_ALLOCATION.format(total=inputs.allocation_sum))
    if inputs.desired_withdrawal_rate < 0:
        errors.append(MSG_NEGATIVE_WITHDRAWAL)
    if inputs.current_annual_expenses < 0:
        errors.append(MSG_NEGATIVE_CURRENT_EXPENSES)
    if inputs.fire_annual_expenses < 0:
        errors.append(MSG_NEGATIVE_FIRE_EXPENSES)
    if inputs.annual_labor_income < 0:
        errors.append(MSG_NEGATIVE_LABOR_INCOME)
    if inputs.max_age < current_age:
        errors.append(MSG_MAX_AGE_BELOW_CURRENT)
    if inputs.max_age > MAX_AGE_LIMIT:
        errors.append(MSG_MAX_AGE_TOO_HIGH)

    magnitudes = (
        inputs.initial_savings,
        inputs.current_annual_expenses,
        inputs.fire_annual_expenses,
        inputs.annual_labor_income,
    )
    if any(_too_large(value) for value in magnitudes):
        errors.append(MSG_TOO_LARGE)

    return report
