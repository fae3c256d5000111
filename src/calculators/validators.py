"""Input range checks run before any calculation.

Each check accepts the raw value a form or API client submitted (numbers
or numeric strings) and returns a ValidationResult instead of raising.
"""

from decimal import Decimal, InvalidOperation
from typing import Any

from config.settings import settings
from src.calculators.income_tax import MAX_DEPENDENTS
from src.calculators.models import ValidationResult

_VALID = ValidationResult(valid=True)


def _parse_decimal(value: Any) -> Decimal | None:
    if isinstance(value, bool):
        return None
    try:
        result = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    return result if result.is_finite() else None


def _format_bound(bound: Decimal) -> str:
    return f"{bound:,.2f}"


def _validate_amount(value: Any, label: str, max_amount: Decimal | None) -> ValidationResult:
    if value is None or (isinstance(value, str) and not value.strip()):
        return ValidationResult(valid=False, message=f"{label} is required.")

    amount = _parse_decimal(value)
    if amount is None or amount <= 0:
        return ValidationResult(valid=False, message=f"{label} must be greater than zero.")

    bound = settings.max_amount if max_amount is None else max_amount
    if amount > bound:
        return ValidationResult(
            valid=False,
            message=f"{label} is too high (maximum: {_format_bound(bound)}).",
        )
    return _VALID


def validate_gross_amount(value: Any, max_amount: Decimal | None = None) -> ValidationResult:
    """Check that a gross amount is positive and within the sanity bound."""
    return _validate_amount(value, "Gross amount", max_amount)


def validate_net_amount(value: Any, max_amount: Decimal | None = None) -> ValidationResult:
    """Check that a target net amount is positive and within the sanity bound."""
    return _validate_amount(value, "Net amount", max_amount)


def validate_dependents(value: Any) -> ValidationResult:
    """Check that the number of dependents is a whole number in [0, 20]."""
    number = _parse_decimal(value)
    if number is None or number != number.to_integral_value():
        return ValidationResult(valid=False, message="Number of dependents must be a whole number.")
    if number < 0:
        return ValidationResult(valid=False, message="Number of dependents cannot be negative.")
    if number > MAX_DEPENDENTS:
        return ValidationResult(
            valid=False,
            message=f"Number of dependents is too high (maximum: {MAX_DEPENDENTS}).",
        )
    return _VALID


def validate_service_tax_rate(value: Any) -> ValidationResult:
    """Check that the service tax rate is a number between 0 and 100."""
    rate = _parse_decimal(value)
    if rate is None or rate < 0 or rate > 100:
        return ValidationResult(valid=False, message="Service tax rate must be between 0% and 100%.")
    return _VALID
