"""Municipal service tax calculator."""

from decimal import Decimal

from src.calculators.contribution import require_positive_gross
from src.calculators.errors import InvalidInputError
from src.calculators.models import ServiceTaxResult
from src.calculators.money import Numeric, percent_of, round_money, to_decimal


def require_service_tax_rate(rate_percent: Numeric) -> Decimal:
    """Return the rate as Decimal if it lies in [0, 100]."""
    rate = to_decimal(rate_percent, "service_tax_rate")
    if rate < 0 or rate > 100:
        raise InvalidInputError("service_tax_rate", "Service tax rate must be between 0% and 100%.")
    return rate


def calculate_service_tax(gross_amount: Numeric, rate_percent: Numeric = Decimal("5")) -> ServiceTaxResult:
    """Calculate service tax as a flat percentage of the gross amount.

    Raises:
        InvalidInputError: If gross_amount is not positive or the rate is outside 0-100.
    """
    gross = require_positive_gross(gross_amount)
    rate = require_service_tax_rate(rate_percent)

    amount = round_money(gross * rate / 100)

    return ServiceTaxResult(
        amount=amount,
        rate_percent=round_money(rate),
        effective_rate_percent=percent_of(amount, gross),
        taxable_base=gross,
    )


def excluded_service_tax() -> ServiceTaxResult:
    """Zero placeholder used when the payment is not subject to service tax."""
    zero = Decimal("0.00")
    return ServiceTaxResult(
        amount=zero,
        rate_percent=zero,
        effective_rate_percent=zero,
        taxable_base=zero,
        included=False,
    )
