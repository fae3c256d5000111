"""Social security contribution calculator for independent contractors."""

from decimal import Decimal

from src.calculators.errors import InvalidInputError
from src.calculators.models import ContributionResult
from src.calculators.money import Numeric, percent_of, round_money, to_decimal
from src.calculators.tax_data import RATE_SCHEDULE, RateSchedule


def require_positive_gross(gross_amount: Numeric) -> Decimal:
    """Return the gross amount rounded to cents, raising if it is not positive."""
    gross = to_decimal(gross_amount, "gross_amount")
    if gross <= 0:
        raise InvalidInputError("gross_amount", "Gross amount must be greater than zero.")
    gross = round_money(gross)
    if gross <= 0:
        raise InvalidInputError("gross_amount", "Gross amount must be at least 0.01.")
    return gross


def calculate_contribution(
    gross_amount: Numeric,
    schedule: RateSchedule = RATE_SCHEDULE,
) -> ContributionResult:
    """Calculate the flat-rate social security contribution.

    The base is capped at the contribution ceiling, and the amount never
    falls below the contribution owed on one minimum wage.

    Args:
        gross_amount: Gross payment (must be > 0).
        schedule: Rate schedule to apply.

    Returns:
        ContributionResult with amount, base, ceiling and floor flags.

    Raises:
        InvalidInputError: If gross_amount is not positive.
    """
    gross = require_positive_gross(gross_amount)

    base = min(gross, schedule.contribution_ceiling)
    raw = base * schedule.contribution_rate
    floor = schedule.contribution_floor
    amount = round_money(max(raw, floor))

    return ContributionResult(
        amount=amount,
        rate_percent=round_money(schedule.contribution_rate * 100),
        effective_rate_percent=percent_of(amount, gross),
        taxable_base=round_money(base),
        ceiling=schedule.contribution_ceiling,
        minimum_wage=schedule.minimum_wage,
        ceiling_applied=gross > schedule.contribution_ceiling,
        floor_applied=raw < floor,
    )
