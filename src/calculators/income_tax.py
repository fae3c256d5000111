"""Income tax calculator: progressive brackets with a subtracted amount."""

from decimal import Decimal

from src.calculators.contribution import calculate_contribution, require_positive_gross
from src.calculators.errors import InvalidInputError
from src.calculators.models import IncomeTaxResult
from src.calculators.money import Numeric, percent_of, round_money
from src.calculators.tax_data import RATE_SCHEDULE, RateSchedule, find_bracket

MAX_DEPENDENTS = 20


def require_dependents(dependents: int) -> int:
    """Return ``dependents`` if it is a whole number in [0, MAX_DEPENDENTS]."""
    if isinstance(dependents, bool) or not isinstance(dependents, int):
        raise InvalidInputError("dependents", "Number of dependents must be a whole number.")
    if dependents < 0 or dependents > MAX_DEPENDENTS:
        raise InvalidInputError(
            "dependents",
            f"Number of dependents must be between 0 and {MAX_DEPENDENTS}.",
        )
    return dependents


def calculate_income_tax(
    gross_amount: Numeric,
    dependents: int = 0,
    schedule: RateSchedule = RATE_SCHEDULE,
) -> IncomeTaxResult:
    """Calculate withheld income tax on a contractor payment.

    The taxable base is the gross amount less the social security
    contribution (recomputed here, so both calculators agree) and the
    per-dependent deduction. The bracket whose upper bound first reaches
    the base supplies the rate and the amount subtracted.

    Args:
        gross_amount: Gross payment (must be > 0).
        dependents: Number of dependents, 0-20.
        schedule: Rate schedule to apply.

    Returns:
        IncomeTaxResult with amount, applied bracket rate and deductions.

    Raises:
        InvalidInputError: If gross_amount is not positive or dependents is out of range.
    """
    gross = require_positive_gross(gross_amount)
    dependents = require_dependents(dependents)

    contribution_deduction = calculate_contribution(gross, schedule).amount
    dependents_deduction = round_money(dependents * schedule.dependent_deduction)
    taxable_base = gross - contribution_deduction - dependents_deduction

    if taxable_base <= 0:
        return IncomeTaxResult(
            amount=Decimal("0.00"),
            rate_percent=Decimal("0.00"),
            effective_rate_percent=Decimal("0.00"),
            taxable_base=Decimal("0.00"),
            dependents=dependents,
            contribution_deduction=contribution_deduction,
            dependents_deduction=dependents_deduction,
            subtracted_amount=Decimal("0.00"),
        )

    bracket = find_bracket(taxable_base, schedule.brackets)
    amount = round_money(max(taxable_base * bracket.rate - bracket.subtracted_amount, Decimal("0")))

    return IncomeTaxResult(
        amount=amount,
        rate_percent=round_money(bracket.rate * 100),
        effective_rate_percent=percent_of(amount, gross),
        taxable_base=round_money(taxable_base),
        dependents=dependents,
        contribution_deduction=contribution_deduction,
        dependents_deduction=dependents_deduction,
        subtracted_amount=round_money(bracket.subtracted_amount),
    )
