"""Brazilian withholding constants: contribution limits and income tax brackets.

Hardcoded Python constants (not DB-driven). A single schedule is in force;
the engine does not carry historical tables.
"""

from bisect import bisect_left
from decimal import Decimal
from typing import NamedTuple


class TaxBracket(NamedTuple):
    """A single progressive income tax bracket."""

    upper: Decimal  # inclusive; Infinity on the last bracket
    rate: Decimal
    subtracted_amount: Decimal


class RateSchedule(NamedTuple):
    """All withholding parameters for the contractor payment engine."""

    minimum_wage: Decimal
    contribution_ceiling: Decimal
    contribution_rate: Decimal
    dependent_deduction: Decimal
    brackets: tuple[TaxBracket, ...]

    @property
    def contribution_floor(self) -> Decimal:
        """Minimum contribution owed on any positive payment."""
        return self.minimum_wage * self.contribution_rate

    @property
    def contribution_cap(self) -> Decimal:
        """Maximum contribution owed on any payment."""
        return self.contribution_ceiling * self.contribution_rate


INCOME_TAX_BRACKETS = (
    TaxBracket(Decimal("2112.00"), Decimal("0"), Decimal("0")),
    TaxBracket(Decimal("2826.65"), Decimal("0.075"), Decimal("158.40")),
    TaxBracket(Decimal("3751.05"), Decimal("0.15"), Decimal("370.40")),
    TaxBracket(Decimal("4664.68"), Decimal("0.225"), Decimal("651.73")),
    TaxBracket(Decimal("Infinity"), Decimal("0.275"), Decimal("884.96")),
)

RATE_SCHEDULE = RateSchedule(
    minimum_wage=Decimal("1412.00"),
    contribution_ceiling=Decimal("7786.02"),
    contribution_rate=Decimal("0.20"),  # self-employed contractor rate
    dependent_deduction=Decimal("189.59"),
    brackets=INCOME_TAX_BRACKETS,
)


def find_bracket(
    taxable_base: Decimal,
    brackets: tuple[TaxBracket, ...] = INCOME_TAX_BRACKETS,
) -> TaxBracket:
    """Return the first bracket whose upper bound is >= ``taxable_base``.

    A base sitting exactly on an upper bound belongs to that bracket.
    ``brackets`` must be sorted ascending by upper bound and end with Infinity.
    """
    index = bisect_left([b.upper for b in brackets], taxable_base)
    return brackets[min(index, len(brackets) - 1)]
