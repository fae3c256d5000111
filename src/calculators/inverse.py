"""Gross-from-net solver: finds the gross payment that yields a target net.

The net amount is a piecewise-linear function of the gross amount (brackets,
contribution floor and ceiling), so there is no closed-form inverse. The
solver applies a proportional correction each round, assuming the local
relationship is close to linear. It also keeps the closest estimates seen
on either side of the target; once a correction would leave that bracket
(or go non-positive) it interpolates between the two ends instead. The best
estimate seen is returned when the budget runs out.
"""

import logging
from decimal import Decimal

from src.calculators.errors import InvalidInputError
from src.calculators.income_tax import require_dependents
from src.calculators.models import InversionRequest, InversionResult, TaxInput, TaxSummary
from src.calculators.money import CENTS, round_money, to_decimal
from src.calculators.service_tax import require_service_tax_rate
from src.calculators.summary import SummaryCalculator

logger = logging.getLogger(__name__)

INITIAL_GROSS_FACTOR = Decimal("1.35")  # covers a typical combined burden
RESET_GROSS_FACTOR = Decimal("1.5")
PERTURBATION_FACTOR = Decimal("1.05")

NON_CONVERGENCE_WARNING = "Did not fully converge; returning the closest approximation found."


class _Bracket:
    """Estimates seen just below and just above the target net, as (gross, net)."""

    def __init__(self, target: Decimal) -> None:
        self.target = target
        self.low: tuple[Decimal, Decimal] | None = None
        self.high: tuple[Decimal, Decimal] | None = None

    def _inside(self, gross: Decimal) -> bool:
        if self.low is None or self.high is None:
            return False
        lower, upper = sorted((self.low[0], self.high[0]))
        return lower < gross < upper

    def record(self, gross: Decimal, net: Decimal) -> None:
        if net < self.target:
            if self.low is None or net > self.low[1] or self._inside(gross):
                self.low = (gross, net)
        elif net > self.target:
            if self.high is None or net < self.high[1] or self._inside(gross):
                self.high = (gross, net)

    def admits(self, gross: Decimal) -> bool:
        """Whether ``gross`` lies strictly inside what is known of the bracket."""
        if gross <= 0:
            return False
        if self.low is not None and self.high is not None:
            return self._inside(gross)
        if self.low is not None:
            return gross > self.low[0]
        if self.high is not None:
            return gross < self.high[0]
        return True

    def fallback(self) -> Decimal | None:
        """Estimate to try when a correction leaves the bracket.

        Returns None when both ends are known and no whole cent lies
        between them.
        """
        if self.low is not None and self.high is not None:
            low_gross, low_net = self.low
            high_gross, high_net = self.high
            if abs(high_gross - low_gross) <= CENTS:
                return None
            proposed = round_money(
                low_gross + (self.target - low_net) * (high_gross - low_gross) / (high_net - low_net)
            )
            if not self._inside(proposed):
                proposed = round_money((low_gross + high_gross) / 2)
            return proposed if self._inside(proposed) else None
        if self.low is not None:
            # net rises by at most one unit per unit of gross, so this never overshoots
            low_gross, low_net = self.low
            return round_money(low_gross + (self.target - low_net))
        return round_money(self.target * RESET_GROSS_FACTOR)


def _check_request(request: InversionRequest) -> Decimal:
    target = to_decimal(request.target_net_amount, "target_net_amount")
    if target <= 0:
        raise InvalidInputError("target_net_amount", "Net amount must be greater than zero.")
    if request.tolerance <= 0:
        raise InvalidInputError("tolerance", "Tolerance must be greater than zero.")
    if request.max_iterations < 1:
        raise InvalidInputError("max_iterations", "Maximum iterations must be at least 1.")
    require_dependents(request.dependents)
    require_service_tax_rate(request.service_tax_rate)
    return target


def _next_estimate(estimate: Decimal, summary: TaxSummary, bracket: _Bracket) -> Decimal | None:
    """Scale the estimate by the ratio of target to computed net, within the bracket."""
    net = summary.net_amount
    if net > 0:
        diff = net - bracket.target
        proposed = round_money(estimate * (1 - diff / net))
        if proposed == estimate:
            # correction smaller than a cent; move one cent towards the target
            proposed = estimate - CENTS if diff > 0 else estimate + CENTS
        if bracket.admits(proposed):
            return proposed
    return bracket.fallback()


def _summarize(calculator: SummaryCalculator, request: InversionRequest, gross: Decimal) -> TaxSummary:
    return calculator.calculate(
        TaxInput(
            gross_amount=gross,
            dependents=request.dependents,
            service_tax_rate=request.service_tax_rate,
            include_service_tax=request.include_service_tax,
        )
    )


def solve_gross_from_net(
    request: InversionRequest,
    calculator: SummaryCalculator,
) -> InversionResult:
    """Find the gross amount whose net amount matches ``request.target_net_amount``.

    Never raises for non-convergence: when the iteration budget runs out, or
    the bracket around the target narrows to adjacent cents, the best
    estimate seen is returned with ``converged=False`` and a warning.

    Args:
        request: Target net amount, side parameters, tolerance and budget.
        calculator: Summary calculator (and its cache) used for every step.

    Returns:
        InversionResult describing the gross amount found.

    Raises:
        InvalidInputError: If the request itself is malformed (non-positive
            target or tolerance, empty iteration budget).
    """
    target = _check_request(request)
    bracket = _Bracket(target)
    estimate = round_money(target * INITIAL_GROSS_FACTOR)
    best_estimate = estimate
    best_diff: Decimal | None = None
    iterations_used = request.max_iterations

    for iteration in range(request.max_iterations):
        try:
            summary = _summarize(calculator, request, estimate)
            diff = summary.net_amount - target
            bracket.record(estimate, summary.net_amount)

            if best_diff is None or abs(diff) < best_diff:
                best_diff = abs(diff)
                best_estimate = estimate

            if abs(diff) <= request.tolerance:
                logger.info(
                    "Solved gross %s for net %s in %d iterations",
                    estimate,
                    target,
                    iteration + 1,
                )
                return InversionResult(
                    converged=True,
                    gross_amount_found=estimate,
                    target_net_amount=round_money(target),
                    actual_net_amount=summary.net_amount,
                    net_difference=round_money(diff),
                    iterations_used=iteration + 1,
                    summary=summary,
                )

            next_estimate = _next_estimate(estimate, summary, bracket)
            if next_estimate is None:
                iterations_used = iteration + 1
                break
            estimate = next_estimate
        except (InvalidInputError, ArithmeticError) as e:
            logger.debug("Step at gross %s failed (%s); perturbing estimate", estimate, e)
            estimate = round_money(estimate * PERTURBATION_FACTOR)
            if estimate <= 0:
                estimate = round_money(target * RESET_GROSS_FACTOR)

    summary = _summarize(calculator, request, best_estimate)
    logger.warning(
        "Gross-from-net did not converge for net %s after %d iterations; best gross %s",
        target,
        iterations_used,
        best_estimate,
    )
    return InversionResult(
        converged=False,
        gross_amount_found=best_estimate,
        target_net_amount=round_money(target),
        actual_net_amount=summary.net_amount,
        net_difference=round_money(summary.net_amount - target),
        iterations_used=iterations_used,
        summary=summary,
        warning=NON_CONVERGENCE_WARNING,
    )
