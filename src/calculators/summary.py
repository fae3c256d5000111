"""Aggregates contribution, income tax and service tax into one summary."""

import logging

from src.calculators.cache import ResultCache, make_cache_key
from src.calculators.contribution import calculate_contribution, require_positive_gross
from src.calculators.income_tax import calculate_income_tax, require_dependents
from src.calculators.models import TaxInput, TaxSummary
from src.calculators.money import percent_of, round_money, round_rate
from src.calculators.service_tax import (
    calculate_service_tax,
    excluded_service_tax,
    require_service_tax_rate,
)
from src.calculators.tax_data import RATE_SCHEDULE, RateSchedule

logger = logging.getLogger(__name__)


class SummaryCalculator:
    """Computes TaxSummary values, writing through to an optional cache."""

    def __init__(
        self,
        cache: ResultCache | None = None,
        schedule: RateSchedule = RATE_SCHEDULE,
    ) -> None:
        self._cache = cache
        self._schedule = schedule

    @property
    def cache(self) -> ResultCache | None:
        return self._cache

    def calculate(self, tax_input: TaxInput) -> TaxSummary:
        """Calculate all withholdings for ``tax_input``.

        Each component is rounded to cents before the totals are derived,
        so ``total_tax`` is exactly the sum of the component amounts and
        ``net_amount`` is exactly ``gross_amount - total_tax``.

        Raises:
            InvalidInputError: If any forward-calculator precondition fails.
        """
        gross = require_positive_gross(tax_input.gross_amount)
        dependents = require_dependents(tax_input.dependents)
        rate = round_rate(require_service_tax_rate(tax_input.service_tax_rate))

        key = make_cache_key(gross, dependents, rate, tax_input.include_service_tax)
        if self._cache is not None:
            cached = self._cache.get(key)
            if cached is not None:
                return cached

        contribution = calculate_contribution(gross, self._schedule)
        income_tax = calculate_income_tax(gross, dependents, self._schedule)
        if tax_input.include_service_tax:
            service_tax = calculate_service_tax(gross, rate)
        else:
            service_tax = excluded_service_tax()

        total_tax = contribution.amount + income_tax.amount + service_tax.amount
        summary = TaxSummary(
            gross_amount=gross,
            dependents=dependents,
            contribution=contribution,
            income_tax=income_tax,
            service_tax=service_tax,
            total_tax=round_money(total_tax),
            net_amount=round_money(gross - total_tax),
            total_tax_percent=percent_of(total_tax, gross),
        )

        if self._cache is not None:
            summary = self._cache.put(key, summary)
        return summary
