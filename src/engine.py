"""Withholding tax engine: validate inputs, then calculate or solve.

This is the single entry point the surrounding application (API routes,
CLI) calls into. It owns the summary cache for the life of the process.
"""

import logging

from config.settings import settings
from src.calculators.cache import ResultCache
from src.calculators.contribution import calculate_contribution
from src.calculators.errors import InvalidInputError
from src.calculators.income_tax import calculate_income_tax
from src.calculators.inverse import solve_gross_from_net
from src.calculators.models import (
    CacheStats,
    ContributionResult,
    IncomeTaxResult,
    InversionRequest,
    InversionResult,
    ServiceTaxResult,
    TaxInput,
    TaxSummary,
    ValidationResult,
)
from src.calculators.money import Numeric
from src.calculators.service_tax import calculate_service_tax
from src.calculators.summary import SummaryCalculator
from src.calculators.validators import (
    validate_dependents,
    validate_gross_amount,
    validate_net_amount,
    validate_service_tax_rate,
)

logger = logging.getLogger(__name__)


def _require(field: str, result: ValidationResult) -> None:
    if not result.valid:
        raise InvalidInputError(field, result.message)


class TaxEngine:
    """Validated access to the forward calculators and the gross-from-net solver."""

    def __init__(self, calculator: SummaryCalculator | None = None) -> None:
        self._calculator = calculator or SummaryCalculator()

    @classmethod
    def from_settings(cls) -> "TaxEngine":
        """Build an engine with the cache configured from ``settings``."""
        cache = ResultCache(settings.cache_max_entries) if settings.cache_enabled else None
        logger.info(
            "Tax engine ready (cache=%s, capacity=%d)",
            "on" if cache is not None else "off",
            settings.cache_max_entries,
        )
        return cls(SummaryCalculator(cache=cache))

    def calculate_contribution(self, gross_amount: Numeric) -> ContributionResult:
        _require("gross_amount", validate_gross_amount(gross_amount))
        return calculate_contribution(gross_amount)

    def calculate_income_tax(self, gross_amount: Numeric, dependents: int = 0) -> IncomeTaxResult:
        _require("gross_amount", validate_gross_amount(gross_amount))
        _require("dependents", validate_dependents(dependents))
        return calculate_income_tax(gross_amount, dependents)

    def calculate_service_tax(self, gross_amount: Numeric, rate_percent: Numeric) -> ServiceTaxResult:
        _require("gross_amount", validate_gross_amount(gross_amount))
        _require("service_tax_rate", validate_service_tax_rate(rate_percent))
        return calculate_service_tax(gross_amount, rate_percent)

    def compute_summary(self, tax_input: TaxInput) -> TaxSummary:
        """Validate ``tax_input`` and return its TaxSummary.

        Raises:
            InvalidInputError: On the first failed range check; no
                calculator runs in that case.
        """
        _require("gross_amount", validate_gross_amount(tax_input.gross_amount))
        _require("dependents", validate_dependents(tax_input.dependents))
        _require("service_tax_rate", validate_service_tax_rate(tax_input.service_tax_rate))
        return self._calculator.calculate(tax_input)

    def solve_gross_from_net(self, request: InversionRequest) -> InversionResult:
        """Validate ``request`` and solve for the gross amount.

        Non-convergence is reported on the result, never raised.
        """
        _require("target_net_amount", validate_net_amount(request.target_net_amount))
        _require("dependents", validate_dependents(request.dependents))
        _require("service_tax_rate", validate_service_tax_rate(request.service_tax_rate))
        return solve_gross_from_net(request, self._calculator)

    def cache_stats(self) -> CacheStats | None:
        """Return cache statistics, or None when caching is disabled."""
        cache = self._calculator.cache
        return cache.stats() if cache is not None else None

    def clear_cache(self) -> None:
        cache = self._calculator.cache
        if cache is not None:
            cache.clear()
            logger.info("Summary cache cleared")
