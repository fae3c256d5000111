"""Shared test fixtures."""

import pytest

from src.calculators.cache import ResultCache
from src.calculators.summary import SummaryCalculator
from src.engine import TaxEngine


@pytest.fixture
def cache() -> ResultCache:
    """Small cache so eviction is easy to trigger."""
    return ResultCache(capacity=10)


@pytest.fixture
def calculator(cache: ResultCache) -> SummaryCalculator:
    """Summary calculator writing through to the small cache."""
    return SummaryCalculator(cache=cache)


@pytest.fixture
def uncached_calculator() -> SummaryCalculator:
    return SummaryCalculator()


@pytest.fixture
def engine(calculator: SummaryCalculator) -> TaxEngine:
    return TaxEngine(calculator)
