"""Bounded in-process cache of tax summaries.

Entries are evicted oldest-inserted first once capacity is exceeded; reads
do not refresh an entry's position. The cache is a pure optimisation, so
callers must not depend on any particular entry surviving.
"""

import logging
import threading
from collections import OrderedDict
from decimal import Decimal

from src.calculators.models import CacheStats, TaxSummary
from src.calculators.money import CENTS, RATE_PLACES

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 100


def make_cache_key(
    gross_amount: Decimal,
    dependents: int,
    service_tax_rate: Decimal,
    include_service_tax: bool,
) -> str:
    """Build the canonical key for a summary request.

    Amounts are encoded with fixed precision so equal values written
    differently (5, 5.0, 5.00) map to the same entry.
    """
    gross = gross_amount.quantize(CENTS)
    rate = service_tax_rate.quantize(RATE_PLACES)
    return f"{gross}:{dependents}:{rate}:{int(include_service_tax)}"


class ResultCache:
    """Thread-safe FIFO cache mapping request keys to TaxSummary."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("Cache capacity must be at least 1")
        self._capacity = capacity
        self._entries: OrderedDict[str, TaxSummary] = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def get(self, key: str) -> TaxSummary | None:
        """Return the cached summary for ``key``, or None."""
        with self._lock:
            summary = self._entries.get(key)
            if summary is None:
                self._misses += 1
            else:
                self._hits += 1
        if summary is not None:
            logger.debug("Cache hit: %s", key)
        return summary

    def put(self, key: str, summary: TaxSummary) -> TaxSummary:
        """Insert ``summary`` unless ``key`` is already present.

        Returns the summary now stored under ``key``, so concurrent callers
        computing the same request all hand back one instance.
        """
        with self._lock:
            existing = self._entries.get(key)
            if existing is not None:
                return existing
            self._entries[key] = summary
            evicted: list[str] = []
            while len(self._entries) > self._capacity:
                oldest, _ = self._entries.popitem(last=False)
                evicted.append(oldest)
        for oldest in evicted:
            logger.debug("Cache evicted: %s", oldest)
        return summary

    def clear(self) -> None:
        """Drop all entries and reset hit counters."""
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0

    def stats(self) -> CacheStats:
        """Return size, capacity, hit counters and keys in insertion order."""
        with self._lock:
            return CacheStats(
                size=len(self._entries),
                capacity=self._capacity,
                hits=self._hits,
                misses=self._misses,
                keys=list(self._entries),
            )
