"""Comparable-sale helpers for exit cap and pricing benchmarks.

Pure functions. No I/O: comps are fetched by the caller.
"""

import statistics
from decimal import Decimal
from typing import Iterable

from src.models.comps import ComparableSale
from src.models.results import PricePerSqftBenchmark


def suggest_exit_cap_rate(comps: Iterable[ComparableSale]) -> Decimal | None:
    """Median of the known comp cap rates, None if no comp reports one."""
    rates = [c.cap_rate for c in comps if c.cap_rate is not None and c.cap_rate > 0]
    if not rates:
        return None
    return statistics.median(rates)


def benchmark_price_per_sqft(
    comps: Iterable[ComparableSale],
) -> PricePerSqftBenchmark | None:
    """Min / average / max of known comp $/sq ft."""
    values = [
        c.price_per_sqft for c in comps
        if c.price_per_sqft is not None and c.price_per_sqft > 0
    ]
    if not values:
        return None
    return PricePerSqftBenchmark(
        min=min(values),
        avg=sum(values, Decimal("0")) / len(values),
        max=max(values),
        count=len(values),
    )
