"""Comparable-sale benchmark routes."""

import logging
from decimal import Decimal, ROUND_HALF_UP

from fastapi import APIRouter

from src.api.schemas import (
    ComparableSaleRequest,
    CompsRequest,
    CompsResponse,
    PricePerSqftBenchmarkResponse,
)
from src.engine.comps import benchmark_price_per_sqft, suggest_exit_cap_rate
from src.models.comps import ComparableSale
from src.models.results import PricePerSqftBenchmark

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/comps", tags=["comps"])

TWO_PLACES = Decimal("0.01")


def build_comps(comps: list[ComparableSaleRequest]) -> list[ComparableSale]:
    return [ComparableSale(**c.model_dump()) for c in comps]


def benchmark_to_response(
    benchmark: PricePerSqftBenchmark | None,
) -> PricePerSqftBenchmarkResponse | None:
    if benchmark is None:
        return None
    return PricePerSqftBenchmarkResponse(
        min=benchmark.min,
        avg=benchmark.avg.quantize(TWO_PLACES, ROUND_HALF_UP),
        max=benchmark.max,
        count=benchmark.count,
    )


@router.post("/benchmark", response_model=CompsResponse)
def benchmark(req: CompsRequest):
    """Suggested exit cap (median comp cap rate) and $/sq ft range."""
    comps = build_comps(req.comps)
    suggested = suggest_exit_cap_rate(comps)
    logger.info("Benchmarked %d comps, suggested exit cap %s", len(comps), suggested)
    return CompsResponse(
        suggested_exit_cap=suggested,
        price_per_sqft=benchmark_to_response(benchmark_price_per_sqft(comps)),
    )
