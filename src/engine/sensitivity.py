"""Sensitivity tables: valuation by cap rate, IRR by exit cap and income growth.

Pure functions. No I/O. Each IRR cell re-runs the full hold-period model
with one assumption replaced.
"""

from dataclasses import replace
from decimal import Decimal, ROUND_HALF_UP
from typing import Sequence

from src.config import settings
from src.engine.cashflow import value_from_cap_rate
from src.engine.irr import calculate_irr, run_hold_period
from src.engine.outcome import ZERO, safe_divide
from src.models.deal import ModelInputs
from src.models.results import CapRateScenario, IRRMatrix, IRRSensitivityRow

CAP_RATE_STEPS = [Decimal(s) for s in ("-1.5", "-1.0", "-0.5", "0", "0.5", "1.0", "1.5")]
ASKING_RATE_TOLERANCE = Decimal("0.1")


def _grid(values: Sequence[float | Decimal] | None, default: list[float]) -> list[Decimal]:
    return [Decimal(str(v)) for v in (default if values is None else values)]


def _is_solvable(inputs: ModelInputs) -> bool:
    return inputs.initial_income > 0 and inputs.total_cash_invested > 0


def valuation_by_cap_rate(
    noi: Decimal, purchase_price: Decimal, asking_cap_rate: Decimal
) -> list[CapRateScenario]:
    """Implied value at cap rates around the asking rate (rounded to 0.5)."""
    base = (asking_cap_rate * 2).quantize(Decimal("1"), ROUND_HALF_UP) / 2
    scenarios: list[CapRateScenario] = []
    for step in CAP_RATE_STEPS:
        cap = base + step
        if cap <= 0:
            continue
        value = value_from_cap_rate(noi, cap)
        scenarios.append(CapRateScenario(
            cap_rate=cap,
            value=value,
            vs_asking_pct=safe_divide(value - purchase_price, purchase_price).or_zero() * 100,
            is_asking_rate=abs(cap - asking_cap_rate) < ASKING_RATE_TOLERANCE,
        ))
    return scenarios


def _run(inputs: ModelInputs) -> IRRSensitivityRow:
    projections, exit_sale, cash_flows = run_hold_period(inputs)
    if exit_sale is None:
        return IRRSensitivityRow(
            exit_cap_rate=inputs.exit_cap_rate,
            income_growth_rate=inputs.income_growth_rate,
            irr=ZERO,
        )
    return IRRSensitivityRow(
        exit_cap_rate=inputs.exit_cap_rate,
        income_growth_rate=inputs.income_growth_rate,
        irr=calculate_irr(cash_flows),
        sale_price=exit_sale.sale_price,
        net_to_seller=exit_sale.net_to_seller,
        total_cash_flow=sum((p.cash_flow for p in projections), ZERO),
    )


def irr_by_exit_cap(
    inputs: ModelInputs, exit_caps: Sequence[float | Decimal] | None = None
) -> list[IRRSensitivityRow]:
    if not _is_solvable(inputs):
        return []
    return [
        _run(replace(inputs, exit_cap_rate=cap))
        for cap in _grid(exit_caps, settings.sensitivity_exit_caps)
    ]


def irr_by_income_growth(
    inputs: ModelInputs, growth_rates: Sequence[float | Decimal] | None = None
) -> list[IRRSensitivityRow]:
    if not _is_solvable(inputs):
        return []
    return [
        _run(replace(inputs, income_growth_rate=g))
        for g in _grid(growth_rates, settings.sensitivity_growth_rates)
    ]


def irr_matrix(
    inputs: ModelInputs,
    exit_caps: Sequence[float | Decimal] | None = None,
    growth_rates: Sequence[float | Decimal] | None = None,
) -> IRRMatrix:
    """IRR grid: one row per income growth rate, one column per exit cap."""
    if not _is_solvable(inputs):
        return IRRMatrix()
    caps = _grid(exit_caps, settings.matrix_exit_caps)
    rates = _grid(growth_rates, settings.matrix_growth_rates)
    values = [
        [
            _run(replace(inputs, income_growth_rate=g, exit_cap_rate=cap)).irr
            for cap in caps
        ]
        for g in rates
    ]
    return IRRMatrix(exit_caps=caps, growth_rates=rates, values=values)
