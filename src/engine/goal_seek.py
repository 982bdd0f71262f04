"""Goal-seek: invert the hold-period model to hit a target IRR.

Every solver runs the same objective (ModelInputs -> IRR) with exactly one
field replaced by a probe value, and bisects that probe for a fixed number
of iterations. The fixed count keeps results reproducible and bounded.

Pure functions. No I/O.
"""

import logging
from dataclasses import replace
from decimal import Decimal
from typing import Callable

from src.config import settings
from src.engine.irr import run_hold_period, solve_irr
from src.engine.outcome import ZERO, Outcome
from src.models.deal import ModelInputs
from src.models.results import GoalSeekResult, GoalSeekSummary

logger = logging.getLogger(__name__)

MIN_EXIT_CAP = Decimal("1")
MAX_EXIT_CAP = Decimal("15")


def model_irr(inputs: ModelInputs) -> Outcome:
    """Objective for every solver: one parameter set in, IRR out."""
    _, _, cash_flows = run_hold_period(inputs)
    return solve_irr(cash_flows)


def deal_irr(inputs: ModelInputs) -> Decimal:
    return model_irr(inputs).or_zero()


def bisect(
    objective: Callable[[Decimal], Decimal],
    target: Decimal,
    low: Decimal,
    high: Decimal,
    increasing: bool,
    iterations: int | None = None,
) -> Decimal:
    """Fixed-iteration bisection for objective(x) == target on [low, high].

    increasing says whether the objective rises with x; it decides which
    bound moves when the probe overshoots.
    """
    iterations = settings.bisection_iterations if iterations is None else iterations
    for _ in range(iterations):
        mid = (low + high) / 2
        value = objective(mid)
        if (value < target) == increasing:
            low = mid
        else:
            high = mid
    return (low + high) / 2


def _probe(inputs: ModelInputs, field: str) -> Callable[[Decimal], Decimal]:
    def objective(value: Decimal) -> Decimal:
        return deal_irr(replace(inputs, **{field: value}))
    return objective


def solve_max_purchase_price(target_irr: Decimal, inputs: ModelInputs) -> Decimal:
    """Highest price that still clears target_irr. Loan and closing costs scale with it."""
    return bisect(
        _probe(inputs, "purchase_price"),
        target_irr,
        low=Decimal("1"),
        high=inputs.purchase_price * 3,
        increasing=False,
    )


def solve_required_noi_lift(target_irr: Decimal, inputs: ModelInputs) -> Decimal:
    """Year-1 NOI needed to reach target_irr, searching on gross income."""
    income = bisect(
        _probe(inputs, "initial_income"),
        target_irr,
        low=inputs.initial_expenses,
        high=inputs.initial_income * 5,
        increasing=True,
    )
    return income - inputs.initial_expenses


def solve_required_rent_psf(
    target_noi: Decimal, area_sqft: Decimal, expense_ratio_pct: Decimal
) -> Decimal:
    """Closed form: gross rent per sq ft that nets target_noi after expenses."""
    if area_sqft <= 0 or expense_ratio_pct >= 100:
        return ZERO
    return target_noi / (1 - expense_ratio_pct / 100) / area_sqft


def solve_capex_ceiling(target_irr: Decimal, inputs: ModelInputs) -> Decimal:
    """Most up-front capital that can be added before IRR drops to target.

    Added capex is carried as extra closing cost, so it raises invested cash
    without touching the loan.
    """
    price = inputs.purchase_price
    if price <= 0:
        return ZERO

    def objective(capex: Decimal) -> Decimal:
        closing_pct = inputs.closing_costs_pct + capex / price * 100
        return deal_irr(replace(inputs, closing_costs_pct=closing_pct))

    return bisect(objective, target_irr, low=ZERO, high=price, increasing=False)


def solve_target_exit_cap(target_irr: Decimal, inputs: ModelInputs) -> Decimal:
    """Highest exit cap rate that still delivers target_irr.

    Inverted relative to the other solvers: a lower exit cap means a higher
    sale price and a higher IRR.
    """
    return bisect(
        _probe(inputs, "exit_cap_rate"),
        target_irr,
        low=MIN_EXIT_CAP,
        high=MAX_EXIT_CAP,
        increasing=False,
    )


def solve_all(
    target_irr: Decimal,
    inputs: ModelInputs,
    area_sqft: Decimal,
    expense_ratio_pct: Decimal,
) -> GoalSeekSummary:
    """Run all five solvers against one target IRR.

    The rent/sq ft solve targets the NOI found by the NOI-lift solver.
    """
    required_noi = solve_required_noi_lift(target_irr, inputs)
    summary = GoalSeekSummary(
        target_irr=target_irr,
        max_purchase_price=GoalSeekResult(
            "purchase_price", solve_max_purchase_price(target_irr, inputs), target_irr
        ),
        required_noi=GoalSeekResult("noi", required_noi, target_irr),
        required_rent_psf=GoalSeekResult(
            "rent_psf",
            solve_required_rent_psf(required_noi, area_sqft, expense_ratio_pct),
            required_noi,
        ),
        capex_ceiling=GoalSeekResult(
            "capex", solve_capex_ceiling(target_irr, inputs), target_irr
        ),
        target_exit_cap=GoalSeekResult(
            "exit_cap_rate", solve_target_exit_cap(target_irr, inputs), target_irr
        ),
    )
    logger.debug(
        "Goal-seek at %s%% IRR: max price %s, required NOI %s, exit cap %s",
        target_irr,
        summary.max_purchase_price.value,
        summary.required_noi.value,
        summary.target_exit_cap.value,
    )
    return summary
