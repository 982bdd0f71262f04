"""IRR, NPV and equity-multiple computation.

Pure functions. No I/O. Rates in and out are percentages.
"""

import logging
from decimal import Decimal

from scipy.optimize import brentq

from src.config import settings
from src.engine.disposition import compute_exit
from src.engine.outcome import ZERO, Outcome, OutcomeStatus, safe_divide
from src.engine.projections import generate_projections
from src.models.deal import ModelInputs
from src.models.results import ExitWaterfall, YearRecord

logger = logging.getLogger(__name__)


def build_irr_cash_flows(
    initial_investment: Decimal,
    projections: list[YearRecord],
    net_sale_proceeds: Decimal,
) -> list[Decimal]:
    """[-investment, cf1, ..., cf(n-1), cf(n) + sale proceeds]."""
    cash_flows = [-initial_investment]
    cash_flows.extend(p.cash_flow for p in projections)
    if projections:
        cash_flows[-1] += net_sale_proceeds
    return cash_flows


def run_hold_period(
    inputs: ModelInputs,
) -> tuple[list[YearRecord], ExitWaterfall | None, list[Decimal]]:
    """Projections, exit waterfall and the signed cash-flow vector for one deal.

    The vector's final element carries the seller's net proceeds after
    loan payoff.
    """
    projections = generate_projections(inputs)
    if not projections:
        return projections, None, [-inputs.total_cash_invested]
    exit_sale = compute_exit(
        projections[-1],
        inputs.income_growth_rate,
        inputs.exit_cap_rate,
        inputs.selling_costs_pct,
    )
    cash_flows = build_irr_cash_flows(
        inputs.total_cash_invested, projections, exit_sale.net_to_seller
    )
    return projections, exit_sale, cash_flows


def _npv(cash_flows: list[float], rate: float) -> float:
    return sum(cf / (1 + rate) ** t for t, cf in enumerate(cash_flows))


def _npv_derivative(cash_flows: list[float], rate: float) -> float:
    """dNPV/dr = -sum(t * CF_t / (1 + r)^(t + 1))."""
    return -sum(t * cf / (1 + rate) ** (t + 1) for t, cf in enumerate(cash_flows))


def _brent_irr(cash_flows: list[float]) -> float | None:
    try:
        return brentq(
            lambda r: _npv(cash_flows, r),
            settings.irr_min_rate,
            settings.irr_max_rate,
            xtol=1e-10,
            maxiter=1000,
        )
    except (ValueError, OverflowError, ZeroDivisionError):
        # No sign change inside the rate bounds
        return None


def _to_pct(rate: float) -> Decimal:
    return Decimal(str(rate)) * 100


def solve_irr(cash_flows: list[Decimal]) -> Outcome:
    """Newton-Raphson on NPV(r) = 0, steps clamped to the configured rate bounds.

    cash_flows[0] must be a negative investment and at least one period must
    follow; anything else cannot be solved and is reported as UNSOLVABLE
    rather than raised. When Newton stalls (flat derivative, exhausted
    iterations) the bracketed Brent solve is tried next. If no root lies
    inside the bounds, the result is the bound on the side of the root,
    tagged NOT_CONVERGED.
    """
    if len(cash_flows) < 2 or cash_flows[0] >= 0:
        return Outcome.unsolvable()

    cfs = [float(cf) for cf in cash_flows]
    rate = settings.irr_initial_guess

    try:
        for _ in range(settings.irr_max_iterations):
            npv = _npv(cfs, rate)
            if abs(npv) < settings.irr_tolerance:
                return Outcome(_to_pct(rate))
            derivative = _npv_derivative(cfs, rate)
            if derivative == 0:
                break
            rate = rate - npv / derivative
            rate = min(max(rate, settings.irr_min_rate), settings.irr_max_rate)
    except (OverflowError, ZeroDivisionError):
        logger.debug("IRR Newton step overflowed at rate %s", rate)

    fallback = _brent_irr(cfs)
    if fallback is not None:
        logger.debug("IRR Newton did not converge, Brent fallback gave %s", fallback)
        return Outcome(_to_pct(fallback))

    # Still profitable at the top of the range: the IRR lies above it
    if _npv(cfs, settings.irr_max_rate) > 0:
        logger.debug("IRR above %s for %d cash flows", settings.irr_max_rate, len(cfs))
        return Outcome(_to_pct(settings.irr_max_rate), OutcomeStatus.NOT_CONVERGED)

    logger.debug("IRR below %s for %d cash flows", settings.irr_min_rate, len(cfs))
    return Outcome(_to_pct(settings.irr_min_rate), OutcomeStatus.NOT_CONVERGED)


def calculate_irr(cash_flows: list[Decimal]) -> Decimal:
    """IRR as a percent; 0 when the cash flows cannot be solved."""
    return solve_irr(cash_flows).or_zero()


def calculate_npv(cash_flows: list[Decimal], discount_rate_pct: Decimal) -> Decimal:
    """Discounted sum at a fixed external rate, period 0 undiscounted."""
    base = 1 + discount_rate_pct / 100
    if base == 0:
        return ZERO
    return sum((cf / base ** t for t, cf in enumerate(cash_flows)), ZERO)


def calculate_equity_multiple(
    total_invested: Decimal,
    total_cash_flows: Decimal,
    net_sale_proceeds: Decimal,
) -> Decimal:
    """Equity multiple = (operating cash flow + sale proceeds) / cash invested."""
    return safe_divide(total_cash_flows + net_sale_proceeds, total_invested).or_zero()


def calculate_avg_cash_on_cash(
    projections: list[YearRecord], total_invested: Decimal
) -> Decimal:
    """Arithmetic mean of yearly cash-on-cash returns, as a percent."""
    if not projections or total_invested == 0:
        return ZERO
    yearly = [p.cash_flow / total_invested * 100 for p in projections]
    return sum(yearly, ZERO) / len(yearly)
