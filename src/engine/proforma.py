"""Deal orchestrator: composes all engine sub-modules into a full analysis.

Pure computation. No I/O. DealInputs in, DealAnalysis out.
"""

import logging
from decimal import Decimal
from typing import Iterable

from src.config import settings
from src.models.comps import ComparableSale
from src.models.deal import DealInputs, ModelInputs
from src.models.results import DealAnalysis, ExitWaterfall
from src.models.strategy import STRATEGY_THRESHOLDS

from src.engine import cashflow, debt
from src.engine.comps import benchmark_price_per_sqft, suggest_exit_cap_rate
from src.engine.goal_seek import solve_all
from src.engine.irr import (
    calculate_avg_cash_on_cash,
    calculate_equity_multiple,
    calculate_npv,
    run_hold_period,
    solve_irr,
)
from src.engine.outcome import ZERO
from src.engine.scorecard import evaluate_scorecard
from src.engine.value_add import stabilization_noi, total_project_cost

logger = logging.getLogger(__name__)


def model_inputs(deal: DealInputs) -> ModelInputs:
    """Flatten a deal into the hold-period model's parameter set."""
    fin = deal.financials
    financing = deal.financing
    projection = deal.projection
    return ModelInputs(
        initial_income=fin.effective_gross_income,
        initial_expenses=fin.total_expenses,
        purchase_price=financing.purchase_price,
        income_growth_rate=projection.income_growth_rate,
        expense_growth_rate=projection.expense_growth_rate,
        ltv_pct=financing.ltv_pct,
        interest_rate=financing.interest_rate,
        amortization_years=financing.amortization_years,
        closing_costs_pct=financing.closing_costs_pct,
        additional_debt_service=financing.additional_debt_service,
        holding_period=projection.holding_period,
        exit_cap_rate=projection.exit_cap_rate,
        selling_costs_pct=projection.selling_costs_pct,
        value_add_cost=deal.value_add.total,
        appreciation_rate=projection.appreciation_rate,
    )


def run_deal_analysis(
    deal: DealInputs,
    comps: Iterable[ComparableSale] = (),
    include_goal_seek: bool = True,
) -> DealAnalysis:
    """Run the complete investment analysis for one deal.

    Returns DealAnalysis with the going-in pro forma, hold-period projections,
    exit, return metrics, strategy scorecard and goal-seek targets.
    """
    fin = deal.financials
    financing = deal.financing
    inputs = model_inputs(deal)

    # Going-in pro forma
    egi = inputs.initial_income
    expenses = inputs.initial_expenses
    year1_noi = cashflow.noi(egi, expenses)
    price = financing.purchase_price

    # Financing
    loan = debt.loan_amount(price, financing.ltv_pct)
    down = debt.down_payment(price, loan)
    closing = debt.closing_costs(price, financing.closing_costs_pct)
    pmt = debt.monthly_payment(loan, financing.interest_rate, financing.amortization_years)
    debt_service = debt.annual_debt_service(pmt) + financing.additional_debt_service
    total_invested = inputs.total_cash_invested

    # Hold period and exit
    projections, exit_sale, cash_flows = run_hold_period(inputs)
    irr_outcome = solve_irr(cash_flows)
    if not irr_outcome.ok:
        logger.debug("Deal IRR %s for %d cash flows", irr_outcome.status.value, len(cash_flows))

    total_cash_flow = sum((p.cash_flow for p in projections), ZERO)
    net_to_seller = exit_sale.net_to_seller if exit_sale else ZERO
    equity_multiple = calculate_equity_multiple(total_invested, total_cash_flow, net_to_seller)
    irr = irr_outcome.or_zero()
    avg_coc = calculate_avg_cash_on_cash(projections, total_invested)
    going_in_cap = cashflow.cap_rate(year1_noi, price)
    coverage = debt.dscr(year1_noi, debt_service)
    btcf = cashflow.before_tax_cash_flow(year1_noi, debt_service)

    scorecard = evaluate_scorecard(
        deal.strategy, going_in_cap, avg_coc, irr, equity_multiple, coverage
    )

    goal_seek = None
    if include_goal_seek and price > 0 and egi > 0:
        goal_seek = solve_all(
            STRATEGY_THRESHOLDS[deal.strategy].irr,
            inputs,
            area_sqft=fin.building_sqft,
            expense_ratio_pct=cashflow.operating_expense_ratio(expenses, egi),
        )

    comps = list(comps)
    return DealAnalysis(
        effective_gross_income=egi,
        total_expenses=expenses,
        noi=year1_noi,
        cap_rate=going_in_cap,
        operating_expense_ratio=cashflow.operating_expense_ratio(expenses, egi),
        price_per_sqft=cashflow.price_per_sqft(price, fin.building_sqft),
        gross_rent_multiplier=cashflow.gross_rent_multiplier(price, fin.potential_gross_income),
        loan_amount=loan,
        down_payment=down,
        closing_costs=closing,
        monthly_payment=pmt,
        annual_debt_service=debt_service,
        before_tax_cash_flow=btcf,
        dscr=coverage,
        cash_on_cash=cashflow.cash_on_cash(btcf, total_invested),
        total_cash_invested=total_invested,
        total_project_cost=total_project_cost(price, closing, deal.value_add),
        projections=projections,
        exit=exit_sale or ExitWaterfall(),
        cash_flows=cash_flows,
        irr=irr,
        npv=calculate_npv(cash_flows, Decimal(str(settings.npv_discount_rate))),
        equity_multiple=equity_multiple,
        average_cash_on_cash=avg_coc,
        total_profit=total_cash_flow + net_to_seller - total_invested,
        scorecard=scorecard,
        goal_seek=goal_seek,
        stabilization=stabilization_noi(fin.building_sqft, deal.stabilization),
        suggested_exit_cap=suggest_exit_cap_rate(comps),
        price_per_sqft_benchmark=benchmark_price_per_sqft(comps),
    )
