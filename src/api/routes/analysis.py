"""Analysis routes: the primary API entry point."""

import logging
from decimal import Decimal, ROUND_HALF_UP

from fastapi import APIRouter, HTTPException

from src.api.routes.comps import build_comps, benchmark_to_response
from src.api.schemas import (
    AnalysisResponse,
    CapRateScenarioResponse,
    DealRequest,
    DecisionMetricResponse,
    ExitResponse,
    GoalSeekRequest,
    GoalSeekResponse,
    IRRMatrixResponse,
    IRRRequest,
    IRRResponse,
    IRRSensitivityRowResponse,
    ScorecardResponse,
    SensitivityRequest,
    SensitivityResponse,
    StabilizationResponse,
    YearRecordResponse,
)
from src.engine import cashflow, debt
from src.engine.goal_seek import solve_all
from src.engine.irr import calculate_equity_multiple, calculate_npv, solve_irr
from src.engine.outcome import ZERO
from src.engine.proforma import model_inputs, run_deal_analysis
from src.engine.scorecard import format_metric
from src.engine.sensitivity import irr_by_exit_cap, irr_by_income_growth, irr_matrix, valuation_by_cap_rate
from src.models.deal import (
    DealInputs,
    ExpenseItems,
    FinancingTerms,
    ProjectionAssumptions,
    PropertyFinancials,
    StabilizationInputs,
    ValueAddCosts,
)
from src.models.results import GoalSeekSummary, IRRSensitivityRow, Scorecard
from src.models.strategy import STRATEGY_THRESHOLDS, Strategy

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["analysis"])

TWO_PLACES = Decimal("0.01")
FOUR_PLACES = Decimal("0.0001")


def _money(v: Decimal) -> Decimal:
    return v.quantize(TWO_PLACES, ROUND_HALF_UP)


def _rate(v: Decimal) -> Decimal:
    return v.quantize(FOUR_PLACES, ROUND_HALF_UP)


def _parse_strategy(value: str) -> Strategy:
    try:
        return Strategy(value)
    except ValueError:
        raise HTTPException(
            status_code=400,
            detail=f"Unknown strategy '{value}'. Expected one of: "
            + ", ".join(s.value for s in Strategy),
        )


def _build_deal(req: DealRequest) -> DealInputs:
    """Build engine inputs from request data."""
    return DealInputs(
        financials=PropertyFinancials(
            potential_gross_income=req.potential_gross_income,
            vacancy_rate=req.vacancy_rate,
            other_income=req.other_income,
            expenses=ExpenseItems(**req.expenses.model_dump()),
            management_fee_pct=req.management_fee_pct,
            building_sqft=req.building_sqft,
        ),
        financing=FinancingTerms(
            purchase_price=req.purchase_price,
            ltv_pct=req.ltv_pct,
            interest_rate=req.interest_rate,
            amortization_years=req.amortization_years,
            closing_costs_pct=req.closing_costs_pct,
            additional_debt_service=req.additional_debt_service,
        ),
        projection=ProjectionAssumptions(
            income_growth_rate=req.income_growth_rate,
            expense_growth_rate=req.expense_growth_rate,
            holding_period=req.holding_period,
            exit_cap_rate=req.exit_cap_rate,
            selling_costs_pct=req.selling_costs_pct,
            appreciation_rate=req.appreciation_rate,
        ),
        strategy=_parse_strategy(req.strategy),
        value_add=ValueAddCosts(**req.value_add.model_dump()),
        stabilization=StabilizationInputs(**req.stabilization.model_dump()),
    )


def _scorecard_to_response(card: Scorecard) -> ScorecardResponse:
    return ScorecardResponse(
        strategy=card.strategy.value,
        strategy_label=card.strategy.label,
        verdict=card.verdict.value,
        pass_count=card.pass_count,
        metrics=[
            DecisionMetricResponse(
                label=m.label,
                actual=_rate(m.actual),
                required=m.required,
                format=m.format.value,
                passed=m.passed,
                display=format_metric(m.actual, m.format),
            )
            for m in card.metrics
        ],
    )


def _goal_seek_to_response(summary: GoalSeekSummary) -> GoalSeekResponse:
    return GoalSeekResponse(
        target_irr=summary.target_irr,
        max_purchase_price=_money(summary.max_purchase_price.value),
        required_noi=_money(summary.required_noi.value),
        required_rent_psf=_money(summary.required_rent_psf.value),
        capex_ceiling=_money(summary.capex_ceiling.value),
        target_exit_cap=_rate(summary.target_exit_cap.value),
    )


def _row_to_response(row: IRRSensitivityRow) -> IRRSensitivityRowResponse:
    return IRRSensitivityRowResponse(
        exit_cap_rate=row.exit_cap_rate,
        income_growth_rate=row.income_growth_rate,
        irr=_rate(row.irr),
        sale_price=_money(row.sale_price),
        net_to_seller=_money(row.net_to_seller),
        total_cash_flow=_money(row.total_cash_flow),
    )


def _result_to_response(result, deal: DealInputs) -> AnalysisResponse:
    """Convert engine DealAnalysis to API response."""
    projections = [
        YearRecordResponse(
            year=p.year,
            income=_money(p.income),
            expenses=_money(p.expenses),
            noi=_money(p.noi),
            debt_service=_money(p.debt_service),
            cash_flow=_money(p.cash_flow),
            loan_balance=_money(p.loan_balance),
            property_value=_money(p.property_value),
            equity=_money(p.equity),
        )
        for p in result.projections
    ]

    e = result.exit
    exit_sale = ExitResponse(
        exit_noi=_money(e.exit_noi),
        sale_price=_money(e.sale_price),
        selling_costs=_money(e.selling_costs),
        net_sale_proceeds=_money(e.net_sale_proceeds),
        loan_payoff=_money(e.loan_payoff),
        net_to_seller=_money(e.net_to_seller),
    )

    s = result.stabilization
    stabilization = StabilizationResponse(
        as_is_income=_money(s.as_is_income),
        as_is_expenses=_money(s.as_is_expenses),
        as_is_noi=_money(s.as_is_noi),
        stabilized_income=_money(s.stabilized_income),
        stabilized_expenses=_money(s.stabilized_expenses),
        stabilized_noi=_money(s.stabilized_noi),
        noi_lift=_money(s.noi_lift),
    )

    return AnalysisResponse(
        strategy=deal.strategy.value,
        effective_gross_income=_money(result.effective_gross_income),
        total_expenses=_money(result.total_expenses),
        noi=_money(result.noi),
        cap_rate=_rate(result.cap_rate),
        cap_rate_status=cashflow.cap_rate_status(result.cap_rate),
        operating_expense_ratio=_rate(result.operating_expense_ratio),
        price_per_sqft=_money(result.price_per_sqft),
        gross_rent_multiplier=_rate(result.gross_rent_multiplier),
        loan_amount=_money(result.loan_amount),
        down_payment=_money(result.down_payment),
        closing_costs=_money(result.closing_costs),
        monthly_payment=_money(result.monthly_payment),
        annual_debt_service=_money(result.annual_debt_service),
        before_tax_cash_flow=_money(result.before_tax_cash_flow),
        dscr=_rate(result.dscr),
        dscr_status=debt.dscr_status(result.dscr),
        cash_on_cash=_rate(result.cash_on_cash),
        total_cash_invested=_money(result.total_cash_invested),
        total_project_cost=_money(result.total_project_cost),
        projections=projections,
        exit=exit_sale,
        cash_flows=[_money(cf) for cf in result.cash_flows],
        irr=_rate(result.irr),
        npv=_money(result.npv),
        equity_multiple=_rate(result.equity_multiple),
        average_cash_on_cash=_rate(result.average_cash_on_cash),
        total_profit=_money(result.total_profit),
        scorecard=_scorecard_to_response(result.scorecard),
        goal_seek=_goal_seek_to_response(result.goal_seek) if result.goal_seek else None,
        stabilization=stabilization,
        suggested_exit_cap=(
            _rate(result.suggested_exit_cap) if result.suggested_exit_cap is not None else None
        ),
        price_per_sqft_benchmark=benchmark_to_response(result.price_per_sqft_benchmark),
    )


@router.post("/analyze", response_model=AnalysisResponse)
def analyze(req: DealRequest):
    """Primary endpoint: deal inputs → full analysis.

    Orchestrates: build inputs → run pro forma, projections, exit, returns,
    scorecard and goal-seek → return results.
    """
    deal = _build_deal(req)
    if model_inputs(deal).total_cash_invested <= 0:
        logger.warning(
            "Analyzing deal with no invested cash (price %s, LTV %s%%)",
            req.purchase_price,
            req.ltv_pct,
        )

    result = run_deal_analysis(deal, comps=build_comps(req.comps))
    logger.info(
        "Analyzed %s deal at %s: IRR %s%%, verdict %s",
        deal.strategy.value,
        req.purchase_price,
        _rate(result.irr),
        result.scorecard.verdict.value,
    )
    return _result_to_response(result, deal)


@router.post("/goal-seek", response_model=GoalSeekResponse)
def goal_seek(req: GoalSeekRequest):
    """Solve price, NOI, rent/sq ft, capex and exit cap for a target IRR."""
    deal = _build_deal(req.deal)
    inputs = model_inputs(deal)
    if inputs.purchase_price <= 0 or inputs.initial_income <= 0:
        raise HTTPException(
            status_code=400,
            detail="Goal-seek needs a positive purchase price and income.",
        )

    target = req.target_irr
    if target is None:
        target = STRATEGY_THRESHOLDS[deal.strategy].irr

    summary = solve_all(
        target,
        inputs,
        area_sqft=deal.financials.building_sqft,
        expense_ratio_pct=deal.financials.operating_expense_ratio,
    )
    logger.info(
        "Goal-seek at %s%% IRR: max price %s",
        target,
        _money(summary.max_purchase_price.value),
    )
    return _goal_seek_to_response(summary)


@router.post("/sensitivity", response_model=SensitivityResponse)
def sensitivity(req: SensitivityRequest):
    """Valuation by cap rate and IRR by exit cap / income growth."""
    deal = _build_deal(req.deal)
    inputs = model_inputs(deal)
    going_in_noi = cashflow.noi(inputs.initial_income, inputs.initial_expenses)
    asking_cap = cashflow.cap_rate(going_in_noi, inputs.purchase_price)

    matrix = irr_matrix(inputs, req.exit_caps, req.growth_rates)
    logger.info(
        "Sensitivity for deal at %s: %d x %d IRR matrix",
        inputs.purchase_price,
        len(matrix.growth_rates),
        len(matrix.exit_caps),
    )
    return SensitivityResponse(
        valuation=[
            CapRateScenarioResponse(
                cap_rate=s.cap_rate,
                value=_money(s.value),
                vs_asking_pct=_rate(s.vs_asking_pct),
                is_asking_rate=s.is_asking_rate,
            )
            for s in valuation_by_cap_rate(going_in_noi, inputs.purchase_price, asking_cap)
        ],
        by_exit_cap=[_row_to_response(r) for r in irr_by_exit_cap(inputs, req.exit_caps)],
        by_income_growth=[
            _row_to_response(r) for r in irr_by_income_growth(inputs, req.growth_rates)
        ],
        matrix=IRRMatrixResponse(
            exit_caps=matrix.exit_caps,
            growth_rates=matrix.growth_rates,
            values=[[_rate(v) for v in row] for row in matrix.values],
        ),
    )


@router.post("/irr", response_model=IRRResponse)
def irr(req: IRRRequest):
    """IRR, NPV and equity multiple for a raw cash-flow vector."""
    flows = req.cash_flows
    outcome = solve_irr(flows)
    invested = -flows[0] if flows[0] < 0 else ZERO
    multiple = calculate_equity_multiple(invested, sum(flows[1:], ZERO), ZERO)
    logger.info("IRR for %d cash flows: %s", len(flows), outcome.status.value)
    return IRRResponse(
        irr=_rate(outcome.or_zero()),
        status=outcome.status.value,
        npv=_money(calculate_npv(flows, req.discount_rate)),
        equity_multiple=_rate(multiple),
    )
