"""Pydantic schemas for API request/response models."""

from decimal import Decimal

from pydantic import BaseModel, Field

from src.config import settings


# ---- Request schemas ----

class ExpensesRequest(BaseModel):
    property_taxes: Decimal = Field(Decimal("0"), ge=0)
    insurance: Decimal = Field(Decimal("0"), ge=0)
    utilities: Decimal = Field(Decimal("0"), ge=0)
    repairs_maintenance: Decimal = Field(Decimal("0"), ge=0)
    reserves_capex: Decimal = Field(Decimal("0"), ge=0)
    other_expenses: Decimal = Field(Decimal("0"), ge=0)


class ValueAddRequest(BaseModel):
    capex: Decimal = Field(Decimal("0"), ge=0)
    ti_leasing: Decimal = Field(Decimal("0"), ge=0)
    carry_costs: Decimal = Field(Decimal("0"), ge=0)
    contingency: Decimal = Field(Decimal("0"), ge=0)


class StabilizationRequest(BaseModel):
    as_is_rent_psf: Decimal = Field(Decimal("0"), ge=0)
    stabilized_rent_psf: Decimal = Field(Decimal("0"), ge=0)
    as_is_occupancy: Decimal = Field(Decimal("0"), ge=0, le=100)
    stabilized_occupancy: Decimal = Field(Decimal("0"), ge=0, le=100)
    as_is_other_income: Decimal = Field(Decimal("0"), ge=0)
    stabilized_other_income: Decimal = Field(Decimal("0"), ge=0)
    as_is_expense_ratio: Decimal = Field(Decimal("0"), ge=0, le=100)
    stabilized_expense_ratio: Decimal = Field(Decimal("0"), ge=0, le=100)


class ComparableSaleRequest(BaseModel):
    address: str = ""
    sale_price: Decimal | None = Field(None, ge=0)
    cap_rate: Decimal | None = Field(None, ge=0, description="Percent")
    price_per_sqft: Decimal | None = Field(None, ge=0)


class DealRequest(BaseModel):
    """One deal. All rates are percentages (7 means 7%)."""
    # Operating statement
    potential_gross_income: Decimal = Field(..., ge=0)
    vacancy_rate: Decimal = Field(Decimal("0"), ge=0, le=100)
    other_income: Decimal = Field(Decimal("0"), ge=0)
    expenses: ExpensesRequest = Field(default_factory=ExpensesRequest)
    management_fee_pct: Decimal = Field(Decimal("0"), ge=0, le=100)
    building_sqft: Decimal = Field(Decimal("0"), ge=0)

    # Financing
    purchase_price: Decimal = Field(..., ge=0)
    ltv_pct: Decimal = Field(Decimal("0"), ge=0, le=100)
    interest_rate: Decimal = Field(Decimal("0"), ge=0)
    amortization_years: int = Field(0, ge=0, le=50)
    closing_costs_pct: Decimal = Field(Decimal("0"), ge=0)
    additional_debt_service: Decimal = Field(Decimal("0"), ge=0)

    # Hold period
    income_growth_rate: Decimal = Field(Decimal("0"), ge=-100)
    expense_growth_rate: Decimal = Field(Decimal("0"), ge=-100)
    holding_period: int = Field(settings.default_holding_period, ge=0, le=50)
    exit_cap_rate: Decimal = Field(Decimal(str(settings.default_exit_cap_rate)), gt=0)
    selling_costs_pct: Decimal = Field(
        Decimal(str(settings.default_selling_costs_pct)), ge=0, lt=100
    )
    appreciation_rate: Decimal | None = Field(None, ge=-100)

    strategy: str = settings.default_strategy
    value_add: ValueAddRequest = Field(default_factory=ValueAddRequest)
    stabilization: StabilizationRequest = Field(default_factory=StabilizationRequest)
    comps: list[ComparableSaleRequest] = []


class GoalSeekRequest(BaseModel):
    deal: DealRequest
    target_irr: Decimal | None = Field(None, description="Percent; defaults to the strategy hurdle")


class SensitivityRequest(BaseModel):
    deal: DealRequest
    exit_caps: list[Decimal] | None = None
    growth_rates: list[Decimal] | None = None


class IRRRequest(BaseModel):
    cash_flows: list[Decimal] = Field(..., min_length=1)
    discount_rate: Decimal = Decimal(str(settings.npv_discount_rate))


class CompsRequest(BaseModel):
    comps: list[ComparableSaleRequest]


# ---- Response schemas ----

class YearRecordResponse(BaseModel):
    year: int
    income: Decimal
    expenses: Decimal
    noi: Decimal
    debt_service: Decimal
    cash_flow: Decimal
    loan_balance: Decimal
    property_value: Decimal
    equity: Decimal


class ExitResponse(BaseModel):
    exit_noi: Decimal
    sale_price: Decimal
    selling_costs: Decimal
    net_sale_proceeds: Decimal
    loan_payoff: Decimal
    net_to_seller: Decimal


class DecisionMetricResponse(BaseModel):
    label: str
    actual: Decimal
    required: Decimal | None = None
    format: str
    passed: bool
    display: str


class ScorecardResponse(BaseModel):
    strategy: str
    strategy_label: str
    verdict: str
    pass_count: int
    metrics: list[DecisionMetricResponse]


class GoalSeekResponse(BaseModel):
    target_irr: Decimal
    max_purchase_price: Decimal
    required_noi: Decimal
    required_rent_psf: Decimal
    capex_ceiling: Decimal
    target_exit_cap: Decimal


class StabilizationResponse(BaseModel):
    as_is_income: Decimal
    as_is_expenses: Decimal
    as_is_noi: Decimal
    stabilized_income: Decimal
    stabilized_expenses: Decimal
    stabilized_noi: Decimal
    noi_lift: Decimal


class PricePerSqftBenchmarkResponse(BaseModel):
    min: Decimal
    avg: Decimal
    max: Decimal
    count: int


class AnalysisResponse(BaseModel):
    strategy: str

    # Going-in
    effective_gross_income: Decimal
    total_expenses: Decimal
    noi: Decimal
    cap_rate: Decimal
    cap_rate_status: str
    operating_expense_ratio: Decimal
    price_per_sqft: Decimal
    gross_rent_multiplier: Decimal

    # Financing
    loan_amount: Decimal
    down_payment: Decimal
    closing_costs: Decimal
    monthly_payment: Decimal
    annual_debt_service: Decimal
    before_tax_cash_flow: Decimal
    dscr: Decimal
    dscr_status: str
    cash_on_cash: Decimal
    total_cash_invested: Decimal
    total_project_cost: Decimal

    # Hold period
    projections: list[YearRecordResponse]
    exit: ExitResponse
    cash_flows: list[Decimal]

    # Returns
    irr: Decimal
    npv: Decimal
    equity_multiple: Decimal
    average_cash_on_cash: Decimal
    total_profit: Decimal

    scorecard: ScorecardResponse
    goal_seek: GoalSeekResponse | None = None
    stabilization: StabilizationResponse
    suggested_exit_cap: Decimal | None = None
    price_per_sqft_benchmark: PricePerSqftBenchmarkResponse | None = None


class CapRateScenarioResponse(BaseModel):
    cap_rate: Decimal
    value: Decimal
    vs_asking_pct: Decimal
    is_asking_rate: bool


class IRRSensitivityRowResponse(BaseModel):
    exit_cap_rate: Decimal
    income_growth_rate: Decimal
    irr: Decimal
    sale_price: Decimal
    net_to_seller: Decimal
    total_cash_flow: Decimal


class IRRMatrixResponse(BaseModel):
    exit_caps: list[Decimal]
    growth_rates: list[Decimal]
    values: list[list[Decimal]]


class SensitivityResponse(BaseModel):
    valuation: list[CapRateScenarioResponse]
    by_exit_cap: list[IRRSensitivityRowResponse]
    by_income_growth: list[IRRSensitivityRowResponse]
    matrix: IRRMatrixResponse


class IRRResponse(BaseModel):
    irr: Decimal
    status: str
    npv: Decimal
    equity_multiple: Decimal


class CompsResponse(BaseModel):
    suggested_exit_cap: Decimal | None = None
    price_per_sqft: PricePerSqftBenchmarkResponse | None = None


class StrategyResponse(BaseModel):
    strategy: str
    label: str
    cap_rate: Decimal | None = None
    cash_on_cash: Decimal
    irr: Decimal
    equity_multiple: Decimal
    dscr: Decimal
