from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

from src.models.strategy import Strategy


@dataclass(frozen=True)
class YearRecord:
    year: int

    # Operations
    income: Decimal = Decimal("0")
    expenses: Decimal = Decimal("0")
    noi: Decimal = Decimal("0")
    debt_service: Decimal = Decimal("0")
    cash_flow: Decimal = Decimal("0")

    # Balance sheet
    loan_balance: Decimal = Decimal("0")
    property_value: Decimal = Decimal("0")
    equity: Decimal = Decimal("0")  # Value - loan balance


@dataclass(frozen=True)
class ExitWaterfall:
    exit_noi: Decimal = Decimal("0")  # Buyer's forward NOI
    sale_price: Decimal = Decimal("0")
    selling_costs: Decimal = Decimal("0")
    net_sale_proceeds: Decimal = Decimal("0")
    loan_payoff: Decimal = Decimal("0")
    net_to_seller: Decimal = Decimal("0")


class MetricFormat(Enum):
    PERCENT = "percent"
    RATIO = "ratio"
    CURRENCY = "currency"


class Verdict(Enum):
    GO = "GO"
    REVIEW = "REVIEW"
    NO_GO = "NO-GO"


@dataclass(frozen=True)
class DecisionMetric:
    label: str
    actual: Decimal
    required: Decimal | None
    format: MetricFormat
    passed: bool


@dataclass(frozen=True)
class Scorecard:
    strategy: Strategy
    metrics: list[DecisionMetric]
    verdict: Verdict

    @property
    def pass_count(self) -> int:
        return sum(1 for m in self.metrics if m.passed)


@dataclass(frozen=True)
class GoalSeekResult:
    """Solved value of one free variable that drives IRR to the target."""
    variable: str
    value: Decimal
    target: Decimal


@dataclass(frozen=True)
class GoalSeekSummary:
    target_irr: Decimal
    max_purchase_price: GoalSeekResult
    required_noi: GoalSeekResult
    required_rent_psf: GoalSeekResult
    capex_ceiling: GoalSeekResult
    target_exit_cap: GoalSeekResult


@dataclass(frozen=True)
class PricePerSqftBenchmark:
    min: Decimal
    avg: Decimal
    max: Decimal
    count: int


@dataclass(frozen=True)
class StabilizationResult:
    as_is_income: Decimal = Decimal("0")
    as_is_expenses: Decimal = Decimal("0")
    as_is_noi: Decimal = Decimal("0")
    stabilized_income: Decimal = Decimal("0")
    stabilized_expenses: Decimal = Decimal("0")
    stabilized_noi: Decimal = Decimal("0")

    @property
    def noi_lift(self) -> Decimal:
        return self.stabilized_noi - self.as_is_noi


@dataclass(frozen=True)
class CapRateScenario:
    cap_rate: Decimal
    value: Decimal
    vs_asking_pct: Decimal
    is_asking_rate: bool


@dataclass(frozen=True)
class IRRSensitivityRow:
    exit_cap_rate: Decimal
    income_growth_rate: Decimal
    irr: Decimal
    sale_price: Decimal = Decimal("0")
    net_to_seller: Decimal = Decimal("0")
    total_cash_flow: Decimal = Decimal("0")


@dataclass(frozen=True)
class IRRMatrix:
    exit_caps: list[Decimal] = field(default_factory=list)
    growth_rates: list[Decimal] = field(default_factory=list)
    values: list[list[Decimal]] = field(default_factory=list)  # [growth][exit cap]


@dataclass
class DealAnalysis:
    # Single-period pro forma
    effective_gross_income: Decimal = Decimal("0")
    total_expenses: Decimal = Decimal("0")
    noi: Decimal = Decimal("0")
    cap_rate: Decimal = Decimal("0")
    operating_expense_ratio: Decimal = Decimal("0")
    price_per_sqft: Decimal = Decimal("0")
    gross_rent_multiplier: Decimal = Decimal("0")

    # Financing
    loan_amount: Decimal = Decimal("0")
    down_payment: Decimal = Decimal("0")
    closing_costs: Decimal = Decimal("0")
    monthly_payment: Decimal = Decimal("0")
    annual_debt_service: Decimal = Decimal("0")
    before_tax_cash_flow: Decimal = Decimal("0")
    dscr: Decimal = Decimal("0")
    cash_on_cash: Decimal = Decimal("0")  # Year 1
    total_cash_invested: Decimal = Decimal("0")
    total_project_cost: Decimal = Decimal("0")

    # Hold period
    projections: list[YearRecord] = field(default_factory=list)
    exit: ExitWaterfall = field(default_factory=ExitWaterfall)
    cash_flows: list[Decimal] = field(default_factory=list)

    # Returns
    irr: Decimal = Decimal("0")
    npv: Decimal = Decimal("0")
    equity_multiple: Decimal = Decimal("0")
    average_cash_on_cash: Decimal = Decimal("0")
    total_profit: Decimal = Decimal("0")

    # Decision support
    scorecard: Scorecard | None = None
    goal_seek: GoalSeekSummary | None = None
    stabilization: StabilizationResult = field(default_factory=StabilizationResult)
    suggested_exit_cap: Decimal | None = None
    price_per_sqft_benchmark: PricePerSqftBenchmark | None = None
