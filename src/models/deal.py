"""Deal inputs: operating statement, financing, projection assumptions.

All rates are percentages (Decimal("7") means 7%).
"""

from dataclasses import dataclass, field
from decimal import Decimal

from src.engine import cashflow, debt
from src.models.strategy import Strategy


@dataclass(frozen=True)
class ExpenseItems:
    """Fixed annual operating expenses. Management fee is computed separately."""
    property_taxes: Decimal = Decimal("0")
    insurance: Decimal = Decimal("0")
    utilities: Decimal = Decimal("0")
    repairs_maintenance: Decimal = Decimal("0")
    reserves_capex: Decimal = Decimal("0")
    other_expenses: Decimal = Decimal("0")

    @property
    def fixed_total(self) -> Decimal:
        return (
            self.property_taxes
            + self.insurance
            + self.utilities
            + self.repairs_maintenance
            + self.reserves_capex
            + self.other_expenses
        )


@dataclass(frozen=True)
class PropertyFinancials:
    potential_gross_income: Decimal
    vacancy_rate: Decimal = Decimal("0")  # % of PGI
    other_income: Decimal = Decimal("0")  # Parking, signage, etc.
    expenses: ExpenseItems = field(default_factory=ExpenseItems)
    management_fee_pct: Decimal = Decimal("0")  # % of EGI
    building_sqft: Decimal = Decimal("0")

    @property
    def vacancy_amount(self) -> Decimal:
        return cashflow.vacancy_amount(self.potential_gross_income, self.vacancy_rate)

    @property
    def effective_gross_income(self) -> Decimal:
        return cashflow.effective_gross_income(
            self.potential_gross_income, self.vacancy_amount, self.other_income
        )

    @property
    def management_fee(self) -> Decimal:
        return cashflow.management_fee(self.effective_gross_income, self.management_fee_pct)

    @property
    def total_expenses(self) -> Decimal:
        return cashflow.total_expenses(self.expenses.fixed_total, self.management_fee)

    @property
    def noi(self) -> Decimal:
        return cashflow.noi(self.effective_gross_income, self.total_expenses)

    @property
    def operating_expense_ratio(self) -> Decimal:
        """Total expenses as a percent of EGI."""
        return cashflow.operating_expense_ratio(self.total_expenses, self.effective_gross_income)


@dataclass(frozen=True)
class FinancingTerms:
    purchase_price: Decimal
    ltv_pct: Decimal = Decimal("0")
    interest_rate: Decimal = Decimal("0")  # Annual, %
    amortization_years: int = 0
    closing_costs_pct: Decimal = Decimal("0")
    # Fixed annual payment on top of the bank loan (e.g. seller carryback)
    additional_debt_service: Decimal = Decimal("0")

    @property
    def loan_amount(self) -> Decimal:
        return debt.loan_amount(self.purchase_price, self.ltv_pct)

    @property
    def down_payment(self) -> Decimal:
        return debt.down_payment(self.purchase_price, self.loan_amount)

    @property
    def closing_costs(self) -> Decimal:
        return debt.closing_costs(self.purchase_price, self.closing_costs_pct)

    @property
    def total_cash_required(self) -> Decimal:
        return debt.total_cash_required(self.down_payment, self.closing_costs)



@dataclass(frozen=True)
class ProjectionAssumptions:
    income_growth_rate: Decimal = Decimal("0")
    expense_growth_rate: Decimal = Decimal("0")
    holding_period: int = 5
    exit_cap_rate: Decimal = Decimal("6")
    selling_costs_pct: Decimal = Decimal("2")
    # None keeps property value tracking income growth
    appreciation_rate: Decimal | None = None


@dataclass(frozen=True)
class ValueAddCosts:
    capex: Decimal = Decimal("0")
    ti_leasing: Decimal = Decimal("0")
    carry_costs: Decimal = Decimal("0")
    contingency: Decimal = Decimal("0")

    @property
    def total(self) -> Decimal:
        return self.capex + self.ti_leasing + self.carry_costs + self.contingency


@dataclass(frozen=True)
class StabilizationInputs:
    """As-is vs stabilized operating assumptions, per square foot."""
    as_is_rent_psf: Decimal = Decimal("0")
    stabilized_rent_psf: Decimal = Decimal("0")
    as_is_occupancy: Decimal = Decimal("0")  # %
    stabilized_occupancy: Decimal = Decimal("0")  # %
    as_is_other_income: Decimal = Decimal("0")
    stabilized_other_income: Decimal = Decimal("0")
    as_is_expense_ratio: Decimal = Decimal("0")  # % of income
    stabilized_expense_ratio: Decimal = Decimal("0")  # % of income


@dataclass(frozen=True)
class DealInputs:
    """Everything needed to evaluate one deal."""
    financials: PropertyFinancials
    financing: FinancingTerms
    projection: ProjectionAssumptions = field(default_factory=ProjectionAssumptions)
    strategy: Strategy = Strategy.VALUE_ADD
    value_add: ValueAddCosts = field(default_factory=ValueAddCosts)
    stabilization: StabilizationInputs = field(default_factory=StabilizationInputs)


@dataclass(frozen=True)
class ModelInputs:
    """Flat parameter set for the hold-period model.

    Loan and invested cash are derived from price so that a goal-seek probe
    on any single field keeps the rest of the deal consistent.
    """
    initial_income: Decimal
    initial_expenses: Decimal
    purchase_price: Decimal
    income_growth_rate: Decimal = Decimal("0")
    expense_growth_rate: Decimal = Decimal("0")
    ltv_pct: Decimal = Decimal("0")
    interest_rate: Decimal = Decimal("0")
    amortization_years: int = 0
    closing_costs_pct: Decimal = Decimal("0")
    additional_debt_service: Decimal = Decimal("0")
    holding_period: int = 5
    exit_cap_rate: Decimal = Decimal("6")
    selling_costs_pct: Decimal = Decimal("2")
    value_add_cost: Decimal = Decimal("0")
    appreciation_rate: Decimal | None = None

    @property
    def loan_amount(self) -> Decimal:
        return debt.loan_amount(self.purchase_price, self.ltv_pct)

    @property
    def total_cash_invested(self) -> Decimal:
        down = debt.down_payment(self.purchase_price, self.loan_amount)
        closing = debt.closing_costs(self.purchase_price, self.closing_costs_pct)
        return debt.total_cash_required(down, closing) + self.value_add_cost
