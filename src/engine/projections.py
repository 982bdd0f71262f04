"""Year-by-year hold-period projection.

Pure computation. No I/O. ModelInputs in, list[YearRecord] out.
"""

from decimal import Decimal

from src.engine.debt import annual_debt_service, monthly_payment, remaining_balance
from src.models.deal import ModelInputs
from src.models.results import YearRecord


def growth_factor(rate_pct: Decimal, year: int) -> Decimal:
    """Compounding factor for a 1-indexed year: no growth inside year 1."""
    if year <= 1:
        return Decimal("1")
    return (1 + rate_pct / 100) ** (year - 1)


def generate_projections(inputs: ModelInputs) -> list[YearRecord]:
    """Project income, expenses, debt service and equity across the hold.

    Debt service is fixed for the whole hold (fixed-rate amortizing loan plus
    any flat additional payment). Property value follows income growth unless
    an explicit appreciation rate is supplied.
    """
    loan = inputs.loan_amount
    debt_service = (
        annual_debt_service(
            monthly_payment(loan, inputs.interest_rate, inputs.amortization_years)
        )
        + inputs.additional_debt_service
    )
    value_growth = (
        inputs.income_growth_rate
        if inputs.appreciation_rate is None
        else inputs.appreciation_rate
    )

    projections: list[YearRecord] = []
    for year in range(1, inputs.holding_period + 1):
        income = inputs.initial_income * growth_factor(inputs.income_growth_rate, year)
        expenses = inputs.initial_expenses * growth_factor(inputs.expense_growth_rate, year)
        year_noi = income - expenses

        balance = remaining_balance(
            loan, inputs.interest_rate, inputs.amortization_years, year
        )
        value = inputs.purchase_price * growth_factor(value_growth, year)

        projections.append(YearRecord(
            year=year,
            income=income,
            expenses=expenses,
            noi=year_noi,
            debt_service=debt_service,
            cash_flow=year_noi - debt_service,
            loan_balance=balance,
            property_value=value,
            equity=value - balance,
        ))

    return projections
