"""As-is vs stabilized NOI for value-add business plans.

Pure functions. No I/O.
"""

from decimal import Decimal

from src.models.deal import StabilizationInputs, ValueAddCosts
from src.models.results import StabilizationResult


def stabilized_income(
    area_sqft: Decimal,
    rent_psf: Decimal,
    occupancy_pct: Decimal,
    other_income: Decimal = Decimal("0"),
) -> Decimal:
    """Occupied rentable area * rent/sq ft + other income."""
    return area_sqft * rent_psf * occupancy_pct / 100 + other_income


def stabilization_noi(
    area_sqft: Decimal, inputs: StabilizationInputs
) -> StabilizationResult:
    as_is_income = stabilized_income(
        area_sqft, inputs.as_is_rent_psf, inputs.as_is_occupancy, inputs.as_is_other_income
    )
    stab_income = stabilized_income(
        area_sqft,
        inputs.stabilized_rent_psf,
        inputs.stabilized_occupancy,
        inputs.stabilized_other_income,
    )
    as_is_expenses = as_is_income * inputs.as_is_expense_ratio / 100
    stab_expenses = stab_income * inputs.stabilized_expense_ratio / 100

    return StabilizationResult(
        as_is_income=as_is_income,
        as_is_expenses=as_is_expenses,
        as_is_noi=as_is_income - as_is_expenses,
        stabilized_income=stab_income,
        stabilized_expenses=stab_expenses,
        stabilized_noi=stab_income - stab_expenses,
    )


def total_project_cost(
    purchase_price: Decimal, closing_costs: Decimal, costs: ValueAddCosts
) -> Decimal:
    """All-in basis: price + closing + value-add budget."""
    return purchase_price + closing_costs + costs.total
