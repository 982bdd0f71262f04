"""Canonical test fixtures used across engine and API tests.

Fixture: $10M commercial property, PGI $1M, 5% vacancy, $300K expenses
(incl. 3% management), 70% LTV, 7% rate, 25yr amortization.
Hold: 5 years, 3% income / 2% expense growth, 6.5% exit cap, 2% selling.
"""

import pytest
from decimal import Decimal

from fastapi.testclient import TestClient

from src.api.app import app
from src.models.comps import ComparableSale
from src.models.deal import (
    DealInputs,
    ExpenseItems,
    FinancingTerms,
    ModelInputs,
    ProjectionAssumptions,
    PropertyFinancials,
)
from src.models.strategy import Strategy


@pytest.fixture
def canonical_financials() -> PropertyFinancials:
    """EGI $950K, fixed expenses $271.5K + $28.5K management = $300K."""
    return PropertyFinancials(
        potential_gross_income=Decimal("1000000"),
        vacancy_rate=Decimal("5"),
        expenses=ExpenseItems(
            property_taxes=Decimal("120000"),
            insurance=Decimal("35000"),
            utilities=Decimal("40000"),
            repairs_maintenance=Decimal("46500"),
            reserves_capex=Decimal("30000"),
        ),
        management_fee_pct=Decimal("3"),
        building_sqft=Decimal("50000"),
    )


@pytest.fixture
def canonical_financing() -> FinancingTerms:
    return FinancingTerms(
        purchase_price=Decimal("10000000"),
        ltv_pct=Decimal("70"),
        interest_rate=Decimal("7"),
        amortization_years=25,
    )


@pytest.fixture
def canonical_projection() -> ProjectionAssumptions:
    return ProjectionAssumptions(
        income_growth_rate=Decimal("3"),
        expense_growth_rate=Decimal("2"),
        holding_period=5,
        exit_cap_rate=Decimal("6.5"),
        selling_costs_pct=Decimal("2"),
    )


@pytest.fixture
def canonical_deal(canonical_financials, canonical_financing, canonical_projection) -> DealInputs:
    return DealInputs(
        financials=canonical_financials,
        financing=canonical_financing,
        projection=canonical_projection,
        strategy=Strategy.VALUE_ADD,
    )


@pytest.fixture
def canonical_inputs() -> ModelInputs:
    """Flattened hold-period parameters for the canonical deal."""
    return ModelInputs(
        initial_income=Decimal("950000"),
        initial_expenses=Decimal("300000"),
        purchase_price=Decimal("10000000"),
        income_growth_rate=Decimal("3"),
        expense_growth_rate=Decimal("2"),
        ltv_pct=Decimal("70"),
        interest_rate=Decimal("7"),
        amortization_years=25,
        holding_period=5,
        exit_cap_rate=Decimal("6.5"),
        selling_costs_pct=Decimal("2"),
    )


@pytest.fixture
def sample_comps() -> list[ComparableSale]:
    return [
        ComparableSale(address="410 Commerce Dr", cap_rate=Decimal("6.25"), price_per_sqft=Decimal("195")),
        ComparableSale(address="88 Harbor Pkwy", cap_rate=Decimal("6.75"), price_per_sqft=Decimal("210")),
        ComparableSale(address="1200 Main St", cap_rate=Decimal("6.5"), price_per_sqft=Decimal("188")),
        ComparableSale(address="7 Quarry Rd"),
    ]


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def deal_payload() -> dict:
    """The canonical $10M deal as a JSON request body."""
    return {
        "potential_gross_income": "1000000",
        "vacancy_rate": "5",
        "expenses": {
            "property_taxes": "120000",
            "insurance": "35000",
            "utilities": "40000",
            "repairs_maintenance": "46500",
            "reserves_capex": "30000",
        },
        "management_fee_pct": "3",
        "building_sqft": "50000",
        "purchase_price": "10000000",
        "ltv_pct": "70",
        "interest_rate": "7",
        "amortization_years": 25,
        "income_growth_rate": "3",
        "expense_growth_rate": "2",
        "holding_period": 5,
        "exit_cap_rate": "6.5",
        "selling_costs_pct": "2",
        "strategy": "value_add",
    }
