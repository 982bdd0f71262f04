from dataclasses import replace
from decimal import Decimal

from src.engine.projections import generate_projections, growth_factor


class TestGrowthFactor:
    def test_no_growth_in_year_one(self):
        assert growth_factor(Decimal("3"), 1) == Decimal("1")

    def test_compounds(self):
        assert growth_factor(Decimal("3"), 3) == Decimal("1.03") ** 2

    def test_full_decline(self):
        assert growth_factor(Decimal("-100"), 1) == Decimal("1")
        assert growth_factor(Decimal("-100"), 2) == Decimal("0")


class TestProjections:
    def test_length_and_order(self, canonical_inputs):
        projections = generate_projections(canonical_inputs)
        assert len(projections) == 5
        assert [p.year for p in projections] == [1, 2, 3, 4, 5]

    def test_year_one(self, canonical_inputs):
        first = generate_projections(canonical_inputs)[0]
        assert first.income == Decimal("950000")
        assert first.expenses == Decimal("300000")
        assert first.noi == Decimal("650000")
        assert abs(first.debt_service - Decimal("593697")) < Decimal("1")
        assert abs(first.cash_flow - Decimal("56303")) < Decimal("1")

    def test_income_and_expenses_grow(self, canonical_inputs):
        projections = generate_projections(canonical_inputs)
        assert projections[1].income == Decimal("950000") * Decimal("1.03")
        assert projections[1].expenses == Decimal("300000") * Decimal("1.02")

    def test_debt_service_constant(self, canonical_inputs):
        projections = generate_projections(canonical_inputs)
        assert len({p.debt_service for p in projections}) == 1

    def test_zero_growth_flat_noi(self, canonical_inputs):
        inputs = replace(
            canonical_inputs,
            income_growth_rate=Decimal("0"),
            expense_growth_rate=Decimal("0"),
        )
        for p in generate_projections(inputs):
            assert p.noi == Decimal("650000")

    def test_loan_balance_decreases(self, canonical_inputs):
        projections = generate_projections(canonical_inputs)
        for prev, cur in zip(projections, projections[1:]):
            assert cur.loan_balance < prev.loan_balance

    def test_value_tracks_income_growth(self, canonical_inputs):
        projections = generate_projections(canonical_inputs)
        assert projections[0].property_value == Decimal("10000000")
        assert projections[2].property_value == Decimal("10000000") * Decimal("1.03") ** 2

    def test_explicit_appreciation(self, canonical_inputs):
        inputs = replace(canonical_inputs, appreciation_rate=Decimal("0"))
        for p in generate_projections(inputs):
            assert p.property_value == Decimal("10000000")
            assert p.equity == p.property_value - p.loan_balance

    def test_additional_debt_service(self, canonical_inputs):
        base = generate_projections(canonical_inputs)[0]
        inputs = replace(canonical_inputs, additional_debt_service=Decimal("24000"))
        first = generate_projections(inputs)[0]
        assert first.debt_service == base.debt_service + Decimal("24000")

    def test_unlevered(self, canonical_inputs):
        inputs = replace(canonical_inputs, ltv_pct=Decimal("0"))
        for p in generate_projections(inputs):
            assert p.debt_service == Decimal("0")
            assert p.loan_balance == Decimal("0")
            assert p.cash_flow == p.noi

    def test_zero_holding_period(self, canonical_inputs):
        assert generate_projections(replace(canonical_inputs, holding_period=0)) == []

    def test_income_wiped_out(self, canonical_inputs):
        inputs = replace(canonical_inputs, income_growth_rate=Decimal("-100"))
        projections = generate_projections(inputs)
        assert projections[0].income == Decimal("950000")
        assert all(p.income == 0 for p in projections[1:])
        assert projections[1].property_value == 0

    def test_expenses_wiped_out(self, canonical_inputs):
        inputs = replace(canonical_inputs, expense_growth_rate=Decimal("-100"))
        projections = generate_projections(inputs)
        assert projections[0].expenses == Decimal("300000")
        assert all(p.expenses == 0 for p in projections[1:])
