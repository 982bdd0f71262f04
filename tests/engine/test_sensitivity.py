from dataclasses import replace
from decimal import Decimal

from src.engine.sensitivity import (
    irr_by_exit_cap,
    irr_by_income_growth,
    irr_matrix,
    valuation_by_cap_rate,
)


class TestValuationByCapRate:
    def test_steps_around_asking(self):
        scenarios = valuation_by_cap_rate(Decimal("650000"), Decimal("10000000"), Decimal("6.5"))
        assert [s.cap_rate for s in scenarios] == [
            Decimal(c) for c in ("5.0", "5.5", "6.0", "6.5", "7.0", "7.5", "8.0")
        ]
        asking = [s for s in scenarios if s.is_asking_rate]
        assert len(asking) == 1
        assert asking[0].value == Decimal("10000000")
        assert asking[0].vs_asking_pct == Decimal("0")

    def test_lower_cap_higher_value(self):
        scenarios = valuation_by_cap_rate(Decimal("650000"), Decimal("10000000"), Decimal("6.5"))
        for prev, cur in zip(scenarios, scenarios[1:]):
            assert cur.value < prev.value
        assert scenarios[0].vs_asking_pct > 0
        assert scenarios[-1].vs_asking_pct < 0

    def test_base_rounds_to_half_point(self):
        scenarios = valuation_by_cap_rate(Decimal("630000"), Decimal("10000000"), Decimal("6.3"))
        assert scenarios[3].cap_rate == Decimal("6.5")
        assert not any(s.is_asking_rate for s in scenarios)

    def test_skips_non_positive_caps(self):
        scenarios = valuation_by_cap_rate(Decimal("80000"), Decimal("10000000"), Decimal("0.8"))
        assert all(s.cap_rate > 0 for s in scenarios)
        assert len(scenarios) == 5


class TestIRRSensitivity:
    def test_by_exit_cap(self, canonical_inputs):
        rows = irr_by_exit_cap(canonical_inputs)
        assert len(rows) == 7
        for prev, cur in zip(rows, rows[1:]):
            assert cur.irr < prev.irr
            assert cur.sale_price < prev.sale_price

    def test_custom_grid(self, canonical_inputs):
        rows = irr_by_exit_cap(canonical_inputs, [Decimal("6.5")])
        assert len(rows) == 1
        assert rows[0].exit_cap_rate == Decimal("6.5")
        assert Decimal("13.5") < rows[0].irr < Decimal("15")

    def test_by_income_growth(self, canonical_inputs):
        rows = irr_by_income_growth(canonical_inputs)
        assert len(rows) == 5
        for prev, cur in zip(rows, rows[1:]):
            assert cur.irr > prev.irr
            assert cur.total_cash_flow > prev.total_cash_flow

    def test_matrix_shape(self, canonical_inputs):
        matrix = irr_matrix(canonical_inputs)
        assert len(matrix.values) == len(matrix.growth_rates) == 5
        assert all(len(row) == len(matrix.exit_caps) == 5 for row in matrix.values)

    def test_matrix_monotone(self, canonical_inputs):
        matrix = irr_matrix(canonical_inputs)
        # Rows: faster growth raises IRR. Columns: higher exit cap lowers it.
        assert matrix.values[-1][0] > matrix.values[0][0]
        assert matrix.values[0][-1] < matrix.values[0][0]

    def test_unsolvable_inputs(self, canonical_inputs):
        no_income = replace(canonical_inputs, initial_income=Decimal("0"))
        assert irr_by_exit_cap(no_income) == []
        assert irr_by_income_growth(no_income) == []
        assert irr_matrix(no_income).values == []

        all_debt = replace(canonical_inputs, ltv_pct=Decimal("100"))
        assert irr_by_exit_cap(all_debt) == []
