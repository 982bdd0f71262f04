from dataclasses import replace
from decimal import Decimal

from src.engine.irr import (
    build_irr_cash_flows,
    calculate_avg_cash_on_cash,
    calculate_equity_multiple,
    calculate_irr,
    calculate_npv,
    run_hold_period,
    solve_irr,
)
from src.engine.outcome import OutcomeStatus
from src.models.results import YearRecord


class TestIRR:
    def test_simple_irr(self):
        """Invest $100, get $110 after 1 year = 10% IRR."""
        irr = calculate_irr([Decimal("-100"), Decimal("110")])
        assert abs(irr - Decimal("10")) < Decimal("0.01")

    def test_multi_year(self):
        """Known cash flows with ~15% IRR."""
        cfs = [Decimal("-100000"), Decimal("10000"), Decimal("10000"),
               Decimal("10000"), Decimal("10000"), Decimal("130000")]
        irr = calculate_irr(cfs)
        assert Decimal("10") < irr < Decimal("20")

    def test_loss(self):
        irr = calculate_irr([Decimal("-100"), Decimal("50"), Decimal("30")])
        assert irr < 0

    def test_negative_returns(self):
        """All-negative cash flows sit below the rate floor, not at zero."""
        outcome = solve_irr([Decimal("-100"), Decimal("-10"), Decimal("-10")])
        assert outcome.status is OutcomeStatus.NOT_CONVERGED
        assert outcome.or_zero() == Decimal("-99")

    def test_below_lower_bound(self):
        """True IRR is about -99.5%; the result stops at the -99% floor."""
        outcome = solve_irr([Decimal("-100"), Decimal("0.5")])
        assert outcome.status is OutcomeStatus.NOT_CONVERGED
        assert calculate_irr([Decimal("-100"), Decimal("0.5")]) == Decimal("-99")

    def test_total_loss_ranks_below_break_even(self):
        total_loss = calculate_irr([Decimal("-100"), Decimal("0")])
        break_even = calculate_irr([Decimal("-100"), Decimal("100")])
        assert total_loss == Decimal("-99")
        assert abs(break_even) < Decimal("0.01")
        assert total_loss < break_even

    def test_empty_cash_flows(self):
        assert calculate_irr([]) == Decimal("0")

    def test_single_cash_flow(self):
        assert calculate_irr([Decimal("-100")]) == Decimal("0")

    def test_non_negative_investment(self):
        assert calculate_irr([Decimal("100"), Decimal("110")]) == Decimal("0")
        assert calculate_irr([Decimal("0"), Decimal("110")]) == Decimal("0")

    def test_solved_outcome_is_ok(self):
        assert solve_irr([Decimal("-100"), Decimal("110")]).ok

    def test_very_high_return(self):
        """500% in one year needs many clamped steps or the bracketed fallback."""
        irr = calculate_irr([Decimal("-100"), Decimal("600")])
        assert abs(irr - Decimal("500")) < Decimal("0.1")

    def test_beyond_upper_bound(self):
        outcome = solve_irr([Decimal("-1"), Decimal("1000")])
        assert outcome.status is OutcomeStatus.NOT_CONVERGED
        assert outcome.or_zero() == Decimal("1000")


class TestCashFlowVector:
    def test_sale_folded_into_last_year(self):
        projections = [
            YearRecord(year=1, cash_flow=Decimal("100")),
            YearRecord(year=2, cash_flow=Decimal("200")),
        ]
        cfs = build_irr_cash_flows(Decimal("1000"), projections, Decimal("1500"))
        assert cfs == [Decimal("-1000"), Decimal("100"), Decimal("1700")]

    def test_no_projections(self):
        assert build_irr_cash_flows(Decimal("1000"), [], Decimal("1500")) == [Decimal("-1000")]

    def test_hold_period(self, canonical_inputs):
        projections, exit_sale, cfs = run_hold_period(canonical_inputs)
        assert len(cfs) == 6
        assert cfs[0] == Decimal("-3000000")
        assert cfs[1] == projections[0].cash_flow
        assert cfs[-1] == projections[-1].cash_flow + exit_sale.net_to_seller

    def test_hold_period_zero_years(self, canonical_inputs):
        projections, exit_sale, cfs = run_hold_period(replace(canonical_inputs, holding_period=0))
        assert projections == []
        assert exit_sale is None
        assert cfs == [Decimal("-3000000")]
        assert calculate_irr(cfs) == Decimal("0")

    def test_canonical_irr(self, canonical_inputs):
        _, _, cfs = run_hold_period(canonical_inputs)
        irr = calculate_irr(cfs)
        assert Decimal("13.5") < irr < Decimal("15")


class TestNPV:
    def test_zero_rate_is_sum(self):
        cfs = [Decimal("-100"), Decimal("60"), Decimal("60")]
        assert calculate_npv(cfs, Decimal("0")) == Decimal("20")

    def test_discounting(self):
        npv = calculate_npv([Decimal("-100"), Decimal("110")], Decimal("10"))
        assert abs(npv) < Decimal("0.0001")

    def test_npv_at_irr_is_zero(self):
        cfs = [Decimal("-100000"), Decimal("10000"), Decimal("10000"), Decimal("130000")]
        irr = calculate_irr(cfs)
        assert abs(calculate_npv(cfs, irr)) < Decimal("1")


class TestEquityMultiple:
    def test_basic(self):
        em = calculate_equity_multiple(Decimal("100000"), Decimal("50000"), Decimal("150000"))
        assert em == Decimal("2")

    def test_zero_investment(self):
        em = calculate_equity_multiple(Decimal("0"), Decimal("50000"), Decimal("150000"))
        assert em == Decimal("0")


class TestAverageCashOnCash:
    def test_mean_of_yearly(self):
        projections = [
            YearRecord(year=1, cash_flow=Decimal("30000")),
            YearRecord(year=2, cash_flow=Decimal("90000")),
        ]
        assert calculate_avg_cash_on_cash(projections, Decimal("1000000")) == Decimal("6")

    def test_empty(self):
        assert calculate_avg_cash_on_cash([], Decimal("1000000")) == Decimal("0")

    def test_zero_investment(self):
        projections = [YearRecord(year=1, cash_flow=Decimal("30000"))]
        assert calculate_avg_cash_on_cash(projections, Decimal("0")) == Decimal("0")
