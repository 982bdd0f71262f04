"""Property disposition (sale) at the end of the hold.

Pure functions. No I/O.
"""

from decimal import Decimal

from src.engine.cashflow import value_from_cap_rate
from src.models.results import ExitWaterfall, YearRecord


def compute_sale_proceeds(
    exit_noi: Decimal,
    exit_cap_rate: Decimal,
    loan_balance: Decimal,
    selling_costs_pct: Decimal,
) -> ExitWaterfall:
    """Capitalize exit NOI, deduct selling costs and retire the loan."""
    sale_price = value_from_cap_rate(exit_noi, exit_cap_rate)
    selling_costs = sale_price * selling_costs_pct / 100
    net_sale_proceeds = sale_price - selling_costs

    return ExitWaterfall(
        exit_noi=exit_noi,
        sale_price=sale_price,
        selling_costs=selling_costs,
        net_sale_proceeds=net_sale_proceeds,
        loan_payoff=loan_balance,
        net_to_seller=net_sale_proceeds - loan_balance,
    )


def forward_noi(last_year: YearRecord, income_growth_rate: Decimal) -> Decimal:
    """The buyer underwrites one more year of income growth."""
    return last_year.noi * (1 + income_growth_rate / 100)


def compute_exit(
    last_year: YearRecord,
    income_growth_rate: Decimal,
    exit_cap_rate: Decimal,
    selling_costs_pct: Decimal,
) -> ExitWaterfall:
    """Exit waterfall from the final projection year."""
    return compute_sale_proceeds(
        exit_noi=forward_noi(last_year, income_growth_rate),
        exit_cap_rate=exit_cap_rate,
        loan_balance=last_year.loan_balance,
        selling_costs_pct=selling_costs_pct,
    )
