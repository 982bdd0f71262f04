"""Loan payment and remaining-balance primitives.

Pure functions: Decimal in, Decimal out. No I/O.
Rates are annual percentages (Decimal("7") for 7%).
"""

from decimal import Decimal

from src.engine.outcome import ZERO, Outcome, safe_divide

DSCR_WARNING = Decimal("1.25")
DSCR_GOOD = Decimal("1.5")


def _monthly_rate(annual_rate_pct: Decimal) -> Decimal:
    return annual_rate_pct / 100 / 12


def monthly_payment(loan: Decimal, annual_rate_pct: Decimal, years: int) -> Decimal:
    """Fixed monthly payment: P * [r(1+r)^n] / [(1+r)^n - 1].

    Zero loan, rate, or term means no amortizing payment.
    """
    if loan == 0 or annual_rate_pct == 0 or years == 0:
        return ZERO

    r = _monthly_rate(annual_rate_pct)
    n = int(years) * 12
    factor = (1 + r) ** n
    return safe_divide(loan * r * factor, factor - 1).or_zero()


def annual_debt_service(payment: Decimal) -> Decimal:
    return payment * 12


def remaining_balance(
    loan: Decimal, annual_rate_pct: Decimal, years: int, years_elapsed: int
) -> Decimal:
    """Balance after years_elapsed * 12 payments.

    B = L(1+r)^p - PMT * [(1+r)^p - 1] / r, floored at zero.
    """
    if annual_rate_pct == 0 or years <= 0:
        return loan

    r = _monthly_rate(annual_rate_pct)
    p = max(int(years_elapsed), 0) * 12
    pmt = monthly_payment(loan, annual_rate_pct, years)
    growth = (1 + r) ** p
    balance = loan * growth - pmt * (growth - 1) / r
    return max(ZERO, balance)


def loan_amount(purchase_price: Decimal, ltv_pct: Decimal) -> Decimal:
    return purchase_price * ltv_pct / 100


def down_payment(purchase_price: Decimal, loan: Decimal) -> Decimal:
    return purchase_price - loan


def closing_costs(purchase_price: Decimal, closing_costs_pct: Decimal) -> Decimal:
    return purchase_price * closing_costs_pct / 100


def total_cash_required(down: Decimal, closing: Decimal) -> Decimal:
    return down + closing


def dscr_outcome(noi: Decimal, debt_service: Decimal) -> Outcome:
    return safe_divide(noi, debt_service)


def dscr(noi: Decimal, debt_service: Decimal) -> Decimal:
    """Debt Service Coverage Ratio = NOI / annual debt service (0 when unlevered)."""
    return dscr_outcome(noi, debt_service).or_zero()


def dscr_status(value: Decimal) -> str:
    if value < DSCR_WARNING:
        return "danger"
    if value < DSCR_GOOD:
        return "warning"
    return "good"
