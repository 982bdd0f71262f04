"""Single-period pro forma: income, expenses, NOI, cap rate.

Pure functions: Decimal in, Decimal out. No I/O.
"""

from decimal import Decimal

from src.engine.outcome import ZERO, safe_divide

CAP_RATE_LOW = Decimal("4.0")  # Below this might be overpriced
CAP_RATE_HIGH = Decimal("8.0")  # Above this might be risky


def vacancy_amount(pgi: Decimal, vacancy_rate_pct: Decimal) -> Decimal:
    return pgi * vacancy_rate_pct / 100


def effective_gross_income(
    pgi: Decimal, vacancy: Decimal, other_income: Decimal = ZERO
) -> Decimal:
    """EGI = PGI - vacancy + other income."""
    return pgi - vacancy + other_income


def management_fee(egi: Decimal, fee_pct: Decimal) -> Decimal:
    return egi * fee_pct / 100


def total_expenses(fixed_total: Decimal, mgmt_fee: Decimal = ZERO) -> Decimal:
    """Fixed line items plus the management fee."""
    return fixed_total + mgmt_fee


def noi(egi: Decimal, expenses: Decimal) -> Decimal:
    """Net Operating Income = EGI - operating expenses."""
    return egi - expenses


def cap_rate(noi_amount: Decimal, purchase_price: Decimal) -> Decimal:
    """Cap rate = NOI / price, as a percent."""
    return (safe_divide(noi_amount, purchase_price).or_zero()) * 100


def value_from_cap_rate(noi_amount: Decimal, cap_rate_pct: Decimal) -> Decimal:
    """Inverse of cap_rate: value = NOI / (cap / 100)."""
    return safe_divide(noi_amount, cap_rate_pct / 100).or_zero()


def operating_expense_ratio(expenses: Decimal, egi: Decimal) -> Decimal:
    return safe_divide(expenses, egi).or_zero() * 100


def price_per_sqft(purchase_price: Decimal, sqft: Decimal) -> Decimal:
    return safe_divide(purchase_price, sqft).or_zero()


def gross_rent_multiplier(purchase_price: Decimal, annual_gross_income: Decimal) -> Decimal:
    return safe_divide(purchase_price, annual_gross_income).or_zero()


def before_tax_cash_flow(noi_amount: Decimal, debt_service: Decimal) -> Decimal:
    """BTCF = NOI - annual debt service."""
    return noi_amount - debt_service


def cash_on_cash(cash_flow: Decimal, total_cash_invested: Decimal) -> Decimal:
    """Annual cash flow / total cash invested, as a percent."""
    return safe_divide(cash_flow, total_cash_invested).or_zero() * 100


def cap_rate_status(value: Decimal) -> str:
    if value < CAP_RATE_LOW:
        return "low"
    if value > CAP_RATE_HIGH:
        return "high"
    return "normal"
