"""CLI client for the Deal Engine API. Posts a deal and prints a terminal report.

Usage:
    python deal-analyzer/analyze_deal.py deal.json
    python deal-analyzer/analyze_deal.py deal.json --strategy core --price 9500000
    python deal-analyzer/analyze_deal.py deal.json --sensitivity --api-url http://localhost:8000
"""

import argparse
import asyncio
import json
import sys
from decimal import Decimal
from pathlib import Path

import httpx


# ── Helpers ──────────────────────────────────────────────────────────────────

def _pct(v) -> str:
    """Format a percent value (7.5 means 7.5%) for display."""
    return f"{float(v):.2f}%"


def _dollar(v) -> str:
    return f"${float(v):,.0f}"


def _header(title: str) -> None:
    print(f"\n{'=' * 64}")
    print(f"  {title}")
    print(f"{'=' * 64}")


def load_deal(path: Path) -> dict:
    with path.open() as f:
        return json.load(f)


# ── Report sections ──────────────────────────────────────────────────────────

def print_going_in(data: dict) -> None:
    _header("Going-In Pro Forma")
    print(f"  Effective Gross Income:  {_dollar(data['effective_gross_income'])}")
    print(f"  Operating Expenses:      {_dollar(data['total_expenses'])}")
    print(f"  NOI:                     {_dollar(data['noi'])}")
    print(f"  Cap Rate:                {_pct(data['cap_rate'])} ({data['cap_rate_status']})")
    print(f"  Expense Ratio:           {_pct(data['operating_expense_ratio'])}")
    if float(data["price_per_sqft"]):
        print(f"  Price / Sq Ft:           {_dollar(data['price_per_sqft'])}")
    print(f"  Gross Rent Multiplier:   {float(data['gross_rent_multiplier']):.2f}")


def print_financing(data: dict) -> None:
    _header("Financing")
    print(f"  Loan Amount:          {_dollar(data['loan_amount'])}")
    print(f"  Down Payment:         {_dollar(data['down_payment'])}")
    print(f"  Closing Costs:        {_dollar(data['closing_costs'])}")
    print(f"  Monthly Payment:      {_dollar(data['monthly_payment'])}")
    print(f"  Annual Debt Service:  {_dollar(data['annual_debt_service'])}")
    print(f"  DSCR:                 {float(data['dscr']):.2f} ({data['dscr_status']})")
    print(f"  Year-1 Cash Flow:     {_dollar(data['before_tax_cash_flow'])}")
    print(f"  Total Cash Invested:  {_dollar(data['total_cash_invested'])}")


def print_deal_metrics(data: dict) -> None:
    _header("Deal Metrics")
    print(f"  IRR:                  {_pct(data['irr'])}")
    print(f"  NPV:                  {_dollar(data['npv'])}")
    print(f"  Equity Multiple:      {float(data['equity_multiple']):.2f}x")
    print(f"  Avg Cash-on-Cash:     {_pct(data['average_cash_on_cash'])}")
    print(f"  Total Profit:         {_dollar(data['total_profit'])}")


def print_cashflow_table(data: dict) -> None:
    projections = data.get("projections", [])
    if not projections:
        return
    _header("Cash Flow Projections")
    header = (
        f"  {'Yr':>3}  {'Income':>11}  {'NOI':>11}  {'Debt Svc':>11}  "
        f"{'Cash Flow':>11}  {'Loan Bal':>12}"
    )
    print(header)
    print(f"  {'---':>3}  {'-' * 11}  {'-' * 11}  {'-' * 11}  {'-' * 11}  {'-' * 12}")
    for yr in projections:
        print(
            f"  {yr['year']:>3}  {_dollar(yr['income']):>11}  "
            f"{_dollar(yr['noi']):>11}  {_dollar(yr['debt_service']):>11}  "
            f"{_dollar(yr['cash_flow']):>11}  {_dollar(yr['loan_balance']):>12}"
        )


def print_exit(data: dict) -> None:
    sale = data.get("exit")
    if not sale or not float(sale["sale_price"]):
        return
    _header("Exit (Sale)")
    print(f"  Forward NOI:          {_dollar(sale['exit_noi'])}")
    print(f"  Sale Price:           {_dollar(sale['sale_price'])}")
    print(f"  Selling Costs:        {_dollar(sale['selling_costs'])}")
    print(f"  Net Sale Proceeds:    {_dollar(sale['net_sale_proceeds'])}")
    print(f"  Loan Payoff:          {_dollar(sale['loan_payoff'])}")
    print(f"  Net to Seller:        {_dollar(sale['net_to_seller'])}")


def print_scorecard(data: dict) -> None:
    card = data["scorecard"]
    _header(f"{card['strategy_label']} Scorecard: {card['verdict']}")
    for m in card["metrics"]:
        mark = "PASS" if m["passed"] else "FAIL"
        if m["required"] is None:
            required = "n/a"
        elif m["format"] == "percent":
            required = _pct(m["required"])
        else:
            required = f"{float(m['required']):.2f}x"
        print(f"  {m['label']:<20} {m['display']:>10}  min {required:>8}  [{mark}]")
    print(f"\n  {card['pass_count']} of {len(card['metrics'])} hurdles met")


def print_goal_seek(data: dict) -> None:
    seek = data.get("goal_seek")
    if not seek:
        return
    _header(f"Goal Seek (target IRR {_pct(seek['target_irr'])})")
    print(f"  Max Purchase Price:   {_dollar(seek['max_purchase_price'])}")
    print(f"  Required NOI:         {_dollar(seek['required_noi'])}")
    if float(seek["required_rent_psf"]):
        print(f"  Required Rent/Sq Ft:  ${float(seek['required_rent_psf']):,.2f}")
    print(f"  Capex Ceiling:        {_dollar(seek['capex_ceiling'])}")
    print(f"  Max Exit Cap Rate:    {_pct(seek['target_exit_cap'])}")


def print_stabilization(data: dict) -> None:
    stab = data.get("stabilization")
    if not stab or not float(stab["stabilized_income"]):
        return
    _header("Stabilization")
    print(f"  As-Is NOI:            {_dollar(stab['as_is_noi'])}")
    print(f"  Stabilized NOI:       {_dollar(stab['stabilized_noi'])}")
    print(f"  NOI Lift:             {_dollar(stab['noi_lift'])}")


def print_comps(data: dict) -> None:
    suggested = data.get("suggested_exit_cap")
    bench = data.get("price_per_sqft_benchmark")
    if suggested is None and bench is None:
        return
    _header("Comparable Sales")
    if suggested is not None:
        print(f"  Suggested Exit Cap:   {_pct(suggested)}")
    if bench:
        print(
            f"  Comp $/Sq Ft:         {_dollar(bench['min'])} – {_dollar(bench['max'])}"
            f" (avg {_dollar(bench['avg'])}, {bench['count']} comps)"
        )


def print_sensitivity(data: dict) -> None:
    _header("Valuation by Cap Rate")
    for row in data["valuation"]:
        marker = "  <- asking" if row["is_asking_rate"] else ""
        print(
            f"  {_pct(row['cap_rate']):>7}  {_dollar(row['value']):>14}  "
            f"{float(row['vs_asking_pct']):>+7.1f}%{marker}"
        )

    matrix = data["matrix"]
    if not matrix["values"]:
        return
    _header("IRR by Income Growth (rows) and Exit Cap (columns)")
    print("  " + " " * 7 + "".join(f"{_pct(c):>9}" for c in matrix["exit_caps"]))
    for growth, row in zip(matrix["growth_rates"], matrix["values"]):
        print(f"  {_pct(growth):>7}" + "".join(f"{_pct(v):>9}" for v in row))


# ── Main ─────────────────────────────────────────────────────────────────────

async def _post(client: httpx.AsyncClient, url: str, payload: dict, api_url: str) -> dict:
    try:
        resp = await client.post(url, json=payload)
    except httpx.ConnectError:
        print(f"Error: Could not connect to API at {api_url}", file=sys.stderr)
        print("Is the server running? Start with: uvicorn src.api.app:app --reload", file=sys.stderr)
        sys.exit(1)
    except httpx.TimeoutException:
        print("Error: Request timed out", file=sys.stderr)
        sys.exit(1)

    if resp.status_code != 200:
        print(f"Error: API returned {resp.status_code}", file=sys.stderr)
        try:
            detail = resp.json().get("detail", resp.text)
        except ValueError:
            detail = resp.text
        print(f"  {detail}", file=sys.stderr)
        sys.exit(1)

    return resp.json()


async def main() -> None:
    parser = argparse.ArgumentParser(
        description="Analyze a commercial real estate deal via the Deal Engine API"
    )
    parser.add_argument("deal", type=Path, help="Path to a deal JSON file")
    parser.add_argument(
        "--strategy",
        choices=["core", "value_add", "opportunistic"],
        default=None,
        help="Strategy override",
    )
    parser.add_argument("--price", type=Decimal, help="Purchase price override")
    parser.add_argument("--exit-cap", type=Decimal, help="Exit cap rate override (percent)")
    parser.add_argument("--hold-years", type=int, help="Hold period in years")
    parser.add_argument(
        "--sensitivity",
        action="store_true",
        help="Also print cap rate and IRR sensitivity tables",
    )
    parser.add_argument(
        "--api-url",
        default="http://localhost:8000",
        help="API base URL (default: http://localhost:8000)",
    )

    args = parser.parse_args()

    try:
        payload = load_deal(args.deal)
    except (OSError, json.JSONDecodeError) as e:
        print(f"Error: Could not read deal file {args.deal}: {e}", file=sys.stderr)
        sys.exit(1)

    # Apply only non-None overrides
    field_map = {
        "strategy": "strategy",
        "price": "purchase_price",
        "exit_cap": "exit_cap_rate",
        "hold_years": "holding_period",
    }
    for cli_name, api_name in field_map.items():
        val = getattr(args, cli_name)
        if val is not None:
            payload[api_name] = val if not isinstance(val, Decimal) else str(val)

    async with httpx.AsyncClient(timeout=120) as client:
        data = await _post(client, f"{args.api_url}/api/v1/analyze", payload, args.api_url)
        sens = None
        if args.sensitivity:
            sens = await _post(
                client, f"{args.api_url}/api/v1/sensitivity", {"deal": payload}, args.api_url
            )

    # Print report
    print_going_in(data)
    print_financing(data)
    print_deal_metrics(data)
    print_cashflow_table(data)
    print_exit(data)
    print_scorecard(data)
    print_goal_seek(data)
    print_stabilization(data)
    print_comps(data)
    if sens is not None:
        print_sensitivity(sens)
    print()


if __name__ == "__main__":
    asyncio.run(main())
