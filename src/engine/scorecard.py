"""Strategy scorecard: compare deal metrics to hurdle thresholds.

Pure functions. No I/O. Recomputed from scratch on every evaluation.
"""

from decimal import Decimal, InvalidOperation

from src.models.results import DecisionMetric, MetricFormat, Scorecard, Verdict
from src.models.strategy import STRATEGY_THRESHOLDS, Strategy

REVIEW_MIN_PASSES = 3


def _metric(
    label: str, actual: Decimal, required: Decimal | None, fmt: MetricFormat
) -> DecisionMetric:
    return DecisionMetric(
        label=label,
        actual=actual,
        required=required,
        format=fmt,
        passed=required is None or actual >= required,
    )


def build_decision_metrics(
    strategy: Strategy,
    cap_rate: Decimal,
    avg_cash_on_cash: Decimal,
    irr: Decimal,
    equity_multiple: Decimal,
    dscr: Decimal,
) -> list[DecisionMetric]:
    thresholds = STRATEGY_THRESHOLDS[strategy]
    return [
        _metric("Going-In Cap Rate", cap_rate, thresholds.cap_rate, MetricFormat.PERCENT),
        _metric("Avg Cash-on-Cash", avg_cash_on_cash, thresholds.cash_on_cash, MetricFormat.PERCENT),
        _metric("IRR", irr, thresholds.irr, MetricFormat.PERCENT),
        _metric("Equity Multiple", equity_multiple, thresholds.equity_multiple, MetricFormat.RATIO),
        _metric("DSCR", dscr, thresholds.dscr, MetricFormat.RATIO),
    ]


def verdict(metrics: list[DecisionMetric]) -> Verdict:
    """GO when everything passes, REVIEW on a majority, NO-GO otherwise."""
    passes = sum(1 for m in metrics if m.passed)
    if passes == len(metrics):
        return Verdict.GO
    if passes >= REVIEW_MIN_PASSES:
        return Verdict.REVIEW
    return Verdict.NO_GO


def evaluate_scorecard(
    strategy: Strategy,
    cap_rate: Decimal,
    avg_cash_on_cash: Decimal,
    irr: Decimal,
    equity_multiple: Decimal,
    dscr: Decimal,
) -> Scorecard:
    metrics = build_decision_metrics(
        strategy, cap_rate, avg_cash_on_cash, irr, equity_multiple, dscr
    )
    return Scorecard(strategy=strategy, metrics=metrics, verdict=verdict(metrics))


def format_metric(value: Decimal | float | None, fmt: MetricFormat) -> str:
    """Render a metric for display: 12.34%, 1.25x, $1,234."""
    try:
        number = Decimal(str(value)) if value is not None else None
    except InvalidOperation:
        number = None
    finite = number is not None and number.is_finite()

    if fmt is MetricFormat.PERCENT:
        return f"{number:.2f}%" if finite else "0%"
    if fmt is MetricFormat.RATIO:
        return f"{number:.2f}x" if finite else "0.00x"
    return f"${number:,.0f}" if finite else "$0"
