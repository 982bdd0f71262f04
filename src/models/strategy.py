from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class Strategy(Enum):
    CORE = "core"
    VALUE_ADD = "value_add"
    OPPORTUNISTIC = "opportunistic"

    @property
    def label(self) -> str:
        return {
            Strategy.CORE: "Core",
            Strategy.VALUE_ADD: "Value-Add",
            Strategy.OPPORTUNISTIC: "Opportunistic",
        }[self]


@dataclass(frozen=True)
class StrategyThresholds:
    """Minimum acceptable metrics. Percent values except multiple and DSCR."""
    cap_rate: Decimal | None  # Opportunistic deals have no going-in cap floor
    cash_on_cash: Decimal
    irr: Decimal
    equity_multiple: Decimal
    dscr: Decimal


STRATEGY_THRESHOLDS: dict[Strategy, StrategyThresholds] = {
    Strategy.CORE: StrategyThresholds(
        cap_rate=Decimal("5.0"),
        cash_on_cash=Decimal("6.0"),
        irr=Decimal("8.0"),
        equity_multiple=Decimal("1.5"),
        dscr=Decimal("1.35"),
    ),
    Strategy.VALUE_ADD: StrategyThresholds(
        cap_rate=Decimal("6.0"),
        cash_on_cash=Decimal("7.0"),
        irr=Decimal("14.0"),
        equity_multiple=Decimal("1.7"),
        dscr=Decimal("1.25"),
    ),
    Strategy.OPPORTUNISTIC: StrategyThresholds(
        cap_rate=None,
        cash_on_cash=Decimal("4.0"),
        irr=Decimal("18.0"),
        equity_multiple=Decimal("2.0"),
        dscr=Decimal("1.15"),
    ),
}
