"""Investment strategy hurdle tables."""

from fastapi import APIRouter

from src.api.schemas import StrategyResponse
from src.models.strategy import STRATEGY_THRESHOLDS

router = APIRouter(prefix="/api/v1", tags=["strategies"])


@router.get("/strategies", response_model=list[StrategyResponse])
def list_strategies():
    return [
        StrategyResponse(
            strategy=strategy.value,
            label=strategy.label,
            cap_rate=t.cap_rate,
            cash_on_cash=t.cash_on_cash,
            irr=t.irr,
            equity_multiple=t.equity_multiple,
            dscr=t.dscr,
        )
        for strategy, t in STRATEGY_THRESHOLDS.items()
    ]
