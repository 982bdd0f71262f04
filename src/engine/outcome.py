"""Tagged numeric results.

Engine internals return an Outcome instead of a bare zero so that
"could not compute" stays distinguishable from "computed zero". Public
scalar functions unwrap with or_zero() exactly once.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

ZERO = Decimal("0")


class OutcomeStatus(Enum):
    OK = "ok"
    UNSOLVABLE = "unsolvable"
    DIVISION_BY_ZERO = "division_by_zero"
    NOT_CONVERGED = "not_converged"


@dataclass(frozen=True)
class Outcome:
    value: Decimal
    status: OutcomeStatus = OutcomeStatus.OK

    @property
    def ok(self) -> bool:
        return self.status is OutcomeStatus.OK

    def or_zero(self) -> Decimal:
        """Unwrap for display. A non-converged solve keeps its bound."""
        if self.status in (OutcomeStatus.OK, OutcomeStatus.NOT_CONVERGED):
            return self.value
        return ZERO

    @classmethod
    def unsolvable(cls) -> "Outcome":
        return cls(ZERO, OutcomeStatus.UNSOLVABLE)

    @classmethod
    def division_by_zero(cls) -> "Outcome":
        return cls(ZERO, OutcomeStatus.DIVISION_BY_ZERO)


def safe_divide(numerator: Decimal, denominator: Decimal) -> Outcome:
    if denominator == 0:
        return Outcome.division_by_zero()
    result = numerator / denominator
    if not result.is_finite():
        return Outcome.unsolvable()
    return Outcome(result)
