from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class ComparableSale:
    """A closed sale from the deal-record store. Either metric may be unknown."""
    address: str = ""
    sale_price: Decimal | None = None
    cap_rate: Decimal | None = None  # %
    price_per_sqft: Decimal | None = None
