"""Price oracle protocol — single-exchange price source abstraction."""
from typing import Protocol

from ..models import PriceQuote


class PriceOracle(Protocol):
    """Abstract interface for fetching a current price from one exchange."""

    @property
    def name(self) -> str: ...

    async def get_new_price(self) -> PriceQuote: ...
