"""Exchange price oracles."""
from .base import ExchangeOracle, RequestState
from .tradeogre import TradeOgreOracle

__all__ = ["ExchangeOracle", "RequestState", "TradeOgreOracle"]
