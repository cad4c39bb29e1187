"""Protocol interfaces for the price oracles."""
from .price_oracle import PriceOracle
from .transport import Transport

__all__ = ["PriceOracle", "Transport"]
