"""Builds the configured oracles and serves price requests by oracle name."""
from __future__ import annotations

import logging
from collections.abc import Callable

from ..config import AppConfig, OraclesConfig
from ..interfaces.price_oracle import PriceOracle
from ..interfaces.transport import Transport
from ..models import PriceQuote
from ..oracles import TradeOgreOracle
from ..transport import TorTransport

logger = logging.getLogger(__name__)

# Registry of oracle factories keyed by oracle name.
_ORACLE_FACTORIES: dict[str, Callable[[Transport, OraclesConfig], PriceOracle]] = {
    "tradeogre": lambda transport, cfg: TradeOgreOracle(transport, cfg.tradeogre),
}


class PriceService:
    """Owns the Tor transport and one oracle per enabled oracle name."""

    def __init__(self, config: AppConfig, transport: Transport | None = None) -> None:
        self._transport = transport or TorTransport(config.tor)

        self._oracles: dict[str, PriceOracle] = {}
        for name in config.oracles.enabled:
            factory = _ORACLE_FACTORIES.get(name)
            if factory:
                self._oracles[name] = factory(self._transport, config.oracles)
            else:
                logger.warning("No oracle factory for '%s'", name)

    @property
    def oracle_names(self) -> list[str]:
        return list(self._oracles)

    async def get_price(self, name: str) -> PriceQuote:
        """Fetch a new price from the named oracle.

        Raises:
            KeyError: if no oracle with that name is enabled.
            PriceOracleError: if the oracle fails; the call is not retried.
        """
        if name not in self._oracles:
            raise KeyError(f"Oracle '{name}' is not enabled")
        return await self._oracles[name].get_new_price()
