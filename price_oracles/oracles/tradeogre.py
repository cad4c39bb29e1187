"""TradeOgre price oracle — MWC/USDT from MWC/BTC trades and the BTC/USDT ticker."""
from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from ..config import TradeOgreConfig
from ..errors import PriceOracleError
from ..interfaces.transport import Transport
from ..models import PriceQuote
from ..timestamps import utc_now
from ..validation import ResponseShape, parse_json, validate
from .base import ExchangeOracle, RequestLifecycle, RequestState

logger = logging.getLogger(__name__)


class TradeOgreOracle(ExchangeOracle):
    """Price MWC in USDT as (last MWC/BTC trade) × (BTC/USDT ticker)."""

    name = "tradeogre"

    def __init__(
        self,
        transport: Transport,
        config: TradeOgreConfig,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        super().__init__(transport, clock)
        self.host = config.host
        self.port = config.port
        self.history_path = config.history_path
        self.ticker_path = config.ticker_path

    async def get_new_price(self) -> PriceQuote:
        lifecycle = RequestLifecycle(self.name)
        try:
            history_request = self._create_request(self.host, self.port, self.history_path)
            ticker_request = self._create_request(self.host, self.port, self.ticker_path)
            lifecycle.advance(RequestState.REQUESTS_BUILT)

            await self._perform_requests([history_request, ticker_request])
            lifecycle.advance(RequestState.REQUESTS_EXECUTED)

            trade = validate(parse_json(history_request.output_buffer), ResponseShape.HISTORY)
            timestamp = self._timestamp_from_epoch(trade.date)
            mwc_btc = self._parse_price(trade.price)
            lifecycle.advance(RequestState.FIRST_VALIDATED)

            ticker = validate(parse_json(ticker_request.output_buffer), ResponseShape.TICKER)
            btc_usdt = self._parse_price(ticker.price)
            lifecycle.advance(RequestState.SECOND_VALIDATED)

            product = mwc_btc.multiply(btc_usdt)
            lifecycle.advance(RequestState.COMPUTED)

            price = product.format(mwc_btc.scale + btc_usdt.scale)
        except PriceOracleError as e:
            lifecycle.fail(e)
            raise

        lifecycle.advance(RequestState.DONE)
        logger.info("%s price: %s at %s", self.name, price, timestamp.isoformat())
        return PriceQuote(timestamp=timestamp, price=price)
