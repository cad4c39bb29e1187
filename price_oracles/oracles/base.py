"""Request/validate/compute pipeline shared by every exchange oracle."""
from __future__ import annotations

import enum
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from datetime import datetime

from ..decimal_value import DecimalValue
from ..errors import PriceOracleError, TransportFailure
from ..interfaces.transport import Transport
from ..models import PriceQuote, RequestDescriptor
from ..timestamps import from_epoch_seconds, utc_now

logger = logging.getLogger(__name__)


class RequestState(enum.Enum):
    IDLE = "idle"
    REQUESTS_BUILT = "requests_built"
    REQUESTS_EXECUTED = "requests_executed"
    FIRST_VALIDATED = "first_validated"
    SECOND_VALIDATED = "second_validated"
    COMPUTED = "computed"
    DONE = "done"
    FAILED = "failed"


class RequestLifecycle:
    """Tracks one ``get_new_price`` call through its states.

    Owned by a single call, so concurrent calls on one oracle never share it.
    """

    def __init__(self, oracle_name: str) -> None:
        self.oracle_name = oracle_name
        self.state = RequestState.IDLE

    def advance(self, state: RequestState) -> None:
        logger.debug("%s: %s -> %s", self.oracle_name, self.state.value, state.value)
        self.state = state

    def fail(self, error: PriceOracleError) -> None:
        """Record the state the call failed in and move to FAILED."""
        error.state = self.state.value
        logger.error(
            "%s: %s failed in state %s: %s",
            self.oracle_name,
            type(error).__name__,
            self.state.value,
            error,
        )
        self.state = RequestState.FAILED


class ExchangeOracle(ABC):
    """Base class for oracles that price an asset from one exchange.

    Subclasses supply endpoints and field extraction; this class supplies
    request construction, batch execution, timestamp and price conversion.
    """

    name: str

    def __init__(
        self, transport: Transport, clock: Callable[[], datetime] = utc_now
    ) -> None:
        self._transport = transport
        self._clock = clock

    @abstractmethod
    async def get_new_price(self) -> PriceQuote:
        """Fetch a fresh price, raising a PriceOracleError on any failure."""

    @staticmethod
    def _create_request(host: str, port: int, path: str) -> RequestDescriptor:
        return RequestDescriptor.build(host, port, path)

    async def _perform_requests(self, requests: Sequence[RequestDescriptor]) -> None:
        """Run the batch; every buffer must come back non-empty."""
        if not await self._transport.perform_requests(requests):
            raise TransportFailure(f"Performing {self.name} requests failed")
        for request in requests:
            if not request.output_buffer:
                raise TransportFailure(
                    f"Empty {self.name} response from {request.url}",
                    {"url": request.url},
                )

    def _timestamp_from_epoch(self, seconds: int) -> datetime:
        return from_epoch_seconds(seconds, now=self._clock())

    @staticmethod
    def _parse_price(text: str) -> DecimalValue:
        return DecimalValue.parse(text)

