"""Transport protocol — executes a batch of outbound GET requests."""
from collections.abc import Sequence
from typing import Protocol

from ..models import RequestDescriptor


class Transport(Protocol):
    """Abstract interface for the (anonymizing) HTTP transport.

    Fills each descriptor's ``output_buffer`` with its response body and
    returns True only when every request in the batch succeeded.
    """

    async def perform_requests(self, requests: Sequence[RequestDescriptor]) -> bool: ...
