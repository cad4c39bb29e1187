"""Data models — all frozen (immutable)."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from .errors import ConstructionFailure

MIN_PORT = 1
MAX_PORT = 65535


@dataclass(frozen=True)
class RequestDescriptor:
    """One outbound HTTPS GET request and the buffer its response lands in."""

    host: str
    port: int
    path: str
    output_buffer: bytearray = field(default_factory=bytearray, compare=False)

    @classmethod
    def build(cls, host: str, port: int, path: str) -> RequestDescriptor:
        """Build a descriptor with a fresh, empty output buffer."""
        if not host:
            raise ConstructionFailure("Request host is empty")
        if isinstance(port, bool) or not isinstance(port, int):
            raise ConstructionFailure(f"Request port is not an integer: {port!r}")
        if not MIN_PORT <= port <= MAX_PORT:
            raise ConstructionFailure(f"Request port out of range: {port}")
        if not path.startswith("/"):
            raise ConstructionFailure(f"Request path must start with '/': {path!r}")
        return cls(host=host, port=port, path=path)

    @property
    def url(self) -> str:
        return f"https://{self.host}:{self.port}{self.path}"


@dataclass(frozen=True)
class PriceQuote:
    """Price returned by an oracle.

    ``price`` is a canonical decimal string; ``timestamp`` is timezone-aware UTC.
    """

    timestamp: datetime
    price: str
