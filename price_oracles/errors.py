"""Typed failures for a single price request.

Every failure is terminal for the call that raised it. Retry policy belongs
to whoever called the oracle.
"""
from __future__ import annotations

from typing import Any


class PriceOracleError(Exception):
    """Base exception for all price oracle failures.

    Attributes:
        message: Human-readable error description
        details: Additional context about the error
        state: Name of the request state the call failed in, set by the oracle
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.state: str | None = None


class ConstructionFailure(PriceOracleError):
    """Raised when a request descriptor cannot be built."""


class TransportFailure(PriceOracleError):
    """Raised when the transport fails or leaves a response buffer empty."""


class SchemaViolation(PriceOracleError):
    """Raised when a JSON response has the wrong shape, type or value."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message, {"field": field})
        self.field = field


class NumericInvalid(PriceOracleError):
    """Raised when a price string is malformed or a value is not positive."""


class TimestampOutOfRange(PriceOracleError):
    """Raised when an epoch value cannot be represented as a datetime."""
