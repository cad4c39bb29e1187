"""Pure validation of untrusted exchange responses — no I/O.

Each expected response has a fixed shape. Checks run structural first
(container kind, field presence and JSON type) and semantic last, stopping
at the first violation.
"""
from __future__ import annotations

import enum
import json
from dataclasses import dataclass
from typing import Any

from .errors import SchemaViolation

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

ROOT = "<root>"


class ResponseShape(enum.Enum):
    HISTORY = "history"
    TICKER = "ticker"


@dataclass(frozen=True)
class HistoryTrade:
    """Most recent trade from a trade history response."""

    date: int
    price: str


@dataclass(frozen=True)
class TickerPrice:
    price: str


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


def parse_json(buffer: bytes | bytearray) -> Any:
    """Decode a response body into a tree of plain JSON values."""
    try:
        return json.loads(bytes(buffer).decode("utf-8"), parse_constant=_reject_constant)
    except (UnicodeDecodeError, ValueError) as e:
        raise SchemaViolation(ROOT, f"Response is not valid JSON: {e}") from e
    except RecursionError as e:
        raise SchemaViolation(ROOT, "Response is nested too deeply") from e


def is_int64(value: Any) -> bool:
    """True for JSON integers that fit in a signed 64-bit integer."""
    return type(value) is int and INT64_MIN <= value <= INT64_MAX


def _require(container: dict[str, Any], name: str, expected: type) -> Any:
    if name not in container:
        raise SchemaViolation(name, f"Missing field '{name}'")
    value = container[name]
    if expected is int:
        valid = is_int64(value)
    else:
        valid = type(value) is expected
    if not valid:
        raise SchemaViolation(
            name, f"Field '{name}' is not a {expected.__name__}: {value!r}"
        )
    return value


def validate_history(json_root: Any) -> HistoryTrade:
    """Validate a trade history array and extract its last (most recent) trade."""
    if not isinstance(json_root, list) or not json_root:
        raise SchemaViolation(ROOT, "History response is not a non-empty array")

    most_recent = json_root[-1]
    if not isinstance(most_recent, dict):
        raise SchemaViolation(ROOT, "Most recent trade is not an object")

    date = _require(most_recent, "date", int)
    price = _require(most_recent, "price", str)
    return HistoryTrade(date=date, price=price)


def validate_ticker(json_root: Any) -> TickerPrice:
    """Validate a ticker object whose ``success`` flag must be true."""
    if not isinstance(json_root, dict):
        raise SchemaViolation(ROOT, "Ticker response is not an object")

    success = _require(json_root, "success", bool)
    price = _require(json_root, "price", str)
    if not success:
        raise SchemaViolation("success", "Ticker response reports failure")
    return TickerPrice(price=price)


_VALIDATORS = {
    ResponseShape.HISTORY: validate_history,
    ResponseShape.TICKER: validate_ticker,
}


def validate(json_root: Any, shape: ResponseShape) -> HistoryTrade | TickerPrice:
    """Validate ``json_root`` against ``shape`` and return the extracted value."""
    return _VALIDATORS[shape](json_root)
