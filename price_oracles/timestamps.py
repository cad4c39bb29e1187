"""Epoch seconds → bounds-checked, future-clamped UTC datetimes."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

from .errors import TimestampOutOfRange

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_SECOND = timedelta(seconds=1)

MIN_EPOCH_SECONDS = (datetime.min.replace(tzinfo=timezone.utc) - EPOCH) // _ONE_SECOND
MAX_EPOCH_SECONDS = (datetime.max.replace(tzinfo=timezone.utc) - EPOCH) // _ONE_SECOND


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def from_epoch_seconds(seconds: int, now: datetime | None = None) -> datetime:
    """Convert an exchange-reported epoch value into a timestamp.

    A timestamp later than ``now`` is clamped to ``now``; exchanges with a
    skewed clock must not report trades from the future.
    """
    if not MIN_EPOCH_SECONDS <= seconds <= MAX_EPOCH_SECONDS:
        raise TimestampOutOfRange(
            f"Epoch value out of range: {seconds}", {"seconds": seconds}
        )

    timestamp = EPOCH + timedelta(seconds=seconds)
    if now is None:
        now = utc_now()
    else:
        # naive values are read as local time
        now = now.astimezone(timezone.utc)
    if timestamp > now:
        return now
    return timestamp


def to_epoch_seconds(timestamp: datetime) -> int:
    return (timestamp - EPOCH) // _ONE_SECOND
