# passport_sessions/dates.py
"""
Absolute expiry computation.

Expiries are stored with millisecond resolution (BSON datetimes carry no
more), so both ``now`` and the TTL are reduced to whole milliseconds before
being added.
"""
from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone
from typing import Optional, Protocol, Union

Duration = Union[timedelta, int, float]

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MS = timedelta(milliseconds=1)
_MIN_MS = (datetime.min.replace(tzinfo=timezone.utc) - _EPOCH) // _ONE_MS
_MAX_MS = (datetime.max.replace(tzinfo=timezone.utc) - _EPOCH) // _ONE_MS


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    def now(self) -> datetime:
        return datetime.now(timezone.utc)


def _check_duration(ttl: Duration) -> None:
    if isinstance(ttl, bool) or not isinstance(ttl, (timedelta, int, float)):
        raise TypeError(f"ttl must be a timedelta or a number of seconds, got {type(ttl).__name__}")


def is_non_positive(ttl: Duration) -> bool:
    _check_duration(ttl)
    if isinstance(ttl, timedelta):
        return ttl <= timedelta(0)
    return ttl <= 0


def ttl_milliseconds(ttl: Duration) -> Optional[int]:
    """
    Whole milliseconds in ``ttl``, truncated toward zero. Plain numbers are
    taken as seconds; non-finite floats give ``None``.
    """
    _check_duration(ttl)
    if isinstance(ttl, timedelta):
        return whole_milliseconds(ttl)
    if isinstance(ttl, int):
        return ttl * 1000
    ms = ttl * 1000
    if not math.isfinite(ms):
        return None
    return int(ms)


def whole_milliseconds(ttl: timedelta) -> int:
    """Milliseconds in ``ttl``, truncated toward zero."""
    micros = (ttl.days * 86_400 + ttl.seconds) * 1_000_000 + ttl.microseconds
    if micros < 0:
        return -(-micros // 1000)
    return micros // 1000


def ensure_utc(value: datetime) -> datetime:
    # naive datetimes coming out of pymongo are UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def timestamp_millis(value: datetime) -> int:
    return (ensure_utc(value) - _EPOCH) // _ONE_MS


def add_duration(now: datetime, ttl: Duration) -> Optional[datetime]:
    """
    Return ``now + ttl`` as an aware UTC datetime truncated to milliseconds,
    or ``None`` if the result is not representable.
    """
    offset = ttl_milliseconds(ttl)
    if offset is None:
        return None
    total = timestamp_millis(now) + offset
    if total > _MAX_MS or total < _MIN_MS:
        return None
    return _EPOCH + timedelta(milliseconds=total)


class ExpiryCalculator:
    def __init__(self, clock: Optional[Clock] = None) -> None:
        self._clock = clock if clock is not None else SystemClock()

    def now(self) -> datetime:
        return ensure_utc(self._clock.now())

    def compute(self, ttl: Duration, now: Optional[datetime] = None) -> Optional[datetime]:
        return add_duration(now if now is not None else self.now(), ttl)

    def is_expired(self, expiry: datetime, now: Optional[datetime] = None) -> bool:
        current = now if now is not None else self.now()
        return timestamp_millis(expiry) < timestamp_millis(current)
