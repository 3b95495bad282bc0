"""Human-readable timespan and byte-size helpers."""

from __future__ import annotations

import re
from datetime import timedelta
from decimal import Decimal
from typing import Union

TimespanLike = Union[timedelta, int, float, str]

_TIMESPAN_UNITS = (
    ("ns", 1000),
    ("us", 1000),
    ("ms", 1000),
    ("s", 60),
    ("m", 60),
    ("h", 24),
    ("d", 7),
)

_UNIT_NANOS = {
    "ns": 1,
    "us": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
    "d": 86400 * 1_000_000_000,
}

_TIMESPAN_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*(ns|us|ms|s|m|h|d)?\s*$", re.IGNORECASE)

_BYTE_PREFIXES = "kMGTPE"


def timedelta_to_nanos(value: timedelta) -> int:
    return (value // timedelta(microseconds=1)) * 1000


def format_timespan(value: timedelta, suffix: str = "") -> str:
    """Render ``value`` in the largest unit that divides it exactly.

    ``timedelta(seconds=60)`` becomes ``"1m"`` while ``timedelta(seconds=90)``
    stays ``"90s"``. Days are the largest unit. ``suffix`` is appended verbatim.
    """

    amount = timedelta_to_nanos(value)
    unit = "ns"
    for unit, step in _TIMESPAN_UNITS:
        if unit == "d" or amount < step or amount % step != 0:
            break
        amount //= step
    return f"{amount}{unit}{suffix}"


def format_bytes(size: int, suffix: str = "") -> str:
    """Render a byte count with binary prefixes (``1024 -> "1.0kB"``)."""

    if size == 1:
        return f"1 byte{suffix}"
    if size < 1024:
        return f"{size} bytes{suffix}"
    exponent = 0
    while exponent < len(_BYTE_PREFIXES) and size >= 1024 ** (exponent + 1):
        exponent += 1
    return f"{size / 1024 ** exponent:.1f}{_BYTE_PREFIXES[exponent - 1]}B{suffix}"


def parse_timespan(value: TimespanLike) -> timedelta:
    """Parse ``"500ms"``, ``"30s"``, ``"10m"``, ``"2h"``, ``"1d"`` or plain seconds.

    Values must be whole microseconds; ``"1500ns"`` is rejected rather than rounded.
    """

    if isinstance(value, timedelta):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Invalid timespan: {value!r}")
    if isinstance(value, (int, float)):
        if value < 0:
            raise ValueError(f"Timespan must not be negative: {value!r}")
        try:
            return timedelta(seconds=value)
        except OverflowError as exc:
            raise ValueError(f"Timespan out of range: {value!r}") from exc

    match = _TIMESPAN_PATTERN.match(str(value))
    if not match:
        raise ValueError(f"Invalid timespan: {value!r}")
    number, unit = match.groups()
    nanos = Decimal(number) * _UNIT_NANOS[(unit or "s").lower()]
    if nanos % 1000:
        raise ValueError(f"Timespan must be a whole number of microseconds: {value!r}")
    try:
        return timedelta(microseconds=int(nanos // 1000))
    except OverflowError as exc:
        raise ValueError(f"Timespan out of range: {value!r}") from exc
