"""
Interval identifiers and their display labels.

An interval identifier encodes a 5-minute slot as hours * 100 + minutes,
so 805 is 08:05 and 2355 is the last slot of the day.
"""

from __future__ import annotations
from typing import Iterable, List
import numbers

from .config import INTERVAL_MINUTES


CANONICAL_INTERVALS: List[int] = [
    hour * 100 + minute
    for hour in range(24)
    for minute in range(0, 60, INTERVAL_MINUTES)
]

_CANONICAL_SET = frozenset(CANONICAL_INTERVALS)


def is_canonical_interval(value) -> bool:
    """Return True if value is one of the 288 canonical interval codes."""
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        return False
    return int(value) in _CANONICAL_SET


def interval_id_to_time(value) -> str:
    """
    Convert an interval identifier to an "h:mm" label.

    Examples:
        0 -> "0:00"
        805 -> "8:05"
        1230 -> "12:30"

    Invalid identifiers (not one of the canonical codes) return a diagnostic
    message instead of raising, since the label is only cosmetic.

    Args:
        value: Interval identifier in hhmm form

    Returns:
        Display label, or a diagnostic message for invalid input
    """
    if not is_canonical_interval(value):
        return f"Invalid interval: {value!r}"

    hours, minutes = divmod(int(value), 100)
    if minutes < 10:
        return f"{hours}:0{minutes}"
    return f"{hours}:{minutes}"


def interval_labels(intervals: Iterable) -> List[str]:
    """Apply interval_id_to_time to a sequence of identifiers."""
    return [interval_id_to_time(i) for i in intervals]
