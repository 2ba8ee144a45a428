"""
Relative duration parsing.

A duration is a positive integer followed by a unit suffix:

    "500ms"  -> 500
    "60s"    -> 60_000
    "1m"     -> 60_000
    "2h"     -> 7_200_000

Units:
    ms  milliseconds
    s   seconds
    m   minutes
    h   hours
    d   days
    w   weeks
    n   months (30 days)
    y   years (365 days)

Parsing validates syntax only; "60s" and "1m" parse to the same value but
query components keep the literal string.
"""

import logging
import re
from typing import Dict

from tsquery.errors import InvalidDurationError

logger = logging.getLogger(__name__)

_SECOND_MS = 1_000
_DAY_MS = 86_400 * _SECOND_MS

UNIT_MS: Dict[str, int] = {
    "ms": 1,
    "s": _SECOND_MS,
    "m": 60 * _SECOND_MS,
    "h": 3_600 * _SECOND_MS,
    "d": _DAY_MS,
    "w": 7 * _DAY_MS,
    "n": 30 * _DAY_MS,
    "y": 365 * _DAY_MS,
}

_DURATION_RE = re.compile(r"^([-+]?[0-9]+)([a-z]+)$")


def parse_duration(duration: str) -> int:
    """
    Parse a relative duration into milliseconds.

    Args:
        duration: Duration string such as "60s"

    Returns:
        Duration in milliseconds

    Raises:
        InvalidDurationError: If the string is empty, lacks a known unit,
            is not numeric, or is zero or negative
    """
    if not duration:
        raise InvalidDurationError("Duration cannot be null or empty")

    match = _DURATION_RE.match(duration)
    if match is None:
        logger.debug("Rejected duration %r", duration)
        raise InvalidDurationError(f"Invalid duration (number or unit): {duration}")

    number, unit = match.groups()
    if unit not in UNIT_MS:
        raise InvalidDurationError(f"Invalid duration (suffix): {duration}")

    value = int(number)
    if value <= 0:
        raise InvalidDurationError(f"Zero or negative duration: {duration}")

    return value * UNIT_MS[unit]
