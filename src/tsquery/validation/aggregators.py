"""
Aggregator registry.

Maps lower-case aggregator names to their metadata. Query components only
need to know that a name exists; the interpolation recorded for each
aggregator is consumed by the executor when series are merged.

    >>> get("sum")
    Aggregator(name='sum', interpolation=<Interpolation.LERP: 'lerp'>)
    >>> get("SUM")
    Traceback (most recent call last):
    ...
    tsquery.validation.aggregators.NoSuchAggregatorError: 'No such aggregator: SUM'

Lookup is exact; callers lower-case the name first.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List

logger = logging.getLogger(__name__)


class Interpolation(Enum):
    """How missing points are filled when series are merged."""

    LERP = "lerp"  # linear interpolation
    ZIM = "zim"  # zero if missing
    MAX = "max"  # max value if missing
    MIN = "min"  # min value if missing
    PREV = "prev"  # previous value if missing


@dataclass(frozen=True)
class Aggregator:
    """A registered aggregation function."""

    name: str
    interpolation: Interpolation


class NoSuchAggregatorError(KeyError):
    """Raised when a name is not registered."""


_PERCENTILES = ("50", "75", "90", "95", "99", "999")

# Estimated percentile variants (r3 and r7 estimation types)
_ESTIMATED = tuple(f"ep{p}r{r}" for p in _PERCENTILES for r in ("3", "7"))

_BUILTINS: List[Aggregator] = [
    Aggregator("sum", Interpolation.LERP),
    Aggregator("min", Interpolation.LERP),
    Aggregator("max", Interpolation.LERP),
    Aggregator("avg", Interpolation.LERP),
    Aggregator("dev", Interpolation.LERP),
    Aggregator("mult", Interpolation.LERP),
    Aggregator("diff", Interpolation.LERP),
    Aggregator("median", Interpolation.LERP),
    Aggregator("none", Interpolation.ZIM),
    Aggregator("zimsum", Interpolation.ZIM),
    Aggregator("count", Interpolation.ZIM),
    Aggregator("first", Interpolation.ZIM),
    Aggregator("last", Interpolation.ZIM),
    Aggregator("mimmin", Interpolation.MAX),
    Aggregator("mimmax", Interpolation.MIN),
    *(Aggregator(f"p{p}", Interpolation.LERP) for p in _PERCENTILES),
    *(Aggregator(name, Interpolation.LERP) for name in _ESTIMATED),
]

_REGISTRY: Dict[str, Aggregator] = {agg.name: agg for agg in _BUILTINS}


def get(name: str) -> Aggregator:
    """
    Look up an aggregator by exact name.

    Raises:
        NoSuchAggregatorError: If the name is not registered
    """
    try:
        return _REGISTRY[name]
    except KeyError:
        raise NoSuchAggregatorError(f"No such aggregator: {name}") from None


def names() -> List[str]:
    """Return all registered aggregator names, sorted."""
    return sorted(_REGISTRY)


def register(aggregator: Aggregator) -> None:
    """
    Add a custom aggregator.

    Raises:
        ValueError: If the name is empty, not lower-case, or already taken
    """
    if not aggregator.name or aggregator.name != aggregator.name.lower():
        raise ValueError(
            f"Aggregator name must be non-empty and lower-case: '{aggregator.name}'"
        )
    if aggregator.name in _REGISTRY:
        raise ValueError(f"Aggregator already registered: '{aggregator.name}'")

    _REGISTRY[aggregator.name] = aggregator
    logger.info(
        f"Registered aggregator '{aggregator.name}' "
        f"({aggregator.interpolation.value})"
    )


def unregister(name: str) -> None:
    """Remove a custom aggregator. Built-ins cannot be removed."""
    if any(agg.name == name for agg in _BUILTINS):
        raise ValueError(f"Cannot unregister built-in aggregator: '{name}'")
    _REGISTRY.pop(name, None)
