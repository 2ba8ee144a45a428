"""
Three-way comparators and comparison chains.

A comparator is any callable ``(a, b) -> int`` returning a negative number,
zero or a positive number. Value objects build their total order from an
explicit, prioritised list of ``(left, right, comparator)`` entries:

    compare_chain(
        (self.id, other.id, nulls_first(natural)),
        (self.explicit_tags, other.explicit_tags, true_first),
        (self.tags, other.tags, nulls_first(lexicographical(natural))),
    )

Evaluation stops at the first non-zero result.
"""

from typing import Any, Callable, Optional, Sequence, Tuple

Comparator = Callable[[Any, Any], int]


def natural(a: Any, b: Any) -> int:
    """Compare two values by their own ``<`` operator."""
    if a < b:
        return -1
    if b < a:
        return 1
    return 0


def nulls_first(comparator: Comparator) -> Comparator:
    """Wrap a comparator so that None sorts before any value."""

    def _compare(a: Any, b: Any) -> int:
        if a is None:
            return 0 if b is None else -1
        if b is None:
            return 1
        return comparator(a, b)

    return _compare


def true_first(a: bool, b: bool) -> int:
    """Compare booleans with True sorting before False."""
    if a == b:
        return 0
    return -1 if a else 1


def lexicographical(comparator: Comparator) -> Comparator:
    """
    Lift an element comparator to sequences.

    Elements are compared pairwise; the first difference decides. A sequence
    that is a strict prefix of another sorts first.
    """

    def _compare(a: Sequence[Any], b: Sequence[Any]) -> int:
        for left, right in zip(a, b):
            result = comparator(left, right)
            if result != 0:
                return result
        return (len(a) > len(b)) - (len(a) < len(b))

    return _compare


def compare_chain(*links: Tuple[Any, Any, Optional[Comparator]]) -> int:
    """
    Evaluate comparisons in priority order.

    Args:
        *links: ``(left, right, comparator)`` entries. A comparator of None
            means ``natural``.

    Returns:
        -1, 0 or 1
    """
    for left, right, comparator in links:
        result = (comparator or natural)(left, right)
        if result != 0:
            return -1 if result < 0 else 1
    return 0
