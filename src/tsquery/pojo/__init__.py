"""
Query value objects.

Immutable, builder-constructed components of a time-series query, each
with a deterministic fingerprint and a total order.
"""

from .base import CanonicalValue
from .downsampler import Downsampler
from .fill import FillPolicy, NumericFillPolicy
from .filter import Filter
from .tagv import FILTER_TYPES, TagVFilter

__all__ = [
    "CanonicalValue",
    "Downsampler",
    "FILTER_TYPES",
    "FillPolicy",
    "Filter",
    "NumericFillPolicy",
    "TagVFilter",
]
