"""
tsquery: canonical value objects for time-series queries.

Filters and downsamplers built here can be used directly as cache keys or
plan nodes: structurally identical components are equal, hash identically,
share a fingerprint and compare as 0, whatever order a client listed their
sub-filters in.
"""

from tsquery.errors import (
    InvalidDurationError,
    InvalidIdError,
    InvalidSyntaxError,
    MissingFieldError,
    QueryValidationError,
    UnknownAggregatorError,
    UnknownFilterTypeError,
)
from tsquery.hashing import DEFAULT_HASH_CONFIG, HashConfig
from tsquery.pojo import (
    Downsampler,
    FillPolicy,
    Filter,
    NumericFillPolicy,
    TagVFilter,
)

__all__ = [
    # Value objects
    "Downsampler",
    "FillPolicy",
    "Filter",
    "NumericFillPolicy",
    "TagVFilter",
    # Hashing
    "DEFAULT_HASH_CONFIG",
    "HashConfig",
    # Errors
    "InvalidDurationError",
    "InvalidIdError",
    "InvalidSyntaxError",
    "MissingFieldError",
    "QueryValidationError",
    "UnknownAggregatorError",
    "UnknownFilterTypeError",
]
