"""
Validation collaborators for query components.

- ids: identifier grammar
- duration: relative duration parsing
- aggregators: aggregator name registry
"""

from tsquery.validation import aggregators
from tsquery.validation.duration import parse_duration
from tsquery.validation.ids import validate_id

__all__ = [
    "aggregators",
    "parse_duration",
    "validate_id",
]
