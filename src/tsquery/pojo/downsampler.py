"""
Downsampling directives for metric queries.

A Downsampler reduces each series to one point per interval using an
aggregator, optionally filling empty intervals:

    Downsampler.new_builder()
        .set_interval("60s")
        .set_aggregator("sum")
        .set_fill_policy(NumericFillPolicy(FillPolicy.ZERO))
        .build()

Fields are kept exactly as given. "60s" and "1m" denote the same duration
but are different Downsamplers, and so are "sum" and "SUM": validation
lower-cases the aggregator for the registry lookup, while equality, order
and fingerprint use the literal string.

FINGERPRINT:
    base   = hash_fields(interval, aggregator)    # ASCII
    result = combine_ordered([base])                           # no fill policy
           | combine_ordered([base, fill_policy.fingerprint()])

    A null interval or aggregator hashes as a null marker, never as "".

ORDER:
    1. interval     nulls first, then string order
    2. aggregator   nulls first, then string order
    3. fill_policy  nulls first, then the fill policy's own order
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional, Tuple

from tsquery.errors import MissingFieldError, UnknownAggregatorError
from tsquery.hashing import (
    ASCII,
    DEFAULT_HASH_CONFIG,
    HashConfig,
    combine_ordered,
    hash_fields,
)
from tsquery.ordering import compare_chain, natural, nulls_first
from tsquery.pojo.base import CanonicalValue
from tsquery.pojo.fill import NumericFillPolicy
from tsquery.validation import aggregators
from tsquery.validation.duration import parse_duration

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Downsampler(CanonicalValue):
    """
    Interval, aggregator and optional fill policy for downsampling.

    Attributes:
        interval: Relative interval with value and unit, e.g. "60s"
        aggregator: Aggregator name, e.g. "sum"
        fill_policy: Policy for intervals without data
    """

    interval: Optional[str] = None
    aggregator: Optional[str] = None
    fill_policy: Optional[NumericFillPolicy] = None

    @classmethod
    def new_builder(cls) -> "Downsampler.Builder":
        return cls.Builder()

    def validate(self) -> None:
        """
        Validate interval, aggregator and fill policy.

        Raises:
            MissingFieldError: If interval or aggregator is None or empty
            InvalidDurationError: If interval is not a valid duration
            UnknownAggregatorError: If the aggregator is not registered
            QueryValidationError: Propagated from the fill policy
        """
        if not self.interval:
            raise MissingFieldError("interval")
        parse_duration(self.interval)

        if not self.aggregator:
            raise MissingFieldError("aggregator")
        try:
            aggregators.get(self.aggregator.lower())
        except aggregators.NoSuchAggregatorError:
            logger.debug("Downsampler references unknown aggregator %r", self.aggregator)
            raise UnknownAggregatorError(self.aggregator) from None

        if self.fill_policy is not None:
            self.fill_policy.validate()

    def _fields(self) -> Tuple[Any, ...]:
        return (self.interval, self.aggregator, self.fill_policy)

    def fingerprint(self, config: HashConfig = DEFAULT_HASH_CONFIG) -> bytes:
        base = hash_fields(
            self.interval,
            self.aggregator,
            encoding=ASCII,
            config=config,
        )
        hashes = [base]
        if self.fill_policy is not None:
            hashes.append(self.fill_policy.fingerprint(config))
        return combine_ordered(hashes, config)

    def compare_to(self, other: "Downsampler") -> int:
        return compare_chain(
            (self.interval, other.interval, nulls_first(natural)),
            (self.aggregator, other.aggregator, nulls_first(natural)),
            (self.fill_policy, other.fill_policy, nulls_first(natural)),
        )

    class Builder:
        """Mutable staging object for Downsampler. Setters do not validate."""

        def __init__(self):
            self._interval: Optional[str] = None
            self._aggregator: Optional[str] = None
            self._fill_policy: Optional[NumericFillPolicy] = None

        def set_interval(self, interval: Optional[str]) -> "Downsampler.Builder":
            self._interval = interval
            return self

        def set_aggregator(self, aggregator: Optional[str]) -> "Downsampler.Builder":
            self._aggregator = aggregator
            return self

        def set_fill_policy(
            self, fill_policy: Optional[NumericFillPolicy]
        ) -> "Downsampler.Builder":
            self._fill_policy = fill_policy
            return self

        def build(self) -> "Downsampler":
            return Downsampler(
                interval=self._interval,
                aggregator=self._aggregator,
                fill_policy=self._fill_policy,
            )
