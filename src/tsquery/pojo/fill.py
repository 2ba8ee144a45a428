"""
Fill policies for downsampling.

When a downsampling bucket has no data, the fill policy decides what is
emitted instead:

    none    nothing (the bucket is skipped)
    zero    0
    nan     NaN
    null    an explicit null
    scalar  a caller-supplied constant
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple, Union

from tsquery.errors import MissingFieldError, QueryValidationError
from tsquery.hashing import ASCII, DEFAULT_HASH_CONFIG, HashConfig, hash_fields
from tsquery.ordering import compare_chain, nulls_first
from tsquery.pojo.base import CanonicalValue

logger = logging.getLogger(__name__)


class FillPolicy(Enum):
    """Supported fill policies, in their natural order."""

    NONE = "none"
    ZERO = "zero"
    NOT_A_NUMBER = "nan"
    NULL = "null"
    SCALAR = "scalar"

    @classmethod
    def from_name(cls, name: str) -> "FillPolicy":
        """
        Resolve a policy from its wire name, case-insensitively.

        Raises:
            QueryValidationError: If the name is not a known policy
        """
        try:
            return cls(name.lower())
        except (AttributeError, ValueError):
            raise QueryValidationError(f"Unrecognized fill policy: {name}") from None

    @property
    def ordinal(self) -> int:
        return _ORDINALS[self]


_ORDINALS = {policy: i for i, policy in enumerate(FillPolicy)}


def _compare_policies(a: FillPolicy, b: FillPolicy) -> int:
    return a.ordinal - b.ordinal


def _compare_values(a: float, b: float) -> int:
    return (a > b) - (a < b)


@dataclass(frozen=True, eq=False)
class NumericFillPolicy(CanonicalValue):
    """
    A fill policy plus the value it emits.

    NaN values are stored as None, so "nan" and "null" policies carry no
    value and equality stays reflexive. A policy name string is resolved
    to its FillPolicy.
    """

    policy: Optional[FillPolicy] = None
    value: Optional[float] = None

    def __post_init__(self):
        if isinstance(self.policy, str):
            object.__setattr__(self, "policy", FillPolicy.from_name(self.policy))
        if self.value is not None:
            # + 0.0 folds -0.0 into 0.0, which compare equal
            value = float(self.value) + 0.0
            object.__setattr__(self, "value", None if math.isnan(value) else value)

    @classmethod
    def new_builder(cls) -> "NumericFillPolicy.Builder":
        return cls.Builder()

    def validate(self) -> None:
        """
        Check that the value is consistent with the policy.

        Raises:
            MissingFieldError: If the policy is missing, or a scalar policy
                has no value
            QueryValidationError: If the value contradicts the policy
        """
        if self.policy is None:
            raise MissingFieldError("policy", "Missing fill policy")

        if self.policy is FillPolicy.SCALAR:
            if self.value is None:
                raise MissingFieldError("value", "Scalar fill policy requires a value")
            if math.isinf(self.value):
                raise QueryValidationError(
                    f"Scalar fill value must be finite, got {self.value}"
                )
        elif self.policy is FillPolicy.ZERO:
            if self.value not in (None, 0.0):
                raise QueryValidationError(
                    f"Fill policy 'zero' cannot have value {self.value}"
                )
        elif self.value is not None:
            logger.debug("Fill policy %s given value %r", self.policy.value, self.value)
            raise QueryValidationError(
                f"Fill policy '{self.policy.value}' cannot have value {self.value}"
            )

    def _fields(self) -> Tuple[Any, ...]:
        return (self.policy, self.value)

    def fingerprint(self, config: HashConfig = DEFAULT_HASH_CONFIG) -> bytes:
        return hash_fields(
            self.policy.value if self.policy is not None else None,
            self.value,
            encoding=ASCII,
            config=config,
        )

    def compare_to(self, other: "NumericFillPolicy") -> int:
        return compare_chain(
            (self.policy, other.policy, nulls_first(_compare_policies)),
            (self.value, other.value, nulls_first(_compare_values)),
        )

    class Builder:
        """Mutable staging object for NumericFillPolicy."""

        def __init__(self):
            self._policy: Optional[FillPolicy] = None
            self._value: Optional[float] = None

        def set_policy(
            self, policy: Optional[Union[FillPolicy, str]]
        ) -> "NumericFillPolicy.Builder":
            if isinstance(policy, str):
                policy = FillPolicy.from_name(policy)
            self._policy = policy
            return self

        def set_value(self, value: Optional[float]) -> "NumericFillPolicy.Builder":
            self._value = value
            return self

        def build(self) -> "NumericFillPolicy":
            return NumericFillPolicy(policy=self._policy, value=self._value)
