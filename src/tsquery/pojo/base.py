"""
Shared behaviour for canonical query value objects.

Subclasses are frozen dataclasses built through a builder. They provide:

- ``_fields()``: the tuple of semantic fields, used for equality
- ``fingerprint(config)``: deterministic digest over the same fields
- ``compare_to(other)``: total order consistent with equality

This base derives ``__eq__``, ``__hash__`` and the rich comparisons from
those three, so the contract "equal <=> compare_to == 0 <=> same fingerprint"
is enforced in one place.
"""

from abc import ABC, abstractmethod
from typing import Any, Tuple

from tsquery.hashing import DEFAULT_HASH_CONFIG, HashConfig, fingerprint_to_int


class CanonicalValue(ABC):
    """Base class for immutable, fingerprinted, totally ordered values."""

    @abstractmethod
    def _fields(self) -> Tuple[Any, ...]:
        """Return the semantic fields in declaration order."""
        pass

    @abstractmethod
    def fingerprint(self, config: HashConfig = DEFAULT_HASH_CONFIG) -> bytes:
        """Return the deterministic digest of this value."""
        pass

    @abstractmethod
    def compare_to(self, other: Any) -> int:
        """Three-way compare against another value of the same type."""
        pass

    @abstractmethod
    def validate(self) -> None:
        """Raise a QueryValidationError if the value is unusable."""
        pass

    def hexdigest(self, config: HashConfig = DEFAULT_HASH_CONFIG) -> str:
        """Return the fingerprint as a hex string, e.g. for cache keys."""
        return self.fingerprint(config).hex()

    def __eq__(self, other) -> bool:
        if self is other:
            return True
        if other is None or type(self) is not type(other):
            return NotImplemented
        return self._fields() == other._fields()

    def __hash__(self) -> int:
        return fingerprint_to_int(self.fingerprint())

    def __lt__(self, other) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self.compare_to(other) < 0

    def __le__(self, other) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self.compare_to(other) <= 0

    def __gt__(self, other) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self.compare_to(other) > 0

    def __ge__(self, other) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self.compare_to(other) >= 0
