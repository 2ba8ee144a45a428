"""
Tag-value sub-filters.

A TagVFilter selects series by the values of a single tag key:

    TagVFilter(tagk="host", filter="web*", type="wildcard", group_by=True)

Only identity, order and fingerprint live here. Matching semantics for each
filter type belong to the executor.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional, Tuple

from tsquery.errors import MissingFieldError, UnknownFilterTypeError
from tsquery.hashing import UTF8, DEFAULT_HASH_CONFIG, HashConfig, hash_fields
from tsquery.ordering import compare_chain, natural, nulls_first, true_first
from tsquery.pojo.base import CanonicalValue

logger = logging.getLogger(__name__)

FILTER_TYPES = frozenset(
    {
        "literal_or",  # host=web01|web02
        "iliteral_or",  # case-insensitive literal_or
        "not_literal_or",  # host!=web01|web02
        "not_iliteral_or",
        "wildcard",  # host=web*
        "iwildcard",  # case-insensitive wildcard
        "regexp",  # host=web[0-9]+
        "not_key",  # series must not have the tag key
    }
)

# Filter types that do not take a filter expression
KEY_ONLY_TYPES = frozenset({"not_key"})


@dataclass(frozen=True, eq=False)
class TagVFilter(CanonicalValue):
    """A filter over the values of one tag key."""

    tagk: Optional[str] = None
    filter: Optional[str] = None
    type: Optional[str] = None
    group_by: bool = False

    @classmethod
    def new_builder(cls) -> "TagVFilter.Builder":
        return cls.Builder()

    def validate(self) -> None:
        """
        Check that the tag key, expression and type are usable.

        Raises:
            MissingFieldError: If tagk, type or (for value filters) filter is empty
            UnknownFilterTypeError: If type is not registered
        """
        if not self.tagk:
            raise MissingFieldError("tagk")
        if not self.type:
            raise MissingFieldError("type")
        if self.type not in FILTER_TYPES:
            logger.debug("Unknown filter type %r for tagk %r", self.type, self.tagk)
            raise UnknownFilterTypeError(self.type)
        if self.type not in KEY_ONLY_TYPES and not self.filter:
            raise MissingFieldError("filter")

    def _fields(self) -> Tuple[Any, ...]:
        return (self.tagk, self.filter, self.type, self.group_by)

    def fingerprint(self, config: HashConfig = DEFAULT_HASH_CONFIG) -> bytes:
        return hash_fields(
            self.tagk,
            self.filter,
            self.type,
            self.group_by,
            encoding=UTF8,
            config=config,
        )

    def compare_to(self, other: "TagVFilter") -> int:
        return compare_chain(
            (self.tagk, other.tagk, nulls_first(natural)),
            (self.type, other.type, nulls_first(natural)),
            (self.filter, other.filter, nulls_first(natural)),
            (self.group_by, other.group_by, true_first),
        )

    class Builder:
        """Mutable staging object for TagVFilter."""

        def __init__(self):
            self._tagk: Optional[str] = None
            self._filter: Optional[str] = None
            self._type: Optional[str] = None
            self._group_by = False

        def set_tagk(self, tagk: Optional[str]) -> "TagVFilter.Builder":
            self._tagk = tagk
            return self

        def set_filter(self, filter: Optional[str]) -> "TagVFilter.Builder":
            self._filter = filter
            return self

        def set_type(self, type: Optional[str]) -> "TagVFilter.Builder":
            self._type = type
            return self

        def set_group_by(self, group_by: bool) -> "TagVFilter.Builder":
            self._group_by = bool(group_by)
            return self

        def build(self) -> "TagVFilter":
            return TagVFilter(
                tagk=self._tagk,
                filter=self._filter,
                type=self._type,
                group_by=self._group_by,
            )
