"""
Filter sets for metric queries.

A Filter names a set of tag-value sub-filters that metric queries refer to
by id:

    Filter.new_builder()
        .set_id("f1")
        .set_tags([host_filter, dc_filter])
        .set_explicit_tags(True)
        .build()

================================================================================
CANONICAL FORM
================================================================================

set_tags() sorts the sub-filters into their natural order, so the order a
client listed them in never reaches the built object:

    set_tags([host, dc])  ->  tags == (dc, host)
    set_tags([dc, host])  ->  tags == (dc, host)

Both builds are equal, hash identically, compare as 0 and share a
fingerprint. Duplicates are kept.

FINGERPRINT:
    base   = hash_fields(id, explicit_tags)
    result = combine_ordered([base, tag_0.fingerprint(), tag_1.fingerprint(), ...])

    A Filter built without tags (tags is None) hashes an extra null marker
    into the base digest so it never shares a fingerprint with an explicitly
    empty tag list, which it does not equal.

    A null id hashes as a null marker, not as "", for the same reason.

ORDER:
    1. id             nulls first, then string order
    2. explicit_tags  True before False
    3. tags           nulls first, then element-wise in canonical order
================================================================================
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Tuple

from tsquery.errors import MissingFieldError
from tsquery.hashing import (
    DEFAULT_HASH_CONFIG,
    UTF8,
    HashConfig,
    combine_ordered,
    hash_fields,
)
from tsquery.ordering import (
    compare_chain,
    lexicographical,
    natural,
    nulls_first,
    true_first,
)
from tsquery.pojo.base import CanonicalValue
from tsquery.pojo.tagv import TagVFilter
from tsquery.validation.ids import validate_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Filter(CanonicalValue):
    """
    A named set of tag-value filters.

    Attributes:
        id: Name metric queries use to reference this filter set
        tags: Sub-filters in canonical order, or None if never set
        explicit_tags: Only match series whose tag keys are exactly those
            named in ``tags``
    """

    id: Optional[str] = None
    tags: Optional[Tuple[TagVFilter, ...]] = None
    explicit_tags: bool = False

    def __post_init__(self):
        # Direct construction gets the same canonical form as the builder
        if self.tags is not None:
            object.__setattr__(self, "tags", tuple(sorted(self.tags)))
        object.__setattr__(self, "explicit_tags", bool(self.explicit_tags))

    @classmethod
    def new_builder(cls) -> "Filter.Builder":
        return cls.Builder()

    def validate(self) -> None:
        """
        Validate the filter set id.

        Sub-filters are not validated here; an absent or empty tag list is a
        legal filter that matches everything.

        Raises:
            MissingFieldError: If id is None or empty
            InvalidIdError: If id does not match the id grammar
        """
        if not self.id:
            logger.debug("Filter validation failed: missing id")
            raise MissingFieldError("id")
        validate_id(self.id)

    def _fields(self) -> Tuple[Any, ...]:
        return (self.id, self.tags, self.explicit_tags)

    def fingerprint(self, config: HashConfig = DEFAULT_HASH_CONFIG) -> bytes:
        if self.tags is None:
            base = hash_fields(
                self.id, self.explicit_tags, None, encoding=UTF8, config=config
            )
            return combine_ordered([base], config)

        base = hash_fields(self.id, self.explicit_tags, encoding=UTF8, config=config)
        hashes = [base]
        for tag in self.tags:
            hashes.append(tag.fingerprint(config))
        return combine_ordered(hashes, config)

    def compare_to(self, other: "Filter") -> int:
        return compare_chain(
            (self.id, other.id, nulls_first(natural)),
            (self.explicit_tags, other.explicit_tags, true_first),
            (self.tags, other.tags, nulls_first(lexicographical(natural))),
        )

    class Builder:
        """
        Mutable staging object for Filter.

        Not safe to share between threads; build() snapshots the state.
        """

        def __init__(self):
            self._id: Optional[str] = None
            self._tags: Optional[Tuple[TagVFilter, ...]] = None
            self._explicit_tags = False

        def set_id(self, id: str) -> "Filter.Builder":
            """
            Set the filter set id.

            Raises:
                MissingFieldError: If id is None or empty
                InvalidIdError: If id does not match the id grammar
            """
            validate_id(id)
            self._id = id
            return self

        def set_tags(self, tags: Optional[Iterable[TagVFilter]]) -> "Filter.Builder":
            """Store the sub-filters sorted into canonical order. None clears them."""
            self._tags = tuple(sorted(tags)) if tags is not None else None
            return self

        def set_explicit_tags(self, explicit_tags: bool) -> "Filter.Builder":
            self._explicit_tags = bool(explicit_tags)
            return self

        def build(self) -> "Filter":
            return Filter(
                id=self._id,
                tags=self._tags,
                explicit_tags=self._explicit_tags,
            )
