"""
Tests for tsquery.pojo.filter module.

Covers:
- Builder contract (eager id check, canonical tag order)
- validate()
- Equality, hashing, fingerprint and compare_to() consistency
"""

import itertools

import pytest

from tsquery.errors import InvalidIdError, InvalidSyntaxError, MissingFieldError
from tsquery.pojo.filter import Filter
from tsquery.pojo.tagv import TagVFilter


def _tag(tagk, filter, type="literal_or", group_by=False):
    return TagVFilter(tagk=tagk, filter=filter, type=type, group_by=group_by)


@pytest.fixture
def host_tag():
    return _tag("host", "web01", "literal_or", False)


@pytest.fixture
def dc_tag():
    return _tag("dc", "phx*", "wildcard", True)


@pytest.fixture
def base_filter(host_tag, dc_tag):
    """Reference filter: id f1, two tags, explicit_tags False."""
    return (
        Filter.new_builder()
        .set_id("f1")
        .set_explicit_tags(False)
        .set_tags([host_tag, dc_tag])
        .build()
    )


def _assert_same(a, b):
    assert a == b
    assert hash(a) == hash(b)
    assert a.fingerprint() == b.fingerprint()
    assert a.compare_to(b) == 0
    assert b.compare_to(a) == 0


def _assert_different(a, b):
    assert a != b
    assert a.fingerprint() != b.fingerprint()
    assert a.compare_to(b) != 0
    assert a.compare_to(b) == -b.compare_to(a)


class TestBuilder:
    """Test Filter.Builder."""

    def test_build_reads_back_fields(self, host_tag):
        flt = (
            Filter.new_builder()
            .set_id("f1")
            .set_tags([host_tag])
            .set_explicit_tags(True)
            .build()
        )

        assert flt.id == "f1"
        assert flt.tags == (host_tag,)
        assert flt.explicit_tags is True

    def test_defaults(self):
        flt = Filter.new_builder().build()

        assert flt.id is None
        assert flt.tags is None
        assert flt.explicit_tags is False

    def test_set_id_validates_eagerly(self):
        with pytest.raises(InvalidIdError):
            Filter.new_builder().set_id("bad.Id")

    @pytest.mark.parametrize("id", [None, ""])
    def test_set_id_rejects_missing(self, id):
        with pytest.raises(MissingFieldError):
            Filter.new_builder().set_id(id)

    def test_set_tags_sorts(self, host_tag, dc_tag):
        flt = Filter.new_builder().set_id("f1").set_tags([host_tag, dc_tag]).build()

        assert flt.tags == (dc_tag, host_tag)

    def test_set_tags_does_not_mutate_input(self, host_tag, dc_tag):
        tags = [host_tag, dc_tag]
        Filter.new_builder().set_tags(tags)

        assert tags == [host_tag, dc_tag]

    def test_set_tags_none_clears(self, host_tag):
        flt = Filter.new_builder().set_tags([host_tag]).set_tags(None).build()

        assert flt.tags is None

    def test_duplicates_are_kept(self, host_tag):
        flt = Filter.new_builder().set_tags([host_tag, host_tag]).build()

        assert flt.tags == (host_tag, host_tag)

    def test_direct_construction_is_canonical(self, host_tag, dc_tag, base_filter):
        """Bypassing the builder still stores tags in canonical order."""
        flt = Filter(id="f1", tags=[host_tag, dc_tag], explicit_tags=False)

        assert flt.tags == (dc_tag, host_tag)
        _assert_same(flt, base_filter)

    def test_built_filter_is_immutable(self, base_filter):
        with pytest.raises(AttributeError):
            base_filter.id = "f2"

    def test_builder_reuse_does_not_affect_built(self, host_tag, dc_tag):
        builder = Filter.new_builder().set_id("f1").set_tags([host_tag])
        first = builder.build()
        builder.set_tags([dc_tag])

        assert first.tags == (host_tag,)


class TestValidate:
    """Test Filter.validate()."""

    def test_valid(self, host_tag):
        flt = (
            Filter.new_builder()
            .set_id("f1")
            .set_tags([host_tag])
            .set_explicit_tags(True)
            .build()
        )

        flt.validate()

    @pytest.mark.parametrize("id", [None, ""])
    def test_missing_id(self, id):
        with pytest.raises(MissingFieldError):
            Filter(id=id).validate()

    def test_bad_id(self):
        """Objects constructed without the builder are re-checked."""
        with pytest.raises(InvalidSyntaxError):
            Filter(id="bad.Id", tags=()).validate()

    @pytest.mark.parametrize("tags", [None, ()])
    def test_absent_or_empty_tags_are_legal(self, tags):
        Filter(id="f1", tags=tags).validate()

    def test_does_not_validate_sub_filters(self):
        """Sub-filter validation belongs to the composing query."""
        Filter(id="f1", tags=[_tag("", "*", "iwildcard")]).validate()


class TestEqualityAndOrder:
    """Test equality, hashing, fingerprint and compare_to()."""

    def test_identical_builds(self, base_filter, host_tag, dc_tag):
        other = (
            Filter.new_builder()
            .set_id("f1")
            .set_explicit_tags(False)
            .set_tags([host_tag, dc_tag])
            .build()
        )

        _assert_same(base_filter, other)

    def test_order_independent(self):
        tags = [
            _tag("host", "web01"),
            _tag("dc", "phx*", "wildcard", True),
            _tag("app", "api", "iliteral_or"),
            _tag("host", "web02"),
        ]
        filters = [
            Filter.new_builder().set_id("f1").set_tags(list(perm)).build()
            for perm in itertools.permutations(tags)
        ]

        for flt in filters[1:]:
            _assert_same(filters[0], flt)

    def test_fingerprint_stable(self, base_filter):
        assert base_filter.fingerprint() == base_filter.fingerprint()
        assert base_filter.hexdigest() == base_filter.fingerprint().hex()

    def test_different_id(self, base_filter, host_tag, dc_tag):
        other = (
            Filter.new_builder()
            .set_id("f2")
            .set_explicit_tags(False)
            .set_tags([host_tag, dc_tag])
            .build()
        )

        _assert_different(base_filter, other)
        assert base_filter.compare_to(other) == -1

    def test_different_explicit_tags(self, base_filter, host_tag, dc_tag):
        other = (
            Filter.new_builder()
            .set_id("f1")
            .set_explicit_tags(True)
            .set_tags([host_tag, dc_tag])
            .build()
        )

        _assert_different(base_filter, other)
        # True sorts first
        assert base_filter.compare_to(other) == 1

    def test_different_tag_value(self, base_filter, dc_tag):
        other = (
            Filter.new_builder()
            .set_id("f1")
            .set_explicit_tags(False)
            .set_tags([_tag("host", "web02"), dc_tag])
            .build()
        )

        _assert_different(base_filter, other)
        assert base_filter.compare_to(other) == -1

    def test_different_tag_count(self, base_filter, dc_tag):
        other = Filter.new_builder().set_id("f1").set_tags([dc_tag]).build()

        _assert_different(base_filter, other)
        # Prefix sorts first
        assert other.compare_to(base_filter) == -1

    def test_duplicate_tags_differ(self, host_tag):
        once = Filter.new_builder().set_id("f1").set_tags([host_tag]).build()
        twice = Filter.new_builder().set_id("f1").set_tags([host_tag, host_tag]).build()

        _assert_different(once, twice)

    def test_absent_and_empty_tags_differ(self):
        _assert_different(Filter(id="f1", tags=None), Filter(id="f1", tags=()))
        assert Filter(id="f1", tags=None).compare_to(Filter(id="f1", tags=())) == -1

    def test_null_id_sorts_first(self, host_tag):
        unnamed = Filter(id=None, tags=[host_tag])
        named = Filter(id="a", tags=[host_tag])

        assert unnamed.compare_to(named) == -1
        assert named.compare_to(unnamed) == 1
        assert unnamed < named

    def test_rich_comparisons(self, base_filter):
        other = Filter(id="f2", tags=base_filter.tags)

        assert base_filter < other
        assert base_filter <= other
        assert other > base_filter
        assert other >= base_filter

    def test_sorted_is_deterministic(self, host_tag, dc_tag):
        filters = [
            Filter(id="b", tags=[host_tag]),
            Filter(id="a", tags=[dc_tag], explicit_tags=False),
            Filter(id="a", tags=[dc_tag], explicit_tags=True),
            Filter(id=None),
        ]

        assert [(f.id, f.explicit_tags) for f in sorted(filters)] == [
            (None, False),
            ("a", True),
            ("a", False),
            ("b", False),
        ]

    def test_usable_as_dict_key(self, base_filter, host_tag, dc_tag):
        cache = {base_filter: "plan"}
        permuted = Filter.new_builder().set_id("f1").set_tags([dc_tag, host_tag]).build()

        assert cache[permuted] == "plan"

    def test_not_equal_to_other_types(self, base_filter):
        assert base_filter != "f1"
        assert base_filter != None  # noqa: E711

    def test_null_and_empty_id_differ(self):
        """Equality and fingerprint agree for a null id versus an empty one."""
        unset = Filter(id=None, tags=())
        empty = Filter(id="", tags=())

        _assert_different(unset, empty)
        assert unset.compare_to(empty) == -1
