"""
Mapping between wire payloads and query value objects.

The value objects know nothing about JSON. This module populates their
builders from parsed payloads and turns built objects back into payloads.

Wire names:

    Filter       id, tags, explicitTags
    TagVFilter   tagk, filter, type, groupBy
    Downsampler  interval, aggregator, fillPolicy
    FillPolicy   policy, value

Reading:
    - Unknown keys are ignored
    - Keys whose value is null are skipped, leaving the field unset so that
      validate() reports it
    - Builder setters run as usual, so Filter ids are checked on the way in

Writing:
    - None fields are omitted
    - to_json() emits compact JSON with sorted keys

Usage:
    flt = parse_filter('{"id": "f1", "tags": [], "explicitTags": true}')
    flt.validate()
    payload = filter_to_dict(flt)
"""

import json
import logging
import math
from typing import Any, Callable, Dict, Mapping, Optional

from tsquery.errors import QueryValidationError
from tsquery.pojo.downsampler import Downsampler
from tsquery.pojo.fill import NumericFillPolicy
from tsquery.pojo.filter import Filter
from tsquery.pojo.tagv import TagVFilter

logger = logging.getLogger(__name__)

_TRUE_STRINGS = {"true", "1", "yes"}
_FALSE_STRINGS = {"false", "0", "no"}


def _to_bool(value: Any, field: str) -> bool:
    """Accept JSON booleans and their common string spellings."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise QueryValidationError(f"Field '{field}' must be a boolean, got {value!r}")


def _apply(
    payload: Mapping[str, Any],
    setters: Dict[str, Callable[[Any], Any]],
    kind: str,
) -> None:
    """Call the setter for each known, non-null key in the payload."""
    if not isinstance(payload, Mapping):
        raise QueryValidationError(
            f"{kind} payload must be an object, got {type(payload).__name__}"
        )

    for key, value in payload.items():
        setter = setters.get(key)
        if setter is None:
            logger.debug("Ignoring unknown %s field '%s'", kind, key)
            continue
        if value is None:
            continue
        setter(value)


def _drop_none(payload: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in payload.items() if v is not None}


# =============================================================================
# TAG VALUE FILTERS
# =============================================================================


def tagv_from_dict(payload: Mapping[str, Any]) -> TagVFilter:
    """Build a TagVFilter from its wire payload."""
    builder = TagVFilter.new_builder()

    def _set_group_by(value: Any) -> None:
        builder.set_group_by(_to_bool(value, "groupBy"))

    _apply(
        payload,
        {
            "tagk": builder.set_tagk,
            "filter": builder.set_filter,
            "type": builder.set_type,
            "groupBy": _set_group_by,
            # Legacy spelling
            "group_by": _set_group_by,
        },
        "TagVFilter",
    )
    return builder.build()


def tagv_to_dict(tag: TagVFilter) -> Dict[str, Any]:
    return _drop_none(
        {
            "tagk": tag.tagk,
            "filter": tag.filter,
            "type": tag.type,
            "groupBy": tag.group_by,
        }
    )


# =============================================================================
# FILTERS
# =============================================================================


def filter_from_dict(payload: Mapping[str, Any]) -> Filter:
    """
    Build a Filter from its wire payload.

    Raises:
        InvalidIdError: If a present id does not match the id grammar
        QueryValidationError: If a field has the wrong shape
    """
    builder = Filter.new_builder()

    def _set_tags(tags: Any) -> None:
        if not isinstance(tags, list):
            raise QueryValidationError(
                f"Field 'tags' must be a list, got {type(tags).__name__}"
            )
        builder.set_tags([tagv_from_dict(tag) for tag in tags])

    _apply(
        payload,
        {
            "id": builder.set_id,
            "tags": _set_tags,
            "explicitTags": lambda v: builder.set_explicit_tags(
                _to_bool(v, "explicitTags")
            ),
        },
        "Filter",
    )
    return builder.build()


def filter_to_dict(flt: Filter) -> Dict[str, Any]:
    tags = [tagv_to_dict(tag) for tag in flt.tags] if flt.tags is not None else None
    return _drop_none(
        {
            "id": flt.id,
            "tags": tags,
            "explicitTags": flt.explicit_tags,
        }
    )


# =============================================================================
# FILL POLICIES AND DOWNSAMPLERS
# =============================================================================


def _to_float(value: Any) -> float:
    # NaN arrives as a string in strict JSON
    if isinstance(value, str) and value.strip().lower() == "nan":
        return math.nan
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise QueryValidationError(f"Field 'value' must be a number, got {value!r}")
    return float(value)


def fill_policy_from_dict(payload: Mapping[str, Any]) -> NumericFillPolicy:
    """Build a NumericFillPolicy from its wire payload."""
    builder = NumericFillPolicy.new_builder()
    _apply(
        payload,
        {
            "policy": builder.set_policy,
            "value": lambda v: builder.set_value(_to_float(v)),
        },
        "NumericFillPolicy",
    )
    return builder.build()


def fill_policy_to_dict(fill_policy: NumericFillPolicy) -> Dict[str, Any]:
    policy = fill_policy.policy.value if fill_policy.policy is not None else None
    return _drop_none({"policy": policy, "value": fill_policy.value})


def downsampler_from_dict(payload: Mapping[str, Any]) -> Downsampler:
    """Build a Downsampler from its wire payload. Nothing is validated."""
    builder = Downsampler.new_builder()
    _apply(
        payload,
        {
            "interval": builder.set_interval,
            "aggregator": builder.set_aggregator,
            "fillPolicy": lambda v: builder.set_fill_policy(fill_policy_from_dict(v)),
        },
        "Downsampler",
    )
    return builder.build()


def downsampler_to_dict(downsampler: Downsampler) -> Dict[str, Any]:
    fill = downsampler.fill_policy
    return _drop_none(
        {
            "interval": downsampler.interval,
            "aggregator": downsampler.aggregator,
            "fillPolicy": fill_policy_to_dict(fill) if fill is not None else None,
        }
    )


# =============================================================================
# JSON
# =============================================================================

_TO_DICT: Dict[type, Callable[[Any], Dict[str, Any]]] = {
    Filter: filter_to_dict,
    TagVFilter: tagv_to_dict,
    Downsampler: downsampler_to_dict,
    NumericFillPolicy: fill_policy_to_dict,
}


def _loads(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise QueryValidationError(f"Malformed JSON: {e}") from e


def parse_filter(text: str) -> Filter:
    return filter_from_dict(_loads(text))


def parse_downsampler(text: str) -> Downsampler:
    return downsampler_from_dict(_loads(text))


def to_json(obj: Any, indent: Optional[int] = None) -> str:
    """
    Serialize a query value object to JSON.

    Raises:
        TypeError: If obj is not a supported value object
        ValueError: If a fill policy value is infinite
    """
    to_dict = _TO_DICT.get(type(obj))
    if to_dict is None:
        raise TypeError(f"Cannot serialize {type(obj).__name__}")

    separators = (",", ":") if indent is None else None
    # NaN is stored as None; infinity has no JSON spelling and is rejected
    return json.dumps(
        to_dict(obj),
        sort_keys=True,
        separators=separators,
        indent=indent,
        allow_nan=False,
    )
