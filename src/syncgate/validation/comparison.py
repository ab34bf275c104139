"""Semantic equality and range comparison of document values.

Specialized string types (date, datetime, time, timezone, uuid) are
compared by meaning rather than by spelling when a validator type is
given: "2018" and "2018-01-01" are the same date, and UUIDs ignore case.
Omitting the validator type forces a plain value comparison.
"""

from typing import Any, Callable

from syncgate.core.types import MISSING, is_value_null_or_missing
from syncgate.validation import iso8601, messages
from syncgate.validation.item_stack import ItemStack

# Returns a cmp-style number, or None when the two values are not comparable
Comparator = Callable[[Any, Any], float | None]


def _normalize_uuid(value: Any) -> Any:
    return value.lower() if isinstance(value, str) else value


def _compare_uuids(a: Any, b: Any) -> int | None:
    if not isinstance(a, str) or not isinstance(b, str):
        return None
    a, b = a.lower(), b.lower()
    return (a > b) - (a < b)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _compare_plain(a: Any, b: Any) -> int | None:
    if _is_number(a) and _is_number(b):
        return (a > b) - (a < b)
    if isinstance(a, str) and isinstance(b, str):
        return (a > b) - (a < b)
    return None


_TYPED_COMPARATORS: dict[str, Comparator] = {
    "date": iso8601.compare_dates,
    "datetime": iso8601.compare_dates,
    "time": iso8601.compare_times,
    "timezone": iso8601.compare_timezones,
    "uuid": _compare_uuids,
}


def get_comparator(validator_type: str | None) -> Comparator:
    return _TYPED_COMPARATORS.get(validator_type or "", _compare_plain)


def _simple_values_equal(a: Any, b: Any, validator_type: str | None) -> bool:
    comparator = _TYPED_COMPARATORS.get(validator_type or "")
    if comparator is not None:
        result = comparator(a, b)
        if result is not None:
            return result == 0
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if _is_number(a) and _is_number(b):
        return a == b
    return type(a) is type(b) and a == b


def check_item_equality(
    value: Any,
    expected: Any,
    validator_type: str | None = None,
    strict: bool = False,
) -> bool:
    """Deep, order-sensitive (for lists) equality of two document values.

    With ``strict``, an absent value (MISSING) and None are different;
    otherwise they are interchangeable.
    """
    value_missing = is_value_null_or_missing(value)
    expected_missing = is_value_null_or_missing(expected)
    if value_missing and expected_missing:
        return not strict or (value is MISSING) == (expected is MISSING)
    if value_missing != expected_missing:
        return False

    if isinstance(value, list) or isinstance(expected, list):
        return _check_list_equality(value, expected, strict)
    if isinstance(value, dict) or isinstance(expected, dict):
        return _check_dict_equality(value, expected, strict)
    return _simple_values_equal(value, expected, validator_type)


def _check_list_equality(value: Any, expected: Any, strict: bool) -> bool:
    if not (isinstance(value, list) and isinstance(expected, list)):
        return False
    if len(value) != len(expected):
        return False
    return all(
        check_item_equality(element, expected_element, strict=strict)
        for element, expected_element in zip(value, expected)
    )


def _check_dict_equality(value: Any, expected: Any, strict: bool) -> bool:
    if not (isinstance(value, dict) and isinstance(expected, dict)):
        return False
    keys = list(value) + [key for key in expected if key not in value]
    return all(
        check_item_equality(value.get(key, MISSING), expected.get(key, MISSING), strict=strict)
        for key in keys
    )


# =============================================================================
# Constraint evaluators
# =============================================================================


def _range_violated(
    value: Any,
    constraint: Any,
    validator_type: str | None,
    violated: Callable[[float], bool],
) -> bool:
    result = get_comparator(validator_type)(value, constraint)
    return result is not None and violated(result)


def validate_minimum_value(stack: ItemStack, minimum: Any, validator_type: str | None) -> str | None:
    if _range_violated(stack.current.item_value, minimum, validator_type, lambda r: r < 0):
        return messages.minimum_value_violation(stack.path, minimum)
    return None


def validate_minimum_value_exclusive(stack: ItemStack, minimum: Any, validator_type: str | None) -> str | None:
    if _range_violated(stack.current.item_value, minimum, validator_type, lambda r: r <= 0):
        return messages.minimum_value_exclusive_violation(stack.path, minimum)
    return None


def validate_maximum_value(stack: ItemStack, maximum: Any, validator_type: str | None) -> str | None:
    if _range_violated(stack.current.item_value, maximum, validator_type, lambda r: r > 0):
        return messages.maximum_value_violation(stack.path, maximum)
    return None


def validate_maximum_value_exclusive(stack: ItemStack, maximum: Any, validator_type: str | None) -> str | None:
    if _range_violated(stack.current.item_value, maximum, validator_type, lambda r: r >= 0):
        return messages.maximum_value_exclusive_violation(stack.path, maximum)
    return None


def validate_immutable(
    stack: ItemStack,
    only_when_set: bool,
    validator_type: str | None,
    strict: bool = False,
) -> str | None:
    """Check that the current item kept its old value.

    Nothing is compared when the item's parent did not exist in the old
    document (e.g. a property of an object newly appended to an array).
    """
    frame = stack.current
    if only_when_set and is_value_null_or_missing(frame.old_item_value):
        return None
    if not stack.parent_existed():
        return None
    if check_item_equality(frame.item_value, frame.old_item_value, validator_type, strict):
        return None
    return messages.immutable_item_violation(stack.path)


def validate_equality(
    stack: ItemStack,
    expected: Any,
    validator_type: str | None,
    strict: bool = False,
) -> str | None:
    if check_item_equality(stack.current.item_value, expected, validator_type, strict):
        return None
    return messages.must_equal_violation(stack.path, expected)
