"""Validation error message formatters.

Every constraint violation message is produced here so that the
validator and anything asserting on its output (tests, client code
matching on messages) agree on the exact wording.
"""

import json
import re
from datetime import date, datetime, timezone
from typing import Any

TYPE_DESCRIPTIONS = {
    "array": "an array",
    "attachmentReference": "an attachment reference string",
    "boolean": "a boolean",
    "date": "an ECMAScript simplified ISO 8601 date string with no time or time zone components",
    "datetime": "an ECMAScript simplified ISO 8601 date string with optional time and time zone components",
    "float": "a floating point or integer number",
    "hashtable": "an object/hashtable",
    "integer": "an integer",
    "object": "an object",
    "string": "a string",
    "time": "an ECMAScript simplified ISO 8601 time string with no date or time zone components",
    "timezone": "an ECMAScript simplified ISO 8601 time zone string",
    "uuid": "a UUID string",
}


def stringify(value: Any) -> str:
    """Render a constraint value the way it appears in messages."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        instant = value.astimezone(timezone.utc)
        return instant.strftime("%Y-%m-%dT%H:%M:%S.") + f"{instant.microsecond // 1000:03d}Z"
    if isinstance(value, date):
        return value.isoformat() + "T00:00:00.000Z"
    return str(value)


def to_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), default=stringify)


def pattern_text(pattern: "re.Pattern[str] | str") -> str:
    return pattern.pattern if isinstance(pattern, re.Pattern) else str(pattern)


def join_values(values: list[Any]) -> str:
    return ",".join(stringify(v) for v in values)


# =============================================================================
# Document-level
# =============================================================================


def allow_attachments_violation() -> str:
    return "document type does not support attachments"


def cannot_delete_doc_violation() -> str:
    return "documents of this type cannot be deleted"


def cannot_replace_doc_violation() -> str:
    return "documents of this type cannot be replaced"


def immutable_doc_violation() -> str:
    return "documents of this type cannot be replaced or deleted"


def document_id_format_invalid(pattern: "re.Pattern[str] | str") -> str:
    return f"document ID must conform to expected pattern {pattern_text(pattern)}"


def unsupported_property(property_path: str) -> str:
    return f'property "{property_path}" is not supported'


# =============================================================================
# Item-level
# =============================================================================


def type_constraint_violation(item_path: str, type_name: str) -> str:
    return f'item "{item_path}" must be {TYPE_DESCRIPTIONS[type_name]}'


def required_value_violation(item_path: str) -> str:
    return f'item "{item_path}" must not be null or missing'


def must_not_be_missing_violation(item_path: str) -> str:
    return f'item "{item_path}" must not be missing'


def must_not_be_null_violation(item_path: str) -> str:
    return f'item "{item_path}" must not be null'


def must_not_be_empty_violation(item_path: str) -> str:
    return f'item "{item_path}" must not be empty'


def immutable_item_violation(item_path: str) -> str:
    return f'item "{item_path}" cannot be modified'


def must_equal_violation(item_path: str, expected: Any) -> str:
    return f'value of item "{item_path}" must equal {to_json(expected)}'


def must_equal_ignore_case_violation(item_path: str, expected: str) -> str:
    return f'value of item "{item_path}" must equal (case insensitive) "{expected}"'


def minimum_value_violation(item_path: str, minimum: Any) -> str:
    return f'item "{item_path}" must not be less than {stringify(minimum)}'


def minimum_value_exclusive_violation(item_path: str, minimum: Any) -> str:
    return f'item "{item_path}" must not be less than or equal to {stringify(minimum)}'


def maximum_value_violation(item_path: str, maximum: Any) -> str:
    return f'item "{item_path}" must not be greater than {stringify(maximum)}'


def maximum_value_exclusive_violation(item_path: str, maximum: Any) -> str:
    return f'item "{item_path}" must not be greater than or equal to {stringify(maximum)}'


def minimum_length_violation(item_path: str, minimum_length: int) -> str:
    return f'length of item "{item_path}" must not be less than {minimum_length}'


def maximum_length_violation(item_path: str, maximum_length: int) -> str:
    return f'length of item "{item_path}" must not be greater than {maximum_length}'


def regex_pattern_item_violation(item_path: str, pattern: "re.Pattern[str] | str") -> str:
    return f'item "{item_path}" must conform to expected format {pattern_text(pattern)}'


def must_be_trimmed_violation(item_path: str) -> str:
    return f'item "{item_path}" must not have any leading or trailing whitespace'


def enum_predefined_value_violation(item_path: str, predefined_values: list[Any]) -> str:
    return f'item "{item_path}" must be one of the predefined values: {join_values(predefined_values)}'


def hashtable_key_empty(hashtable_path: str) -> str:
    return f'hashtable "{hashtable_path}" must not have an empty key'


def hashtable_key_not_string(key_path: str) -> str:
    return f'hashtable key "{key_path}" is not a string'


def hashtable_key_format_invalid(key_path: str, pattern: "re.Pattern[str] | str") -> str:
    return f'hashtable key "{key_path}" must conform to expected format {pattern_text(pattern)}'


def hashtable_maximum_size_violation(hashtable_path: str, maximum_size: int) -> str:
    return f'hashtable "{hashtable_path}" must not be larger than {maximum_size} elements'


def hashtable_minimum_size_violation(hashtable_path: str, minimum_size: int) -> str:
    return f'hashtable "{hashtable_path}" must not be smaller than {minimum_size} elements'


# =============================================================================
# Attachments
# =============================================================================


def maximum_attachment_count_violation(maximum_count: int) -> str:
    return f"documents of this type must not have more than {maximum_count} attachments"


def maximum_individual_attachment_size_violation(attachment_name: str, maximum_size: int) -> str:
    return f"attachment {attachment_name} must not exceed {maximum_size} bytes"


def maximum_total_attachment_size_violation(maximum_size: int) -> str:
    return (
        "documents of this type must not have a combined attachment size "
        f"greater than {maximum_size} bytes"
    )


def supported_extensions_attachment_violation(attachment_name: str, extensions: list[str]) -> str:
    return f'attachment "{attachment_name}" must have a supported file extension ({",".join(extensions)})'


def supported_content_types_attachment_violation(attachment_name: str, content_types: list[str]) -> str:
    return f'attachment "{attachment_name}" must have a supported content type ({",".join(content_types)})'


def attachment_filename_format_invalid(attachment_name: str, pattern: "re.Pattern[str] | str") -> str:
    return f'attachment "{attachment_name}" must conform to expected pattern {pattern_text(pattern)}'


def require_attachment_reference_violation(attachment_name: str) -> str:
    return f"attachment {attachment_name} must have a corresponding attachment reference property"


def supported_extensions_attachment_reference_violation(item_path: str, extensions: list[str]) -> str:
    return (
        f'attachment reference "{item_path}" must have a supported file extension '
        f'({",".join(extensions)})'
    )


def supported_content_types_attachment_reference_violation(item_path: str, content_types: list[str]) -> str:
    return (
        f'attachment reference "{item_path}" must have a supported content type '
        f'({",".join(content_types)})'
    )


def maximum_size_attachment_reference_violation(item_path: str, maximum_size: int) -> str:
    return f'attachment reference "{item_path}" must not be larger than {maximum_size} bytes'


def attachment_reference_format_invalid(item_path: str, pattern: "re.Pattern[str] | str") -> str:
    return f'attachment reference "{item_path}" must conform to expected pattern {pattern_text(pattern)}'
