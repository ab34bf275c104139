"""Core document primitives."""

from syncgate.core.types import (
    MISSING,
    RESERVED_PROPERTIES,
    Operation,
    get_item,
    is_document_missing_or_deleted,
    is_value_null_or_missing,
    resolve_old_doc,
)

__all__ = [
    "MISSING",
    "RESERVED_PROPERTIES",
    "Operation",
    "get_item",
    "is_document_missing_or_deleted",
    "is_value_null_or_missing",
    "resolve_old_doc",
]
