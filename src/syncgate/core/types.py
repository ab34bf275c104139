"""Shared document primitives for syncgate.

Documents are plain JSON-like dicts. Python has no ``undefined``, so an
absent key is represented by the ``MISSING`` sentinel wherever the
difference between "absent" and ``None`` matters (strict comparisons).
"""

from enum import Enum
from typing import Any


class _Missing:
    """Marker for a key that is absent from its container."""

    _instance: "_Missing | None" = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()

# Properties managed by the document store, always allowed at the document root
RESERVED_PROPERTIES = frozenset({"_id", "_rev", "_deleted", "_revisions", "_attachments"})


def is_value_null_or_missing(value: Any) -> bool:
    """Whether the value is None or the MISSING sentinel."""
    return value is None or value is MISSING


def is_document_missing_or_deleted(doc: Any) -> bool:
    """Whether the document is absent or is a deletion tombstone."""
    return is_value_null_or_missing(doc) or bool(doc.get("_deleted"))


def resolve_old_doc(old_doc: dict[str, Any] | None) -> dict[str, Any] | None:
    """Return the effective old document, or None if it is missing or deleted."""
    if is_document_missing_or_deleted(old_doc):
        return None
    return old_doc


def get_item(container: Any, key: Any) -> Any:
    """Look up ``key`` in a dict (or index in a list), returning MISSING if absent."""
    if isinstance(container, dict):
        return container.get(key, MISSING)
    if isinstance(container, list) and isinstance(key, int):
        return container[key] if 0 <= key < len(container) else MISSING
    return MISSING


class Operation(Enum):
    """The kind of write being attempted."""

    ADD = "add"
    REPLACE = "replace"
    REMOVE = "remove"

    @classmethod
    def for_write(
        cls, doc: dict[str, Any], old_doc: dict[str, Any] | None
    ) -> "Operation":
        if doc.get("_deleted"):
            return cls.REMOVE
        if resolve_old_doc(old_doc) is not None:
            return cls.REPLACE
        return cls.ADD
