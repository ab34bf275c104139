"""Shared fixtures for syncgate tests."""

from typing import Any

import pytest

from syncgate.definitions.registry import FunctionRegistry
from syncgate.definitions.types import DocumentDefinition
from syncgate.validation.document import collect_validation_errors


def match_all(doc, old_doc, doc_type):
    return True


def make_definition(**kwargs: Any) -> DocumentDefinition:
    """A definition that matches every document, with the given overrides."""
    kwargs.setdefault("type_filter", match_all)
    return DocumentDefinition(**kwargs)


def collect_errors(
    doc: dict[str, Any],
    old_doc: dict[str, Any] | None = None,
    doc_type: str = "testDoc",
    **definition_kwargs: Any,
) -> list[str]:
    return collect_validation_errors(doc, old_doc, make_definition(**definition_kwargs), doc_type)


@pytest.fixture(autouse=True)
def clear_function_registry():
    """Clear the function registry before and after each test."""
    FunctionRegistry.clear()
    yield
    FunctionRegistry.clear()
