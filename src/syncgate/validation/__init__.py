"""Document content validation."""

from syncgate.validation.context import AttachmentReference, ValidationContext
from syncgate.validation.document import (
    collect_validation_errors,
    validate_document,
    validate_document_constraints,
)
from syncgate.validation.item_stack import ItemFrame, ItemStack, build_item_path
from syncgate.validation.properties import PropertiesValidator

__all__ = [
    "AttachmentReference",
    "ItemFrame",
    "ItemStack",
    "PropertiesValidator",
    "ValidationContext",
    "build_item_path",
    "collect_validation_errors",
    "validate_document",
    "validate_document_constraints",
]
