"""Document-level validation.

Checks that apply to the document as a whole (immutability of the
entire document, replace/delete bans, document ID format) and the entry
point that runs every content check for a write.
"""

import logging
from typing import Any

from syncgate.core.types import MISSING, is_document_missing_or_deleted, resolve_old_doc
from syncgate.definitions.types import DocumentDefinition, resolve_constraint
from syncgate.errors import ValidationFailedError
from syncgate.validation import comparison, messages
from syncgate.validation.attachments import as_pattern, validate_attachments
from syncgate.validation.context import ValidationContext
from syncgate.validation.properties import PropertiesValidator

logger = logging.getLogger(__name__)

# Store-managed revision bookkeeping, ignored when comparing document contents
_REVISION_PROPERTIES = frozenset({"_rev", "_revisions"})


def _document_contents_equal(doc: dict[str, Any], old_doc: dict[str, Any]) -> bool:
    keys = [k for k in doc if k not in _REVISION_PROPERTIES]
    keys += [k for k in old_doc if k not in _REVISION_PROPERTIES and k not in doc]
    return all(
        comparison.check_item_equality(doc.get(key, MISSING), old_doc.get(key, MISSING))
        for key in keys
    )


def validate_document_constraints(
    doc: dict[str, Any],
    old_doc: dict[str, Any] | None,
    definition: DocumentDefinition,
) -> list[str]:
    """Return violations of the definition's whole-document constraints."""
    errors: list[str] = []
    effective_old_doc = resolve_old_doc(old_doc)
    is_delete = bool(doc.get("_deleted"))

    if effective_old_doc is not None:
        if resolve_constraint(definition.immutable, doc, effective_old_doc):
            if is_delete or not _document_contents_equal(doc, effective_old_doc):
                errors.append(messages.immutable_doc_violation())
        elif is_delete:
            if resolve_constraint(definition.cannot_delete, doc, effective_old_doc):
                errors.append(messages.cannot_delete_doc_violation())
        elif resolve_constraint(definition.cannot_replace, doc, effective_old_doc):
            errors.append(messages.cannot_replace_doc_violation())

    if not is_delete and is_document_missing_or_deleted(old_doc):
        pattern = as_pattern(resolve_constraint(definition.document_id_regex_pattern, doc, effective_old_doc))
        if pattern is not None and not pattern.search(str(doc.get("_id", ""))):
            errors.append(messages.document_id_format_invalid(pattern))

    return errors


def collect_validation_errors(
    doc: dict[str, Any],
    old_doc: dict[str, Any] | None,
    definition: DocumentDefinition,
    doc_type: str,
) -> list[str]:
    """Run every check that applies to this write and return all violations."""
    effective_old_doc = resolve_old_doc(old_doc)
    ctx = ValidationContext(doc_type=doc_type, doc=doc, old_doc=effective_old_doc)

    ctx.add_errors(validate_document_constraints(doc, old_doc, definition))

    if not doc.get("_deleted"):
        PropertiesValidator(ctx).validate_document(definition)
        if doc.get("_attachments"):
            validate_attachments(ctx, definition)

    return ctx.errors


def validate_document(
    doc: dict[str, Any],
    old_doc: dict[str, Any] | None,
    definition: DocumentDefinition,
    doc_type: str,
) -> None:
    """Validate a write, raising ValidationFailedError listing every violation."""
    errors = collect_validation_errors(doc, old_doc, definition, doc_type)
    if errors:
        logger.info("Rejected %s document %r: %d violation(s)", doc_type, doc.get("_id"), len(errors))
        raise ValidationFailedError(doc_type, errors)
