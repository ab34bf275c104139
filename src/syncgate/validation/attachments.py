"""Attachment validation.

Two layers:
- attachmentReference properties: the property value names an attachment
  and carries its own extension / content type / size rules
- document-wide constraints over the whole ``_attachments`` collection

Adding an attachment is usually a separate write from setting the
property that references it, so reference rules that need the attachment
itself are only checked once the attachment is present.
"""

import re
from typing import Any, Callable

from syncgate.definitions.types import (
    AttachmentConstraints,
    AttachmentReferenceValidator,
    DocumentDefinition,
    resolve_constraint,
)
from syncgate.validation import messages
from syncgate.validation.context import AttachmentReference, ValidationContext
from syncgate.validation.item_stack import ItemStack


def build_supported_extensions_pattern(extensions: list[str]) -> "re.Pattern[str]":
    """Regex matching a filename that ends with one of the extensions."""
    alternatives = "|".join(re.escape(ext) for ext in extensions)
    return re.compile(rf"\.({alternatives})$", re.IGNORECASE)


def as_pattern(pattern: Any) -> "re.Pattern[str] | None":
    if pattern is None:
        return None
    if isinstance(pattern, re.Pattern):
        return pattern
    return re.compile(pattern)


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_attachment_reference(
    ctx: ValidationContext,
    stack: ItemStack,
    validator: AttachmentReferenceValidator,
    resolve: Callable[[Any], Any],
) -> None:
    """Validate one attachmentReference property value.

    ``resolve`` evaluates the validator's item-level constraints for the
    current stack position.
    """
    value = stack.current.item_value
    path = stack.path

    if not isinstance(value, str):
        ctx.add_error(messages.type_constraint_violation(path, "attachmentReference"))
        return

    supported_extensions = resolve(validator.supported_extensions)
    supported_content_types = resolve(validator.supported_content_types)
    maximum_size = resolve(validator.maximum_size)
    regex_pattern = as_pattern(resolve(validator.regex_pattern))

    ctx.attachment_references[value] = AttachmentReference(
        item_path=path,
        maximum_size=maximum_size,
        supported_extensions=supported_extensions,
        supported_content_types=supported_content_types,
        regex_pattern=regex_pattern,
    )

    if supported_extensions and not build_supported_extensions_pattern(supported_extensions).search(value):
        ctx.add_error(messages.supported_extensions_attachment_reference_violation(path, supported_extensions))

    if regex_pattern is not None and not regex_pattern.search(value):
        ctx.add_error(messages.attachment_reference_format_invalid(path, regex_pattern))

    attachment = (ctx.doc.get("_attachments") or {}).get(value)
    if not attachment:
        return

    if supported_content_types and attachment.get("content_type") not in supported_content_types:
        ctx.add_error(
            messages.supported_content_types_attachment_reference_violation(path, supported_content_types)
        )

    if maximum_size is not None and attachment.get("length", 0) > maximum_size:
        ctx.add_error(messages.maximum_size_attachment_reference_violation(path, maximum_size))


def validate_attachments(ctx: ValidationContext, definition: DocumentDefinition) -> None:
    """Apply the definition's document-wide attachment constraints.

    Must run after property validation so that every attachment
    reference in the document has been recorded.
    """
    doc, old_doc = ctx.doc, ctx.old_doc
    attachments: dict[str, Any] = doc.get("_attachments") or {}

    constraints: AttachmentConstraints | None = resolve_constraint(
        definition.attachment_constraints, doc, old_doc
    )

    def resolve(name: str) -> Any:
        if constraints is None:
            return None
        return resolve_constraint(getattr(constraints, name), doc, old_doc)

    maximum_count = resolve("maximum_attachment_count")
    maximum_individual_size = resolve("maximum_individual_size")
    maximum_total_size = resolve("maximum_total_size")
    supported_extensions = resolve("supported_extensions")
    supported_content_types = resolve("supported_content_types")
    require_references = resolve("require_attachment_references")
    filename_pattern = as_pattern(resolve("filename_regex_pattern"))
    extensions_pattern = (
        build_supported_extensions_pattern(supported_extensions) if supported_extensions else None
    )

    total_size = 0
    for name, attachment in attachments.items():
        size = (attachment or {}).get("length", 0)
        total_size += size
        reference = ctx.attachment_references.get(name)

        if require_references and reference is None:
            ctx.add_error(messages.require_attachment_reference_violation(name))

        if _is_integer(maximum_individual_size) and size > maximum_individual_size:
            if reference is None or not _is_integer(reference.maximum_size):
                ctx.add_error(messages.maximum_individual_attachment_size_violation(name, maximum_individual_size))

        if extensions_pattern is not None and not extensions_pattern.search(name):
            if reference is None or reference.supported_extensions is None:
                ctx.add_error(messages.supported_extensions_attachment_violation(name, supported_extensions))

        if supported_content_types and (attachment or {}).get("content_type") not in supported_content_types:
            if reference is None or reference.supported_content_types is None:
                ctx.add_error(messages.supported_content_types_attachment_violation(name, supported_content_types))

        if filename_pattern is not None and not filename_pattern.search(name):
            if reference is None or reference.regex_pattern is None:
                ctx.add_error(messages.attachment_filename_format_invalid(name, filename_pattern))

    if _is_integer(maximum_total_size) and total_size > maximum_total_size:
        ctx.add_error(messages.maximum_total_attachment_size_violation(maximum_total_size))

    if _is_integer(maximum_count) and len(attachments) > maximum_count:
        ctx.add_error(messages.maximum_attachment_count_violation(maximum_count))

    if not resolve_constraint(definition.allow_attachments, doc, old_doc) and attachments:
        ctx.add_error(messages.allow_attachments_violation())
