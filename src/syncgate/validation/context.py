"""State shared across one validation pass over a document."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class AttachmentReference:
    """An attachment named by an attachmentReference property.

    Holds the referencing property's resolved constraints, which take
    precedence over the document-wide attachment constraints.
    """

    item_path: str
    maximum_size: int | None = None
    supported_extensions: list[str] | None = None
    supported_content_types: list[str] | None = None
    regex_pattern: Any = None


@dataclass
class ValidationContext:
    """Accumulates violations for a single document write.

    Attributes:
        doc_type: The resolved document type id
        doc: The document being written
        old_doc: The effective previous revision (None on create or when
            the previous revision was deleted)
        errors: Violation messages in the order they were found
        attachment_references: Attachment name -> referencing property
    """

    doc_type: str
    doc: dict[str, Any]
    old_doc: dict[str, Any] | None = None
    errors: list[str] = field(default_factory=list)
    attachment_references: dict[str, AttachmentReference] = field(default_factory=dict)

    def add_error(self, message: str | None) -> None:
        if message:
            self.errors.append(message)

    def add_errors(self, messages: list[str] | str | None) -> None:
        if isinstance(messages, str):
            messages = [messages]
        for message in messages or []:
            self.add_error(message)

    @property
    def is_replace(self) -> bool:
        return self.old_doc is not None
