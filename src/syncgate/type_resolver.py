"""Document type resolution."""

import logging
from typing import Any

from syncgate.core.types import resolve_old_doc
from syncgate.definitions.types import DocumentDefinitions

logger = logging.getLogger(__name__)


def resolve_document_type(
    doc: dict[str, Any],
    old_doc: dict[str, Any] | None,
    definitions: DocumentDefinitions,
) -> str | None:
    """Return the id of the first definition whose type filter matches.

    Definitions are tried in declaration order. Filters see the effective
    old document, i.e. None when the previous revision is missing or
    deleted.

    Returns:
        The document type id, or None if no definition matched
    """
    effective_old_doc = resolve_old_doc(old_doc)
    for doc_type, definition in definitions.items():
        if definition.type_filter(doc, effective_old_doc, doc_type):
            logger.debug("Document %r resolved to type %s", doc.get("_id"), doc_type)
            return doc_type
    return None
