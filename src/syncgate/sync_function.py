"""The sync function: one decision per document write.

For each write the pipeline is:
1. resolve the document type
2. authorize the write
3. validate the contents (skipped for deletes except whole-document rules)
4. make access assignments (not on delete)
5. set the expiry (not on delete)
6. assign the document's channels

A custom action may follow each step. Any failure raises immediately;
nothing after the failing step runs.
"""

from __future__ import annotations

import logging
from typing import Any

from syncgate.auth.access import assign_user_access, get_all_doc_channels
from syncgate.auth.authorization import authorize
from syncgate.config import PUBLIC_CHANNEL
from syncgate.definitions.types import DocumentDefinitions
from syncgate.errors import UnknownDocumentTypeError
from syncgate.expiry import set_doc_expiry
from syncgate.hooks.service import CustomActionService
from syncgate.hooks.types import CustomActionMetadata, LifecycleEvent
from syncgate.host import Host
from syncgate.type_resolver import resolve_document_type
from syncgate.validation.document import validate_document

logger = logging.getLogger(__name__)


class SyncFunction:
    """Decides whether document writes are accepted.

    Holds an ordered, read-only collection of document definitions; one
    instance can serve any number of writes.

    Example:
        sync = SyncFunction(DefinitionsLoader(path).load())
        sync(doc, old_doc, host)
    """

    def __init__(self, definitions: DocumentDefinitions):
        self.definitions = definitions
        self.custom_actions = CustomActionService()

    def __call__(
        self,
        doc: dict[str, Any],
        old_doc: dict[str, Any] | None,
        host: Host,
    ) -> CustomActionMetadata:
        """Run one write through the pipeline.

        Args:
            doc: The new revision (``_deleted`` set for deletes)
            old_doc: The current revision, or None if there is none
            host: Collaborators for authorization and side effects

        Returns:
            Metadata describing everything decided for the write

        Raises:
            ForbiddenError: If the write is rejected
            ConfigurationError: If the matched definition is malformed
        """
        doc_type = resolve_document_type(doc, old_doc, self.definitions)

        if doc_type is None:
            if doc.get("_deleted"):
                # Deleting a document nobody can identify: admin only, public channel
                logger.info("Deleting document %r of unknown type", doc.get("_id"))
                host.require_access([])
                host.channel([PUBLIC_CHANNEL])
                return CustomActionMetadata(
                    document_type_id=None,
                    document_definition=None,
                    document_channels=[PUBLIC_CHANNEL],
                )
            logger.info("Rejected document %r: unknown type", doc.get("_id"))
            raise UnknownDocumentTypeError()

        definition = self.definitions[doc_type]
        is_delete = bool(doc.get("_deleted"))
        metadata = CustomActionMetadata(document_type_id=doc_type, document_definition=definition)
        self.custom_actions.fire(LifecycleEvent.TYPE_IDENTIFICATION_SUCCEEDED, doc, old_doc, metadata)

        metadata.authorization = authorize(doc, old_doc, definition, host)
        self.custom_actions.fire(LifecycleEvent.AUTHORIZATION_SUCCEEDED, doc, old_doc, metadata)

        validate_document(doc, old_doc, definition, doc_type)
        self.custom_actions.fire(LifecycleEvent.VALIDATION_SUCCEEDED, doc, old_doc, metadata)

        if definition.access_assignments is not None and not is_delete:
            assignments = assign_user_access(doc, old_doc, definition, host)
            if assignments:
                metadata.access_assignments = assignments
                self.custom_actions.fire(LifecycleEvent.ACCESS_ASSIGNMENTS_SUCCEEDED, doc, old_doc, metadata)

        if definition.expiry is not None and not is_delete:
            metadata.expiry_date = set_doc_expiry(doc, old_doc, definition, host)
            self.custom_actions.fire(LifecycleEvent.EXPIRY_ASSIGNMENT_SUCCEEDED, doc, old_doc, metadata)

        channels = get_all_doc_channels(doc, old_doc, definition)
        host.channel(channels)
        metadata.document_channels = channels
        metadata = self.custom_actions.fire(
            LifecycleEvent.DOCUMENT_CHANNEL_ASSIGNMENT_SUCCEEDED, doc, old_doc, metadata
        )

        logger.debug("Accepted %s document %r into %s", doc_type, doc.get("_id"), channels)
        return metadata
