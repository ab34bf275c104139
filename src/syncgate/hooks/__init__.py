"""syncgate lifecycle hooks.

A document definition may attach a custom action to any of these
events, fired in this order as a write moves through the pipeline:
- onTypeIdentificationSucceeded: the document type was resolved
- onAuthorizationSucceeded: the user may perform the write
- onValidationSucceeded: the contents satisfy the definition
- onAccessAssignmentsSucceeded: channel and role grants were made
- onExpiryAssignmentSucceeded: the document expiry was set
- onDocumentChannelAssignmentSucceeded: the document's channels were assigned

Usage:
    from syncgate.hooks import CustomActions

    def audit(doc, old_doc, metadata):
        log.info("%s accepted into %s", doc["_id"], metadata.document_channels)

    CustomActions(on_document_channel_assignment_succeeded=audit)
"""

from syncgate.hooks.service import CustomActionService
from syncgate.hooks.types import (
    CustomAction,
    CustomActionMetadata,
    CustomActions,
    LifecycleEvent,
)

__all__ = [
    "CustomAction",
    "CustomActionMetadata",
    "CustomActionService",
    "CustomActions",
    "LifecycleEvent",
]
