"""Lifecycle hook types for syncgate.

Defines the events a document definition can hook into and the metadata
handed to each custom action:
- LifecycleEvent: the fixed points in the sync pipeline
- CustomActions: one optional slot per event on a document definition
- CustomActionMetadata: everything computed about the write so far
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable

if TYPE_CHECKING:
    from syncgate.auth.access import AccessAssignmentResult
    from syncgate.auth.authorization import Authorization
    from syncgate.definitions.types import DocumentDefinition


class LifecycleEvent(Enum):
    """Pipeline points at which custom actions fire, in firing order."""

    TYPE_IDENTIFICATION_SUCCEEDED = "onTypeIdentificationSucceeded"
    AUTHORIZATION_SUCCEEDED = "onAuthorizationSucceeded"
    VALIDATION_SUCCEEDED = "onValidationSucceeded"
    ACCESS_ASSIGNMENTS_SUCCEEDED = "onAccessAssignmentsSucceeded"
    EXPIRY_ASSIGNMENT_SUCCEEDED = "onExpiryAssignmentSucceeded"
    DOCUMENT_CHANNEL_ASSIGNMENT_SUCCEEDED = "onDocumentChannelAssignmentSucceeded"

    @property
    def slot(self) -> str:
        """Attribute name of this event's slot on CustomActions."""
        return _SLOTS[self]


_SLOTS = {
    LifecycleEvent.TYPE_IDENTIFICATION_SUCCEEDED: "on_type_identification_succeeded",
    LifecycleEvent.AUTHORIZATION_SUCCEEDED: "on_authorization_succeeded",
    LifecycleEvent.VALIDATION_SUCCEEDED: "on_validation_succeeded",
    LifecycleEvent.ACCESS_ASSIGNMENTS_SUCCEEDED: "on_access_assignments_succeeded",
    LifecycleEvent.EXPIRY_ASSIGNMENT_SUCCEEDED: "on_expiry_assignment_succeeded",
    LifecycleEvent.DOCUMENT_CHANNEL_ASSIGNMENT_SUCCEEDED: "on_document_channel_assignment_succeeded",
}


@dataclass
class CustomActionMetadata:
    """Runtime state passed to every custom action.

    Fields are filled in as the pipeline advances, so a hook only sees
    the results of steps that have already succeeded.

    Attributes:
        document_type_id: The resolved document type
        document_definition: The definition of that type
        event: The event currently being fired
        authorization: Channels/roles/users the write was authorized against
        access_assignments: Channel and role grants made for this write
        expiry_date: When the document will expire, if an expiry is defined
        document_channels: Channels assigned to the document
    """

    document_type_id: str | None
    document_definition: DocumentDefinition | None
    event: LifecycleEvent | None = None
    authorization: Authorization | None = None
    access_assignments: list[AccessAssignmentResult] = field(default_factory=list)
    expiry_date: datetime | None = None
    document_channels: list[str] | None = None


# Custom action signature: (doc, old_doc, metadata) -> None
CustomAction = Callable[[dict[str, Any], "dict[str, Any] | None", CustomActionMetadata], None]


@dataclass
class CustomActions:
    """Optional custom action for each lifecycle event."""

    on_type_identification_succeeded: CustomAction | None = None
    on_authorization_succeeded: CustomAction | None = None
    on_validation_succeeded: CustomAction | None = None
    on_access_assignments_succeeded: CustomAction | None = None
    on_expiry_assignment_succeeded: CustomAction | None = None
    on_document_channel_assignment_succeeded: CustomAction | None = None

    def get(self, event: LifecycleEvent) -> CustomAction | None:
        return getattr(self, event.slot)
