"""Custom action execution for syncgate.

Fires the custom action a document definition declares for a lifecycle
event. Actions run synchronously, in pipeline order, and only once the
step they follow has fully succeeded. An exception raised by an action
propagates and rejects the write.
"""

import logging
from dataclasses import replace
from typing import Any

from syncgate.hooks.types import CustomActionMetadata, LifecycleEvent

logger = logging.getLogger(__name__)


class CustomActionService:
    """Invokes custom actions at each lifecycle event."""

    def fire(
        self,
        event: LifecycleEvent,
        doc: dict[str, Any],
        old_doc: dict[str, Any] | None,
        metadata: CustomActionMetadata,
    ) -> CustomActionMetadata:
        """Fire the action registered for ``event``, if any.

        Args:
            event: The lifecycle event that just completed
            doc: The document being written
            old_doc: The previous revision as given to the sync function
            metadata: State computed so far; its ``event`` is set to ``event``

        Returns:
            The metadata as passed to the action
        """
        metadata = replace(metadata, event=event)
        definition = metadata.document_definition
        if definition is None:
            return metadata

        action = definition.custom_actions.get(event)
        if action is None:
            return metadata

        logger.debug("Firing %s for %s document %r", event.value, metadata.document_type_id, doc.get("_id"))
        action(doc, old_doc, metadata)
        return metadata
