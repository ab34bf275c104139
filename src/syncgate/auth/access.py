"""Document channels and user access grants."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from syncgate.auth.authorization import append_authorizations, get_authorization_map
from syncgate.config import ROLE_PREFIX
from syncgate.core.types import resolve_old_doc
from syncgate.definitions.types import AccessAssignment, DocumentDefinition, resolve_constraint
from syncgate.errors import ConfigurationError
from syncgate.host import Host

logger = logging.getLogger(__name__)

_CHANNEL_MAP_KEYS = ("view", "write", "add", "replace", "remove")


@dataclass(frozen=True)
class ChannelAccessAssignment:
    """Users and roles granted access to channels."""

    users_and_roles: list[str]
    channels: list[str]
    type: str = "channel"


@dataclass(frozen=True)
class RoleAccessAssignment:
    """Users added to roles."""

    users: list[str]
    roles: list[str]
    type: str = "role"


AccessAssignmentResult = ChannelAccessAssignment | RoleAccessAssignment


def get_all_doc_channels(
    doc: dict[str, Any],
    old_doc: dict[str, Any] | None,
    definition: DocumentDefinition,
) -> list[str]:
    """Every channel named in the definition's channel map, without duplicates."""
    channel_map = get_authorization_map(doc, old_doc, definition.channels)
    all_channels: list[str] = []
    if channel_map:
        for key in _CHANNEL_MAP_KEYS:
            append_authorizations(all_channels, channel_map.get(key))
    return all_channels


def _resolve_names(
    doc: dict[str, Any],
    old_doc: dict[str, Any] | None,
    constraint: Any,
    prefix: str = "",
) -> list[str]:
    names = resolve_constraint(constraint, doc, old_doc)
    if names is None:
        return []
    if not isinstance(names, (list, tuple)):
        names = [names]
    return [prefix + str(name) for name in names if name is not None]


def assign_user_access(
    doc: dict[str, Any],
    old_doc: dict[str, Any] | None,
    definition: DocumentDefinition,
    host: Host,
) -> list[AccessAssignmentResult]:
    """Make the channel and role grants the definition declares for this write."""
    effective_old_doc = resolve_old_doc(old_doc)
    assignments = resolve_constraint(definition.access_assignments, doc, effective_old_doc) or []

    results: list[AccessAssignmentResult] = []
    for assignment in assignments:
        if not isinstance(assignment, AccessAssignment):
            raise ConfigurationError(f"Invalid access assignment: {assignment!r}")

        users = _resolve_names(doc, effective_old_doc, assignment.users)
        roles = _resolve_names(doc, effective_old_doc, assignment.roles, ROLE_PREFIX)

        if assignment.type == "role":
            host.role(users, roles)
            results.append(RoleAccessAssignment(users=users, roles=roles))
        else:
            channels = _resolve_names(doc, effective_old_doc, assignment.channels)
            host.access(users + roles, channels)
            results.append(ChannelAccessAssignment(users_and_roles=users + roles, channels=channels))

    logger.debug("Made %d access assignment(s) for %r", len(results), doc.get("_id"))
    return results
