"""Write authorization.

A definition lists, per operation, the channels, roles and users that
may write documents of its type. Each map value may be a single name or
a list of names; the "write" key applies to every operation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from syncgate.core.types import Operation, resolve_old_doc
from syncgate.definitions.types import DocumentDefinition, resolve_constraint
from syncgate.errors import AccessDeniedError, ForbiddenError
from syncgate.host import Host

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Authorization:
    """Names the write was authorized against; None where a kind was not declared."""

    channels: list[str] | None = None
    roles: list[str] | None = None
    users: list[str] | None = None


def append_authorizations(target: list[str], names: Any) -> None:
    """Add a name or list of names to ``target``, skipping duplicates."""
    if names is None:
        return
    if not isinstance(names, (list, tuple)):
        names = [names]
    for name in names:
        if name not in target:
            target.append(name)


def get_authorization_map(
    doc: dict[str, Any],
    old_doc: dict[str, Any] | None,
    constraint: Any,
) -> dict[str, Any] | None:
    return resolve_constraint(constraint, doc, resolve_old_doc(old_doc))


def get_required_authorizations(
    doc: dict[str, Any],
    old_doc: dict[str, Any] | None,
    constraint: Any,
) -> list[str] | None:
    """Names required for this write, or None if none apply to its operation."""
    authorization_map = get_authorization_map(doc, old_doc, constraint)
    if authorization_map is None:
        return None

    operation = Operation.for_write(doc, old_doc)
    required: list[str] = []
    found = False
    for key in ("write", operation.value):
        if authorization_map.get(key):
            found = True
            append_authorizations(required, authorization_map[key])

    return required if found else None


def authorize(
    doc: dict[str, Any],
    old_doc: dict[str, Any] | None,
    definition: DocumentDefinition,
    host: Host,
) -> Authorization:
    """Ensure the current user may perform this write.

    When a definition declares more than one kind of authorization, the
    user needs to satisfy only one of them. A definition that declares
    none for this operation falls back to an empty channel requirement,
    which only an admin session satisfies.

    Raises:
        ForbiddenError: If the user is not authorized
    """
    channels = get_required_authorizations(doc, old_doc, definition.channels)
    roles = get_required_authorizations(doc, old_doc, definition.authorized_roles)
    users = get_required_authorizations(doc, old_doc, definition.authorized_users)

    checks = [
        (channels, host.require_access),
        (roles, host.require_role),
        (users, host.require_user),
    ]
    declared = [(names, check) for names, check in checks if names is not None]

    if not declared:
        host.require_access([])
        return Authorization()

    if len(declared) == 1:
        names, check = declared[0]
        check(names)
        return Authorization(channels=channels, roles=roles, users=users)

    for names, check in declared:
        try:
            check(names)
        except ForbiddenError as e:
            logger.debug("Authorization against %s failed: %s", names, e)
            continue
        return Authorization(channels=channels, roles=roles, users=users)

    raise AccessDeniedError("missing channel access")
