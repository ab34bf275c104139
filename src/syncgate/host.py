"""Host collaborators.

The document store that runs the sync function supplies the checks and
side effects it needs. ``Host`` is that contract; ``SessionHost`` is a
concrete implementation for a single user session that records every
side effect, used by the CLI and by tests.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol, runtime_checkable

from syncgate.config import ROLE_PREFIX
from syncgate.errors import AccessDeniedError

logger = logging.getLogger(__name__)


@runtime_checkable
class Host(Protocol):
    """Callbacks provided by the document store.

    The ``require_*`` methods return normally when the current user is
    authorized and raise a ForbiddenError otherwise.
    """

    def require_access(self, channels: list[str]) -> None:
        """Require the user to have access to at least one of the channels."""
        ...

    def require_role(self, roles: list[str]) -> None:
        """Require the user to hold at least one of the roles."""
        ...

    def require_user(self, users: list[str]) -> None:
        """Require the user to be one of the users."""
        ...

    def channel(self, channels: list[str]) -> None:
        """Assign the document to the channels."""
        ...

    def access(self, grantees: list[str], channels: list[str]) -> None:
        """Grant users (and "role:"-prefixed roles) access to channels."""
        ...

    def role(self, users: list[str], roles: list[str]) -> None:
        """Add users to "role:"-prefixed roles."""
        ...

    def expiry(self, expiry: datetime) -> None:
        """Set when the document expires."""
        ...


@dataclass
class SessionHost:
    """Host for one authenticated (or admin) session.

    An admin session passes every requirement, including an empty one.
    Everyone else needs a matching channel, role or user name.
    """

    user: str | None = None
    roles: tuple[str, ...] = ()
    channels: tuple[str, ...] = ()
    admin: bool = False

    channel_calls: list[list[str]] = field(default_factory=list)
    access_calls: list[tuple[list[str], list[str]]] = field(default_factory=list)
    role_calls: list[tuple[list[str], list[str]]] = field(default_factory=list)
    expiry_calls: list[datetime] = field(default_factory=list)

    def require_access(self, channels: list[str]) -> None:
        if self.admin:
            return
        if not set(channels) & set(self.channels):
            raise AccessDeniedError("missing channel access")

    def require_role(self, roles: list[str]) -> None:
        if self.admin:
            return
        held = set(self.roles) | {ROLE_PREFIX + r for r in self.roles}
        if not set(roles) & held:
            raise AccessDeniedError("missing role access")

    def require_user(self, users: list[str]) -> None:
        if self.admin:
            return
        if self.user is None or self.user not in users:
            raise AccessDeniedError("wrong user")

    def channel(self, channels: list[str]) -> None:
        logger.debug("Assigning document to channels %s", channels)
        self.channel_calls.append(list(channels))

    def access(self, grantees: list[str], channels: list[str]) -> None:
        self.access_calls.append((list(grantees), list(channels)))

    def role(self, users: list[str], roles: list[str]) -> None:
        self.role_calls.append((list(users), list(roles)))

    def expiry(self, expiry: datetime) -> None:
        self.expiry_calls.append(expiry)

    @property
    def assigned_channels(self) -> list[str] | None:
        """Channels from the most recent channel() call, if any."""
        return self.channel_calls[-1] if self.channel_calls else None
