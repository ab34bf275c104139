"""syncgate: validation and authorization of document writes.

Usage:
    from syncgate import SyncFunction, SessionHost, load_definitions

    sync = SyncFunction(load_definitions(Path("definitions")))
    sync(doc, old_doc, SessionHost(user="alice", channels=("notebooks",)))
"""

from syncgate.definitions import DocumentDefinition, definition_function, load_definitions
from syncgate.errors import (
    AccessDeniedError,
    ConfigurationError,
    ForbiddenError,
    SyncGateError,
    UnknownDocumentTypeError,
    ValidationFailedError,
)
from syncgate.host import Host, SessionHost
from syncgate.sync_function import SyncFunction

__version__ = "0.1.0"

__all__ = [
    "AccessDeniedError",
    "ConfigurationError",
    "DocumentDefinition",
    "ForbiddenError",
    "Host",
    "SessionHost",
    "SyncFunction",
    "SyncGateError",
    "UnknownDocumentTypeError",
    "ValidationFailedError",
    "definition_function",
    "load_definitions",
]
