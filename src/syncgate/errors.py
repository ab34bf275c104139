"""Exceptions raised while deciding on a document write.

Everything that rejects a write is a ForbiddenError and carries the
message handed back to the client in ``forbidden``. ConfigurationError
marks a broken document definition and is deliberately not a
ForbiddenError.
"""


class SyncGateError(Exception):
    """Base class for all syncgate errors."""
    pass


class ForbiddenError(SyncGateError):
    """The write was rejected."""

    def __init__(self, message: str):
        super().__init__(message)
        self.forbidden = message


class UnknownDocumentTypeError(ForbiddenError):
    """No document definition matched the document."""

    def __init__(self, message: str = "Unknown document type"):
        super().__init__(message)


class AccessDeniedError(ForbiddenError):
    """The user lacks the channels, roles or identity the write requires."""
    pass


class ValidationFailedError(ForbiddenError):
    """The document violated one or more constraints of its definition.

    Attributes:
        doc_type: The resolved document type id
        errors: Every violation message, in the order they were found
    """

    def __init__(self, doc_type: str, errors: list[str]):
        super().__init__(f"Invalid {doc_type} document: " + "; ".join(errors))
        self.doc_type = doc_type
        self.errors = list(errors)


class ConfigurationError(SyncGateError):
    """A document definition is malformed (unknown validator type, enum
    without predefined values, unregistered function reference, ...)."""
    pass
