"""Document definitions: the model, the YAML loader and its function registry."""

from syncgate.definitions.loader import DefinitionsLoader, load_definitions
from syncgate.definitions.registry import FunctionRegistry, definition_function
from syncgate.definitions.types import (
    VALIDATOR_TYPES,
    AccessAssignment,
    ArrayValidator,
    AttachmentConstraints,
    AttachmentReferenceValidator,
    BooleanValidator,
    DateTimeValidator,
    DateValidator,
    DocumentDefinition,
    DocumentDefinitions,
    Dynamic,
    EnumValidator,
    FloatValidator,
    HashtableKeysValidator,
    HashtableValidator,
    IntegerValidator,
    ObjectValidator,
    PropertyValidator,
    Static,
    StringValidator,
    TimeValidator,
    TimeZoneValidator,
    UuidValidator,
    resolve_constraint,
    simple_type_filter,
)

__all__ = [
    "VALIDATOR_TYPES",
    "AccessAssignment",
    "ArrayValidator",
    "AttachmentConstraints",
    "AttachmentReferenceValidator",
    "BooleanValidator",
    "DateTimeValidator",
    "DateValidator",
    "DefinitionsLoader",
    "DocumentDefinition",
    "DocumentDefinitions",
    "Dynamic",
    "EnumValidator",
    "FloatValidator",
    "FunctionRegistry",
    "HashtableKeysValidator",
    "HashtableValidator",
    "IntegerValidator",
    "ObjectValidator",
    "PropertyValidator",
    "Static",
    "StringValidator",
    "TimeValidator",
    "TimeZoneValidator",
    "UuidValidator",
    "definition_function",
    "load_definitions",
    "resolve_constraint",
    "simple_type_filter",
]
