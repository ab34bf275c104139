"""Document definition model for syncgate.

A document definition describes one document type: how to recognize it,
who may write it, what its contents must look like and which channels it
lands in. Definitions are built once (in code or by the YAML loader) and
are read-only afterwards.

Any constraint may be static or computed per write:
- Static(value): the same for every write
- Dynamic(fn): computed from the write being validated. Document-level
  functions receive (doc, old_doc); item-level functions receive
  (doc, old_doc, value, old_value).

Plain values given to a constraint field are wrapped in Static. Callables
must be wrapped in Dynamic explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import TYPE_CHECKING, Any, Callable, ClassVar, Generic, TypeVar

from syncgate.errors import ConfigurationError
from syncgate.hooks.types import CustomActions

if TYPE_CHECKING:
    from syncgate.validation.item_stack import ItemFrame

T = TypeVar("T")


@dataclass(frozen=True)
class Static(Generic[T]):
    value: T

    def resolve(self, *args: Any) -> T:
        return self.value


@dataclass(frozen=True)
class Dynamic(Generic[T]):
    fn: Callable[..., T]

    def resolve(self, *args: Any) -> T:
        return self.fn(*args)


Constraint = Static[T] | Dynamic[T]


def resolve_constraint(constraint: Constraint[T] | None, *args: Any) -> T | None:
    """Resolve a possibly-absent constraint against the current write."""
    if constraint is None:
        return None
    return constraint.resolve(*args)


def constraint_field(default: Any = None, default_factory: Callable[[], Any] | None = None) -> Any:
    """Declare a dataclass field holding a Static/Dynamic constraint."""
    if default_factory is not None:
        return field(default_factory=default_factory, metadata={"constraint": True})
    return field(default=default, metadata={"constraint": True})


def _coerce_constraints(instance: Any) -> None:
    for f in fields(instance):
        if not f.metadata.get("constraint"):
            continue
        value = getattr(instance, f.name)
        if value is None or isinstance(value, (Static, Dynamic)):
            continue
        if callable(value):
            raise ConfigurationError(
                f"Constraint '{f.name}' of {type(instance).__name__} is a function; "
                "wrap it in Dynamic(...)"
            )
        object.__setattr__(instance, f.name, Static(value))


# Custom validation signature: (doc, old_doc, current_frame, ancestor_frames) -> messages
CustomValidation = Callable[
    [dict[str, Any], "dict[str, Any] | None", "ItemFrame", "tuple[ItemFrame, ...]"],
    "list[str] | str | None",
]

# Type filter signature: (doc, old_doc, doc_type) -> bool
TypeFilter = Callable[[dict[str, Any], "dict[str, Any] | None", str], bool]


# =============================================================================
# Property validators
# =============================================================================


@dataclass
class PropertyValidator:
    """Constraints shared by every property validator type.

    Not used directly; each concrete subclass stands for one data type.
    ``name`` is the property name for object properties and None for
    array elements and hashtable values.
    """

    type_name: ClassVar[str] = ""

    name: str | None = None
    required: Any = constraint_field()
    must_not_be_missing: Any = constraint_field()
    must_not_be_null: Any = constraint_field()
    immutable: Any = constraint_field()
    immutable_strict: Any = constraint_field()
    immutable_when_set: Any = constraint_field()
    immutable_when_set_strict: Any = constraint_field()
    must_not_be_empty: Any = constraint_field()
    minimum_value: Any = constraint_field()
    minimum_value_exclusive: Any = constraint_field()
    maximum_value: Any = constraint_field()
    maximum_value_exclusive: Any = constraint_field()
    minimum_length: Any = constraint_field()
    maximum_length: Any = constraint_field()
    must_equal: Any = constraint_field()
    must_equal_strict: Any = constraint_field()
    skip_validation_when_value_unchanged: Any = constraint_field()
    custom_validation: CustomValidation | None = None

    def __post_init__(self) -> None:
        _coerce_constraints(self)


@dataclass
class StringValidator(PropertyValidator):
    type_name: ClassVar[str] = "string"

    regex_pattern: Any = constraint_field()
    must_be_trimmed: Any = constraint_field()
    must_equal_ignore_case: Any = constraint_field()


@dataclass
class IntegerValidator(PropertyValidator):
    type_name: ClassVar[str] = "integer"


@dataclass
class FloatValidator(PropertyValidator):
    type_name: ClassVar[str] = "float"


@dataclass
class BooleanValidator(PropertyValidator):
    type_name: ClassVar[str] = "boolean"


@dataclass
class DateValidator(PropertyValidator):
    type_name: ClassVar[str] = "date"


@dataclass
class DateTimeValidator(PropertyValidator):
    type_name: ClassVar[str] = "datetime"


@dataclass
class TimeValidator(PropertyValidator):
    type_name: ClassVar[str] = "time"


@dataclass
class TimeZoneValidator(PropertyValidator):
    type_name: ClassVar[str] = "timezone"


@dataclass
class UuidValidator(PropertyValidator):
    type_name: ClassVar[str] = "uuid"


@dataclass
class EnumValidator(PropertyValidator):
    type_name: ClassVar[str] = "enum"

    predefined_values: Any = constraint_field()


@dataclass
class ObjectValidator(PropertyValidator):
    type_name: ClassVar[str] = "object"

    property_validators: Any = constraint_field()
    allow_unknown_properties: Any = constraint_field()


@dataclass
class ArrayValidator(PropertyValidator):
    type_name: ClassVar[str] = "array"

    array_elements_validator: Any = constraint_field()


@dataclass
class HashtableKeysValidator:
    """Constraints on the keys of a hashtable."""

    must_not_be_empty: Any = constraint_field()
    regex_pattern: Any = constraint_field()

    def __post_init__(self) -> None:
        _coerce_constraints(self)


@dataclass
class HashtableValidator(PropertyValidator):
    type_name: ClassVar[str] = "hashtable"

    hashtable_keys_validator: Any = constraint_field()
    hashtable_values_validator: Any = constraint_field()
    minimum_size: Any = constraint_field()
    maximum_size: Any = constraint_field()


@dataclass
class AttachmentReferenceValidator(PropertyValidator):
    type_name: ClassVar[str] = "attachmentReference"

    supported_extensions: Any = constraint_field()
    supported_content_types: Any = constraint_field()
    maximum_size: Any = constraint_field()
    regex_pattern: Any = constraint_field()


VALIDATOR_TYPES: dict[str, type[PropertyValidator]] = {
    cls.type_name: cls
    for cls in (
        StringValidator,
        IntegerValidator,
        FloatValidator,
        BooleanValidator,
        DateValidator,
        DateTimeValidator,
        TimeValidator,
        TimeZoneValidator,
        UuidValidator,
        EnumValidator,
        ObjectValidator,
        ArrayValidator,
        HashtableValidator,
        AttachmentReferenceValidator,
    )
}


# =============================================================================
# Document-level definitions
# =============================================================================


@dataclass
class AttachmentConstraints:
    """Whole-document limits on the ``_attachments`` collection."""

    maximum_attachment_count: Any = constraint_field()
    maximum_individual_size: Any = constraint_field()
    maximum_total_size: Any = constraint_field()
    supported_extensions: Any = constraint_field()
    supported_content_types: Any = constraint_field()
    require_attachment_references: Any = constraint_field()
    filename_regex_pattern: Any = constraint_field()

    def __post_init__(self) -> None:
        _coerce_constraints(self)


ACCESS_ASSIGNMENT_TYPES = ("channel", "role")


@dataclass
class AccessAssignment:
    """A grant computed at write time.

    type "channel": give ``users`` and ``roles`` access to ``channels``
    type "role": add ``users`` to ``roles``
    """

    type: str = "channel"
    channels: Any = constraint_field()
    roles: Any = constraint_field()
    users: Any = constraint_field()

    def __post_init__(self) -> None:
        if self.type not in ACCESS_ASSIGNMENT_TYPES:
            raise ConfigurationError(f"Unknown access assignment type: {self.type!r}")
        _coerce_constraints(self)


def simple_type_filter(
    doc: dict[str, Any], old_doc: dict[str, Any] | None, doc_type: str
) -> bool:
    """Match documents whose ``type`` property equals the document type id.

    On replace, both revisions must carry the type; on delete the old
    revision decides.
    """
    if old_doc:
        if doc.get("_deleted"):
            return old_doc.get("type") == doc_type
        return doc.get("type") == old_doc.get("type") == doc_type
    return doc.get("type") == doc_type


def type_id_validator() -> StringValidator:
    """Validator for the ``type`` property of documents matched by simple_type_filter."""
    return StringValidator(
        name="type",
        required=True,
        must_not_be_empty=True,
        immutable=True,
    )


@dataclass
class DocumentDefinition:
    """Everything syncgate knows about one document type.

    Authorization maps (``channels``, ``authorized_roles``,
    ``authorized_users``) use the keys "add", "replace", "remove" and
    "write" (plus "view" for channels); each value is a name or a list of
    names.
    """

    type_filter: TypeFilter
    property_validators: Any = constraint_field(default_factory=list)
    channels: Any = constraint_field()
    authorized_roles: Any = constraint_field()
    authorized_users: Any = constraint_field()
    immutable: Any = constraint_field()
    cannot_replace: Any = constraint_field()
    cannot_delete: Any = constraint_field()
    allow_unknown_properties: Any = constraint_field()
    document_id_regex_pattern: Any = constraint_field()
    allow_attachments: Any = constraint_field()
    attachment_constraints: Any = constraint_field()
    access_assignments: Any = constraint_field()
    expiry: Any = constraint_field()
    custom_actions: CustomActions = field(default_factory=CustomActions)

    def __post_init__(self) -> None:
        if not callable(self.type_filter):
            raise ConfigurationError("Document definition has no type filter")
        _coerce_constraints(self)


# Ordered mapping of document type id -> definition
DocumentDefinitions = dict[str, DocumentDefinition]
