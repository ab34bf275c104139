"""Recursive validation of document contents against property validators.

The walker descends the document and the validator tree together,
carrying an immutable ItemStack so every message names the exact path
of the offending item (e.g. ``objectProp.arrayProp[2].key``). Every
violation is collected; nothing short-circuits except a misconfigured
validator, which raises ConfigurationError.
"""

import re
from typing import Any, Callable

from syncgate.core.types import (
    MISSING,
    RESERVED_PROPERTIES,
    get_item,
    is_value_null_or_missing,
)
from syncgate.definitions.types import (
    ArrayValidator,
    AttachmentReferenceValidator,
    BooleanValidator,
    DateTimeValidator,
    DateValidator,
    DocumentDefinition,
    EnumValidator,
    FloatValidator,
    HashtableKeysValidator,
    HashtableValidator,
    IntegerValidator,
    ObjectValidator,
    PropertyValidator,
    StringValidator,
    TimeValidator,
    TimeZoneValidator,
    UuidValidator,
    resolve_constraint,
    simple_type_filter,
    type_id_validator,
)
from syncgate.errors import ConfigurationError
from syncgate.validation import comparison, iso8601, messages
from syncgate.validation.attachments import as_pattern, validate_attachment_reference
from syncgate.validation.context import ValidationContext
from syncgate.validation.item_stack import ItemStack

UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


def is_integer_value(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and value.is_integer()


def is_number_value(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _length_of(value: Any) -> int | None:
    if isinstance(value, (str, list, dict)):
        return len(value)
    return None


def _plain(value: Any) -> Any:
    return None if value is MISSING else value


class PropertiesValidator:
    """Validates the contents of one document against its definition."""

    def __init__(self, ctx: ValidationContext):
        self.ctx = ctx
        self._type_handlers: dict[type[PropertyValidator], Callable[[ItemStack, Any], None]] = {
            StringValidator: self._validate_string,
            IntegerValidator: self._validate_integer,
            FloatValidator: self._validate_float,
            BooleanValidator: self._validate_boolean,
            DateTimeValidator: self._validate_datetime,
            DateValidator: self._validate_date,
            TimeValidator: self._validate_time,
            TimeZoneValidator: self._validate_timezone,
            UuidValidator: self._validate_uuid,
            EnumValidator: self._validate_enum,
            ObjectValidator: self._validate_object,
            ArrayValidator: self._validate_array,
            HashtableValidator: self._validate_hashtable,
            AttachmentReferenceValidator: self._validate_attachment_reference,
        }

    def validate_document(self, definition: DocumentDefinition) -> None:
        """Walk the whole document, starting at its root properties."""
        doc, old_doc = self.ctx.doc, self.ctx.old_doc
        validators = list(resolve_constraint(definition.property_validators, doc, old_doc) or [])

        if definition.type_filter is simple_type_filter and not any(
            getattr(v, "name", None) == "type" for v in validators
        ):
            validators.append(type_id_validator())

        self._validate_object_properties(
            ItemStack.root(doc, old_doc),
            validators,
            resolve_constraint(definition.allow_unknown_properties, doc, old_doc),
            is_root=True,
        )

    # -------------------------------------------------------------------------
    # Tree walking
    # -------------------------------------------------------------------------

    def _resolve(self, stack: ItemStack, constraint: Any) -> Any:
        frame = stack.current
        return resolve_constraint(
            constraint,
            self.ctx.doc,
            self.ctx.old_doc,
            _plain(frame.item_value),
            _plain(frame.old_item_value),
        )

    def _validate_object_properties(
        self,
        stack: ItemStack,
        validators: list[PropertyValidator],
        allow_unknown_properties: bool | None,
        is_root: bool = False,
    ) -> None:
        frame = stack.current
        object_value = frame.item_value
        old_object_value = frame.old_item_value

        supported: set[str] = set()
        for validator in validators:
            if validator is None:
                continue
            if not isinstance(validator, PropertyValidator):
                raise ConfigurationError(f"Invalid property validator under item \"{stack.path}\": {validator!r}")
            if not validator.name:
                raise ConfigurationError(
                    f'Property validator of item "{stack.path}" has no property name'
                )
            supported.add(validator.name)
            self._validate_item(
                stack.push(
                    validator.name,
                    get_item(object_value, validator.name),
                    get_item(old_object_value, validator.name),
                ),
                validator,
            )

        if allow_unknown_properties:
            return

        for property_name in object_value:
            if is_root and property_name in RESERVED_PROPERTIES:
                continue
            if property_name not in supported:
                self.ctx.add_error(messages.unsupported_property(stack.child_path(property_name)))

    def _validate_item(self, stack: ItemStack, validator: PropertyValidator) -> None:
        if not isinstance(validator, PropertyValidator):
            raise ConfigurationError(f'No data type defined for validator of item "{stack.path}"')

        ctx = self.ctx
        frame = stack.current
        value = frame.item_value
        type_name = validator.type_name or None

        if (
            ctx.is_replace
            and self._resolve(stack, validator.skip_validation_when_value_unchanged)
            and comparison.check_item_equality(value, frame.old_item_value, type_name)
        ):
            return

        if validator.custom_validation is not None:
            ctx.add_errors(
                validator.custom_validation(ctx.doc, ctx.old_doc, frame, stack.ancestors)
            )

        if ctx.is_replace:
            if self._resolve(stack, validator.immutable):
                ctx.add_error(comparison.validate_immutable(stack, False, type_name))
            if self._resolve(stack, validator.immutable_strict):
                ctx.add_error(comparison.validate_immutable(stack, False, None, strict=True))
            if self._resolve(stack, validator.immutable_when_set):
                ctx.add_error(comparison.validate_immutable(stack, True, type_name))
            if self._resolve(stack, validator.immutable_when_set_strict):
                ctx.add_error(comparison.validate_immutable(stack, True, None, strict=True))

        if validator.must_equal is not None:
            ctx.add_error(comparison.validate_equality(
                stack, self._resolve(stack, validator.must_equal), type_name
            ))
        if validator.must_equal_strict is not None:
            ctx.add_error(comparison.validate_equality(
                stack, self._resolve(stack, validator.must_equal_strict), None, strict=True
            ))

        if is_value_null_or_missing(value):
            if self._resolve(stack, validator.required):
                ctx.add_error(messages.required_value_violation(stack.path))
            elif self._resolve(stack, validator.must_not_be_missing) and value is MISSING:
                ctx.add_error(messages.must_not_be_missing_violation(stack.path))
            elif self._resolve(stack, validator.must_not_be_null) and value is None:
                ctx.add_error(messages.must_not_be_null_violation(stack.path))
            return

        self._validate_present_value(stack, validator, type_name)

        handler = self._find_type_handler(validator)
        if handler is None:
            raise ConfigurationError(f'No data type defined for validator of item "{stack.path}"')
        handler(stack, validator)

    def _find_type_handler(self, validator: PropertyValidator) -> Callable[[ItemStack, Any], None] | None:
        for cls in type(validator).__mro__:
            handler = self._type_handlers.get(cls)
            if handler is not None:
                return handler
        return None

    def _validate_present_value(self, stack: ItemStack, validator: PropertyValidator, type_name: str | None) -> None:
        ctx = self.ctx
        value = stack.current.item_value
        length = _length_of(value)

        if self._resolve(stack, validator.must_not_be_empty) and length is not None and length < 1:
            ctx.add_error(messages.must_not_be_empty_violation(stack.path))

        minimum = self._resolve(stack, validator.minimum_value)
        if minimum is not None:
            ctx.add_error(comparison.validate_minimum_value(stack, minimum, type_name))

        minimum_exclusive = self._resolve(stack, validator.minimum_value_exclusive)
        if minimum_exclusive is not None:
            ctx.add_error(comparison.validate_minimum_value_exclusive(stack, minimum_exclusive, type_name))

        maximum = self._resolve(stack, validator.maximum_value)
        if maximum is not None:
            ctx.add_error(comparison.validate_maximum_value(stack, maximum, type_name))

        maximum_exclusive = self._resolve(stack, validator.maximum_value_exclusive)
        if maximum_exclusive is not None:
            ctx.add_error(comparison.validate_maximum_value_exclusive(stack, maximum_exclusive, type_name))

        minimum_length = self._resolve(stack, validator.minimum_length)
        if minimum_length is not None and length is not None and length < minimum_length:
            ctx.add_error(messages.minimum_length_violation(stack.path, minimum_length))

        maximum_length = self._resolve(stack, validator.maximum_length)
        if maximum_length is not None and length is not None and length > maximum_length:
            ctx.add_error(messages.maximum_length_violation(stack.path, maximum_length))

    # -------------------------------------------------------------------------
    # Type handlers
    # -------------------------------------------------------------------------

    def _type_error(self, stack: ItemStack, type_name: str) -> None:
        self.ctx.add_error(messages.type_constraint_violation(stack.path, type_name))

    def _validate_string(self, stack: ItemStack, validator: StringValidator) -> None:
        value = stack.current.item_value
        if not isinstance(value, str):
            self._type_error(stack, "string")
            return

        pattern = as_pattern(self._resolve(stack, validator.regex_pattern))
        if pattern is not None and not pattern.search(value):
            self.ctx.add_error(messages.regex_pattern_item_violation(stack.path, pattern))

        if self._resolve(stack, validator.must_be_trimmed) and value != value.strip():
            self.ctx.add_error(messages.must_be_trimmed_violation(stack.path))

        expected = self._resolve(stack, validator.must_equal_ignore_case)
        if expected is not None and value.lower() != str(expected).lower():
            self.ctx.add_error(messages.must_equal_ignore_case_violation(stack.path, expected))

    def _validate_integer(self, stack: ItemStack, validator: IntegerValidator) -> None:
        if not is_integer_value(stack.current.item_value):
            self._type_error(stack, "integer")

    def _validate_float(self, stack: ItemStack, validator: FloatValidator) -> None:
        if not is_number_value(stack.current.item_value):
            self._type_error(stack, "float")

    def _validate_boolean(self, stack: ItemStack, validator: BooleanValidator) -> None:
        if not isinstance(stack.current.item_value, bool):
            self._type_error(stack, "boolean")

    def _validate_datetime(self, stack: ItemStack, validator: DateTimeValidator) -> None:
        if not iso8601.is_iso8601_datetime_string(stack.current.item_value):
            self._type_error(stack, "datetime")

    def _validate_date(self, stack: ItemStack, validator: DateValidator) -> None:
        if not iso8601.is_iso8601_date_string(stack.current.item_value):
            self._type_error(stack, "date")

    def _validate_time(self, stack: ItemStack, validator: TimeValidator) -> None:
        if not iso8601.is_iso8601_time_string(stack.current.item_value):
            self._type_error(stack, "time")

    def _validate_timezone(self, stack: ItemStack, validator: TimeZoneValidator) -> None:
        if not iso8601.is_iso8601_timezone_string(stack.current.item_value):
            self._type_error(stack, "timezone")

    def _validate_uuid(self, stack: ItemStack, validator: UuidValidator) -> None:
        value = stack.current.item_value
        if not isinstance(value, str) or not UUID_PATTERN.match(value):
            self._type_error(stack, "uuid")

    def _validate_enum(self, stack: ItemStack, validator: EnumValidator) -> None:
        predefined_values = self._resolve(stack, validator.predefined_values)
        if not isinstance(predefined_values, (list, tuple)):
            raise ConfigurationError(
                f'item "{stack.path}" belongs to an enum that has no predefined values'
            )
        value = stack.current.item_value
        if not any(comparison.check_item_equality(value, candidate) for candidate in predefined_values):
            self.ctx.add_error(messages.enum_predefined_value_violation(stack.path, list(predefined_values)))

    def _validate_object(self, stack: ItemStack, validator: ObjectValidator) -> None:
        if not isinstance(stack.current.item_value, dict):
            self._type_error(stack, "object")
            return

        child_validators = self._resolve(stack, validator.property_validators)
        if child_validators is not None:
            self._validate_object_properties(
                stack,
                list(child_validators),
                self._resolve(stack, validator.allow_unknown_properties),
            )

    def _validate_array(self, stack: ItemStack, validator: ArrayValidator) -> None:
        frame = stack.current
        value = frame.item_value
        if not isinstance(value, list):
            self._type_error(stack, "array")
            return

        element_validator = self._resolve(stack, validator.array_elements_validator)
        if element_validator is None:
            return

        for index, element in enumerate(value):
            self._validate_item(
                stack.push(f"[{index}]", element, get_item(frame.old_item_value, index)),
                element_validator,
            )

    def _validate_hashtable(self, stack: ItemStack, validator: HashtableValidator) -> None:
        ctx = self.ctx
        frame = stack.current
        value = frame.item_value
        if not isinstance(value, dict):
            self._type_error(stack, "hashtable")
            return

        hashtable_path = stack.path
        keys_validator: HashtableKeysValidator | None = self._resolve(stack, validator.hashtable_keys_validator)
        values_validator: PropertyValidator | None = self._resolve(stack, validator.hashtable_values_validator)

        for key, element in value.items():
            element_name = f"[{key}]"
            if keys_validator is not None:
                self._validate_hashtable_key(stack, keys_validator, key, hashtable_path + element_name)

            if values_validator is not None:
                self._validate_item(
                    stack.push(element_name, element, get_item(frame.old_item_value, key)),
                    values_validator,
                )

        maximum_size = self._resolve(stack, validator.maximum_size)
        if maximum_size is not None and len(value) > maximum_size:
            ctx.add_error(messages.hashtable_maximum_size_violation(hashtable_path, maximum_size))

        minimum_size = self._resolve(stack, validator.minimum_size)
        if minimum_size is not None and len(value) < minimum_size:
            ctx.add_error(messages.hashtable_minimum_size_violation(hashtable_path, minimum_size))

    def _validate_hashtable_key(
        self,
        stack: ItemStack,
        keys_validator: HashtableKeysValidator,
        key: Any,
        key_path: str,
    ) -> None:
        if not isinstance(key, str):
            self.ctx.add_error(messages.hashtable_key_not_string(key_path))
            return

        if self._resolve(stack, keys_validator.must_not_be_empty) and not key:
            self.ctx.add_error(messages.hashtable_key_empty(stack.path))

        pattern = as_pattern(self._resolve(stack, keys_validator.regex_pattern))
        if pattern is not None and not pattern.search(key):
            self.ctx.add_error(messages.hashtable_key_format_invalid(key_path, pattern))

    def _validate_attachment_reference(self, stack: ItemStack, validator: AttachmentReferenceValidator) -> None:
        validate_attachment_reference(
            self.ctx, stack, validator, lambda constraint: self._resolve(stack, constraint)
        )
