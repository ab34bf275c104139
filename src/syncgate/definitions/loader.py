"""Load document definitions from YAML files.

A definitions file maps document type ids to definitions under a
top-level ``definitions`` key. Keys are camelCase and mirror the
DocumentDefinition / PropertyValidator fields:

    definitions:
      notebook:
        typeFilter: simple
        channels:
          write: notebooks
        propertyValidators:
          - name: title
            type: string
            required: true
            maximumLength: 80
          - name: owner
            type: string
            immutable: true
            mustEqual: {function: currentOwner}

Callables are referenced by registered name (see FunctionRegistry). A
mapping whose only key is ``function`` turns any constraint into a
Dynamic one. Declaration order is preserved, both within a file and
across the files of a directory (sorted by filename).
"""

from __future__ import annotations

import logging
import re
from dataclasses import fields
from pathlib import Path
from typing import Any

import yaml

from syncgate.definitions.registry import FunctionRegistry
from syncgate.definitions.types import (
    VALIDATOR_TYPES,
    AccessAssignment,
    AttachmentConstraints,
    DocumentDefinition,
    DocumentDefinitions,
    Dynamic,
    HashtableKeysValidator,
    PropertyValidator,
    simple_type_filter,
)
from syncgate.errors import ConfigurationError
from syncgate.hooks.types import CustomActions, LifecycleEvent

logger = logging.getLogger(__name__)

SIMPLE_TYPE_FILTER = "simple"

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def to_snake_case(name: str) -> str:
    """documentIdRegexPattern -> document_id_regex_pattern"""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def is_function_reference(value: Any) -> bool:
    return isinstance(value, dict) and set(value) == {"function"}


def _field_names(cls: type) -> set[str]:
    return {f.name for f in fields(cls)}


class DefinitionsLoader:
    """Builds DocumentDefinitions from a YAML file or a directory of them."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self.definitions: DocumentDefinitions = {}

    def load(self) -> DocumentDefinitions:
        """Load every definition under ``path``.

        Raises:
            ConfigurationError: On a missing path, malformed definition,
                duplicate type id or unregistered function name
        """
        if self.path.is_dir():
            files = sorted(self.path.glob("*.yaml")) + sorted(self.path.glob("*.yml"))
        elif self.path.is_file():
            files = [self.path]
        else:
            raise ConfigurationError(f"Definitions path does not exist: {self.path}")

        for yaml_file in files:
            self._load_file(yaml_file)

        logger.info("Loaded %d document definition(s) from %s", len(self.definitions), self.path)
        return self.definitions

    def _load_file(self, yaml_file: Path) -> None:
        with open(yaml_file) as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigurationError(f"{yaml_file}: YAML parse error: {e}") from e

        if not data:
            return
        if not isinstance(data, dict) or not isinstance(data.get("definitions"), dict):
            raise ConfigurationError(f"{yaml_file}: expected a top-level 'definitions' mapping")

        for doc_type, definition_data in data["definitions"].items():
            if doc_type in self.definitions:
                raise ConfigurationError(f"{yaml_file}: duplicate document type '{doc_type}'")
            try:
                self.definitions[doc_type] = self.resolve_definition(definition_data)
            except ConfigurationError as e:
                raise ConfigurationError(f"{yaml_file}: document type '{doc_type}': {e}") from e

    # -------------------------------------------------------------------------
    # Document definitions
    # -------------------------------------------------------------------------

    def resolve_definition(self, data: dict[str, Any]) -> DocumentDefinition:
        """Convert one definition mapping into a DocumentDefinition."""
        if not isinstance(data, dict):
            raise ConfigurationError("definition must be a mapping")

        kwargs: dict[str, Any] = {}
        allowed = _field_names(DocumentDefinition)
        for key, value in data.items():
            name = to_snake_case(key)
            if name not in allowed:
                raise ConfigurationError(f"unknown definition property '{key}'")

            if name == "type_filter":
                kwargs[name] = self._resolve_type_filter(value)
            elif name == "custom_actions":
                kwargs[name] = self._resolve_custom_actions(value)
            elif name == "property_validators":
                kwargs[name] = self._resolve_validator_list(value)
            elif name == "attachment_constraints":
                kwargs[name] = self._resolve_nested(value, AttachmentConstraints)
            elif name == "access_assignments":
                kwargs[name] = self._resolve_access_assignments(value)
            else:
                kwargs[name] = self._resolve_constraint(value)

        if "type_filter" not in kwargs:
            raise ConfigurationError("definition has no typeFilter")
        return DocumentDefinition(**kwargs)

    def _resolve_type_filter(self, value: Any) -> Any:
        if value == SIMPLE_TYPE_FILTER:
            return simple_type_filter
        if not isinstance(value, str):
            raise ConfigurationError("typeFilter must be 'simple' or a registered function name")
        return FunctionRegistry.get(value)

    def _resolve_custom_actions(self, value: Any) -> CustomActions:
        if not isinstance(value, dict):
            raise ConfigurationError("customActions must be a mapping of event name to function name")
        events = {event.value: event for event in LifecycleEvent}
        kwargs: dict[str, Any] = {}
        for event_name, function_name in value.items():
            if event_name not in events:
                raise ConfigurationError(f"unknown custom action event '{event_name}'")
            kwargs[events[event_name].slot] = FunctionRegistry.get(function_name)
        return CustomActions(**kwargs)

    def _resolve_access_assignments(self, value: Any) -> Any:
        if is_function_reference(value):
            return self._resolve_constraint(value)
        if not isinstance(value, list):
            raise ConfigurationError("accessAssignments must be a list")
        return [self._resolve_nested(item, AccessAssignment) for item in value]

    # -------------------------------------------------------------------------
    # Property validators
    # -------------------------------------------------------------------------

    def _resolve_validator_list(self, value: Any) -> Any:
        if is_function_reference(value):
            return self._resolve_constraint(value)
        if not isinstance(value, list):
            raise ConfigurationError("propertyValidators must be a list")
        return [self.resolve_validator(item) for item in value]

    def resolve_validator(self, data: Any) -> PropertyValidator:
        """Convert a validator mapping into the matching PropertyValidator subclass."""
        if not isinstance(data, dict):
            raise ConfigurationError("property validator must be a mapping")

        type_name = data.get("type")
        validator_cls = VALIDATOR_TYPES.get(type_name)
        item = data.get("name", "<element>")
        if validator_cls is None:
            raise ConfigurationError(f'No data type defined for validator of item "{item}"')

        kwargs: dict[str, Any] = {}
        allowed = _field_names(validator_cls)
        for key, value in data.items():
            if key == "type":
                continue
            name = to_snake_case(key)
            if name not in allowed:
                raise ConfigurationError(f"unknown {type_name} validator property '{key}' on item \"{item}\"")

            if name == "name":
                kwargs[name] = value
            elif name == "custom_validation":
                kwargs[name] = FunctionRegistry.get(value)
            elif name == "property_validators":
                kwargs[name] = self._resolve_validator_list(value)
            elif name in ("array_elements_validator", "hashtable_values_validator"):
                kwargs[name] = (
                    self._resolve_constraint(value) if is_function_reference(value) else self.resolve_validator(value)
                )
            elif name == "hashtable_keys_validator":
                kwargs[name] = self._resolve_nested(value, HashtableKeysValidator)
            else:
                kwargs[name] = self._resolve_constraint(value)

        return validator_cls(**kwargs)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _resolve_constraint(self, value: Any) -> Any:
        if is_function_reference(value):
            return Dynamic(FunctionRegistry.get(value["function"]))
        return value

    def _resolve_nested(self, value: Any, cls: type) -> Any:
        """Build a constraint-holding dataclass (or a Dynamic producing one)."""
        if is_function_reference(value):
            return self._resolve_constraint(value)
        if not isinstance(value, dict):
            raise ConfigurationError(f"{cls.__name__} must be a mapping")

        allowed = _field_names(cls)
        kwargs: dict[str, Any] = {}
        for key, item in value.items():
            name = to_snake_case(key)
            if name not in allowed:
                raise ConfigurationError(f"unknown {cls.__name__} property '{key}'")
            kwargs[name] = item if name == "type" else self._resolve_constraint(item)
        return cls(**kwargs)


def load_definitions(path: Path) -> DocumentDefinitions:
    """Shortcut for DefinitionsLoader(path).load()."""
    return DefinitionsLoader(path).load()
