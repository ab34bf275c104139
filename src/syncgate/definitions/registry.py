"""Function registry for syncgate definitions.

Definitions loaded from YAML cannot hold Python callables, so type
filters, dynamic constraints, custom validations and custom actions are
referenced by name. Every such name must be registered before the
definitions that use it are loaded.
"""

from collections.abc import Callable
from typing import Any

from syncgate.errors import ConfigurationError

DefinitionFn = Callable[..., Any]


class FunctionRegistry:
    """Registry of callables referenced by name from definition files.

    Registration is typically done at import time with the
    @definition_function decorator.

    Example:
        @definition_function("ownerChannels")
        def owner_channels(doc, old_doc):
            return {"write": [f"owner-{doc['owner']}"]}
    """

    _functions: dict[str, DefinitionFn] = {}

    @classmethod
    def register(cls, name: str, fn: DefinitionFn) -> None:
        """Register a function by name.

        Re-registering a name replaces the previous function, so a
        module reloaded during development picks up its new code.

        Args:
            name: Identifier used in definition files
            fn: The callable
        """
        cls._functions[name] = fn

    @classmethod
    def get(cls, name: str) -> DefinitionFn:
        """Get a registered function by name.

        Raises:
            ConfigurationError: If no function is registered under the name
        """
        if name not in cls._functions:
            raise ConfigurationError(
                f"Function '{name}' is not registered. "
                "Functions referenced from definitions must be registered before loading."
            )
        return cls._functions[name]

    @classmethod
    def is_registered(cls, name: str) -> bool:
        """Check if a function is registered."""
        return name in cls._functions

    @classmethod
    def list_registered(cls) -> list[str]:
        """List all registered function names."""
        return sorted(cls._functions.keys())

    @classmethod
    def clear(cls) -> None:
        """Clear all registrations. Primarily for testing."""
        cls._functions.clear()


def definition_function(name: str) -> Callable[[DefinitionFn], DefinitionFn]:
    """Decorator to register a function for use in definition files.

    Usage:
        @definition_function("isNotebook")
        def is_notebook(doc, old_doc, doc_type):
            return doc["_id"].startswith("notebook.")
    """

    def decorator(fn: DefinitionFn) -> DefinitionFn:
        FunctionRegistry.register(name, fn)
        return fn

    return decorator
