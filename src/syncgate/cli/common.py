"""Helpers shared by CLI commands."""

import importlib
from pathlib import Path

import click

from syncgate.config import SyncGateConfig

functions_option = click.option(
    "--functions",
    "function_modules",
    multiple=True,
    help="Module to import before loading, registering the functions definitions refer to.",
)


def import_function_modules(modules: tuple[str, ...]) -> None:
    """Import modules whose @definition_function decorators register callables."""
    for module in modules:
        try:
            importlib.import_module(module)
        except ImportError as e:
            raise click.ClickException(f"Cannot import functions module '{module}': {e}")


def resolve_definitions_path(target_path: Path | None) -> Path:
    if target_path is not None:
        return target_path
    config = click.get_current_context().find_object(SyncGateConfig)
    return config.definitions_path if config else SyncGateConfig.from_env().definitions_path
