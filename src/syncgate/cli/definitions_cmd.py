"""Definitions CLI commands."""

from pathlib import Path

import click

from syncgate.cli.common import functions_option, import_function_modules, resolve_definitions_path
from syncgate.definitions.loader import DefinitionsLoader
from syncgate.definitions.validator import validate_definitions_dir
from syncgate.errors import ConfigurationError


@click.group()
def definitions():
    """Document definition commands."""
    pass


@definitions.command()
@click.option(
    "--path",
    "target_path",
    default=None,
    type=click.Path(exists=True, path_type=Path),
    help="Definitions file or directory (default: SYNCGATE_DEFINITIONS_PATH or ./definitions).",
)
@functions_option
def validate(target_path: Path | None, function_modules: tuple[str, ...]):
    """Validate definitions YAML against the schema, then load it."""
    definitions_path = resolve_definitions_path(target_path)
    if not definitions_path.exists():
        click.echo(f"Error: Definitions not found at {definitions_path}", err=True)
        raise SystemExit(1)

    # ── Schema (JSON Schema) validation ─────────────────────────────────────
    issues = validate_definitions_dir(definitions_path)
    for issue in issues:
        click.echo(click.style(str(issue), fg="red"))

    if issues:
        click.echo(click.style(f"\n{len(issues)} schema error(s) found", fg="red", bold=True))
        raise SystemExit(1)

    # ── Semantic (loader) validation ─────────────────────────────────────────
    import_function_modules(function_modules)
    try:
        loaded = DefinitionsLoader(definitions_path).load()
    except ConfigurationError as e:
        click.echo(click.style(f"\nSemantic validation failed: {e}", fg="red"), err=True)
        raise SystemExit(1)

    click.echo(f"Loaded {len(loaded)} document type(s):")
    for doc_type, definition in loaded.items():
        validators = definition.property_validators
        count = len(validators.value) if hasattr(validators, "value") else "dynamic"
        click.echo(f"  ✓ {doc_type} ({count} property validators)")

    click.echo(click.style("\nAll definitions are valid.", fg="green", bold=True))
