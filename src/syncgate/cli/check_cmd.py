"""Run a single document write through the sync function."""

import json
from pathlib import Path

import click

from syncgate.cli.common import functions_option, import_function_modules, resolve_definitions_path
from syncgate.definitions.loader import DefinitionsLoader
from syncgate.errors import ConfigurationError, ForbiddenError
from syncgate.host import SessionHost
from syncgate.sync_function import SyncFunction


def _read_json(path: Path) -> dict:
    try:
        with open(path) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise click.ClickException(f"{path}: invalid JSON: {e}")
    if not isinstance(data, dict):
        raise click.ClickException(f"{path}: expected a JSON object")
    return data


@click.command()
@click.argument("doc_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--definitions",
    "definitions_path",
    default=None,
    type=click.Path(exists=True, path_type=Path),
    help="Definitions file or directory (default: SYNCGATE_DEFINITIONS_PATH or ./definitions).",
)
@click.option(
    "--old-doc",
    "old_doc_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON file holding the current revision of the document.",
)
@click.option("--user", default=None, help="Name of the user performing the write.")
@click.option("--role", "roles", multiple=True, help="Role held by the user (repeatable).")
@click.option("--channel", "channels", multiple=True, help="Channel the user can access (repeatable).")
@click.option("--admin", is_flag=True, default=False, help="Write through the admin API.")
@functions_option
def check(
    doc_path: Path,
    definitions_path: Path | None,
    old_doc_path: Path | None,
    user: str | None,
    roles: tuple[str, ...],
    channels: tuple[str, ...],
    admin: bool,
    function_modules: tuple[str, ...],
):
    """Check whether a document write would be accepted."""
    import_function_modules(function_modules)
    try:
        loaded = DefinitionsLoader(resolve_definitions_path(definitions_path)).load()
    except ConfigurationError as e:
        raise click.ClickException(str(e))

    doc = _read_json(doc_path)
    old_doc = _read_json(old_doc_path) if old_doc_path else None
    host = SessionHost(user=user, roles=roles, channels=channels, admin=admin)

    try:
        metadata = SyncFunction(loaded)(doc, old_doc, host)
    except ForbiddenError as e:
        click.echo(click.style(f"Rejected: {e.forbidden}", fg="red"))
        raise SystemExit(1)
    except ConfigurationError as e:
        raise click.ClickException(f"Definition error: {e}")

    doc_type = metadata.document_type_id or "unknown type"
    click.echo(click.style(f"Accepted ({doc_type})", fg="green", bold=True))
    click.echo(f"Channels: {', '.join(metadata.document_channels or []) or '(none)'}")
    for grant in host.access_calls:
        click.echo(f"Access: {', '.join(grant[0])} -> {', '.join(grant[1])}")
    for grant in host.role_calls:
        click.echo(f"Roles: {', '.join(grant[0])} -> {', '.join(grant[1])}")
    if metadata.expiry_date is not None:
        click.echo(f"Expires: {metadata.expiry_date.isoformat()}")
