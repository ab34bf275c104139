"""syncgate CLI entry point."""

import click

from syncgate.config import SyncGateConfig

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@click.group()
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Override SYNCGATE_LOG_LEVEL.",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None):
    """syncgate — document write validation CLI."""
    config = SyncGateConfig.from_env()
    if log_level:
        config.log_level = log_level.upper()
    try:
        config.configure_logging()
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="SYNCGATE_LOG_LEVEL")
    ctx.obj = config


# Register subcommands
from syncgate.cli.check_cmd import check  # noqa: E402
from syncgate.cli.definitions_cmd import definitions  # noqa: E402

cli.add_command(definitions)
cli.add_command(check)
