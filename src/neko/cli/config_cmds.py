# src/neko/cli/config_cmds.py

from pathlib import Path

import click
import structlog
from rich.pretty import pretty_repr

from neko.cli.utils import CliState, configure_logging
from neko.config import load_config
from neko.exceptions import ConfigurationError
from neko.telemetry import StructLogger

log: StructLogger = structlog.get_logger("cli.config")


@click.group(name="config")
def config_cli():
    """Commands for inspecting and validating configuration."""
    pass


@config_cli.command(name="show")
@click.option(
    "-c",
    "--config-path",
    type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True, path_type=Path),
    default=None,
    envvar="NEKO_CONF",
    help="Path to a pyproject.toml or neko TOML file (env var NEKO_CONF). "
    "Defaults to ./pyproject.toml when present.",
    show_envvar=True,
)
@click.pass_context
def show_config(ctx: click.Context, config_path: Path | None):
    """Load, validate, and display the configuration."""
    state = ctx.find_object(CliState) or CliState()
    if config_path is None:
        config_path = Path("pyproject.toml")

    try:
        config = load_config(config_path)
    except ConfigurationError as e:
        configure_logging(state)
        log.error("Failed to load or validate configuration", error=str(e))
        click.echo(f"Error: Configuration problem in '{config_path}':\n{e}", err=True)
        ctx.exit(1)

    level = configure_logging(state, config)
    log.info(
        "Configuration loaded",
        config_path=str(config_path),
        log_level=level,
        verify_scope=config.verify_scope.value,
    )
    click.echo(pretty_repr(config, expand_all=True))

# 🔼⚙️
