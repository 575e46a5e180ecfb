# src/neko/cli/main.py

"""
Main CLI entry point for neko using Click.
Collects the logging options every subcommand configures itself with.
"""

from importlib.metadata import PackageNotFoundError, version

import click
import structlog

from neko.cli.config_cmds import config_cli
from neko.cli.utils import CliState, logging_options
from neko.telemetry import StructLogger

try:
    __version__ = version("neko")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

log: StructLogger = structlog.get_logger("cli.main")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, "-V", "--version", package_name="neko")
@logging_options
@click.pass_context
def cli(
    ctx: click.Context,
    log_level: str | None,
    log_file: str | None,
    json_logs: bool | None,
):
    """
    Neko: a behavior-driven test organizer.

    Inspect the settings organizers and the pytest plugin will use.
    Log level precedence: --log-level > NEKO_LOG_LEVEL > log_level in the
    config file > WARNING.
    """
    # Logging is configured by the subcommand, once it knows the config.
    ctx.obj = CliState(log_level=log_level, log_file=log_file, json_logs=bool(json_logs))


cli.add_command(config_cli)

if __name__ == "__main__":
    cli()

# 🖥️⚙️
