# src/neko/cli/utils.py

import logging

import click
import structlog
from attrs import define

from neko.config import NekoConfig
from neko.telemetry.logger import setup_logging as core_setup_logging

log = structlog.get_logger("cli.utils")

LOG_LEVEL_CHOICES = click.Choice(list(logging._nameToLevel.keys()), case_sensitive=False)

# Used when neither the command line nor a configuration names a level.
FALLBACK_LOG_LEVEL = "WARNING"


@define(frozen=True, slots=True)
class CliState:
    """Logging options given to the ``neko`` group, handed to every subcommand."""
    log_level: str | None = None
    log_file: str | None = None
    json_logs: bool = False


def logging_options(f):
    """Decorator adding the logging options to the ``neko`` group."""
    f = click.option(
        "-l",
        "--log-level",
        type=LOG_LEVEL_CHOICES,
        default=None,
        help="Set the logging level (overrides log_level from the config and NEKO_LOG_LEVEL).",
    )(f)
    f = click.option(
        "--log-file",
        type=click.Path(dir_okay=False, writable=True, resolve_path=True),
        default=None,
        envvar="NEKO_LOG_FILE",
        help="Path to write logs to a file (JSON format).",
    )(f)
    f = click.option(
        "--json-logs",
        is_flag=True,
        default=None,
        envvar="NEKO_JSON_LOGS",
        help="Output console logs as JSON.",
    )(f)
    return f


def resolve_log_level(state: CliState, config: NekoConfig | None = None) -> str:
    """
    Picks the level name a command logs at.

    ``--log-level`` wins; then the configuration's ``log_level``, which
    already carries any ``NEKO_LOG_LEVEL`` override; then WARNING.
    """
    if state.log_level:
        return state.log_level.upper()
    if config is not None:
        return config.log_level.upper()
    return FALLBACK_LOG_LEVEL


def configure_logging(state: CliState, config: NekoConfig | None = None) -> str:
    """Sets up logging for a command and returns the level name it used."""
    level_name = resolve_log_level(state, config)
    core_setup_logging(
        level=logging.getLevelName(level_name),
        json_logs=state.json_logs,
        log_file=state.log_file,
    )
    log.debug(
        "CLI logging initialized",
        level=level_name,
        source="option" if state.log_level else ("config" if config is not None else "fallback"),
        file=state.log_file or "console",
        json=state.json_logs,
    )
    return level_name

# ⚙️🛠️
