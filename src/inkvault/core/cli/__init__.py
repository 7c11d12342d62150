"""inkvault CLI — entry point for journal, password, move, and export commands."""

import click

from inkvault import __version__
from inkvault.core.config import Config
from inkvault.core.exceptions import ConfigurationError
from inkvault.core.utils.logging import setup_logging

from .common import DEFAULT_CONFIG_PATH, fail


@click.group()
@click.version_option(version=__version__, package_name="inkvault")
@click.option(
    "--config",
    "config_file",
    envvar="INKVAULT_CONFIG",
    default=str(DEFAULT_CONFIG_PATH),
    show_default=True,
    help="YAML or JSON config file.",
)
@click.option("-v", "--verbose", is_flag=True, help="Log at DEBUG level.")
@click.pass_context
def main(ctx: click.Context, config_file: str, verbose: bool) -> None:
    """inkvault — an encrypted journal, one file per day."""
    config = Config(config_file=config_file)
    level = "DEBUG" if verbose else config.get("logging.level", "WARNING")
    try:
        setup_logging(level=level, log_file=config.get("logging.file") or None)
    except ConfigurationError as e:
        fail(str(e))
    ctx.obj = config


# Register subcommands
from .entry_cmd import list_cmd, new, read, verify, write
from .export_cmd import export
from .move_cmd import move
from .passwd_cmd import passwd

main.add_command(list_cmd)
main.add_command(read)
main.add_command(write)
main.add_command(new)
main.add_command(verify)
main.add_command(passwd)
main.add_command(move)
main.add_command(export)
