"""
Command-line interface for fpcli.

Builds the ``fpcli`` click group, applies the global options and registers
every command module under ``fpcli.commands``.
"""

from pathlib import Path
from typing import Optional

import click
from dotenv import load_dotenv

from fpcli import __version__
from fpcli.commands.add_module import add_module
from fpcli.commands.bootstrap import bootstrap
from fpcli.commands.config import config
from fpcli.commands.convert import convert
from fpcli.commands.lint import lint
from fpcli.commands.ls import ls
from fpcli.commands.manifest_info import get_type, get_urls, parse
from fpcli.commands.resolve import resolve
from fpcli.commands.reverse_dns import is_reverse_dns, to_reverse_dns
from fpcli.commands.tree import tree
from fpcli.logging_config import LOG_LEVELS, configure_logging

# Always load .env if present
load_dotenv()


@click.group()
@click.version_option(__version__, prog_name="fpcli")
@click.option(
    "--log-level",
    default="INFO",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Logging level (DEBUG, INFO, WARNING, ERROR)",
)
@click.option(
    "--debug",
    is_flag=True,
    help="Enable debug output (same as --log-level DEBUG)",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Configuration file (default: ~/.config/fpcli/config.yaml)",
)
@click.pass_context
def cli(
    ctx: click.Context, log_level: str, debug: bool, config_path: Optional[Path]
) -> None:
    """A CLI app for Flatpak manifests."""
    ctx.ensure_object(dict)
    ctx.obj["log_level"] = "DEBUG" if debug else log_level.upper()
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = config_path

    configure_logging(ctx.obj["log_level"])


# Manifest editing
cli.add_command(resolve)
cli.add_command(lint)
cli.add_command(add_module)
cli.add_command(bootstrap)

# Manifest inspection
cli.add_command(tree)
cli.add_command(parse)
cli.add_command(get_type)
cli.add_command(get_urls)
cli.add_command(convert)
cli.add_command(ls)

# Naming helpers
cli.add_command(to_reverse_dns)
cli.add_command(is_reverse_dns)

cli.add_command(config)


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
