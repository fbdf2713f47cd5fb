"""Manifest formatting command.

This module provides the 'lint' command, which rewrites a manifest in the
canonical form produced by the codec, or only reports whether it already
is in that form.
"""

import sys
from pathlib import Path

import click
import structlog

from fpcli.commands.base import command_context, handle_errors
from fpcli.manifest import codec

logger = structlog.get_logger(__name__)


@click.command("lint")
@click.argument("path", type=click.Path(path_type=Path))
@click.option(
    "--check",
    "-c",
    is_flag=True,
    help="Only check the manifest for formatting issues",
)
@click.pass_context
@handle_errors
def lint(ctx: click.Context, path: Path, check: bool) -> None:
    """Format a Flatpak manifest.

    With --check, exits with status 0 when the file is already formatted
    and 1 when it is not, without writing anything.

    Examples:
        fpcli lint org.gnome.Maps.json
        fpcli lint --check org.gnome.Maps.json
    """
    config = command_context(ctx).config

    initial_content = codec.read_text(path)
    document = codec.load_manifest(path)
    formatted = codec.dumps(
        document, codec.detect_format(path), json_indent=config.codec.json_indent
    )

    if check:
        if formatted == initial_content:
            click.echo("The file is formatted correctly.")
            return
        click.echo(f"There are formatting issues with {path}.", err=True)
        sys.exit(1)

    if formatted == initial_content:
        logger.info("Manifest already formatted", path=str(path))
        return

    codec.write_manifest(path, document, json_indent=config.codec.json_indent)
    click.echo(f"Formatted {path}.")


__all__ = ["lint"]
