"""Manifest conversion command."""

from pathlib import Path

import click

from fpcli.commands.base import command_context, handle_errors
from fpcli.manifest import codec


@click.command("convert")
@click.argument("path", type=click.Path(path_type=Path))
@click.argument("format_name", metavar="FORMAT")
@click.pass_context
@handle_errors
def convert(ctx: click.Context, path: Path, format_name: str) -> None:
    """Print a manifest converted to another format (json or yaml).

    Examples:
        fpcli convert org.gnome.Maps.json yaml
    """
    config = command_context(ctx).config
    manifest_format = codec.parse_format(format_name)
    document = codec.load_manifest(path)
    click.echo(
        codec.dumps(document, manifest_format, json_indent=config.codec.json_indent),
        nl=False,
    )


__all__ = ["convert"]
