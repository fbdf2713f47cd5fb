"""Manifest skeleton command.

This module provides the 'bootstrap' command, which prints a minimal
manifest built from the bootstrap defaults of the configuration.
"""

from typing import Optional

import click

from fpcli.commands.base import command_context, handle_errors
from fpcli.manifest import codec
from fpcli.services.bootstrap import BootstrapGenerator, ManifestType


@click.command("bootstrap")
@click.option(
    "--manifest-type",
    "-m",
    type=click.Choice([t.value for t in ManifestType], case_sensitive=False),
    default=ManifestType.APPLICATION.value,
    show_default=True,
    help="Type of manifest to bootstrap",
)
@click.option("--url", "-u", default=None, help="URL of the project's code")
@click.option(
    "--format",
    "-f",
    "format_name",
    type=click.Choice(["json", "yaml", "yml"], case_sensitive=False),
    default=None,
    help="Output format (default: bootstrap.output_format, yaml)",
)
@click.pass_context
@handle_errors
def bootstrap(
    ctx: click.Context,
    manifest_type: str,
    url: Optional[str],
    format_name: Optional[str],
) -> None:
    """Create a new manifest from the available information.

    Git URLs (ending in .git) give a git source on the default branch,
    other URLs an archive source, and no URL a local directory source.

    Examples:
        fpcli bootstrap
        fpcli bootstrap --url https://github.com/louib/fpcli.git
        fpcli bootstrap --manifest-type module --format json --url https://example.org/foo-1.0.tar.gz
    """
    manifest_format = codec.parse_format(format_name) if format_name else None
    config = command_context(
        ctx, cli_args={"bootstrap": {"output_format": manifest_format}}
    ).config
    manifest_format = config.bootstrap.output_format

    generator = BootstrapGenerator(config.bootstrap)
    document = generator.bootstrap(ManifestType.from_string(manifest_type), url, manifest_format)

    click.echo(
        codec.dumps(document, manifest_format, json_indent=config.codec.json_indent),
        nl=False,
    )


__all__ = ["bootstrap"]
