"""Module resolution command.

This module provides the 'resolve' command, which replaces every module
imported by path with the content of the file it points to and writes the
self-contained manifest back in place.
"""

from pathlib import Path

import click

from fpcli.commands.base import command_context, document_label, handle_errors, load_buildable
from fpcli.manifest import codec
from fpcli.manifest.models import Application
from fpcli.services.module_resolver import resolve_application, resolve_module_document


@click.command("resolve")
@click.argument("path", type=click.Path(path_type=Path))
@click.option(
    "--check",
    "-c",
    is_flag=True,
    help="Only check that the imported manifests can be resolved",
)
@click.pass_context
@handle_errors
def resolve(ctx: click.Context, path: Path, check: bool) -> None:
    """Resolve all the imported manifests in a manifest file.

    PATH must be an application or module manifest. Nothing is written
    when a reference cannot be resolved.

    Examples:
        fpcli resolve org.gnome.Maps.json
        fpcli resolve --check org.gnome.Maps.json
    """
    cmd_ctx = command_context(ctx)
    config = cmd_ctx.config

    document = load_buildable(path)
    if isinstance(document, Application):
        document = resolve_application(path, document, config.resolver)
    else:
        document = resolve_module_document(path, document, config.resolver)

    if not check:
        codec.write_manifest(path, document, json_indent=config.codec.json_indent)

    click.echo(f"Resolved modules for {document_label(document)}.")


__all__ = ["resolve"]
