"""Module insertion command.

This module provides the 'add-module' command, which appends a module to an
application or module manifest, either imported by path or inlined.
"""

import os
from pathlib import Path

import click

from fpcli.commands.base import command_context, document_label, handle_errors, load_buildable
from fpcli.manifest import codec
from fpcli.manifest.models import ModulePath


@click.command("add-module")
@click.argument("manifest_path", type=click.Path(path_type=Path))
@click.argument("module_path", type=click.Path(path_type=Path))
@click.option(
    "--inline",
    "-i",
    is_flag=True,
    help="Inline the module instead of importing it by path",
)
@click.pass_context
@handle_errors
def add_module(
    ctx: click.Context, manifest_path: Path, module_path: Path, inline: bool
) -> None:
    """Add a module to a Flatpak manifest.

    The target must be an application or module manifest. By default the
    module is imported by its path relative to the target manifest, so the
    reference resolves from where the manifest lives.

    Examples:
        fpcli add-module org.gnome.Maps.json shared-modules/libsecret.json
        fpcli add-module --inline org.gnome.Maps.json libfoo.yaml
    """
    config = command_context(ctx).config
    document = load_buildable(manifest_path)

    if inline:
        module = codec.load_module(module_path)
        document.modules.append(module)
    else:
        codec.load_module(module_path)
        reference = Path(os.path.relpath(module_path, manifest_path.parent)).as_posix()
        document.modules.append(ModulePath(reference))

    codec.write_manifest(manifest_path, document, json_indent=config.codec.json_indent)
    click.echo(f"Added module {module_path} to {document_label(document)}.")


__all__ = ["add_module"]
