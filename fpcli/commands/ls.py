"""Manifest listing command."""

from pathlib import Path

import click

from fpcli.commands.base import handle_errors
from fpcli.services.manifest_discovery import list_application_paths


@click.command("ls")
@click.argument(
    "path",
    required=False,
    default=".",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@handle_errors
def ls(path: Path) -> None:
    """List all the Flatpak application manifests in a directory.

    Files under .git directories are skipped.
    """
    for manifest_path in list_application_paths(path):
        click.echo(f"Flatpak application at {manifest_path}.")


__all__ = ["ls"]
