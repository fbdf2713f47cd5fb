"""Manifest inspection commands.

This module provides commands that report on a manifest without changing it:
- 'parse': parse a manifest and summarize what it contains
- 'get-type': print the kind of manifest a file holds
- 'get-urls': print the URLs of the sources of a manifest
"""

from pathlib import Path
from typing import List, Optional, Union

import click

from fpcli.commands.base import exit_with_error, handle_errors
from fpcli.manifest import codec
from fpcli.manifest.models import Application, Module, Source, SourceType
from fpcli.services.url_collector import collect_urls


def manifest_kind(document: Union[Application, Module, List[Source]]) -> str:
    if isinstance(document, Application):
        return "application"
    if isinstance(document, Module):
        return "module"
    return "source"


@click.command("parse")
@click.argument("path", type=click.Path(path_type=Path))
@handle_errors
def parse(path: Path) -> None:
    """Parse a Flatpak manifest."""
    document = codec.load_manifest(path)
    if isinstance(document, Application):
        click.echo(f"Parsed Flatpak application manifest for {document.get_id()}.")
    elif isinstance(document, Module):
        click.echo(f"Parsed Flatpak module manifest for {document.name}.")
    else:
        click.echo(f"Parsed {len(document)} Flatpak source(s) from file.")


@click.command("get-type")
@click.argument("path", type=click.Path(path_type=Path))
@handle_errors
def get_type(path: Path) -> None:
    """Print the type of a manifest: application, module or source."""
    if not path.is_file():
        exit_with_error(f"{path} is not a file.")
    click.echo(manifest_kind(codec.load_manifest(path)))


@click.command("get-urls")
@click.argument("path", type=click.Path(path_type=Path))
@click.argument(
    "source_type",
    required=False,
    type=click.Choice([t.value for t in SourceType], case_sensitive=False),
)
@click.option(
    "--mirror-urls",
    "-m",
    is_flag=True,
    help="Also include the mirror urls",
)
@handle_errors
def get_urls(path: Path, source_type: Optional[str], mirror_urls: bool) -> None:
    """Get all the urls contained in a manifest.

    SOURCE_TYPE only includes the URLs of sources of that type. Modules
    imported by path are not followed; run 'fpcli resolve' first to include
    them.

    Examples:
        fpcli get-urls org.gnome.Maps.json
        fpcli get-urls org.gnome.Maps.json git --mirror-urls
    """
    source_types = [SourceType(source_type.lower())] if source_type else None
    document = codec.load_manifest(path)
    for url in collect_urls(document, mirror_urls, source_types):
        click.echo(url)


__all__ = ["get_type", "get_urls", "manifest_kind", "parse"]
