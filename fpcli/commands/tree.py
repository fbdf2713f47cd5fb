"""Module tree command."""

from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from fpcli.commands.base import command_context, document_label, handle_errors, load_buildable
from fpcli.manifest.models import Application
from fpcli.services.module_resolver import resolve_application, resolve_module_document
from fpcli.services.tree_printer import build_rich_tree, print_tree


@click.command("tree")
@click.argument("path", type=click.Path(path_type=Path))
@click.option(
    "--resolve",
    "-r",
    "resolve_refs",
    is_flag=True,
    help="Also resolve the imported manifests",
)
@click.option(
    "--max-depth",
    "-m",
    type=click.IntRange(min=0),
    default=None,
    help="Do not print modules deeper than this (default: tree.max_depth, 1000)",
)
@click.option("--rich", "use_rich", is_flag=True, help="Draw the tree with rich")
@click.pass_context
@handle_errors
def tree(
    ctx: click.Context,
    path: Path,
    resolve_refs: bool,
    max_depth: Optional[int],
    use_rich: bool,
) -> None:
    """Print the modules of a manifest in a tree-like structure.

    Examples:
        fpcli tree org.gnome.Maps.json
        fpcli tree --resolve --max-depth 2 org.gnome.Maps.json
    """
    config = command_context(ctx, cli_args={"tree": {"max_depth": max_depth}}).config
    max_depth = config.tree.max_depth

    document = load_buildable(path)
    if resolve_refs:
        if isinstance(document, Application):
            document = resolve_application(path, document, config.resolver)
        else:
            document = resolve_module_document(path, document, config.resolver)

    label = document_label(document)
    if use_rich:
        Console().print(build_rich_tree(label, document.modules, max_depth))
        return

    click.echo(label)
    print_tree(document.modules, 0, max_depth)


__all__ = ["tree"]
