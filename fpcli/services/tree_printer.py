"""Module tree printer.

Renders a module forest as an indented hierarchy:

    ↪ gtk
      ↪ glib
    ↪ shared-modules/libsecret.json

Inline modules show their name, unresolved path references show the raw
path. Nodes at ``max_depth`` are still shown; only their children are cut.
"""

from typing import Callable, List, Optional, Sequence

import click
from rich.markup import escape
from rich.tree import Tree

from fpcli.manifest.models import Module, ModulePath, ModuleReference

DEFAULT_MAX_DEPTH = 1000
INDENT = "  "
CONNECTOR = "↪ "


def _label(ref: ModuleReference) -> str:
    if isinstance(ref, Module):
        return ref.name
    if isinstance(ref, ModulePath):
        return ref.root
    raise TypeError(f"Unsupported module reference type: {type(ref).__name__}")


def render_tree(
    refs: Sequence[ModuleReference],
    depth: int = 0,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> List[str]:
    """Return the tree lines for ``refs`` in pre-order."""
    if depth > max_depth:
        return []

    lines: List[str] = []
    indent = INDENT * depth
    for ref in refs:
        lines.append(f"{indent}{CONNECTOR}{_label(ref)}")
        if isinstance(ref, Module):
            lines.extend(render_tree(ref.modules, depth + 1, max_depth))
    return lines


def print_tree(
    refs: Sequence[ModuleReference],
    depth: int = 0,
    max_depth: int = DEFAULT_MAX_DEPTH,
    echo: Optional[Callable[[str], None]] = None,
) -> None:
    """Print the module tree, one line per module reference."""
    echo = echo or click.echo
    for line in render_tree(refs, depth, max_depth):
        echo(line)


def build_rich_tree(
    label: str,
    refs: Sequence[ModuleReference],
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Tree:
    """Build a rich Tree with the same depth bound as ``render_tree``."""
    root = Tree(f"[bold]{escape(label)}[/bold]")
    _add_rich_branches(root, refs, 0, max_depth)
    return root


def _add_rich_branches(
    parent: Tree, refs: Sequence[ModuleReference], depth: int, max_depth: int
) -> None:
    if depth > max_depth:
        return
    for ref in refs:
        if isinstance(ref, Module):
            branch = parent.add(f"[cyan]{escape(ref.name)}[/cyan]")
            _add_rich_branches(branch, ref.modules, depth + 1, max_depth)
        else:
            parent.add(f"[dim]{escape(_label(ref))}[/dim]")
