"""
Services built on the manifest model: module resolution, tree printing,
skeleton generation, manifest discovery and URL collection.
"""

from .bootstrap import BootstrapGenerator, ManifestType
from .module_resolver import ModuleResolver, resolve_application, resolve_modules
from .tree_printer import build_rich_tree, print_tree, render_tree

__all__ = [
    "BootstrapGenerator",
    "ManifestType",
    "ModuleResolver",
    "build_rich_tree",
    "print_tree",
    "render_tree",
    "resolve_application",
    "resolve_modules",
]
