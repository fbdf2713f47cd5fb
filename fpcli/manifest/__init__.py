"""
Flatpak manifest object model and codec.

Exposes the pydantic document models, the JSON/YAML codec and the small
naming helpers (archive project names, reverse DNS ids) built on them.
"""

from .codec import (
    ManifestDocument,
    detect_format,
    dumps,
    load_application,
    load_manifest,
    load_module,
    load_sources,
    parse_format,
    write_manifest,
)
from .models import (
    Application,
    BuildSystem,
    ManifestFormat,
    Module,
    ModulePath,
    ModuleReference,
    Source,
    SourcePath,
    SourceReference,
    SourceType,
)

__all__ = [
    "Application",
    "BuildSystem",
    "ManifestDocument",
    "ManifestFormat",
    "Module",
    "ModulePath",
    "ModuleReference",
    "Source",
    "SourcePath",
    "SourceReference",
    "SourceType",
    "detect_format",
    "dumps",
    "load_application",
    "load_manifest",
    "load_module",
    "load_sources",
    "parse_format",
    "write_manifest",
]
