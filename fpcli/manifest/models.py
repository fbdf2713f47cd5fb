"""
Manifest object model.

Pydantic models for Flatpak application, module and source documents.
Module and source lists hold tagged references: a ``ModulePath`` /
``SourcePath`` pointing at another manifest file, or an inline ``Module`` /
``Source`` description. Keys the models do not declare are kept verbatim so
a manifest can be written back without losing anything.
"""

from enum import Enum
from typing import Any, List, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    RootModel,
    SerializerFunctionWrapHandler,
    model_serializer,
    model_validator,
)


class ManifestFormat(str, Enum):
    """Text formats a manifest can be read from and written to."""

    YAML = "yaml"
    JSON = "json"


class BuildSystem(str, Enum):
    """Build systems understood by flatpak-builder."""

    MESON = "meson"
    CMAKE = "cmake"
    CMAKE_NINJA = "cmake-ninja"
    AUTOTOOLS = "autotools"
    QMAKE = "qmake"
    SIMPLE = "simple"


class SourceType(str, Enum):
    """Kinds of module sources."""

    ARCHIVE = "archive"
    GIT = "git"
    BZR = "bzr"
    SVN = "svn"
    DIR = "dir"
    FILE = "file"
    SCRIPT = "script"
    INLINE = "inline"
    SHELL = "shell"
    PATCH = "patch"
    EXTRA_DATA = "extra-data"


class ManifestModel(BaseModel):
    """Common behaviour of every manifest document.

    Unset values and empty lists are left out of the serialized form, which
    keeps the canonical output free of noise such as ``"modules": []``.
    """

    model_config = ConfigDict(
        extra="allow", populate_by_name=True, coerce_numbers_to_str=True
    )

    _format: ManifestFormat = PrivateAttr(default=ManifestFormat.YAML)

    @property
    def manifest_format(self) -> ManifestFormat:
        """Format the document was loaded from, or will be dumped in."""
        return self._format

    def set_format(self, manifest_format: ManifestFormat) -> None:
        self._format = manifest_format

    @model_serializer(mode="wrap")
    def serialize_without_empty(self, handler: SerializerFunctionWrapHandler) -> Any:
        data = handler(self)
        return {
            key: value
            for key, value in data.items()
            if value is not None and not (isinstance(value, (list, dict)) and not value)
        }


class SourcePath(RootModel[str]):
    """A source imported from another manifest file."""

    def __str__(self) -> str:
        return self.root


class ModulePath(RootModel[str]):
    """A module imported from another manifest file."""

    def __str__(self) -> str:
        return self.root


class Source(ManifestModel):
    """Description of how to obtain the code of a module."""

    type: Optional[SourceType] = None
    url: Optional[str] = None
    mirror_urls: List[str] = Field(default_factory=list, alias="mirror-urls")
    path: Optional[str] = None
    branch: Optional[str] = None
    tag: Optional[str] = None
    commit: Optional[str] = None
    sha256: Optional[str] = None
    dest: Optional[str] = None

    # Set when the source was the whole document rather than a list item.
    _single_document: bool = PrivateAttr(default=False)


SourceReference = Union[SourcePath, Source]


class Module(ManifestModel):
    """A named buildable unit, possibly with nested sub-modules."""

    name: str = ""
    buildsystem: Optional[BuildSystem] = None
    config_opts: List[str] = Field(default_factory=list, alias="config-opts")
    build_commands: List[str] = Field(default_factory=list, alias="build-commands")
    cleanup: List[str] = Field(default_factory=list)
    sources: List[Union[SourcePath, Source]] = Field(default_factory=list)
    modules: List[Union[ModulePath, "Module"]] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_simple_build_commands(self) -> "Module":
        """The simple build system has nothing to run without build-commands."""
        if self.buildsystem == BuildSystem.SIMPLE and not self.build_commands:
            raise ValueError("Buildsystem simple requires build-commands.")
        return self


ModuleReference = Union[ModulePath, Module]


class Application(ManifestModel):
    """Top-level application manifest."""

    id: Optional[str] = None
    app_id: Optional[str] = Field(default=None, alias="app-id")
    runtime: Optional[str] = None
    runtime_version: Optional[str] = Field(default=None, alias="runtime-version")
    sdk: Optional[str] = None
    command: Optional[str] = None
    finish_args: List[str] = Field(default_factory=list, alias="finish-args")
    modules: List[Union[ModulePath, Module]] = Field(default_factory=list)

    def get_id(self) -> str:
        """Return the application id, whichever key declared it."""
        return self.id or self.app_id or ""


Module.model_rebuild()


__all__ = [
    "Application",
    "BuildSystem",
    "ManifestFormat",
    "ManifestModel",
    "Module",
    "ModulePath",
    "ModuleReference",
    "Source",
    "SourcePath",
    "SourceReference",
    "SourceType",
]
