"""Manifest skeleton generator.

Builds minimal, valid application / module / source documents, optionally
seeded from the URL of the project's code.
"""

from enum import Enum
from typing import List, Optional, Union

import structlog

from fpcli.config.models import BootstrapConfig
from fpcli.exceptions import FpcliError
from fpcli.manifest.archive import get_project_name_from_url
from fpcli.manifest.models import Application, ManifestFormat, Module, Source, SourceType

logger = structlog.get_logger(__name__)

GIT_SUFFIX = ".git"


class ManifestType(str, Enum):
    """Kinds of manifest documents that can be bootstrapped."""

    APPLICATION = "application"
    MODULE = "module"
    SOURCE = "source"

    @classmethod
    def from_string(cls, value: str) -> "ManifestType":
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise FpcliError(
                f"Invalid manifest type {value!r}",
                error_code="INVALID_MANIFEST_TYPE",
                recovery_suggestion="Use one of: application, module, source",
            ) from None


def get_project_name_from_git_url(url: str) -> Optional[str]:
    """Return the project name of a git URL, or None when it has none.

    Example:
        >>> get_project_name_from_git_url("git@github.com:louib/flatpak-rs.git")
        'flatpak-rs'
    """
    if not url.endswith(GIT_SUFFIX):
        return None
    project_name = url[: -len(GIT_SUFFIX)].split("/")[-1]
    return project_name or None


class BootstrapGenerator:
    """Generates manifest skeletons from the configured defaults."""

    def __init__(self, config: Optional[BootstrapConfig] = None) -> None:
        self.config = config or BootstrapConfig()

    def bootstrap_source(self, url: Optional[str] = None) -> Source:
        """Build the source of a new module.

        No URL gives a local directory source; a URL ending in ``.git`` gives
        a git source on the default branch; anything else is an archive.
        """
        if url is None:
            return Source(type=SourceType.DIR, path="./")
        if url.endswith(GIT_SUFFIX):
            return Source(type=SourceType.GIT, url=url, branch=self.config.default_branch)
        return Source(type=SourceType.ARCHIVE, url=url)

    def bootstrap_module(self, url: Optional[str] = None) -> Module:
        """Build a module with one bootstrapped source, named after its project."""
        source = self.bootstrap_source(url)
        module = Module(sources=[source])

        if source.url is None:
            return module

        placeholder = f"{self.config.placeholder_project_name}.{self.config.default_branch}"
        if source.type == SourceType.GIT:
            project_name = get_project_name_from_git_url(source.url)
            if project_name:
                module.name = f"{project_name}.{self.config.default_branch}"
            else:
                module.name = placeholder
        elif source.type == SourceType.ARCHIVE:
            project_name = get_project_name_from_url(source.url)
            if project_name:
                module.name = f"{project_name}.archive"
            else:
                module.name = placeholder

        logger.debug("Bootstrapped module", name=module.name, source_type=source.type.value)
        return module

    def bootstrap_application(self, url: Optional[str] = None) -> Application:
        """Build an application holding one bootstrapped module."""
        return Application(
            id=self.config.app_id,
            runtime=self.config.runtime,
            runtime_version=self.config.runtime_version,
            sdk=self.config.sdk,
            finish_args=list(self.config.finish_args),
            modules=[self.bootstrap_module(url)],
        )

    def bootstrap(
        self,
        manifest_type: ManifestType = ManifestType.APPLICATION,
        url: Optional[str] = None,
        manifest_format: Optional[ManifestFormat] = None,
    ) -> Union[Application, Module, List[Source]]:
        """Build a skeleton of the requested kind in the requested format."""
        manifest_format = manifest_format or self.config.output_format

        document: Union[Application, Module, List[Source]]
        if manifest_type == ManifestType.APPLICATION:
            document = self.bootstrap_application(url)
            document.set_format(manifest_format)
        elif manifest_type == ManifestType.MODULE:
            document = self.bootstrap_module(url)
            document.set_format(manifest_format)
        else:
            source = self.bootstrap_source(url)
            source.set_format(manifest_format)
            document = [source]

        logger.info(
            "Bootstrapped manifest",
            manifest_type=manifest_type.value,
            url=url,
            format=manifest_format.value,
        )
        return document
