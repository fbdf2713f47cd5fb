"""
Configuration models for fpcli.

Provides type-safe configuration using pydantic with validation,
defaults, and schema enforcement. The bootstrap defaults that used to be
hard-coded constants live here so they can be injected in tests.
"""

from typing import Annotated, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from fpcli.manifest.models import ManifestFormat


class BootstrapConfig(BaseModel):
    """Defaults used when generating new manifest skeletons."""

    default_branch: str = Field(
        default="master",
        description="Branch recorded on bootstrapped git sources",
    )
    placeholder_project_name: str = Field(
        default="project-name",
        description="Project name used when none can be derived from the URL",
    )
    app_id: str = Field(
        default="org.example.appName",
        description="Application id of bootstrapped application manifests",
    )
    runtime: str = Field(default="org.gnome.Platform")
    runtime_version: str = Field(default="41")
    sdk: str = Field(default="org.gnome.Sdk")
    finish_args: List[str] = Field(
        default_factory=lambda: [
            "--filesystem=home",
            "--socket=x11",
            "--socket=wayland",
        ],
        description="Sandbox permissions of bootstrapped applications",
    )
    output_format: ManifestFormat = Field(
        default=ManifestFormat.YAML,
        description="Format bootstrapped manifests are printed in",
    )

    model_config = ConfigDict(extra="forbid")

    @field_validator("default_branch", "placeholder_project_name")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Branch and placeholder names end up in module names."""
        if not v.strip():
            raise ValueError("must not be blank")
        return v


class ResolverConfig(BaseModel):
    """Limits applied while resolving module references."""

    max_depth: Annotated[int, Field(ge=1, le=10000)] = Field(
        default=64,
        description="Deepest module nesting allowed before resolution aborts",
    )
    detect_cycles: bool = Field(
        default=True,
        description="Fail when a manifest file is re-entered on the same branch",
    )

    model_config = ConfigDict(extra="forbid")


class TreeConfig(BaseModel):
    """Settings for the module tree printer."""

    max_depth: Annotated[int, Field(ge=0)] = Field(
        default=1000,
        description="Modules nested deeper than this are not printed",
    )

    model_config = ConfigDict(extra="forbid")


class CodecConfig(BaseModel):
    """Settings for manifest serialization."""

    json_indent: Annotated[int, Field(ge=0, le=8)] = Field(
        default=4,
        description="Number of spaces used to indent JSON manifests",
    )

    model_config = ConfigDict(extra="forbid")


class FpcliConfig(BaseModel):
    """
    Root configuration model for fpcli.

    Example:
        >>> config = FpcliConfig()
        >>> config.bootstrap.default_branch
        'master'
    """

    bootstrap: BootstrapConfig = Field(default_factory=BootstrapConfig)
    resolver: ResolverConfig = Field(default_factory=ResolverConfig)
    tree: TreeConfig = Field(default_factory=TreeConfig)
    codec: CodecConfig = Field(default_factory=CodecConfig)

    model_config = ConfigDict(extra="forbid")
