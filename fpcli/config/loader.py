"""
Configuration loader for fpcli.

Handles loading from multiple sources with proper priority:
CLI Args > Environment Variables > Config File > Defaults
"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from fpcli.exceptions import ConfigError

from .models import FpcliConfig


class ConfigLoader:
    """
    Loads and merges configuration from multiple sources.

    Priority order (highest to lowest):
    1. CLI arguments (passed directly to methods)
    2. Environment variables (FPCLI_*)
    3. Configuration file
    4. Default values
    """

    DEFAULT_CONFIG_DIR = Path.home() / ".config" / "fpcli"
    DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.yaml"
    ENV_PREFIX = "FPCLI_"
    CONFIG_PATH_ENV = "FPCLI_CONFIG_PATH"

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize configuration loader.

        Args:
            config_path: Path to configuration file. If None, uses default location.
        """
        self.config_path = config_path or self._get_config_path_from_env()

    @classmethod
    def _get_config_path_from_env(cls) -> Path:
        """Get configuration path from environment variable or default."""
        env_path = os.environ.get(cls.CONFIG_PATH_ENV)
        if env_path:
            return Path(env_path).expanduser()
        return cls.DEFAULT_CONFIG_FILE

    def load(self) -> FpcliConfig:
        """
        Load configuration from all sources and merge.

        Returns:
            Validated FpcliConfig object

        Raises:
            ConfigError: If configuration is invalid
        """
        config_dict: dict[str, Any] = {}

        if self.config_path.exists():
            file_config = self._load_file(self.config_path)
            config_dict = self._deep_merge(config_dict, file_config)

        env_config = self._load_from_env()
        config_dict = self._deep_merge(config_dict, env_config)

        try:
            return FpcliConfig.model_validate(config_dict)
        except ValidationError as e:
            raise ConfigError(
                f"Configuration validation failed: {e}",
                context={"config_path": str(self.config_path)},
                cause=e,
            ) from e

    def _load_file(self, path: Path) -> dict[str, Any]:
        """
        Load configuration from YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            Configuration dictionary

        Raises:
            ConfigError: If file cannot be read or parsed
        """
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}", cause=e) from e
        except OSError as e:
            raise ConfigError(f"Cannot read config file {path}: {e}", cause=e) from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")
        return data

    def _load_from_env(self) -> dict[str, Any]:
        """
        Load configuration from environment variables.

        Environment variable format:
        - FPCLI_BOOTSTRAP__DEFAULT_BRANCH
        - FPCLI_RESOLVER__MAX_DEPTH
        - FPCLI_TREE__MAX_DEPTH
        - FPCLI_CODEC__JSON_INDENT

        Double underscore (__) separates nested keys.

        Returns:
            Configuration dictionary
        """
        config: dict[str, Any] = {}

        for key, value in os.environ.items():
            if not key.startswith(self.ENV_PREFIX) or key == self.CONFIG_PATH_ENV:
                continue

            config_key = key[len(self.ENV_PREFIX) :].lower()
            parts = config_key.split("__")

            current = config
            for part in parts[:-1]:
                if part not in current:
                    current[part] = {}
                current = current[part]

            current[parts[-1]] = self._convert_env_value(value)

        return config

    def _convert_env_value(self, value: str) -> Any:
        """
        Convert environment variable string to appropriate type.

        Scalars stay strings and are coerced by pydantic; values written as
        a YAML flow sequence (``[a, b]``) become lists.
        """
        stripped = value.strip()
        if stripped.startswith("[") and stripped.endswith("]"):
            try:
                return yaml.safe_load(stripped)
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid list value in environment: {value}") from e
        return value

    def _deep_merge(
        self, base: dict[str, Any], update: dict[str, Any]
    ) -> dict[str, Any]:
        """
        Deep merge two dictionaries.

        Args:
            base: Base dictionary
            update: Dictionary with updates

        Returns:
            Merged dictionary (base is not modified)
        """
        result = base.copy()

        for key, value in update.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def merge_cli_args(
        self,
        config: FpcliConfig,
        cli_args: dict[str, Any],
    ) -> FpcliConfig:
        """
        Merge CLI arguments into configuration.

        CLI arguments have highest priority and override all other sources.

        Args:
            config: Base configuration
            cli_args: CLI arguments to merge (non-None values only)

        Returns:
            New FpcliConfig with CLI args applied
        """
        filtered_args = self._filter_none_values(cli_args)

        if not filtered_args:
            return config

        config_dict = config.model_dump()
        config_dict = self._deep_merge(config_dict, filtered_args)

        try:
            return FpcliConfig.model_validate(config_dict)
        except ValidationError as e:
            raise ConfigError(f"Invalid command-line configuration: {e}", cause=e) from e

    def _filter_none_values(self, data: dict[str, Any]) -> dict[str, Any]:
        """Recursively filter out None values from a dictionary."""
        result = {}
        for key, value in data.items():
            if value is None:
                continue
            elif isinstance(value, dict):
                filtered = self._filter_none_values(value)
                if filtered:
                    result[key] = filtered
            else:
                result[key] = value
        return result

    def create_default_config(self, force: bool = False) -> Path:
        """
        Create default configuration file with comments.

        Args:
            force: Overwrite existing file if True

        Returns:
            Path to created configuration file

        Raises:
            ConfigError: If file exists and force=False
        """
        if self.config_path.exists() and not force:
            raise ConfigError(
                f"Configuration file already exists at {self.config_path}. "
                "Use force=True to overwrite."
            )

        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            with open(self.config_path, "w", encoding="utf-8") as f:
                f.write(self._get_default_config_yaml())
        except OSError as e:
            raise ConfigError(
                f"Cannot write config file {self.config_path}: {e}", cause=e
            ) from e

        return self.config_path

    def _get_default_config_yaml(self) -> str:
        """
        Get default configuration as commented YAML.

        Returns:
            YAML string with inline documentation
        """
        return """\
# fpcli - Flatpak manifest tool configuration
# ===========================================

# Manifest skeleton generation (fpcli bootstrap)
bootstrap:
  # Branch recorded on git sources and used in derived module names
  default_branch: master

  # Project name used when none can be derived from the URL
  placeholder_project_name: project-name

  # Application defaults
  app_id: org.example.appName
  runtime: org.gnome.Platform
  runtime_version: "41"
  sdk: org.gnome.Sdk
  finish_args:
    - --filesystem=home
    - --socket=x11
    - --socket=wayland

  # Format bootstrapped manifests are printed in: yaml or json
  output_format: yaml

# Module reference resolution (fpcli resolve, fpcli tree --resolve)
resolver:
  # Deepest module nesting allowed before resolution aborts
  max_depth: 64

  # Fail when a manifest file is loaded again by one of its own modules
  detect_cycles: true

# Module tree display (fpcli tree)
tree:
  # Modules nested deeper than this are not printed
  max_depth: 1000

# Manifest serialization
codec:
  # Number of spaces used to indent JSON manifests
  json_indent: 4
"""


def load_config(
    config_path: Optional[Path] = None,
    cli_args: Optional[dict[str, Any]] = None,
) -> FpcliConfig:
    """
    Convenience function to load configuration.

    Args:
        config_path: Path to configuration file
        cli_args: CLI arguments to merge (highest priority)

    Returns:
        Validated FpcliConfig object

    Raises:
        ConfigError: If configuration is invalid
    """
    loader = ConfigLoader(config_path)
    config = loader.load()

    if cli_args:
        config = loader.merge_cli_args(config, cli_args)

    return config


def create_default_config(
    config_path: Optional[Path] = None,
    force: bool = False,
) -> Path:
    """
    Create default configuration file.

    Args:
        config_path: Path to configuration file
        force: Overwrite existing file if True

    Returns:
        Path to created configuration file

    Raises:
        ConfigError: If file exists and force=False
    """
    loader = ConfigLoader(config_path)
    return loader.create_default_config(force=force)
