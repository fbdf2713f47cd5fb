"""
Configuration management for fpcli.

Provides type-safe configuration loading and validation with support
for multiple configuration sources and priority-based merging.
"""

from fpcli.exceptions import ConfigError

from .loader import ConfigLoader, create_default_config, load_config
from .models import (
    BootstrapConfig,
    CodecConfig,
    FpcliConfig,
    ResolverConfig,
    TreeConfig,
)

__all__ = [
    "BootstrapConfig",
    "CodecConfig",
    "ConfigError",
    "ConfigLoader",
    "FpcliConfig",
    "ResolverConfig",
    "TreeConfig",
    "create_default_config",
    "load_config",
]
