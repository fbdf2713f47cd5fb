"""Base command infrastructure and shared utilities.

This module provides common utilities used across command modules:
- CommandContext for shared command execution context
- handle_errors to turn fpcli errors into a one-line message and exit 1
- Helpers to load the manifests a command works on
"""

import functools
import sys
from pathlib import Path
from typing import Any, Callable, Dict, NoReturn, Optional, TypeVar, Union

import click
import structlog

from fpcli.config import FpcliConfig, load_config
from fpcli.exceptions import FpcliError, ManifestParseError
from fpcli.manifest import codec
from fpcli.manifest.models import Application, Module

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


class CommandContext:
    """Shared context for command execution."""

    def __init__(
        self,
        ctx: click.Context,
        debug: bool = False,
        log_level: str = "INFO",
        config_path: Optional[Path] = None,
        cli_args: Optional[Dict[str, Any]] = None,
    ):
        self.click_ctx = ctx
        self.debug = debug
        self.log_level = log_level
        self.config_path = config_path
        self.cli_args = cli_args or {}
        self._config: Optional[FpcliConfig] = None

    @property
    def config(self) -> FpcliConfig:
        """Configuration, loaded on first use.

        Command options in ``cli_args`` override the environment and the
        configuration file; options left unset (None) do not.
        """
        if self._config is None:
            self._config = load_config(self.config_path, cli_args=self.cli_args)
        return self._config


def command_context(
    ctx: click.Context, cli_args: Optional[Dict[str, Any]] = None
) -> CommandContext:
    """Create CommandContext from click context and the command's config options."""
    obj = ctx.obj or {}
    return CommandContext(
        ctx=ctx,
        debug=obj.get("debug", False),
        log_level=obj.get("log_level", "INFO"),
        config_path=obj.get("config_path"),
        cli_args=cli_args,
    )


def format_error(error: FpcliError) -> str:
    """One-line description of an error: the message, then its cause."""
    cause = error.cause
    if cause is None:
        return error.message
    if isinstance(cause, FpcliError):
        return f"{error.message}: {format_error(cause)}"
    return f"{error.message}: {cause}"


def exit_with_error(message: str, code: int = 1) -> NoReturn:
    """Exit with error message."""
    click.echo(f"Error: {message}", err=True)
    sys.exit(code)


def handle_errors(f: F) -> F:
    """Report any FpcliError raised by a command and exit with status 1."""

    @functools.wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return f(*args, **kwargs)
        except FpcliError as e:
            logger.debug("Command failed", **e.to_dict())
            exit_with_error(format_error(e))

    return wrapper  # type: ignore[return-value]


def load_buildable(path: Union[str, Path]) -> Union[Application, Module]:
    """Load a manifest that holds modules: an application or a module.

    Raises:
        ManifestParseError: If the file is a source manifest
    """
    document = codec.load_manifest(path)
    if isinstance(document, (Application, Module)):
        return document
    raise ManifestParseError(
        f"{path} is a source manifest, expected an application or module manifest",
        path=str(path),
    )


def document_label(document: Union[Application, Module]) -> str:
    """The id of an application, the name of a module."""
    if isinstance(document, Application):
        return document.get_id()
    return document.name


__all__ = [
    "CommandContext",
    "command_context",
    "document_label",
    "exit_with_error",
    "format_error",
    "handle_errors",
    "load_buildable",
]
