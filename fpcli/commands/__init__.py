"""fpcli commands.

Each module holds one command, or a few closely related ones, and is
registered on the main group in ``fpcli.cli``.
"""

# Re-export from base for convenience
from .base import (
    CommandContext,
    command_context,
    document_label,
    exit_with_error,
    format_error,
    handle_errors,
    load_buildable,
)

__all__ = [
    "CommandContext",
    "command_context",
    "document_label",
    "exit_with_error",
    "format_error",
    "handle_errors",
    "load_buildable",
]
