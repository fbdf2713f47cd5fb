"""
Custom Exception Hierarchy for fpcli

This module provides the exception hierarchy shared by the manifest codec,
the module resolver and the command layer. Every error carries a message,
an optional error code, context and the underlying cause so the CLI can
report the offending path together with what went wrong.
"""

from typing import Any, Dict, Optional


class FpcliError(Exception):
    """
    Base exception class for all fpcli related errors.

    Provides structured error information including context, error codes,
    and optional recovery suggestions.
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        recovery_suggestion: Optional[str] = None,
    ) -> None:
        """
        Initialize the base exception.

        Args:
            message: Human-readable error message
            error_code: Optional error code for programmatic handling
            context: Optional dictionary with error context
            cause: Optional underlying exception that caused this error
            recovery_suggestion: Optional suggestion for error recovery
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}
        self.cause = cause
        self.recovery_suggestion = recovery_suggestion

    def __str__(self) -> str:
        """Return a formatted error message with context."""
        result = self.message
        if self.error_code:
            result = f"[{self.error_code}] {result}"
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            result += f" (context: {context_str})"
        if self.cause:
            result += f" (caused by: {self.cause})"
        if self.recovery_suggestion:
            result += f" (suggestion: {self.recovery_suggestion})"
        return result

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "context": self.context,
            "cause": str(self.cause) if self.cause else None,
            "recovery_suggestion": self.recovery_suggestion,
        }


# Manifest codec exceptions
class ManifestError(FpcliError):
    """Base class for errors raised while reading or writing manifests."""

    def __init__(
        self, message: str, path: Optional[str] = None, **kwargs: Any
    ) -> None:
        context = kwargs.get("context", {})
        if path:
            context["path"] = path
        kwargs["context"] = context
        super().__init__(message, **kwargs)
        self.path = path


class ManifestNotFoundError(ManifestError):
    """Raised when a manifest file does not exist or cannot be read."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        kwargs.setdefault("error_code", "NOT_FOUND")
        super().__init__(message, **kwargs)


class ManifestParseError(ManifestError):
    """Raised when manifest content is malformed or is not the expected kind."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        kwargs.setdefault("error_code", "PARSE_ERROR")
        super().__init__(message, **kwargs)


class ManifestSerializationError(ManifestError):
    """Raised when a manifest cannot be turned back into text."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        kwargs.setdefault("error_code", "SERIALIZATION_ERROR")
        super().__init__(message, **kwargs)


# Resolution exceptions
class ResolutionError(FpcliError):
    """Raised when a module reference cannot be resolved.

    Wraps the ManifestNotFoundError or ManifestParseError that stopped the
    resolution and records the reference string that triggered the load.
    """

    def __init__(
        self,
        message: str,
        reference: Optional[str] = None,
        path: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        context = kwargs.get("context", {})
        if reference:
            context["reference"] = reference
        if path:
            context["path"] = path
        kwargs["context"] = context
        kwargs.setdefault("error_code", "RESOLUTION_ERROR")
        super().__init__(message, **kwargs)
        self.reference = reference
        self.path = path


class CycleDetectedError(ResolutionError):
    """Raised when a manifest file references itself, directly or not."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        kwargs.setdefault("error_code", "CYCLE_DETECTED")
        kwargs.setdefault(
            "recovery_suggestion",
            "Remove the module reference that points back to an ancestor manifest",
        )
        super().__init__(message, **kwargs)


class ResolutionDepthError(ResolutionError):
    """Raised when module nesting goes deeper than the configured limit."""

    def __init__(self, message: str, max_depth: Optional[int] = None, **kwargs: Any) -> None:
        context = kwargs.get("context", {})
        if max_depth is not None:
            context["max_depth"] = max_depth
        kwargs["context"] = context
        kwargs.setdefault("error_code", "RESOLUTION_DEPTH_EXCEEDED")
        kwargs.setdefault(
            "recovery_suggestion",
            "Raise resolver.max_depth in the fpcli configuration",
        )
        super().__init__(message, **kwargs)


# Configuration exceptions
class ConfigError(FpcliError):
    """Configuration loading or validation error."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        kwargs.setdefault("error_code", "CONFIG_ERROR")
        super().__init__(message, **kwargs)


__all__ = [
    "ConfigError",
    "CycleDetectedError",
    "FpcliError",
    "ManifestError",
    "ManifestNotFoundError",
    "ManifestParseError",
    "ManifestSerializationError",
    "ResolutionDepthError",
    "ResolutionError",
]
