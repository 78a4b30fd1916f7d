from __future__ import annotations

from typing import Any, Dict, Mapping, Optional


class SafeglueError(Exception):
    """Base exception for safeglue."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class TemplateError(SafeglueError, ValueError):
    """Raised when a template cannot be rendered with the given values."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        SafeglueError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class TemplateSyntaxError(TemplateError):
    """Raised when template text is malformed."""

    def __init__(
        self,
        message: str,
        *,
        position: Optional[int] = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        if position is not None:
            ctx["position"] = position
            message = f"{message} (at offset {position})"
        super().__init__(message, context=ctx)
        self.position = position


class EscapeError(SafeglueError, ValueError):
    """Raised when a value cannot be safely escaped for the target dialect."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        SafeglueError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class UnsupportedValueError(EscapeError):
    """Raised when a value's type has no SQL representation."""


class UnknownDialectError(SafeglueError, LookupError):
    """Raised when a dialect name does not resolve to a known dialect."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        SafeglueError.__init__(self, message, context=context)
        LookupError.__init__(self, message)


class SecretNotFoundError(SafeglueError, LookupError):
    """Raised when a secret is not available from any source."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        SafeglueError.__init__(self, message, context=context)
        LookupError.__init__(self, message)


class ConfigError(SafeglueError):
    """Raised when configuration cannot be loaded or is invalid."""


__all__ = [
    "SafeglueError",
    "TemplateError",
    "TemplateSyntaxError",
    "EscapeError",
    "UnsupportedValueError",
    "UnknownDialectError",
    "SecretNotFoundError",
    "ConfigError",
]
