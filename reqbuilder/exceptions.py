"""Custom exceptions for reqbuilder.

All reqbuilder-specific exceptions inherit from ReqBuilderError for unified
error handling. Dispatch outcomes never raise: transport and parse failures are
reported through the result state instead.
"""

from __future__ import annotations

from typing import Any


class ReqBuilderError(Exception):
    """Base exception for all reqbuilder errors.

    Attributes:
        message: Human-readable error description
        context: Optional dictionary with additional debugging context
        original_error: Original exception that caused this error (if any)
    """

    def __init__(
        self,
        message: str,
        *args: object,
        context: dict[str, Any] | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message, *args)
        self.message = message
        self.context = context or {}
        self.original_error = original_error

    def __str__(self) -> str:
        base = self.message
        if self.context:
            ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            base = f"{base} [{ctx_str}]"
        if self.original_error:
            base = f"{base} (caused by: {type(self.original_error).__name__}: {self.original_error})"
        return base

    def with_context(self, **kwargs: Any) -> "ReqBuilderError":
        """Add context to this error and return self for chaining."""
        self.context.update(kwargs)
        return self


class ReqBuilderConfigError(ReqBuilderError):
    """Raised when settings or an exported request configuration cannot be loaded.

    Common causes:
    - File not found
    - Invalid YAML / JSON syntax
    - Unknown HTTP method
    - Malformed queryParams / headers lists
    - Out-of-range settings values (e.g. timeout_seconds <= 0)
    """


class ReqBuilderDispatchError(ReqBuilderError):
    """Raised when a request is sent while another one is still pending."""


class ShellCommandError(ReqBuilderError):
    """Raised by the interactive shell for unknown or malformed commands."""
