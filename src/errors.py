"""Error taxonomy for discovery and rewriting."""

from __future__ import annotations


class ChainEditError(Exception):
    """Base class for all discovery and rewrite errors."""


class ParseFailure(ChainEditError):
    """Raised when snippet text cannot be parsed."""


class ContextResolutionError(ChainEditError):
    """Raised when a value's owning call or parameter cannot be determined."""


class IdentityError(ChainEditError):
    """Raised when there is not enough context to build a stable key."""

    def __init__(
        self,
        message: str,
        *,
        call_name: str | None = None,
        line: int | None = None,
        column: int | None = None,
        parameter_name: str | None = None,
    ) -> None:
        self.call_name = call_name
        self.line = line
        self.column = column
        self.parameter_name = parameter_name
        super().__init__(
            f"Key generation error: {message} "
            f"(at {call_name or 'unknown'}, line {line}, col {column})"
        )


class RewriteError(ChainEditError):
    """Raised when the rewriter produces unusable output."""


__all__ = [
    "ChainEditError",
    "ContextResolutionError",
    "IdentityError",
    "ParseFailure",
    "RewriteError",
]
