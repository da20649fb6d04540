"""
Exception types raised by the update engine.

All errors derive from RemutableError and are raised synchronously by the
call (or fluent session call) that failed. A failing call never touches the
caller's original tree.
"""

from __future__ import annotations


class RemutableError(Exception):
    """Base class for all update engine errors."""

    def __init__(self, message: str, *, path: str | None = None) -> None:
        self.path = path
        if path is not None:
            message = f"{message} (at {path})"
        super().__init__(message)


class InvalidPathError(RemutableError, ValueError):
    """Raised when a path is empty or contains an unusable segment."""

    pass


class DescentError(RemutableError, TypeError):
    """Raised when a path tries to descend through a non-container value."""

    pass


class IndexOutOfRangeError(RemutableError, IndexError):
    """Raised when a sequence is written beyond its end."""

    pass


class PredicateNoMatchError(RemutableError, LookupError):
    """Raised when a predicate segment matches no element of a sequence."""

    pass


class TypeMismatchError(RemutableError, TypeError):
    """Raised when an operation meets a value of the wrong shape."""

    pass


class SessionClosedError(RemutableError, RuntimeError):
    """Raised when a session is used after end() or after a failed call."""

    pass
