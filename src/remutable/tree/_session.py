"""
Fluent update sessions.

A Session clones the root once, then applies any number of operations to
the same working tree. Containers cloned by one call are reused by later
calls, so a path prefix shared by several writes is copied only once.

Example:
    >>> import remutable
    >>> state = {"a": [1, 2, 3]}
    >>> (remutable.open(state)
    ...     .push(["a"], 4)
    ...     .set(["b", "c"], {"d": 1, "e": 3})
    ...     .unset(["b", "c", "e"])
    ...     .end())
    {'a': [1, 2, 3, 4], 'b': {'c': {'d': 1}}}
    >>> state
    {'a': [1, 2, 3]}
"""

from __future__ import annotations

import collections.abc as _abc
import enum as _enum
import logging as _logging
import typing as _typing

import remutable.errors as errors
import remutable.tree._clone as _clone
import remutable.tree._operations as _operations
import remutable.tree._path as _path
import remutable.tree._resolve as _resolve

if _typing.TYPE_CHECKING:
    import remutable.tree._core as _core

_logger = _logging.getLogger(__name__)


class SessionState(_enum.Enum):
    """Lifecycle of a session."""

    OPEN = "open"
    ENDED = "ended"
    ABORTED = "aborted"


class Session:
    """
    A chain of operations sharing one working tree.

    Created by Updater.open(). Every operation method returns the session
    so calls can be chained; end() returns the finished tree.

    A call that raises aborts the session. The original tree is never
    affected, but the working tree may be half-written, so any further
    call (including end()) raises SessionClosedError.

    Note:
        **Thread safety:** Sessions are not thread-safe. The working tree
        must not be modified outside the session before end().
    """

    __slots__ = ("_updater", "_original", "_registry", "_working", "_state")

    def __init__(self, updater: _core.Updater, root: _typing.Any) -> None:
        """
        Open a session on a root.

        Args:
            updater: Engine supplying the cloner and path settings.
            root: The caller's tree. Never modified.
        """
        self._updater = updater
        self._original = root
        self._registry = _clone.CloneRegistry(updater.clone)
        self._working = self._registry.clone(root)
        self._state = SessionState.OPEN
        _logger.debug("Opened session on %s", type(root).__name__)

    @property
    def original(self) -> _typing.Any:
        """The tree the session was opened on."""
        return self._original

    @property
    def state(self) -> SessionState:
        """Current lifecycle state."""
        return self._state

    @property
    def clone_count(self) -> int:
        """Number of clones made so far (including the root)."""
        return self._registry.clone_count

    def _check_open(self) -> None:
        if self._state is SessionState.ENDED:
            raise errors.SessionClosedError("Session has already ended")
        if self._state is SessionState.ABORTED:
            raise errors.SessionClosedError("Session was aborted by an earlier failure")

    def apply(self, path: _path.PathLike, operation: _operations.Operation) -> Session:
        """
        Apply any operation at a path.

        Args:
            path: Target path (string or segment sequence).
            operation: The operation to perform.

        Returns:
            This session, for chaining.

        Raises:
            SessionClosedError: If the session has ended or was aborted.
            RemutableError: If the operation fails (the session is aborted).
        """
        self._check_open()
        try:
            segments = _path.parse_path(path, self._updater.delimiter)
            # Unset tolerates absent targets; strict mode still wants predicates to match
            tip = _resolve.resolve(
                self._working,
                segments,
                registry=self._registry,
                create_missing=operation.creates_missing,
                require_match=operation.creates_missing or self._updater.strict_unset,
            )
            if tip is not None:
                _operations.apply_operation(operation, tip, self._registry)
        except Exception:
            self._state = SessionState.ABORTED
            _logger.debug("Session aborted by %s", type(operation).__name__)
            raise
        return self

    def set(self, path: _path.PathLike, value: _typing.Any) -> Session:
        """Assign value at path, creating missing intermediate mappings."""
        return self.apply(path, _operations.Set(value))

    def unset(self, path: _path.PathLike) -> Session:
        """Remove the value at path; does nothing if it is absent."""
        return self.apply(path, _operations.Unset())

    def increment(self, path: _path.PathLike, by: _typing.Any = 1) -> Session:
        """Add by to the number at path."""
        return self.apply(path, _operations.Increment(by))

    def decrement(self, path: _path.PathLike, by: _typing.Any = 1) -> Session:
        """Subtract by from the number at path."""
        return self.apply(path, _operations.Decrement(by))

    def concat(self, path: _path.PathLike, items: _abc.Sequence[_typing.Any]) -> Session:
        """Append items to the sequence at path."""
        return self.apply(path, _operations.Concat(items))

    def prepend(self, path: _path.PathLike, items: _abc.Sequence[_typing.Any]) -> Session:
        """Insert items at the front of the sequence at path."""
        return self.apply(path, _operations.Prepend(items))

    def push(self, path: _path.PathLike, item: _typing.Any) -> Session:
        """Append item to the sequence at path."""
        return self.apply(path, _operations.Push(item))

    def splice(
        self,
        path: _path.PathLike,
        index: int,
        how_many: int | None = None,
        *items: _typing.Any,
    ) -> Session:
        """Remove how_many items at index and insert items there."""
        return self.apply(path, _operations.Splice(index, how_many, items))

    def sort(
        self,
        path: _path.PathLike,
        comparator: _operations.Comparator | None = None,
    ) -> Session:
        """Sort the sequence at path with a two-argument comparator."""
        return self.apply(path, _operations.Sort(comparator))

    def merge(self, path: _path.PathLike, patch: _typing.Any) -> Session:
        """Shallow-merge patch into the mapping (or sequence) at path."""
        return self.apply(path, _operations.Merge(patch))

    def toggle(self, path: _path.PathLike) -> Session:
        """Flip the bool at path."""
        return self.apply(path, _operations.Toggle())

    def end(self) -> _typing.Any:
        """
        Finish the session and return the working tree.

        Raises:
            SessionClosedError: If the session has ended or was aborted.
        """
        self._check_open()
        self._state = SessionState.ENDED
        _logger.debug("Ended session after %d clone(s)", self._registry.clone_count)
        return self._working

    def __repr__(self) -> str:
        return f"Session(state={self._state.value}, clones={self._registry.clone_count})"
