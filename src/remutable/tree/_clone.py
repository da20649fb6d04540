"""
Shallow cloning and per-session clone bookkeeping.

The engine never writes into a container it did not create. Before a write,
the container on the path is swapped for a shallow copy, and the copy is
recorded in a CloneRegistry so later writes in the same session reuse it
instead of copying again.
"""

from __future__ import annotations

import copy as _copy
import logging as _logging
import typing as _typing

import remutable.tree._types as _types

_logger = _logging.getLogger(__name__)


def shallow_clone(value: _typing.Any) -> _typing.Any:
    """
    Default cloner: one-level copy of a mapping or sequence.

    Elements are shared with the source, and the container type is kept
    (an OrderedDict stays an OrderedDict). Scalars are returned unchanged.

    Example:
        >>> inner = [1, 2]
        >>> outer = {"a": inner}
        >>> copied = shallow_clone(outer)
        >>> copied is outer, copied["a"] is inner
        (False, True)
    """
    if _types.kind_of(value).is_container:
        return _copy.copy(value)
    return value


class CloneRegistry:
    """
    Tracks which working containers are private to one session.

    A container is private once the registry has cloned it or adopted it
    (e.g. an empty mapping created for a missing path step). Private
    containers can be written in place; anything else may be shared with
    the caller's original tree and must be cloned first.

    Identity is tracked by id(), and the registry holds a reference to each
    private container so an id can't be recycled while the session lives.
    """

    __slots__ = ("_clone", "_owned", "_clone_count")

    def __init__(self, clone: _types.Cloner = shallow_clone) -> None:
        """
        Create an empty registry.

        Args:
            clone: Cloner used for every copy made in this session.
        """
        self._clone = clone
        self._owned: dict[int, _typing.Any] = {}
        self._clone_count = 0

    @property
    def clone_count(self) -> int:
        """Number of times the cloner has been called."""
        return self._clone_count

    def owns(self, value: _typing.Any) -> bool:
        """Check whether a container is already private to this session."""
        return self._owned.get(id(value)) is value

    def adopt(self, value: _typing.Any) -> _typing.Any:
        """Mark a freshly created container as private and return it."""
        if _types.kind_of(value).is_container:
            self._owned[id(value)] = value
        return value

    def clone(self, value: _typing.Any) -> _typing.Any:
        """
        Clone a value with the configured cloner and adopt the copy.

        Always calls the cloner, even when the value is already private.
        Use ensure_private() to skip the copy for private containers.
        """
        self._clone_count += 1
        copied = self._clone(value)
        _logger.debug("Cloned %s (clone #%d)", type(value).__name__, self._clone_count)
        return self.adopt(copied)

    def ensure_private(self, value: _typing.Any) -> _typing.Any:
        """Return value itself if private, otherwise a private clone of it."""
        if self.owns(value):
            return value
        return self.clone(value)
