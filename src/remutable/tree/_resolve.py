"""
Path resolution with clone-on-write.

resolve() walks a path through a working tree and returns the Tip: the
container that directly holds the last segment. Every container on the way
is made private to the session first (cloned, or created when missing), so
the caller may write into the tip without touching the original tree.

get() is the read-only counterpart; it never clones or creates anything.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import logging as _logging
import typing as _typing

import remutable.constants as constants
import remutable.errors as errors
import remutable.tree._clone as _clone
import remutable.tree._path as _path
import remutable.tree._types as _types

_logger = _logging.getLogger(__name__)


# Sentinel for "no value at this key"
class _MissingType:
    """Sentinel type marking an absent value."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "<MISSING>"

    def __bool__(self) -> bool:
        return False


MISSING = _MissingType()


@_dataclasses.dataclass(slots=True)
class Tip:
    """
    The resolved location of the last path segment.

    Attributes:
        container: Private working container holding the target.
        kind: Kind of container (MAPPING or SEQUENCE).
        key: Effective key (mapping key or sequence index, predicates
            already resolved).
        segments: The full requested path, for error messages.
    """

    container: _typing.Any
    kind: _types.NodeKind
    key: _typing.Any
    segments: tuple[_path.Segment, ...]

    @property
    def path(self) -> str:
        """Formatted path, for error messages."""
        return _path.format_path(self.segments)

    def exists(self) -> bool:
        """Check whether the target currently holds a value."""
        return _contains(self.container, self.kind, self.key)

    def get(self) -> _typing.Any:
        """Return the current target value, or MISSING."""
        if not self.exists():
            return MISSING
        return self.container[self.key]

    def put(self, value: _typing.Any) -> None:
        """
        Store a value at the target.

        Sequences accept index == len as an append.

        Raises:
            IndexOutOfRangeError: If a sequence index lies beyond the end.
        """
        _store(self.container, self.kind, self.key, value, self.path)

    def remove(self) -> None:
        """Remove the target if present (sequence elements shift left)."""
        if self.exists():
            del self.container[self.key]


def _contains(container: _typing.Any, kind: _types.NodeKind, key: _typing.Any) -> bool:
    if kind is _types.NodeKind.SEQUENCE:
        return -len(container) <= key < len(container)
    return key in container


def _store(
    container: _typing.Any,
    kind: _types.NodeKind,
    key: _typing.Any,
    value: _typing.Any,
    path: str,
) -> None:
    if kind is _types.NodeKind.SEQUENCE and key == len(container):
        container.append(value)
    elif kind is _types.NodeKind.SEQUENCE and not _contains(container, kind, key):
        raise errors.IndexOutOfRangeError(
            f"Index {key} is out of range for a sequence of length {len(container)}",
            path=path,
        )
    else:
        container[key] = value


def _sequence_index(name: str) -> int | None:
    """Parse an integer-looking key ("0", "-1"), ASCII digits only."""
    digits = name.removeprefix("-")
    if digits.isascii() and digits.isdecimal():
        return int(name)
    return None


def _effective_key(
    container: _typing.Any,
    kind: _types.NodeKind,
    segment: _path.Segment,
    path: str,
    *,
    require_match: bool = True,
) -> _typing.Any:
    """
    Translate a segment into a concrete key for the given container.

    Returns None when a predicate matches nothing. With require_match off,
    also returns None for a segment that can't address the container (a
    predicate on a mapping, a word key on a sequence).
    """
    if isinstance(segment, _path.Predicate):
        if kind is not _types.NodeKind.SEQUENCE:
            if not require_match:
                return None
            raise errors.TypeMismatchError(
                f"Predicate segment needs a sequence, found a {kind.value}",
                path=path,
            )
        return segment.find(container)

    if isinstance(segment, _path.Index):
        return segment.position

    # Key: integer-looking keys address sequences so dotted paths reach lists
    if kind is _types.NodeKind.SEQUENCE:
        index = _sequence_index(segment.name)
        if index is None and require_match:
            raise errors.DescentError(
                f"Cannot address a sequence with key {segment.name!r}",
                path=path,
            )
        return index
    return segment.name


def resolve(
    root: _typing.Any,
    segments: tuple[_path.Segment, ...],
    *,
    registry: _clone.CloneRegistry,
    create_missing: bool = True,
    require_match: bool = True,
) -> Tip | None:
    """
    Walk a path and return the Tip holding its last segment.

    The root must already be private to the registry. Each intermediate
    container is reused if private, cloned otherwise, and created (as an
    empty mapping) if missing and create_missing is set.

    Args:
        root: Working root of the session.
        segments: Parsed, non-empty path.
        registry: Clone bookkeeping for the current session.
        create_missing: Vivify missing intermediate steps. When False, a
            missing step makes resolution return None instead.
        require_match: Raise when a predicate matches nothing or a segment
            can't address its container. When False, resolution returns
            None instead.

    Returns:
        The Tip, or None when the target is known to be absent (only when
        create_missing or require_match is False).

    Raises:
        DescentError: If a step runs into a scalar, or a word key meets a
            sequence and require_match is set.
        PredicateNoMatchError: If a predicate matches nothing and
            require_match is set.
        TypeMismatchError: If a predicate is applied to a non-sequence and
            require_match is set.
        IndexOutOfRangeError: If vivifying would leave a gap in a sequence.
    """
    path = _path.format_path(segments)
    node = root

    for depth, segment in enumerate(segments):
        kind = _types.kind_of(node)
        if not kind.is_container:
            walked = _path.format_path(segments[:depth])
            raise errors.DescentError(
                f"Cannot descend into a scalar at {walked}",
                path=path,
            )

        key = _effective_key(node, kind, segment, path, require_match=require_match)
        if key is None:
            if require_match:
                raise errors.PredicateNoMatchError(
                    f"No element matches {_path.format_path([segment])}",
                    path=path,
                )
            _logger.debug("Segment %s addresses nothing; skipping %s", segment, path)
            return None

        if depth == len(segments) - 1:
            return Tip(node, kind, key, segments)

        if not _contains(node, kind, key):
            if not create_missing:
                _logger.debug("Missing step %r; skipping %s", key, path)
                return None
            child = registry.adopt({})
            _store(node, kind, key, child, path)
            _logger.debug("Created empty mapping at step %r of %s", key, path)
        else:
            child = node[key]
            if not _types.kind_of(child).is_container:
                walked = _path.format_path(segments[: depth + 1])
                raise errors.DescentError(
                    f"Cannot descend into a scalar at {walked}",
                    path=path,
                )
            if not registry.owns(child):
                child = registry.clone(child)
                node[key] = child

        node = child

    # segments is never empty, so the loop always returns
    raise errors.InvalidPathError("Path must not be empty")


def get(
    tree: _typing.Any,
    path: _path.PathLike,
    default: _typing.Any = None,
    *,
    delimiter: str = constants.DEFAULT_PATH_DELIMITER,
) -> _typing.Any:
    """
    Read the value at a path without modifying anything.

    Args:
        tree: Tree to read from.
        path: Path in any form accepted by parse_path.
        default: Returned when any step is absent, unmatched, or a scalar.
        delimiter: Separator for string paths.

    Example:
        >>> get({"list": [{"id": 1, "name": "a"}]}, ["list", {"id": 1}, "name"])
        'a'
    """
    segments = _path.parse_path(path, delimiter)
    node = tree
    for segment in segments:
        kind = _types.kind_of(node)
        if not kind.is_container:
            return default
        key = _effective_key(node, kind, segment, "", require_match=False)
        if key is None or not _contains(node, kind, key):
            return default
        node = node[key]
    return node
