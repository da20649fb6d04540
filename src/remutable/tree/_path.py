"""
Path segments and path parsing.

A path is a non-empty tuple of segments. Each segment is one of:
- Key: a mapping key (or an integer-looking key into a sequence)
- Index: a sequence position
- Predicate: a partial mapping that selects the first sequence element
  whose fields are all equal to it

Callers may pass paths in looser forms; parse_path normalizes them:
    >>> parse_path("a.b")
    (Key(name='a'), Key(name='b'))
    >>> parse_path(["list", {"id": 2}, "name"])
    (Key(name='list'), Predicate(fields={'id': 2}), Key(name='name'))
"""

from __future__ import annotations

import collections.abc as _abc
import dataclasses as _dataclasses
import typing as _typing

import remutable.constants as constants
import remutable.errors as errors


@_dataclasses.dataclass(frozen=True, slots=True)
class Key:
    """Address a mapping entry by key."""

    name: str


@_dataclasses.dataclass(frozen=True, slots=True)
class Index:
    """Address a sequence element by position (negative counts from the end)."""

    position: int


@_dataclasses.dataclass(frozen=True, slots=True)
class Predicate:
    """
    Address the first sequence element whose fields match.

    An element matches when it is a mapping holding every predicate key
    with a strictly equal value. Strict equality is ``==`` except that a
    bool never equals a non-bool (so ``{"flag": 1}`` does not match
    ``{"flag": True}``).
    """

    fields: _abc.Mapping[str, _typing.Any]

    def __post_init__(self) -> None:
        if not isinstance(self.fields, _abc.Mapping):
            raise errors.InvalidPathError(
                f"Predicate fields must be a mapping, got {type(self.fields).__name__}"
            )
        if not self.fields:
            raise errors.InvalidPathError("Predicate must name at least one field")
        # Own a private copy so later caller edits can't change the match
        object.__setattr__(self, "fields", dict(self.fields))

    def matches(self, element: _typing.Any) -> bool:
        """Check whether a sequence element satisfies this predicate."""
        if not isinstance(element, _abc.Mapping):
            return False
        for field, expected in self.fields.items():
            if field not in element:
                return False
            if not _strictly_equal(element[field], expected):
                return False
        return True

    def find(self, sequence: _abc.Sequence[_typing.Any]) -> int | None:
        """Return the index of the first matching element, or None."""
        for index, element in enumerate(sequence):
            if self.matches(element):
                return index
        return None


Segment: _typing.TypeAlias = Key | Index | Predicate

# Anything parse_path accepts
PathLike: _typing.TypeAlias = (
    str | _abc.Sequence[str | int | _abc.Mapping[str, _typing.Any] | Segment]
)


def _strictly_equal(left: _typing.Any, right: _typing.Any) -> bool:
    # bool is an int subclass; True == 1 must not count as a match
    if isinstance(left, bool) != isinstance(right, bool):
        return False
    return bool(left == right)


def _to_segment(item: _typing.Any) -> Segment:
    """Convert one path item into a Segment."""
    if isinstance(item, (Key, Index, Predicate)):
        return item
    if isinstance(item, bool):
        raise errors.InvalidPathError(f"Path segment cannot be a bool: {item!r}")
    if isinstance(item, str):
        return Key(item)
    if isinstance(item, int):
        return Index(item)
    if isinstance(item, _abc.Mapping):
        return Predicate(item)
    raise errors.InvalidPathError(
        f"Unsupported path segment type: {type(item).__name__}"
    )


def parse_path(
    path: PathLike,
    delimiter: str = constants.DEFAULT_PATH_DELIMITER,
) -> tuple[Segment, ...]:
    """
    Normalize a path into a tuple of segments.

    Args:
        path: A delimiter-separated string of keys, or a sequence of
            keys (str), indices (int), predicates (mappings) and
            Segment objects.
        delimiter: Separator for the string form.

    Returns:
        Non-empty tuple of Segment.

    Raises:
        InvalidPathError: If the path is empty or holds an unusable segment.
    """
    if isinstance(path, str):
        if not delimiter:
            raise errors.InvalidPathError("Path delimiter must not be empty")
        if not path:
            raise errors.InvalidPathError("Path must not be empty")
        names = path.split(delimiter)
        if "" in names:
            raise errors.InvalidPathError(f"Empty key in path {path!r}")
        return tuple(Key(name) for name in names)

    if not isinstance(path, _abc.Sequence):
        raise errors.InvalidPathError(
            f"Path must be a string or a sequence, got {type(path).__name__}"
        )

    segments = tuple(_to_segment(item) for item in path)
    if not segments:
        raise errors.InvalidPathError("Path must not be empty")
    return segments


def format_path(segments: _abc.Iterable[Segment]) -> str:
    """
    Render segments for error messages.

    Example:
        >>> format_path(parse_path(["list", {"id": 2}, "name"]))
        'list[id=2].name'
    """
    result = ""
    for segment in segments:
        if isinstance(segment, Key):
            result += f".{segment.name}" if result else segment.name
        elif isinstance(segment, Index):
            result += f"[{segment.position}]"
        else:
            fields = ", ".join(f"{k}={v!r}" for k, v in segment.fields.items())
            result += f"[{fields}]"
    return result or "<root>"
