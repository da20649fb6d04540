"""
Operation dataclasses for the update engine.

Each operation describes one write at the end of a path. The session
resolves the path to a Tip (a private container plus key) and then calls
apply_operation() to perform the write there.

Example:
    >>> import remutable
    >>> remutable.apply({"a": [1, 2]}, [(["a"], Push(3))])
    {'a': [1, 2, 3]}

Operations that change a sequence (and merges into a mapping) always clone
the target value before mutating it, so the target never aliases the
original tree's container.
"""

from __future__ import annotations

import collections.abc as _abc
import dataclasses as _dataclasses
import functools as _functools
import numbers as _numbers
import typing as _typing

import remutable.errors as errors
import remutable.tree._clone as _clone
import remutable.tree._resolve as _resolve
import remutable.tree._types as _types

# Two-argument ordering callback: negative, zero or positive
Comparator: _typing.TypeAlias = _typing.Callable[[_typing.Any, _typing.Any], int]


@_dataclasses.dataclass(frozen=True, slots=True)
class Operation:
    """Base class for operations."""

    # Whether missing intermediate steps are created. Operations that
    # don't create anything turn a missing step into a no-op.
    creates_missing: _typing.ClassVar[bool] = True


@_dataclasses.dataclass(frozen=True, slots=True)
class Set(Operation):
    """Assign a value."""

    value: _typing.Any


@_dataclasses.dataclass(frozen=True, slots=True)
class Unset(Operation):
    """Remove a mapping key or sequence element (no-op if absent)."""

    creates_missing: _typing.ClassVar[bool] = False


@_dataclasses.dataclass(frozen=True, slots=True)
class Increment(Operation):
    """Add to a number."""

    by: _typing.Any = 1


@_dataclasses.dataclass(frozen=True, slots=True)
class Decrement(Operation):
    """Subtract from a number."""

    by: _typing.Any = 1


@_dataclasses.dataclass(frozen=True, slots=True)
class Concat(Operation):
    """Append several items to a sequence."""

    items: _abc.Sequence[_typing.Any]


@_dataclasses.dataclass(frozen=True, slots=True)
class Prepend(Operation):
    """Insert several items at the front of a sequence."""

    items: _abc.Sequence[_typing.Any]


@_dataclasses.dataclass(frozen=True, slots=True)
class Push(Operation):
    """Append one item to a sequence."""

    item: _typing.Any


@_dataclasses.dataclass(frozen=True, slots=True)
class Splice(Operation):
    """
    Remove and insert sequence items in one step.

    Follows Array.prototype.splice: a negative index counts from the end,
    out-of-range values are clamped, and how_many=None removes everything
    from index to the end.
    """

    index: int
    how_many: int | None = None
    items: tuple[_typing.Any, ...] = ()


@_dataclasses.dataclass(frozen=True, slots=True)
class Sort(Operation):
    """Sort a sequence (stable), by comparator or natural order."""

    comparator: Comparator | None = None


@_dataclasses.dataclass(frozen=True, slots=True)
class Merge(Operation):
    """Shallow-merge a mapping, or concatenate a sequence."""

    patch: _typing.Any


@_dataclasses.dataclass(frozen=True, slots=True)
class Toggle(Operation):
    """Flip a bool (a missing value counts as False)."""

    pass


# =============================================================================
# Application
# =============================================================================


def _require_sequence(tip: _resolve.Tip, operation: str) -> _typing.Any:
    """Return the sequence at the tip or raise TypeMismatchError."""
    current = tip.get()
    if _types.kind_of(current) is not _types.NodeKind.SEQUENCE:
        found = "nothing" if current is _resolve.MISSING else type(current).__name__
        raise errors.TypeMismatchError(
            f"Cannot {operation}: target is not a sequence (found {found})",
            path=tip.path,
        )
    return current


def _require_items(items: _typing.Any, operation: str, path: str) -> list[_typing.Any]:
    """Check that items is a sequence of values (not a string) and list it."""
    if not _is_sequence(items):
        raise errors.TypeMismatchError(
            f"Cannot {operation}: items must be a sequence, got {type(items).__name__}",
            path=path,
        )
    return list(items)


def _require_number(tip: _resolve.Tip, operation: str) -> _typing.Any:
    current = tip.get()
    if not isinstance(current, _numbers.Number) or isinstance(current, bool):
        found = "nothing" if current is _resolve.MISSING else type(current).__name__
        raise errors.TypeMismatchError(
            f"Cannot {operation}: target is not a number (found {found})",
            path=tip.path,
        )
    return current


def _splice_bounds(length: int, index: int, how_many: int | None) -> tuple[int, int]:
    """Clamp splice arguments to a [start, stop) slice."""
    if index < 0:
        start = max(length + index, 0)
    else:
        start = min(index, length)
    if how_many is None:
        return start, length
    return start, start + min(max(how_many, 0), length - start)


def _is_mapping(value: _typing.Any) -> bool:
    return isinstance(value, _abc.Mapping)


def _is_sequence(value: _typing.Any) -> bool:
    return isinstance(value, _abc.Sequence) and not isinstance(value, (str, bytes, bytearray))


def _merge(tip: _resolve.Tip, patch: _typing.Any, registry: _clone.CloneRegistry) -> None:
    current = tip.get()
    current_kind = _types.kind_of(current)

    if current is _resolve.MISSING:
        if _is_mapping(patch):
            tip.put(dict(patch))
        elif _is_sequence(patch):
            tip.put(list(patch))
        else:
            raise errors.TypeMismatchError(
                "Cannot merge a scalar into a missing value", path=tip.path
            )
    elif current_kind is _types.NodeKind.SEQUENCE:
        if not _is_sequence(patch):
            raise errors.TypeMismatchError(
                "cannot merge array and non-array", path=tip.path
            )
        merged = registry.clone(current)
        merged.extend(patch)
        tip.put(merged)
    elif current_kind is _types.NodeKind.MAPPING:
        if not _is_mapping(patch):
            raise errors.TypeMismatchError(
                "cannot merge hashmap with an array or scalar", path=tip.path
            )
        merged = registry.clone(current)
        merged.update(patch)
        tip.put(merged)
    else:
        raise errors.TypeMismatchError("cannot merge into a scalar", path=tip.path)


def apply_operation(
    operation: Operation,
    tip: _resolve.Tip,
    registry: _clone.CloneRegistry,
) -> None:
    """
    Perform an operation at a resolved tip.

    The tip container must be private to the registry. Sequence targets are
    cloned through the registry before they are changed.

    Args:
        operation: The operation to perform.
        tip: Resolved location of the last path segment.
        registry: Clone bookkeeping for the current session.

    Raises:
        TypeMismatchError: If the target has the wrong shape.
        IndexOutOfRangeError: If a sequence is written beyond its end.
    """
    if isinstance(operation, Set):
        tip.put(operation.value)
    elif isinstance(operation, Unset):
        tip.remove()
    elif isinstance(operation, Increment):
        tip.put(_require_number(tip, "increment") + operation.by)
    elif isinstance(operation, Decrement):
        tip.put(_require_number(tip, "decrement") - operation.by)
    elif isinstance(operation, Concat):
        items = _require_items(operation.items, "concat", tip.path)
        result = registry.clone(_require_sequence(tip, "concat"))
        result.extend(items)
        tip.put(result)
    elif isinstance(operation, Prepend):
        items = _require_items(operation.items, "prepend", tip.path)
        result = registry.clone(_require_sequence(tip, "prepend"))
        result[0:0] = items
        tip.put(result)
    elif isinstance(operation, Push):
        result = registry.clone(_require_sequence(tip, "push"))
        result.append(operation.item)
        tip.put(result)
    elif isinstance(operation, Splice):
        result = registry.clone(_require_sequence(tip, "splice"))
        start, stop = _splice_bounds(len(result), operation.index, operation.how_many)
        result[start:stop] = list(operation.items)
        tip.put(result)
    elif isinstance(operation, Sort):
        result = registry.clone(_require_sequence(tip, "sort"))
        if operation.comparator is None:
            result.sort()
        else:
            result.sort(key=_functools.cmp_to_key(operation.comparator))
        tip.put(result)
    elif isinstance(operation, Merge):
        _merge(tip, operation.patch, registry)
    elif isinstance(operation, Toggle):
        current = tip.get()
        if current is _resolve.MISSING:
            current = False
        if not isinstance(current, bool):
            raise errors.TypeMismatchError(
                f"Cannot toggle: target is not a bool (found {type(current).__name__})",
                path=tip.path,
            )
        tip.put(not current)
    else:
        raise TypeError(f"Unknown Operation type: {type(operation).__name__}")
