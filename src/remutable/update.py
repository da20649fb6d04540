"""
Module-level update functions bound to a process-wide default Updater.

These are conveniences for code that doesn't want to carry an Updater
around. The default updater is built lazily from Settings on first use.

    >>> import remutable
    >>> remutable.push({"a": [1, 2, 3]}, ["a"], 4)
    {'a': [1, 2, 3, 4]}

configure_clone() swaps the default updater's cloner. Sessions already
open keep the cloner they started with. The swap is a plain global
rebind with no locking: do it once at startup, not while other threads
are updating.
"""

from __future__ import annotations

import collections.abc as _abc
import logging as _logging
import typing as _typing

import remutable.tree as tree

_logger = _logging.getLogger(__name__)

_default_updater: tree.Updater | None = None


def default_updater() -> tree.Updater:
    """Return the process-wide Updater, building it from Settings if needed."""
    global _default_updater
    if _default_updater is None:
        _default_updater = tree.Updater.from_settings()
    return _default_updater


def configure_clone(clone: tree.Cloner | None) -> None:
    """
    Replace the cloner used by module-level functions.

    Affects only sessions and calls started afterwards.

    Args:
        clone: New cloner, or None to restore shallow_clone.
    """
    global _default_updater
    new_clone = clone if clone is not None else tree.shallow_clone
    _default_updater = default_updater().with_clone(new_clone)
    _logger.info("Default cloner set to %s", getattr(new_clone, "__name__", new_clone))


def reset_default_updater() -> None:
    """Forget the default updater so the next call reloads Settings."""
    global _default_updater
    _default_updater = None


def open(root: _typing.Any) -> tree.Session:  # noqa: A001 - mirrors the session API
    """Begin a session on root."""
    return default_updater().open(root)


def apply(
    root: _typing.Any,
    operations: _abc.Iterable[tuple[tree.PathLike, tree.Operation]],
) -> _typing.Any:
    """Apply a batch of (path, operation) pairs in one session."""
    return default_updater().apply(root, operations)


def get(data: _typing.Any, path: tree.PathLike, default: _typing.Any = None) -> _typing.Any:
    """Read the value at path, or default if absent."""
    return default_updater().get(data, path, default)


def set(root: _typing.Any, path: tree.PathLike, value: _typing.Any) -> _typing.Any:  # noqa: A001
    """Return a new tree with value assigned at path."""
    return default_updater().set(root, path, value)


def unset(root: _typing.Any, path: tree.PathLike) -> _typing.Any:
    """Return a new tree without the value at path."""
    return default_updater().unset(root, path)


def increment(root: _typing.Any, path: tree.PathLike, by: _typing.Any = 1) -> _typing.Any:
    """Return a new tree with the number at path increased."""
    return default_updater().increment(root, path, by)


def decrement(root: _typing.Any, path: tree.PathLike, by: _typing.Any = 1) -> _typing.Any:
    """Return a new tree with the number at path decreased."""
    return default_updater().decrement(root, path, by)


def concat(
    root: _typing.Any,
    path: tree.PathLike,
    items: _abc.Sequence[_typing.Any],
) -> _typing.Any:
    """Return a new tree with items appended to the sequence at path."""
    return default_updater().concat(root, path, items)


def prepend(
    root: _typing.Any,
    path: tree.PathLike,
    items: _abc.Sequence[_typing.Any],
) -> _typing.Any:
    """Return a new tree with items inserted before the sequence at path."""
    return default_updater().prepend(root, path, items)


def push(root: _typing.Any, path: tree.PathLike, item: _typing.Any) -> _typing.Any:
    """Return a new tree with item appended to the sequence at path."""
    return default_updater().push(root, path, item)


def splice(
    root: _typing.Any,
    path: tree.PathLike,
    index: int,
    how_many: int | None = None,
    *items: _typing.Any,
) -> _typing.Any:
    """Return a new tree with the sequence at path spliced."""
    return default_updater().splice(root, path, index, how_many, *items)


def sort(
    root: _typing.Any,
    path: tree.PathLike,
    comparator: tree.Comparator | None = None,
) -> _typing.Any:
    """Return a new tree with the sequence at path sorted."""
    return default_updater().sort(root, path, comparator)


def merge(root: _typing.Any, path: tree.PathLike, patch: _typing.Any) -> _typing.Any:
    """Return a new tree with patch merged into the value at path."""
    return default_updater().merge(root, path, patch)


def toggle(root: _typing.Any, path: tree.PathLike) -> _typing.Any:
    """Return a new tree with the bool at path flipped."""
    return default_updater().toggle(root, path)
