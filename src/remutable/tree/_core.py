"""
Updater: the update engine and its configuration.

An Updater holds everything that affects how updates are performed (the
cloner, the string path delimiter, and the unset policy). It is immutable
once built, so any number of updaters with different settings can be used
side by side.

Two entry points:
- Stateless methods (set, unset, push, ...) take a tree and return a new
  tree. Each call is its own session.
- open() returns a Session for chaining several writes with one clone pass.
"""

from __future__ import annotations

import collections.abc as _abc
import typing as _typing

import remutable.constants as constants
import remutable.errors as errors
import remutable.tree._clone as _clone
import remutable.tree._operations as _operations
import remutable.tree._path as _path
import remutable.tree._resolve as _resolve
import remutable.tree._session as _session
import remutable.tree._types as _types

if _typing.TYPE_CHECKING:
    import remutable.config as config


class Updater:
    """
    Persistent update engine for nested mappings and sequences.

    Example:
        >>> updater = Updater()
        >>> state = {"a": [1, 2, 3]}
        >>> updater.push(state, ["a"], 4)
        {'a': [1, 2, 3, 4]}
        >>> state
        {'a': [1, 2, 3]}

    Args:
        clone: Shallow-copy strategy for containers. Defaults to
            shallow_clone; pass an instrumented wrapper to count copies.
        delimiter: Separator for string paths ("a.b.c").
        strict_unset: If True, unset raises PredicateNoMatchError when a
            predicate matches nothing instead of doing nothing.
    """

    __slots__ = ("_clone", "_delimiter", "_strict_unset")

    def __init__(
        self,
        *,
        clone: _types.Cloner = _clone.shallow_clone,
        delimiter: str = constants.DEFAULT_PATH_DELIMITER,
        strict_unset: bool = False,
    ) -> None:
        if not delimiter:
            raise errors.InvalidPathError("Path delimiter must not be empty")
        self._clone = clone
        self._delimiter = delimiter
        self._strict_unset = strict_unset

    @classmethod
    def from_settings(
        cls,
        settings: config.Settings | None = None,
        *,
        clone: _types.Cloner = _clone.shallow_clone,
    ) -> Updater:
        """
        Build an Updater from Settings.

        Args:
            settings: Loaded settings. If None, Settings() is loaded from
                the environment and config file.
            clone: Cloner to use (cloners are code, not configuration).
        """
        if settings is None:
            import remutable.config as _config

            settings = _config.Settings()
        return cls(
            clone=clone,
            delimiter=settings.path_delimiter,
            strict_unset=settings.strict_unset,
        )

    @property
    def clone(self) -> _types.Cloner:
        """The cloner used by sessions opened from this updater."""
        return self._clone

    @property
    def delimiter(self) -> str:
        """Separator for string paths."""
        return self._delimiter

    @property
    def strict_unset(self) -> bool:
        """Whether unset raises on an unmatched predicate."""
        return self._strict_unset

    def with_clone(self, clone: _types.Cloner) -> Updater:
        """Return a copy of this updater using a different cloner."""
        return Updater(
            clone=clone,
            delimiter=self._delimiter,
            strict_unset=self._strict_unset,
        )

    def open(self, root: _typing.Any) -> _session.Session:
        """Begin a session on root (clones root once)."""
        return _session.Session(self, root)

    def apply(
        self,
        root: _typing.Any,
        operations: _abc.Iterable[tuple[_path.PathLike, _operations.Operation]],
    ) -> _typing.Any:
        """
        Apply a batch of (path, operation) pairs in one session.

        Example:
            >>> Updater().apply({"n": 1}, [("n", _operations.Increment(2)),
            ...                            ("m", _operations.Set(0))])
            {'n': 3, 'm': 0}
        """
        session = self.open(root)
        for path, operation in operations:
            session.apply(path, operation)
        return session.end()

    def get(
        self,
        tree: _typing.Any,
        path: _path.PathLike,
        default: _typing.Any = None,
    ) -> _typing.Any:
        """Read the value at path, or default if absent."""
        return _resolve.get(tree, path, default, delimiter=self._delimiter)

    # =========================================================================
    # Stateless operations
    # =========================================================================

    def set(self, root: _typing.Any, path: _path.PathLike, value: _typing.Any) -> _typing.Any:
        """Return a new tree with value assigned at path."""
        return self.open(root).set(path, value).end()

    def unset(self, root: _typing.Any, path: _path.PathLike) -> _typing.Any:
        """Return a new tree without the value at path (unchanged copy if absent)."""
        return self.open(root).unset(path).end()

    def increment(
        self,
        root: _typing.Any,
        path: _path.PathLike,
        by: _typing.Any = 1,
    ) -> _typing.Any:
        """Return a new tree with the number at path increased by by."""
        return self.open(root).increment(path, by).end()

    def decrement(
        self,
        root: _typing.Any,
        path: _path.PathLike,
        by: _typing.Any = 1,
    ) -> _typing.Any:
        """Return a new tree with the number at path decreased by by."""
        return self.open(root).decrement(path, by).end()

    def concat(
        self,
        root: _typing.Any,
        path: _path.PathLike,
        items: _abc.Sequence[_typing.Any],
    ) -> _typing.Any:
        """Return a new tree with items appended to the sequence at path."""
        return self.open(root).concat(path, items).end()

    def prepend(
        self,
        root: _typing.Any,
        path: _path.PathLike,
        items: _abc.Sequence[_typing.Any],
    ) -> _typing.Any:
        """Return a new tree with items inserted before the sequence at path."""
        return self.open(root).prepend(path, items).end()

    def push(self, root: _typing.Any, path: _path.PathLike, item: _typing.Any) -> _typing.Any:
        """Return a new tree with item appended to the sequence at path."""
        return self.open(root).push(path, item).end()

    def splice(
        self,
        root: _typing.Any,
        path: _path.PathLike,
        index: int,
        how_many: int | None = None,
        *items: _typing.Any,
    ) -> _typing.Any:
        """Return a new tree with the sequence at path spliced."""
        return self.open(root).splice(path, index, how_many, *items).end()

    def sort(
        self,
        root: _typing.Any,
        path: _path.PathLike,
        comparator: _operations.Comparator | None = None,
    ) -> _typing.Any:
        """Return a new tree with the sequence at path sorted."""
        return self.open(root).sort(path, comparator).end()

    def merge(self, root: _typing.Any, path: _path.PathLike, patch: _typing.Any) -> _typing.Any:
        """Return a new tree with patch merged into the value at path."""
        return self.open(root).merge(path, patch).end()

    def toggle(self, root: _typing.Any, path: _path.PathLike) -> _typing.Any:
        """Return a new tree with the bool at path flipped."""
        return self.open(root).toggle(path).end()

    def __repr__(self) -> str:
        clone_name = getattr(self._clone, "__name__", repr(self._clone))
        return (
            f"Updater(clone={clone_name}, delimiter={self._delimiter!r}, "
            f"strict_unset={self._strict_unset})"
        )
