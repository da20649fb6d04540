"""
remutable - persistent updates for nested data

Update deeply nested mappings and sequences by path without mutating the
original. Only the containers on the updated path are copied; everything
else is shared with the original tree.

    >>> import remutable
    >>> state = {"a": [1, 2, 3], "b": {"c": "c"}}
    >>> remutable.unset(state, ["a", 1])
    {'a': [1, 3], 'b': {'c': 'c'}}
"""

import importlib.metadata as _metadata

# Version is defined in pyproject.toml - read it and parse into tuple (primary representation)
_raw_version = _metadata.version("remutable")
__version_info__: tuple[int, int, int] = tuple(int(x) for x in _raw_version.split(".")[:3])  # type: ignore[assignment]
__version__: str = ".".join(str(x) for x in __version_info__)
__author__ = "remutable contributors"

from remutable.errors import (  # noqa: E402
    DescentError,
    IndexOutOfRangeError,
    InvalidPathError,
    PredicateNoMatchError,
    RemutableError,
    SessionClosedError,
    TypeMismatchError,
)
from remutable.tree import (  # noqa: E402
    Index,
    Key,
    Predicate,
    Session,
    Updater,
    format_path,
    parse_path,
    shallow_clone,
)
from remutable.update import (  # noqa: E402
    apply,
    concat,
    configure_clone,
    decrement,
    default_updater,
    get,
    increment,
    merge,
    open,
    prepend,
    push,
    set,
    sort,
    splice,
    toggle,
    unset,
)

__all__ = [
    "__version__",
    "__version_info__",
    "DescentError",
    "Index",
    "IndexOutOfRangeError",
    "InvalidPathError",
    "Key",
    "Predicate",
    "PredicateNoMatchError",
    "RemutableError",
    "Session",
    "SessionClosedError",
    "TypeMismatchError",
    "Updater",
    "apply",
    "concat",
    "configure_clone",
    "decrement",
    "default_updater",
    "format_path",
    "get",
    "increment",
    "merge",
    "open",
    "parse_path",
    "prepend",
    "push",
    "set",
    "shallow_clone",
    "sort",
    "splice",
    "toggle",
    "unset",
]
