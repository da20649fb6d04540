"""
Tree update engine: persistent updates to nested mappings and sequences.

This package walks a path through a tree, copies only the containers on
that path, and shares everything else with the original tree.

Example:
    >>> from remutable.tree import Updater
    >>> state = {"list": [{"id": 1, "name": "henry"}, {"id": 2, "name": "omar"}]}
    >>> Updater().set(state, ["list", {"id": 2}, "name"], "george")["list"][1]
    {'id': 2, 'name': 'george'}
"""

from remutable.tree._clone import CloneRegistry, shallow_clone
from remutable.tree._core import Updater
from remutable.tree._operations import (
    Comparator,
    Concat,
    Decrement,
    Increment,
    Merge,
    Operation,
    Prepend,
    Push,
    Set,
    Sort,
    Splice,
    Toggle,
    Unset,
    apply_operation,
)
from remutable.tree._path import (
    Index,
    Key,
    PathLike,
    Predicate,
    Segment,
    format_path,
    parse_path,
)
from remutable.tree._resolve import MISSING, Tip, get, resolve
from remutable.tree._session import Session, SessionState
from remutable.tree._types import Cloner, NodeKind, Tree, kind_of

__all__ = [
    "MISSING",
    "CloneRegistry",
    "Cloner",
    "Comparator",
    "Concat",
    "Decrement",
    "Increment",
    "Index",
    "Key",
    "Merge",
    "NodeKind",
    "Operation",
    "PathLike",
    "Predicate",
    "Prepend",
    "Push",
    "Segment",
    "Session",
    "SessionState",
    "Set",
    "Sort",
    "Splice",
    "Tip",
    "Toggle",
    "Tree",
    "Unset",
    "Updater",
    "apply_operation",
    "format_path",
    "get",
    "kind_of",
    "parse_path",
    "resolve",
    "shallow_clone",
]
