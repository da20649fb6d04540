"""
Type aliases and node classification for the update engine.

This module provides:
- NodeKind: closed tag for the three shapes a tree node can take
- kind_of: classify a value once so callers dispatch on the tag
- Tree / Cloner: aliases used throughout the tree package
"""

from __future__ import annotations

import collections.abc as _abc
import enum as _enum
import typing as _typing

# Any value that may appear in a tree (mapping, sequence, or scalar)
Tree: _typing.TypeAlias = _typing.Any

# Shallow-copy strategy: takes a node and returns a copy (or the node itself
# for scalars)
Cloner: _typing.TypeAlias = _typing.Callable[[_typing.Any], _typing.Any]


class NodeKind(_enum.Enum):
    """Shape of a tree node."""

    MAPPING = "mapping"
    SEQUENCE = "sequence"
    SCALAR = "scalar"

    @property
    def is_container(self) -> bool:
        """True for mappings and sequences."""
        return self is not NodeKind.SCALAR


def kind_of(value: _typing.Any) -> NodeKind:
    """
    Classify a value as a mapping, sequence, or scalar.

    Only mutable containers count as mappings or sequences, since those are
    the nodes the engine copies and writes into. Strings, bytes, bytearrays,
    tuples, frozen views and every other value are scalars.

    Example:
        >>> kind_of({"a": 1})
        <NodeKind.MAPPING: 'mapping'>
        >>> kind_of([1, 2])
        <NodeKind.SEQUENCE: 'sequence'>
        >>> kind_of((1, 2))
        <NodeKind.SCALAR: 'scalar'>
    """
    if isinstance(value, _abc.MutableMapping):
        return NodeKind.MAPPING
    if isinstance(value, _abc.MutableSequence) and not isinstance(value, bytearray):
        return NodeKind.SEQUENCE
    return NodeKind.SCALAR
