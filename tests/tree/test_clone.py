"""Tests for shallow_clone, kind_of and CloneRegistry."""

import collections as _collections

import remutable.tree as tree


class TestKindOf:
    """Tests for node classification."""

    def test_mutable_containers(self) -> None:
        """dicts and lists are containers."""
        assert tree.kind_of({}) is tree.NodeKind.MAPPING
        assert tree.kind_of([]) is tree.NodeKind.SEQUENCE

    def test_scalars(self) -> None:
        """Strings, numbers, None, tuples and bytes-likes are scalars."""
        for value in ("abc", b"abc", bytearray(b"ab"), 1, 1.5, None, True, (1, 2)):
            assert tree.kind_of(value) is tree.NodeKind.SCALAR, value

    def test_mapping_subclasses(self) -> None:
        """Any MutableMapping is a mapping."""
        assert tree.kind_of(_collections.OrderedDict()) is tree.NodeKind.MAPPING
        assert tree.kind_of(_collections.defaultdict(list)) is tree.NodeKind.MAPPING

    def test_is_container(self) -> None:
        """is_container is False only for scalars."""
        assert tree.NodeKind.MAPPING.is_container
        assert tree.NodeKind.SEQUENCE.is_container
        assert not tree.NodeKind.SCALAR.is_container


class TestShallowClone:
    """Tests for the default cloner."""

    def test_copies_one_level(self) -> None:
        """The container is new but its children are shared."""
        inner = [1, 2]
        outer = {"a": inner}
        copied = tree.shallow_clone(outer)
        assert copied == outer
        assert copied is not outer
        assert copied["a"] is inner

    def test_preserves_container_type(self) -> None:
        """An OrderedDict stays an OrderedDict."""
        original = _collections.OrderedDict([("b", 1), ("a", 2)])
        copied = tree.shallow_clone(original)
        assert type(copied) is _collections.OrderedDict
        assert list(copied) == ["b", "a"]

    def test_scalars_returned_unchanged(self) -> None:
        """Scalars are not copied."""
        value = "text"
        assert tree.shallow_clone(value) is value


class TestCloneRegistry:
    """Tests for per-session clone bookkeeping."""

    def test_clone_adopts_copy(self) -> None:
        """A clone is private; its source is not."""
        registry = tree.CloneRegistry()
        source = {"a": 1}
        copied = registry.clone(source)
        assert registry.owns(copied)
        assert not registry.owns(source)
        assert registry.clone_count == 1

    def test_clone_always_calls_cloner(self) -> None:
        """clone() copies even private values."""
        calls: list[object] = []

        def cloner(value: object) -> object:
            calls.append(value)
            return tree.shallow_clone(value)

        registry = tree.CloneRegistry(cloner)
        first = registry.clone([1])
        registry.clone(first)
        assert len(calls) == 2
        assert registry.clone_count == 2

    def test_ensure_private_reuses_owned(self) -> None:
        """ensure_private() skips the copy for private containers."""
        registry = tree.CloneRegistry()
        copied = registry.ensure_private([1])
        assert registry.ensure_private(copied) is copied
        assert registry.clone_count == 1

    def test_adopt_ignores_scalars(self) -> None:
        """Scalars are never tracked."""
        registry = tree.CloneRegistry()
        registry.adopt(5)
        assert not registry.owns(5)

    def test_equal_but_distinct_values_not_owned(self) -> None:
        """Ownership is by identity, not equality."""
        registry = tree.CloneRegistry()
        registry.adopt({"a": 1})
        assert not registry.owns({"a": 1})
