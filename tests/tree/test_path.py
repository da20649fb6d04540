"""Tests for path segments, parse_path and format_path."""

import collections as _collections

import pytest as _pytest

import remutable.errors as errors
import remutable.tree as tree


class TestParsePathStrings:
    """Tests for delimited string paths."""

    def test_dotted_path_becomes_keys(self) -> None:
        """Each dotted part should become a Key."""
        assert tree.parse_path("a.b.c") == (tree.Key("a"), tree.Key("b"), tree.Key("c"))

    def test_single_key(self) -> None:
        """A string without delimiters is a one-segment path."""
        assert tree.parse_path("a") == (tree.Key("a"),)

    def test_custom_delimiter(self) -> None:
        """The delimiter argument should control splitting."""
        assert tree.parse_path("a/b.c", "/") == (tree.Key("a"), tree.Key("b.c"))

    def test_numeric_parts_stay_keys(self) -> None:
        """String paths never produce Index segments."""
        assert tree.parse_path("list.0") == (tree.Key("list"), tree.Key("0"))

    def test_empty_string_rejected(self) -> None:
        """An empty path is invalid."""
        with _pytest.raises(errors.InvalidPathError):
            tree.parse_path("")

    def test_empty_key_rejected(self) -> None:
        """Doubled or trailing delimiters leave an empty key."""
        with _pytest.raises(errors.InvalidPathError, match="Empty key"):
            tree.parse_path("a..b")
        with _pytest.raises(errors.InvalidPathError):
            tree.parse_path("a.")

    def test_empty_delimiter_rejected(self) -> None:
        """An empty delimiter can't split anything."""
        with _pytest.raises(errors.InvalidPathError):
            tree.parse_path("a.b", "")


class TestParsePathSequences:
    """Tests for sequence paths."""

    def test_mixed_segments(self) -> None:
        """str, int and mapping items map to Key, Index and Predicate."""
        segments = tree.parse_path(["list", 0, {"id": 2}])
        assert segments == (tree.Key("list"), tree.Index(0), tree.Predicate({"id": 2}))

    def test_tuple_path(self) -> None:
        """Any sequence type is accepted."""
        assert tree.parse_path(("a", -1)) == (tree.Key("a"), tree.Index(-1))

    def test_segment_objects_pass_through(self) -> None:
        """Segment instances are used as-is."""
        key = tree.Key("a")
        assert tree.parse_path([key])[0] is key

    def test_empty_sequence_rejected(self) -> None:
        """An empty list is not a path."""
        with _pytest.raises(errors.InvalidPathError):
            tree.parse_path([])

    def test_bool_segment_rejected(self) -> None:
        """True is an int, but not a usable index."""
        with _pytest.raises(errors.InvalidPathError, match="bool"):
            tree.parse_path(["a", True])

    def test_unsupported_segment_rejected(self) -> None:
        """Floats and other types are not segments."""
        with _pytest.raises(errors.InvalidPathError, match="float"):
            tree.parse_path(["a", 1.5])

    def test_non_sequence_rejected(self) -> None:
        """Paths must be strings or sequences."""
        with _pytest.raises(errors.InvalidPathError):
            tree.parse_path(42)  # type: ignore[arg-type]

    def test_invalid_path_is_value_error(self) -> None:
        """InvalidPathError should also be catchable as ValueError."""
        with _pytest.raises(ValueError):
            tree.parse_path([])


class TestPredicate:
    """Tests for Predicate matching."""

    def test_requires_fields(self) -> None:
        """An empty predicate would match everything, so it is rejected."""
        with _pytest.raises(errors.InvalidPathError):
            tree.Predicate({})

    def test_requires_mapping(self) -> None:
        """Fields must be a mapping."""
        with _pytest.raises(errors.InvalidPathError):
            tree.Predicate([("id", 1)])  # type: ignore[arg-type]

    def test_matches_partial_fields(self) -> None:
        """Only the predicate's fields need to match."""
        predicate = tree.Predicate({"id": 2})
        assert predicate.matches({"id": 2, "name": "omar"})
        assert not predicate.matches({"id": 3, "name": "omar"})

    def test_missing_field_does_not_match(self) -> None:
        """An element without the field never matches."""
        assert not tree.Predicate({"id": None}).matches({"name": "x"})

    def test_non_mapping_element_does_not_match(self) -> None:
        """Scalars and lists in the sequence are skipped."""
        predicate = tree.Predicate({"id": 1})
        assert not predicate.matches(1)
        assert not predicate.matches([("id", 1)])

    def test_bool_and_int_are_distinct(self) -> None:
        """True == 1 in Python, but not for predicate matching."""
        assert not tree.Predicate({"flag": 1}).matches({"flag": True})
        assert not tree.Predicate({"flag": True}).matches({"flag": 1})
        assert tree.Predicate({"flag": True}).matches({"flag": True})

    def test_int_and_float_are_equal(self) -> None:
        """Numeric equality otherwise follows ==."""
        assert tree.Predicate({"n": 1}).matches({"n": 1.0})

    def test_find_returns_first_match(self) -> None:
        """find() should return the index of the first matching element."""
        sequence = [{"k": "a"}, {"k": "b", "n": 1}, {"k": "b", "n": 2}]
        assert tree.Predicate({"k": "b"}).find(sequence) == 1

    def test_find_returns_none_without_match(self) -> None:
        """No match is reported as None."""
        assert tree.Predicate({"k": "z"}).find([{"k": "a"}]) is None

    def test_fields_are_copied(self) -> None:
        """Changing the caller's dict afterwards must not change the predicate."""
        fields = {"id": 1}
        predicate = tree.Predicate(fields)
        fields["id"] = 2
        assert predicate.matches({"id": 1})

    def test_accepts_any_mapping(self) -> None:
        """OrderedDict and other mappings work as predicate fields."""
        predicate = tree.Predicate(_collections.OrderedDict(id=1))
        assert predicate.matches({"id": 1})


class TestFormatPath:
    """Tests for format_path."""

    def test_keys_indices_and_predicates(self) -> None:
        """All segment kinds should render readably."""
        segments = tree.parse_path(["list", 0, {"id": 2}, "name"])
        assert tree.format_path(segments) == "list[0][id=2].name"

    def test_empty_is_root(self) -> None:
        """No segments renders as the root marker."""
        assert tree.format_path([]) == "<root>"

    def test_string_values_are_quoted(self) -> None:
        """Predicate values use repr so strings are distinguishable."""
        assert tree.format_path([tree.Predicate({"name": "x"})]) == "[name='x']"
