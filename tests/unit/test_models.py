"""Tests for core domain models."""

from datetime import UTC, datetime

import pytest

from contextlog.core.models import (
    EMPTY_ATTRIBUTES,
    Attribute,
    AttributeKind,
    AttributeList,
    Level,
    LogEntry,
)

pytestmark = [pytest.mark.core, pytest.mark.tier(1)]


class TestLevel:
    """Tests for Level ordering and parsing."""

    def test_levels_are_ordered_by_severity(self) -> None:
        """DEBUG < INFO < WARN < ERROR."""
        assert Level.DEBUG < Level.INFO < Level.WARN < Level.ERROR

    def test_level_values(self) -> None:
        """Levels use spaced integer values."""
        assert [int(level) for level in Level] == [-4, 0, 4, 8]

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("debug", Level.DEBUG),
            ("INFO", Level.INFO),
            ("Warn", Level.WARN),
            ("warning", Level.WARN),
            (" error ", Level.ERROR),
        ],
    )
    def test_parse_is_case_insensitive(self, text: str, expected: Level) -> None:
        """Level names parse regardless of case and surrounding whitespace."""
        assert Level.parse(text) is expected

    def test_parse_rejects_unknown_name(self) -> None:
        """Unknown level names raise ValueError."""
        with pytest.raises(ValueError, match="unknown log level"):
            Level.parse("verbose")


class TestAttribute:
    """Tests for Attribute and its value kinds."""

    @pytest.mark.parametrize(
        ("value", "kind"),
        [
            ("x", AttributeKind.STRING),
            (1, AttributeKind.INT),
            (1.5, AttributeKind.FLOAT),
            (True, AttributeKind.BOOL),
            ({"a": 1}, AttributeKind.STRUCTURED),
            ([1, 2], AttributeKind.STRUCTURED),
            (None, AttributeKind.STRUCTURED),
        ],
    )
    def test_kind_of_value(self, value: object, kind: AttributeKind) -> None:
        """Each value maps to exactly one kind; bool is not an int."""
        assert Attribute("k", value).kind is kind

    def test_structured_is_not_scalar(self) -> None:
        """Only the structured kind is non-scalar."""
        assert not AttributeKind.STRUCTURED.is_scalar
        assert AttributeKind.BOOL.is_scalar

    def test_empty_key_rejected(self) -> None:
        """Attribute keys must be non-empty."""
        with pytest.raises(ValueError):
            Attribute("", 1)

    def test_attribute_is_immutable(self) -> None:
        """Attributes are frozen."""
        attr = Attribute("k", 1)
        with pytest.raises(AttributeError):
            attr.value = 2  # type: ignore[misc]


class TestAttributeList:
    """Tests for AttributeList construction and merge."""

    def test_preserves_insertion_order(self) -> None:
        """Keys keep the order they were given in."""
        attrs = AttributeList([("b", 1), ("a", 2), ("c", 3)])
        assert attrs.keys() == ["b", "a", "c"]

    def test_accepts_mapping_and_kwargs(self) -> None:
        """Mappings and keyword arguments both build lists."""
        attrs = AttributeList({"a": 1}, b=2)
        assert attrs.as_dict() == {"a": 1, "b": 2}

    def test_repeated_key_keeps_first_position_and_last_value(self) -> None:
        """A repeated key stays where it first appeared with the last value."""
        attrs = AttributeList([("a", 1), ("b", 2), ("a", 3)])
        assert [(a.key, a.value) for a in attrs] == [("a", 3), ("b", 2)]

    def test_merge_overrides_in_place_and_appends(self) -> None:
        """Shared keys keep their position; new keys are appended."""
        existing = AttributeList([("a", "1"), ("b", "2")])
        new = AttributeList([("b", "3"), ("c", "4")])

        merged = existing.merge(new)

        assert [(a.key, a.value) for a in merged] == [
            ("a", "1"),
            ("b", "3"),
            ("c", "4"),
        ]

    def test_merge_does_not_modify_inputs(self) -> None:
        """Both operands are unchanged after a merge."""
        existing = AttributeList(a=1)
        new = AttributeList(a=2, b=3)

        existing.merge(new)

        assert existing.as_dict() == {"a": 1}
        assert new.as_dict() == {"a": 2, "b": 3}

    def test_merge_with_empty_sides(self) -> None:
        """Empty lists are identities on either side."""
        attrs = AttributeList(a=1)
        assert attrs.merge(EMPTY_ATTRIBUTES) == attrs
        assert EMPTY_ATTRIBUTES.merge(attrs) == attrs

    def test_lookup_helpers(self) -> None:
        """get, membership and indexing expose the stored attributes."""
        attrs = AttributeList([("a", 1), ("b", 2)])
        assert attrs.get("b") == 2
        assert attrs.get("missing", "x") == "x"
        assert "a" in attrs
        assert attrs[0] == Attribute("a", 1)
        assert len(attrs) == 2

    def test_empty_list_is_falsy(self) -> None:
        """An empty list is falsy."""
        assert not AttributeList()
        assert AttributeList(a=1)


class TestLogEntry:
    """Tests for LogEntry."""

    def test_log_entry_defaults_to_no_attributes(self) -> None:
        """Entries without attributes carry an empty tuple."""
        entry = LogEntry(
            level=Level.INFO,
            timestamp=datetime(2024, 1, 1, tzinfo=UTC),
            message="hello",
        )
        assert entry.attributes == ()


class TestPackageExports:
    """Tests for the public import surface."""

    def test_empty_attributes_is_empty(self) -> None:
        """The shared empty list has no attributes."""
        assert len(EMPTY_ATTRIBUTES) == 0
        assert not EMPTY_ATTRIBUTES

    def test_package_exports_resolve(self) -> None:
        """Every name in __all__ is importable from the package."""
        import contextlog

        missing = [name for name in contextlog.__all__ if not hasattr(contextlog, name)]
        assert missing == []
