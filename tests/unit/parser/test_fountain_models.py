"""Unit tests for the line model and ranged element kinds."""

import pytest

from screenlines.exceptions import ValidationError
from screenlines.parser import (
    BONEYARD,
    NOTE,
    Line,
    LineType,
    PartialLineType,
    RangedElementFamily,
    RangedElementKind,
)


class TestLine:
    """Test Line helpers."""

    def test_defaults(self):
        """Test a fresh line is unparsed and untagged."""
        line = Line()

        assert line.type == LineType.UNPARSED
        assert line.partial_types == {}
        assert line.note_type is None
        assert line.boneyard_type is None

    def test_span(self):
        """Test end offset and raw span."""
        line = Line(text="JOHN", raw_text="JOHN", position=10, length=4)

        assert line.end == 14
        assert line.raw_span == (10, 4)

    def test_copy_is_deep(self):
        """Test that copies share no mutable state."""
        line = Line(text="a [[b", raw_text="a [[b")
        copied = line.copy()
        copied.note_ranges.add(3)
        copied.partial_types["note"] = PartialLineType.ORPHANED_OPEN

        assert line.note_ranges == set()
        assert line.partial_types == {}

    def test_with_partial_type(self):
        """Test tagging returns a new line."""
        line = Line(raw_text="[[x]]")
        tagged = line.with_partial_type(NOTE, PartialLineType.INVISIBLE_ONLY)

        assert tagged.partial_type_for(NOTE) == PartialLineType.INVISIBLE_ONLY
        assert tagged.partial_type_for(BONEYARD) is None
        assert line.partial_type_for(NOTE) is None

    @pytest.mark.parametrize(
        ("line_type", "predicate"),
        [
            (LineType.HEADING, "is_outline_element"),
            (LineType.SECTION, "is_outline_element"),
            (LineType.TITLE_PAGE_UNKNOWN, "is_title_page"),
            (LineType.SYNOPSIS, "is_invisible"),
            (LineType.TITLE_PAGE_TITLE, "is_invisible"),
            (LineType.CHARACTER, "is_dialogue"),
            (LineType.PARENTHETICAL, "is_dialogue_element"),
            (LineType.DUAL_DIALOGUE_CHARACTER, "is_dual_dialogue"),
            (LineType.DUAL_DIALOGUE, "is_dual_dialogue_element"),
            (LineType.DUAL_DIALOGUE, "is_any_sort_of_dialogue"),
            (LineType.DUAL_DIALOGUE_CHARACTER, "is_any_character"),
            (LineType.DUAL_DIALOGUE_PARENTHETICAL, "is_any_parenthetical"),
            (LineType.DIALOGUE, "is_any_dialogue"),
            (LineType.LYRICS, "can_be_split_paragraph"),
        ],
    )
    def test_predicates_true(self, line_type, predicate):
        """Test element predicates that hold for a type."""
        assert getattr(Line(type=line_type), predicate)()

    @pytest.mark.parametrize(
        ("line_type", "predicate"),
        [
            (LineType.ACTION, "is_outline_element"),
            (LineType.EMPTY, "is_title_page"),
            (LineType.ACTION, "is_invisible"),
            (LineType.DUAL_DIALOGUE, "is_dialogue"),
            (LineType.CHARACTER, "is_dialogue_element"),
            (LineType.DUAL_DIALOGUE_CHARACTER, "is_dual_dialogue_element"),
            (LineType.ACTION, "is_any_sort_of_dialogue"),
            (LineType.DIALOGUE, "is_any_character"),
            (LineType.HEADING, "can_be_split_paragraph"),
        ],
    )
    def test_predicates_false(self, line_type, predicate):
        """Test element predicates that do not hold for a type."""
        assert not getattr(Line(type=line_type), predicate)()

    def test_title_page_key(self):
        """Test the key is read from the line text."""
        assert Line(text="Draft Date: today").title_page_key() == "draft date"
        assert Line(text="CUT TO:").title_page_key() == ""


class TestRangedElementKind:
    """Test RangedElementKind."""

    def test_builtin_kinds(self):
        """Test the Fountain delimiters and keys."""
        assert NOTE.delimiters == ("[[", "]]")
        assert BONEYARD.delimiters == ("/*", "*/")
        assert NOTE.key == "note"
        assert BONEYARD.key == "boneyard"
        assert RangedElementKind.note() is NOTE
        assert RangedElementKind.boneyard() is BONEYARD

    def test_other_kind(self):
        """Test a custom kind keyed by its label."""
        kind = RangedElementKind.other("comment", "{{", "}}")

        assert kind.family == RangedElementFamily.OTHER
        assert kind.key == "comment"

    @pytest.mark.parametrize("label", ["", "note", "boneyard"])
    def test_other_kind_rejects_label(self, label):
        """Test that custom kinds cannot reuse built-in keys."""
        with pytest.raises(ValidationError):
            RangedElementKind.other(label, "{{", "}}")

    @pytest.mark.parametrize(("open_", "close"), [("", "]]"), ("[[", ""), ("%%", "%%")])
    def test_invalid_delimiters(self, open_, close):
        """Test that delimiters must be non-empty and distinct."""
        with pytest.raises(ValidationError):
            RangedElementKind(RangedElementFamily.OTHER, open_, close, label="x")

    def test_kinds_are_hashable(self):
        """Test kinds can key dictionaries."""
        assert {NOTE: 1, BONEYARD: 2}[NOTE] == 1
