"""Unit tests for partial line tagging."""

import pytest

from screenlines.parser import (
    BONEYARD,
    NOTE,
    Line,
    PartialLineType,
    partial_type_for_line,
    split_lines,
    tag_partial_lines,
)
from screenlines.parser.partial_lines import partial_types_for_lines


def make_line(raw_text):
    """Build a bare line from raw text."""
    return Line(text=raw_text, raw_text=raw_text)


class TestPartialTypeForLine:
    """Test partial type rules for one line."""

    @pytest.mark.parametrize(
        ("raw_text", "expected"),
        [
            ("[[a note]]", PartialLineType.INVISIBLE_ONLY),
            ("Hello [[open note", PartialLineType.ORPHANED_OPEN),
            ("more]] world", PartialLineType.ORPHANED_CLOSE),
            ("Text [[note]] more", PartialLineType.SELF_CONTAINED),
            ("[[a]] text [[b]]", PartialLineType.SELF_CONTAINED),
            ("end]] middle [[start", PartialLineType.ORPHANED_OPEN_AND_CLOSE),
            ("[[a]] [[b", PartialLineType.ORPHANED_OPEN),
            ("a]] [[b]]", PartialLineType.ORPHANED_CLOSE),
            ("[[note]] trailing", PartialLineType.SELF_CONTAINED),
            ("leading [[note]]", PartialLineType.SELF_CONTAINED),
        ],
    )
    def test_note_rules(self, raw_text, expected):
        """Test each partial type for note delimiters."""
        assert partial_type_for_line(make_line(raw_text), NOTE) == expected

    def test_adjacent_spans_are_self_contained(self):
        """Test that two back-to-back notes count as separated spans."""
        assert (
            partial_type_for_line(make_line("[[a]][[b]]"), NOTE)
            == PartialLineType.SELF_CONTAINED
        )

    def test_no_delimiters(self):
        """Test that a line without delimiters has no partial type."""
        assert partial_type_for_line(make_line("plain"), NOTE) is None

    def test_other_kind_is_ignored(self):
        """Test that boneyard delimiters do not affect the note type."""
        line = make_line("/* boneyard */")

        assert partial_type_for_line(line, NOTE) is None
        assert partial_type_for_line(line, BONEYARD) == PartialLineType.INVISIBLE_ONLY

    @pytest.mark.parametrize(
        ("raw_text", "expected"),
        [
            ("/*/ cut this", PartialLineType.ORPHANED_OPEN),
            ("/*/", PartialLineType.ORPHANED_OPEN),
            ("/*/ cut */", PartialLineType.INVISIBLE_ONLY),
            ("/**/ gone", PartialLineType.SELF_CONTAINED),
        ],
    )
    def test_close_inside_open_is_not_a_close(self, raw_text, expected):
        """Test that the star shared by an open and a close belongs to the open."""
        assert partial_type_for_line(make_line(raw_text), BONEYARD) == expected


class TestTagPartialLines:
    """Test tagging partial lines across a document."""

    def test_tags_only_partial_lines(self):
        """Test that only lines with delimiters are returned, as copies."""
        lines = split_lines("Hello [[open note\nmiddle text\nmore]] world")
        tagged = tag_partial_lines(lines, NOTE)

        assert sorted(tagged) == [0, 2]
        assert tagged[0].note_type == PartialLineType.ORPHANED_OPEN
        assert tagged[2].note_type == PartialLineType.ORPHANED_CLOSE
        assert tagged[0] is not lines[0]
        assert lines[0].partial_types == {}

    def test_tags_accumulate_per_kind(self):
        """Test that tagging one kind keeps tags for another."""
        lines = split_lines("/* cut [[note]]")
        note_tagged = tag_partial_lines(lines, NOTE)
        both = tag_partial_lines([note_tagged[0]], BONEYARD)

        assert both[0].partial_types == {
            "note": PartialLineType.SELF_CONTAINED,
            "boneyard": PartialLineType.ORPHANED_OPEN,
        }
        assert both[0].boneyard_type == PartialLineType.ORPHANED_OPEN

    def test_partial_types_for_fixture(self, ranged_elements):
        """Test the note tags of the sample document."""
        lines = split_lines(ranged_elements)

        assert partial_types_for_lines(lines, NOTE) == {
            2: PartialLineType.SELF_CONTAINED,
            4: PartialLineType.INVISIBLE_ONLY,
            6: PartialLineType.ORPHANED_OPEN,
            8: PartialLineType.ORPHANED_CLOSE,
            15: PartialLineType.ORPHANED_OPEN,
            16: PartialLineType.ORPHANED_OPEN_AND_CLOSE,
            17: PartialLineType.ORPHANED_CLOSE,
            19: PartialLineType.ORPHANED_OPEN,
        }
        assert partial_types_for_lines(lines, BONEYARD) == {
            10: PartialLineType.ORPHANED_OPEN,
            13: PartialLineType.ORPHANED_CLOSE,
        }
