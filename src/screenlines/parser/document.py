"""Parsed Fountain document: the line arena plus resolved invisible ranges."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from screenlines.parser.fountain_models import InlineSpan, Line, MultilineRange
from screenlines.parser.line_types import LineType, PartialLineType, RangedElementKind


@dataclass
class FountainDocument:
    """Lines of a document indexed by global position, with per-kind ranges.

    Lines keep their raw text and raw grapheme span, and ranges are pairs of
    global indices into ``lines``. That is the information an editor needs
    to translate an edit in a delimiter-stripped view back to the raw text;
    the translation itself lives outside this class.
    """

    lines: list[Line] = field(default_factory=list)
    multiline_ranges: dict[str, list[MultilineRange]] = field(default_factory=dict)
    inline_spans: dict[str, list[InlineSpan]] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self) -> Iterator[Line]:
        return iter(self.lines)

    def __getitem__(self, index: int) -> Line:
        return self.lines[index]

    @property
    def types(self) -> list[LineType]:
        return [line.type for line in self.lines]

    def raw_span(self, index: int) -> tuple[int, int]:
        """Return the document grapheme offset and length of a raw line."""
        return self.lines[index].raw_span

    def ranges_for(self, kind: RangedElementKind) -> list[MultilineRange]:
        return self.multiline_ranges.get(kind.key, [])

    def spans_for(self, kind: RangedElementKind) -> list[InlineSpan]:
        return self.inline_spans.get(kind.key, [])

    def lines_in_range(self, multiline_range: MultilineRange) -> list[Line]:
        """Return every line touched by a multiline range, both ends included."""
        return self.lines[multiline_range.global_start : multiline_range.global_end + 1]

    def partial_lines(
        self, kind: RangedElementKind
    ) -> dict[int, PartialLineType]:
        """Map global index to partial type for lines tagged with a kind."""
        return {
            index: partial_type
            for index, line in enumerate(self.lines)
            if (partial_type := line.partial_type_for(kind)) is not None
        }

    def lines_of_type(self, line_type: LineType) -> list[Line]:
        return [line for line in self.lines if line.type is line_type]

    def range_containing(
        self, kind: RangedElementKind, index: int
    ) -> MultilineRange | None:
        """Return the multiline range of a kind that touches a line, if any."""
        for multiline_range in self.ranges_for(kind):
            if multiline_range.contains(index):
                return multiline_range
        return None
