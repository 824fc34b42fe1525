"""Fountain screenplay line parser."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from screenlines.config import ScreenLinesSettings, get_logger, get_settings
from screenlines.parser.delimiters import index_delimiters, inline_spans
from screenlines.parser.document import FountainDocument
from screenlines.parser.fountain_models import InlineSpan, Line, MultilineRange
from screenlines.parser.line_classifier import ContinuousLineClassifier
from screenlines.parser.line_types import (
    DEFAULT_RANGED_KINDS,
    RangedElementFamily,
    RangedElementKind,
)
from screenlines.parser.multiline_ranges import MultilineRangeAssembler
from screenlines.parser.partial_lines import tag_partial_lines
from screenlines.parser.segmenter import split_lines
from screenlines.utils import ScreenplayUtils

logger = get_logger(__name__)

# Line attribute that records invisible offsets for each built-in family
_MARK_ATTRIBUTES = {
    RangedElementFamily.NOTE: "note_ranges",
    RangedElementFamily.BONEYARD: "omitted_ranges",
}


class FountainParser:
    """Parse Fountain text into typed lines and resolved invisible ranges."""

    def __init__(
        self,
        settings: ScreenLinesSettings | None = None,
        kinds: Iterable[RangedElementKind] = DEFAULT_RANGED_KINDS,
    ) -> None:
        """Initialize the fountain parser.

        Args:
            settings: Settings to use; the global settings when omitted
            kinds: Ranged element kinds to resolve, notes and boneyard by default
        """
        self.settings = settings or get_settings()
        self.kinds = tuple(kinds)
        self.classifier = ContinuousLineClassifier(
            honor_escaped_markers=self.settings.honor_escaped_markers
        )

    def split(self, content: str) -> list[Line]:
        """Split content into unparsed lines."""
        return split_lines(content)

    def classify(self, lines: Iterable[Line]) -> list[Line]:
        """Assign a line type to every line."""
        return self.classifier.classify(lines)

    def parse(self, content: str) -> FountainDocument:
        """Parse Fountain content into a document.

        Lines are split and classified, then tagged with their partial type
        for each ranged element kind. Multiline ranges and single-line spans
        are resolved per kind and the invisible offsets they cover are
        recorded on the lines. No text is removed from any line.

        Args:
            content: Raw Fountain text

        Returns:
            FountainDocument holding the lines, ranges and spans
        """
        lines = self.classify(self.split(content))

        multiline_ranges: dict[str, list[MultilineRange]] = {}
        spans: dict[str, list[InlineSpan]] = {}
        for kind in self.kinds:
            kind_ranges, kind_spans = self.resolve_kind(lines, kind)
            multiline_ranges[kind.key] = kind_ranges
            spans[kind.key] = kind_spans

        logger.debug(
            "Parsed Fountain document",
            line_count=len(lines),
            range_counts={key: len(value) for key, value in multiline_ranges.items()},
        )
        return FountainDocument(
            lines=lines, multiline_ranges=multiline_ranges, inline_spans=spans
        )

    def resolve_kind(
        self, lines: list[Line], kind: RangedElementKind
    ) -> tuple[list[MultilineRange], list[InlineSpan]]:
        """Tag partial lines for one kind and resolve its ranges.

        ``lines`` must be owned by the caller: tagged copies replace the
        original entries and invisible offsets are marked in place.

        Returns:
            Multiline ranges and single-line spans for the kind
        """
        tagged = tag_partial_lines(lines, kind)
        for index, line in tagged.items():
            lines[index] = line

        kind_ranges = MultilineRangeAssembler(
            kind, self.settings.multiline_pairing
        ).assemble(tagged)

        kind_spans: list[InlineSpan] = []
        for index, occurrences in index_delimiters(lines, kind).items():
            kind_spans.extend(inline_spans(lines[index], kind, index, occurrences))

        self._mark_invisible_offsets(lines, kind, kind_ranges, kind_spans)
        return kind_ranges, kind_spans

    @staticmethod
    def _mark_invisible_offsets(
        lines: Sequence[Line],
        kind: RangedElementKind,
        multiline_ranges: list[MultilineRange],
        spans: list[InlineSpan],
    ) -> None:
        attribute = _MARK_ATTRIBUTES.get(kind.family)
        if attribute is None:
            return

        close_width = ScreenplayUtils.grapheme_count(kind.close)

        for span in spans:
            getattr(lines[span.global_index], attribute).update(
                range(span.local_start, span.local_end + close_width)
            )

        for multiline_range in multiline_ranges:
            for index in multiline_range.line_indices:
                line = lines[index]
                start = 0
                stop = line.length
                if index == multiline_range.global_start:
                    start = multiline_range.local_start
                if index == multiline_range.global_end:
                    stop = multiline_range.local_end + close_width
                getattr(line, attribute).update(range(start, stop))


def parse_fountain(
    content: str, settings: ScreenLinesSettings | None = None
) -> FountainDocument:
    """Parse Fountain content with a default FountainParser."""
    return FountainParser(settings).parse(content)
