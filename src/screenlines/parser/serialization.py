"""Serialization boundary for parsed lines.

Line types are string-valued inside the package. Consumers that still
expect the numeric ordinals of the classic continuous Fountain parser get
them from the explicit table below, never from the enum itself.
"""

from __future__ import annotations

from screenlines.common.types import JSONDict
from screenlines.exceptions import ValidationError
from screenlines.parser.document import FountainDocument
from screenlines.parser.fountain_models import InlineSpan, Line, MultilineRange
from screenlines.parser.line_types import LineType

LEGACY_ORDINALS: dict[LineType, int] = {
    LineType.EMPTY: 0,
    LineType.SECTION: 1,
    LineType.SYNOPSIS: 2,
    LineType.TITLE_PAGE_TITLE: 3,
    LineType.TITLE_PAGE_AUTHOR: 4,
    LineType.TITLE_PAGE_CREDIT: 5,
    LineType.TITLE_PAGE_SOURCE: 6,
    LineType.TITLE_PAGE_CONTACT: 7,
    LineType.TITLE_PAGE_DRAFT_DATE: 8,
    LineType.TITLE_PAGE_UNKNOWN: 9,
    LineType.HEADING: 10,
    LineType.ACTION: 11,
    LineType.CHARACTER: 12,
    LineType.PARENTHETICAL: 13,
    LineType.DIALOGUE: 14,
    LineType.DUAL_DIALOGUE_CHARACTER: 15,
    LineType.DUAL_DIALOGUE_PARENTHETICAL: 16,
    LineType.DUAL_DIALOGUE: 17,
    LineType.TRANSITION_LINE: 18,
    LineType.LYRICS: 19,
    LineType.PAGE_BREAK: 20,
    LineType.CENTERED: 21,
    LineType.SHOT: 22,
    LineType.MORE: 23,
    LineType.DUAL_DIALOGUE_MORE: 24,
    LineType.UNPARSED: 99,
}

_TYPES_BY_ORDINAL = {ordinal: line_type for line_type, ordinal in LEGACY_ORDINALS.items()}


def to_legacy_ordinal(line_type: LineType) -> int:
    return LEGACY_ORDINALS[line_type]


def from_legacy_ordinal(ordinal: int) -> LineType:
    """Look up the line type for a legacy numeric ordinal.

    Raises:
        ValidationError: If no line type has that ordinal
    """
    try:
        return _TYPES_BY_ORDINAL[ordinal]
    except KeyError as e:
        raise ValidationError(
            message=f"Unknown line type ordinal: {ordinal}",
            hint="Valid ordinals are 0-24 and 99",
            details={"ordinal": ordinal},
        ) from e


def line_to_dict(line: Line, legacy_ordinals: bool = False) -> JSONDict:
    """Render a line as a JSON-compatible dictionary.

    Args:
        line: Line to render
        legacy_ordinals: Emit the numeric ordinal instead of the type name

    Returns:
        Dictionary with type, text, position and partial tags
    """
    line_type: str | int = (
        to_legacy_ordinal(line.type) if legacy_ordinals else line.type.value
    )
    return {
        "type": line_type,
        "text": line.text,
        "raw_text": line.raw_text,
        "position": line.position,
        "length": line.length,
        "forced": line.forced,
        "partial_types": {
            key: partial_type.value for key, partial_type in line.partial_types.items()
        },
    }


def range_to_dict(multiline_range: MultilineRange) -> JSONDict:
    return {
        "kind": multiline_range.kind,
        "global_start": multiline_range.global_start,
        "local_start": multiline_range.local_start,
        "global_end": multiline_range.global_end,
        "local_end": multiline_range.local_end,
        "id": str(multiline_range.id) if multiline_range.id else None,
    }


def span_to_dict(span: InlineSpan) -> JSONDict:
    return {
        "global_index": span.global_index,
        "local_start": span.local_start,
        "local_end": span.local_end,
    }


def document_to_dict(
    document: FountainDocument, legacy_ordinals: bool = False
) -> JSONDict:
    """Render a whole parsed document as a JSON-compatible dictionary."""
    return {
        "lines": [line_to_dict(line, legacy_ordinals) for line in document.lines],
        "multiline_ranges": {
            key: [range_to_dict(r) for r in ranges]
            for key, ranges in document.multiline_ranges.items()
        },
        "inline_spans": {
            key: [span_to_dict(s) for s in spans]
            for key, spans in document.inline_spans.items()
        },
    }
