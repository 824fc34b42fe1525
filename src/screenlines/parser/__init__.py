"""Fountain screenplay line parser for screenlines."""

from __future__ import annotations

from .delimiters import index_document, inline_spans, local_occurrences
from .document import FountainDocument
from .fountain_models import DelimiterOccurrences, InlineSpan, Line, MultilineRange
from .fountain_parser import FountainParser, parse_fountain
from .line_classifier import ContinuousLineClassifier, classify_lines
from .line_types import (
    BONEYARD,
    NOTE,
    LineType,
    PartialLineType,
    RangedElementFamily,
    RangedElementKind,
)
from .multiline_ranges import MultilineRangeAssembler, assemble_multiline_ranges
from .partial_lines import partial_type_for_line, tag_partial_lines
from .segmenter import split_lines

__all__ = [
    "BONEYARD",
    "NOTE",
    "ContinuousLineClassifier",
    "DelimiterOccurrences",
    "FountainDocument",
    "FountainParser",
    "InlineSpan",
    "Line",
    "LineType",
    "MultilineRange",
    "MultilineRangeAssembler",
    "PartialLineType",
    "RangedElementFamily",
    "RangedElementKind",
    "assemble_multiline_ranges",
    "classify_lines",
    "index_document",
    "inline_spans",
    "local_occurrences",
    "parse_fountain",
    "partial_type_for_line",
    "split_lines",
    "tag_partial_lines",
]
