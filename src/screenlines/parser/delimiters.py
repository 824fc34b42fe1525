"""Locate open and close delimiters of invisible elements (notes, boneyard)."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from screenlines.parser.fountain_models import DelimiterOccurrences, InlineSpan, Line
from screenlines.parser.line_types import DEFAULT_RANGED_KINDS, RangedElementKind
from screenlines.utils import ScreenplayUtils


def local_occurrences(line: Line, kind: RangedElementKind) -> DelimiterOccurrences:
    """Find every open and close delimiter of a kind within one line.

    The raw text is searched, so delimiters stay visible here even after a
    later pass strips them from ``line.text``. Delimiters never nest: an
    open inside an open note is just another open occurrence.

    Args:
        line: Line to search
        kind: Ranged element kind supplying the delimiter pair

    Returns:
        Ascending local grapheme offsets of opens and closes
    """
    return DelimiterOccurrences(
        opens=ScreenplayUtils.find_all(line.raw_text, kind.open),
        closes=ScreenplayUtils.find_all(line.raw_text, kind.close),
    )


def global_indices_with_delimiters(
    lines: Sequence[Line], kind: RangedElementKind
) -> list[int]:
    """Return indices of lines whose raw text holds an open or close delimiter."""
    return [
        index
        for index, line in enumerate(lines)
        if kind.open in line.raw_text or kind.close in line.raw_text
    ]


def index_delimiters(
    lines: Sequence[Line], kind: RangedElementKind
) -> dict[int, DelimiterOccurrences]:
    """Map each line holding a delimiter of one kind to its local occurrences.

    Args:
        lines: Document lines in order
        kind: Ranged element kind to index

    Returns:
        Global line index to local open/close offsets, ascending by index
    """
    return {
        index: local_occurrences(lines[index], kind)
        for index in global_indices_with_delimiters(lines, kind)
    }


def index_document(
    lines: Sequence[Line],
    kinds: Iterable[RangedElementKind] = DEFAULT_RANGED_KINDS,
) -> dict[str, dict[int, DelimiterOccurrences]]:
    """Index delimiter occurrences for several kinds across a whole document.

    Returns:
        Kind key (``"note"``, ``"boneyard"``, ...) to the per-line index
        produced by ``index_delimiters``
    """
    return {kind.key: index_delimiters(lines, kind) for kind in kinds}


def inline_spans(
    line: Line,
    kind: RangedElementKind,
    global_index: int,
    occurrences: DelimiterOccurrences | None = None,
) -> list[InlineSpan]:
    """Pair opens with the first close after them on the same line.

    Scanning runs left to right: each open starts a span that ends at the
    next close at or past the end of the open delimiter, and opens inside an
    already open span are ignored. Opens with no close after them and closes
    with no open before them are orphans and produce no span.

    Args:
        line: Line to scan
        kind: Ranged element kind supplying the delimiter pair
        global_index: Index of the line in its document
        occurrences: Precomputed occurrences, looked up when omitted

    Returns:
        Complete spans on this line in order
    """
    if occurrences is None:
        occurrences = local_occurrences(line, kind)

    open_width = ScreenplayUtils.grapheme_count(kind.open)
    close_width = ScreenplayUtils.grapheme_count(kind.close)

    spans: list[InlineSpan] = []
    cursor = 0
    for open_offset in occurrences.opens:
        if open_offset < cursor:
            continue
        close_offset = next(
            (c for c in occurrences.closes if c >= open_offset + open_width), None
        )
        if close_offset is None:
            break
        spans.append(InlineSpan(global_index, open_offset, close_offset))
        cursor = close_offset + close_width
    return spans
