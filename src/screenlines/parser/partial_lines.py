"""Classify how each line relates to an invisible element's delimiters.

A "partial" line is one that an invisible element (note or boneyard)
interrupts, or that an invisible element fills completely. The partial type
is computed per kind, because a line can hold a dangling note opener while
being unremarkable with respect to boneyard.
"""

from __future__ import annotations

from collections.abc import Sequence

from screenlines.parser.delimiters import index_delimiters, local_occurrences
from screenlines.parser.fountain_models import DelimiterOccurrences, Line
from screenlines.parser.line_types import PartialLineType, RangedElementKind
from screenlines.utils import ScreenplayUtils


def partial_type_for_line(
    line: Line,
    kind: RangedElementKind,
    occurrences: DelimiterOccurrences | None = None,
) -> PartialLineType | None:
    """Return the partial-line type of a single line for one kind.

    - ``OrphanedOpen``: an open is never closed on this line.
    - ``OrphanedClose``: a close has no open before it on this line.
    - ``OrphanedOpenAndClose``: a leading close ends an earlier span and a
      trailing open starts a new one.
    - ``SelfContained``: every span closes on the line and there is
      visible text around or between them.
    - ``InvisibleOnly``: the line is nothing but invisible element text.

    Args:
        line: Line whose raw text is examined
        kind: Ranged element kind supplying the delimiter pair
        occurrences: Precomputed delimiter offsets for this line and kind

    Returns:
        The partial type, or None when the line holds no delimiter of the kind
    """
    if occurrences is None:
        occurrences = local_occurrences(line, kind)
    opens = occurrences.opens
    closes = _closes_outside_opens(opens, occurrences.closes, kind)

    if not opens and not closes:
        return None
    if opens and not closes:
        return PartialLineType.ORPHANED_OPEN
    if closes and not opens:
        return PartialLineType.ORPHANED_CLOSE

    has_trailing_open = opens[-1] > closes[-1]
    has_leading_close = closes[0] < opens[0]

    if has_trailing_open and has_leading_close:
        return PartialLineType.ORPHANED_OPEN_AND_CLOSE
    if has_trailing_open:
        return PartialLineType.ORPHANED_OPEN
    if has_leading_close:
        return PartialLineType.ORPHANED_CLOSE

    # Every open is closed on this line; look for visible text around spans
    raw = line.raw_text
    if not raw.startswith(kind.open) or not raw.endswith(kind.close):
        return PartialLineType.SELF_CONTAINED

    # An open after a close means something sits between two spans
    for open_offset in opens:
        for close_offset in closes:
            if open_offset - close_offset > 0:
                return PartialLineType.SELF_CONTAINED

    return PartialLineType.INVISIBLE_ONLY


def _closes_outside_opens(
    opens: list[int], closes: list[int], kind: RangedElementKind
) -> list[int]:
    """Drop closes that start inside an open, like the ``*/`` in ``/*/``."""
    open_width = ScreenplayUtils.grapheme_count(kind.open)
    return [
        close_offset
        for close_offset in closes
        if not any(
            open_offset <= close_offset < open_offset + open_width
            for open_offset in opens
        )
    ]


def partial_types_for_lines(
    lines: Sequence[Line], kind: RangedElementKind
) -> dict[int, PartialLineType]:
    """Compute partial types for every line that holds a delimiter of one kind.

    Returns:
        Global line index to partial type, ascending by index
    """
    partial_types: dict[int, PartialLineType] = {}
    for index, occurrences in index_delimiters(lines, kind).items():
        partial_type = partial_type_for_line(lines[index], kind, occurrences)
        if partial_type is not None:
            partial_types[index] = partial_type
    return partial_types


def tag_partial_lines(
    lines: Sequence[Line], kind: RangedElementKind
) -> dict[int, Line]:
    """Return tagged copies of every partial line for one kind.

    The input lines are left untouched. Each copy carries the kind's partial
    type in ``partial_types`` alongside any tags it already had for other
    kinds.

    Args:
        lines: Document lines in order
        kind: Ranged element kind to tag

    Returns:
        Global line index to tagged line copy, ascending by index
    """
    return {
        index: lines[index].with_partial_type(kind, partial_type)
        for index, partial_type in partial_types_for_lines(lines, kind).items()
    }
