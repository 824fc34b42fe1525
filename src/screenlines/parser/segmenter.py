"""Split raw Fountain text into position-tagged, unparsed lines."""

from __future__ import annotations

from screenlines.parser.fountain_models import Line
from screenlines.parser.line_types import LineType
from screenlines.utils import ScreenplayUtils


def normalize_newlines(text: str) -> str:
    """Replace Windows line breaks with a single newline."""
    return text.replace("\r\n", "\n")


def split_lines(text: str | None) -> list[Line]:
    """Split a document into an ordered list of Unparsed lines.

    Each line records its raw text and its grapheme position within the
    newline-normalized document. A trailing newline terminates the last line
    rather than starting a new empty one.

    Args:
        text: Whole document text; None is treated as an empty document

    Returns:
        Lines in document order; the list index is the line's global index
    """
    if not text:
        return []

    normalized = normalize_newlines(text)
    raw_lines = normalized.split("\n")
    if normalized.endswith("\n"):
        raw_lines.pop()

    lines: list[Line] = []
    position = 0
    for raw in raw_lines:
        length = ScreenplayUtils.grapheme_count(raw)
        lines.append(
            Line(
                type=LineType.UNPARSED,
                text=raw,
                raw_text=raw,
                position=position,
                length=length,
            )
        )
        # +1 for the newline removed by the split
        position += length + 1

    return lines
