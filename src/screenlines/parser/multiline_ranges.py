"""Assemble multiline invisible ranges from orphaned delimiters.

How orphaned opens pair with orphaned closes is not defined by Fountain
itself. Two policies are available:

``nearest``
    An orphaned open pairs with the nearest orphaned close below it, and
    only if no SelfContained or InvisibleOnly line for the same kind sits in
    between. An interrupted open is dropped. Further orphaned opens before
    the close are part of the element's text and do not move its start.

``greedy``
    The first orphaned open in the document pairs with the last orphaned
    close after it, and everything in between becomes part of one range.
"""

from __future__ import annotations

from collections.abc import Mapping

from screenlines.config import PAIRING_GREEDY, PAIRING_NEAREST, get_logger
from screenlines.exceptions import ValidationError
from screenlines.parser.fountain_models import Line, MultilineRange
from screenlines.parser.line_types import (
    CLOSING_PARTIAL_TYPES,
    INTERRUPTING_PARTIAL_TYPES,
    OPENING_PARTIAL_TYPES,
    RangedElementKind,
)
from screenlines.utils import ScreenplayUtils

logger = get_logger(__name__)

PAIRING_POLICIES = (PAIRING_NEAREST, PAIRING_GREEDY)


class MultilineRangeAssembler:
    """Pair orphaned opens and closes of one kind into MultilineRange records."""

    def __init__(self, kind: RangedElementKind, policy: str = PAIRING_NEAREST) -> None:
        """Initialize the assembler.

        Args:
            kind: Ranged element kind whose partial tags are read
            policy: Pairing policy, ``"nearest"`` or ``"greedy"``

        Raises:
            ValidationError: If the policy is unknown
        """
        if policy not in PAIRING_POLICIES:
            raise ValidationError(
                message=f"Unknown multiline pairing policy: {policy!r}",
                hint=f"Use one of: {', '.join(PAIRING_POLICIES)}",
                details={"policy": policy},
            )
        self.kind = kind
        self.policy = policy

    def assemble(self, partial_lines: Mapping[int, Line]) -> list[MultilineRange]:
        """Build ranges from partial lines tagged for this assembler's kind.

        Args:
            partial_lines: Global line index to tagged line, as returned by
                ``tag_partial_lines``; lines without a tag for the kind are
                skipped

        Returns:
            Ranges ordered by their opening line
        """
        ordered = [
            (index, partial_lines[index])
            for index in sorted(partial_lines)
            if partial_lines[index].partial_type_for(self.kind) is not None
        ]
        if self.policy == PAIRING_GREEDY:
            ranges = self._assemble_greedy(ordered)
        else:
            ranges = self._assemble_nearest(ordered)

        logger.debug(
            "Assembled multiline ranges",
            kind=self.kind.key,
            policy=self.policy,
            partial_line_count=len(ordered),
            range_count=len(ranges),
        )
        return ranges

    def _assemble_nearest(
        self, ordered: list[tuple[int, Line]]
    ) -> list[MultilineRange]:
        ranges: list[MultilineRange] = []
        pending: tuple[int, int] | None = None

        for index, line in ordered:
            partial_type = line.partial_type_for(self.kind)

            if pending is not None:
                if partial_type in CLOSING_PARTIAL_TYPES:
                    ranges.append(self._make_range(pending, index, line))
                    pending = None
                elif partial_type in INTERRUPTING_PARTIAL_TYPES:
                    logger.debug(
                        "Dropping interrupted open delimiter",
                        kind=self.kind.key,
                        open_line=pending[0],
                        interrupting_line=index,
                    )
                    pending = None
                    continue
                else:
                    continue

            if partial_type in OPENING_PARTIAL_TYPES:
                pending = (index, self._last_open(line))

        if pending is not None:
            self._log_dangling(pending)
        return ranges

    def _assemble_greedy(
        self, ordered: list[tuple[int, Line]]
    ) -> list[MultilineRange]:
        openings = [
            (index, line)
            for index, line in ordered
            if line.partial_type_for(self.kind) in OPENING_PARTIAL_TYPES
        ]
        if not openings:
            return []

        start_index, start_line = openings[0]
        pending = (start_index, self._last_open(start_line))
        closings = [
            (index, line)
            for index, line in ordered
            if index > start_index
            and line.partial_type_for(self.kind) in CLOSING_PARTIAL_TYPES
        ]
        if not closings:
            self._log_dangling(pending)
            return []

        end_index, end_line = closings[-1]
        last_index, last_line = openings[-1]
        if last_index >= end_index:
            self._log_dangling((last_index, self._last_open(last_line)))
        return [self._make_range(pending, end_index, end_line)]

    def _make_range(
        self, pending: tuple[int, int], end_index: int, end_line: Line
    ) -> MultilineRange:
        start_index, start_offset = pending
        return MultilineRange(
            kind=self.kind.key,
            global_start=start_index,
            local_start=start_offset,
            global_end=end_index,
            local_end=self._first_close(end_line),
        )

    def _last_open(self, line: Line) -> int:
        return ScreenplayUtils.find_all(line.raw_text, self.kind.open)[-1]

    def _first_close(self, line: Line) -> int:
        return ScreenplayUtils.find_all(line.raw_text, self.kind.close)[0]

    def _log_dangling(self, pending: tuple[int, int]) -> None:
        logger.debug(
            "Open delimiter never closed",
            kind=self.kind.key,
            open_line=pending[0],
            open_offset=pending[1],
        )


def assemble_multiline_ranges(
    partial_lines: Mapping[int, Line],
    kind: RangedElementKind,
    policy: str = PAIRING_NEAREST,
) -> list[MultilineRange]:
    """Assemble multiline ranges for one kind with the given pairing policy."""
    return MultilineRangeAssembler(kind, policy).assemble(partial_lines)
