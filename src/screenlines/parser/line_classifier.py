"""Continuous, single-pass line type classifier for Fountain documents.

Each line is typed from its own text and the already-final type of the line
before it. There is no look-ahead: the one rule that needs the following
line (a character cue must be followed by text) is enforced backwards, by
demoting a Character cue to Action as soon as an Empty line follows it. A
cue on the last line has nothing after it and stays Character.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from typing import NamedTuple

from screenlines.config import get_logger
from screenlines.parser.fountain_models import Line
from screenlines.parser.line_types import TITLE_PAGE_KEYS, LineType
from screenlines.utils import ScreenplayUtils

logger = get_logger(__name__)

# Characters that force a line type when they lead the line
FORCED_MARKERS = frozenset({"!", ".", ">", "~", "=", "#", "@"})
HEADING_PREFIXES = frozenset({"int", "ext", "est", "i/e"})
HEADING_TERMINATORS = frozenset({".", " ", "/"})


class Classification(NamedTuple):
    """Result of typing a single line."""

    type: LineType
    forced: bool = False
    escaped: bool = False


class ContinuousLineClassifier:
    """Assign a LineType to every line in one forward pass."""

    def __init__(self, honor_escaped_markers: bool = False) -> None:
        """Initialize the classifier.

        Args:
            honor_escaped_markers: When True, a backslash before a leading
                forced marker (``\\!``, ``\\@`` ...) turns the line into plain
                Action instead of letting the marker force a type.
        """
        self.honor_escaped_markers = honor_escaped_markers

    def classify(self, lines: Iterable[Line]) -> list[Line]:
        """Classify lines and return typed copies in the same order.

        The input lines are not modified. Only the returned list is mutated
        while the pass runs, and only at its tail.

        Args:
            lines: Lines in document order, typically from ``split_lines``

        Returns:
            New Line objects with ``type`` and ``forced`` set
        """
        parsed: list[Line] = []
        for line in lines:
            current = line.copy()
            previous = parsed[-1] if parsed else None

            result = self.classify_line(current, previous)
            current.type = result.type
            current.forced = result.forced
            if result.escaped:
                current.escape_ranges.add(0)

            # Character cues need a non-empty line after them
            if (
                current.type is LineType.EMPTY
                and previous is not None
                and previous.type is LineType.CHARACTER
            ):
                previous.type = LineType.ACTION
                previous.forced = False

            parsed.append(current)

        logger.debug(
            "Classified lines",
            line_count=len(parsed),
            type_counts=dict(Counter(line.type.value for line in parsed)),
        )
        return parsed

    def classify_line(self, line: Line, previous: Line | None) -> Classification:
        """Determine the type of one line given the previous classified line.

        A missing previous line (start of document) counts as an Empty one,
        except that it also allows a title page to begin.

        Args:
            line: Line to classify; its ``text`` is examined
            previous: Previous line with its final type, or None

        Returns:
            The line type and whether a marker character forced it
        """
        text = line.text
        clusters = ScreenplayUtils.graphemes(text)
        previous_is_empty = previous is None or previous.type is LineType.EMPTY

        if self._is_empty(text, clusters):
            return Classification(LineType.EMPTY)

        if self._is_escaped(clusters):
            return Classification(LineType.ACTION, escaped=True)

        forced_type = self._check_forced_element(text, clusters, previous_is_empty)
        if forced_type is not None:
            return Classification(
                forced_type, forced=forced_type is not LineType.PAGE_BREAK
            )

        line_type = self._check_title_page(text, previous)
        if line_type is None:
            line_type = self._check_transition(text, clusters, previous_is_empty)
        if line_type is None:
            line_type = self._check_heading(clusters, previous_is_empty)
        if line_type is None:
            line_type = self._check_dual_dialogue(clusters, previous)
        if line_type is None:
            line_type = self._check_character(text, clusters, previous_is_empty)
        if line_type is None:
            line_type = self._check_dialogue_or_parenthetical(clusters, previous)

        return Classification(line_type or LineType.ACTION)

    # ---------- Parsing sub-checks ----------

    @staticmethod
    def _is_empty(text: str, clusters: list[str]) -> bool:
        """Empty text, or whitespace that is not forced by spaces on both ends."""
        if not clusters:
            return True
        if not ScreenplayUtils.is_blank(text):
            return False
        forced_whitespace = (
            len(clusters) > 1 and clusters[0] == " " and clusters[-1] == " "
        )
        return not forced_whitespace

    def _is_escaped(self, clusters: list[str]) -> bool:
        return (
            self.honor_escaped_markers
            and len(clusters) > 1
            and clusters[0] == "\\"
            and clusters[1] in FORCED_MARKERS
        )

    @staticmethod
    def _check_forced_element(
        text: str, clusters: list[str], previous_is_empty: bool
    ) -> LineType | None:
        first = clusters[0]
        last = clusters[-1]

        if text == "===":
            return LineType.PAGE_BREAK

        if first == "!":
            if len(clusters) > 1 and clusters[1] == "!":
                return LineType.SHOT
            return LineType.ACTION

        if first == ".":
            if previous_is_empty:
                return LineType.HEADING
            # Dialogue may open with an ellipsis
            if len(clusters) > 1 and clusters[1] == ".":
                return None
            return LineType.HEADING

        if first == ">":
            return LineType.CENTERED if last == "<" else LineType.TRANSITION_LINE
        if first == "~":
            return LineType.LYRICS
        if first == "=":
            return LineType.SYNOPSIS
        if first == "#":
            return LineType.SECTION
        if first == "@":
            if last == "^" and previous_is_empty:
                return LineType.DUAL_DIALOGUE_CHARACTER
            return LineType.CHARACTER

        return None

    @staticmethod
    def _check_title_page(text: str, previous: Line | None) -> LineType | None:
        if previous is not None and not previous.is_title_page():
            return None

        key = ScreenplayUtils.title_page_key(text)
        if key:
            return TITLE_PAGE_KEYS.get(key, LineType.TITLE_PAGE_UNKNOWN)

        if previous is not None and (
            previous.title_page_key()
            or text.startswith("\t")
            or text.startswith("   ")
        ):
            return previous.type

        return None

    @staticmethod
    def _check_transition(
        text: str, clusters: list[str], previous_is_empty: bool
    ) -> LineType | None:
        if (
            len(clusters) > 2
            and clusters[-1] == ":"
            and ScreenplayUtils.is_uppercase(text)
            and previous_is_empty
        ):
            return LineType.TRANSITION_LINE
        return None

    @staticmethod
    def _check_heading(
        clusters: list[str], previous_is_empty: bool
    ) -> LineType | None:
        if not previous_is_empty or len(clusters) < 3:
            return None
        if "".join(clusters[:3]).lower() not in HEADING_PREFIXES:
            return None
        # Keeps words like "international" from becoming headings
        if len(clusters) > 3 and clusters[3] in HEADING_TERMINATORS:
            return LineType.HEADING
        return None

    @staticmethod
    def _check_dual_dialogue(
        clusters: list[str], previous: Line | None
    ) -> LineType | None:
        if previous is None or not previous.is_dual_dialogue():
            return None
        if clusters[0] == "(":
            return LineType.DUAL_DIALOGUE_PARENTHETICAL
        return LineType.DUAL_DIALOGUE

    @staticmethod
    def _check_character(
        text: str, clusters: list[str], previous_is_empty: bool
    ) -> LineType | None:
        if not ScreenplayUtils.only_uppercase_until_parenthesis(text):
            return None
        # Two leading spaces force dialogue instead
        if text.startswith("  "):
            return None
        if not previous_is_empty:
            return LineType.ACTION
        if clusters[-1] == "^":
            return LineType.DUAL_DIALOGUE_CHARACTER
        return LineType.CHARACTER

    @staticmethod
    def _check_dialogue_or_parenthetical(
        clusters: list[str], previous: Line | None
    ) -> LineType | None:
        if previous is None:
            return None
        if previous.is_dialogue() and previous.text:
            if clusters[0] == "(":
                return LineType.PARENTHETICAL
            return LineType.DIALOGUE
        if previous.type is LineType.PARENTHETICAL:
            return LineType.DIALOGUE
        return None


def classify_lines(
    lines: Iterable[Line], honor_escaped_markers: bool = False
) -> list[Line]:
    """Classify lines with a fresh ContinuousLineClassifier."""
    return ContinuousLineClassifier(honor_escaped_markers).classify(lines)
