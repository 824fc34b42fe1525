"""Data models for Fountain line parsing."""

from __future__ import annotations

import copy
import uuid
from dataclasses import dataclass, field, replace

from screenlines.exceptions import ValidationError
from screenlines.parser.line_types import (
    DIALOGUE_TYPES,
    DUAL_DIALOGUE_TYPES,
    TITLE_PAGE_TYPES,
    LineType,
    PartialLineType,
    RangedElementKind,
)
from screenlines.utils import ScreenplayUtils


@dataclass
class Line:
    """One physical line of a Fountain document.

    ``position`` and ``length`` are grapheme counts; ``position`` is measured
    from the start of the newline-normalized document. ``partial_types`` maps
    a ranged element kind key (``"note"``, ``"boneyard"``, ...) to the line's
    relationship with that kind's delimiters. A kind is absent from the map
    when the raw text holds none of its delimiters.
    """

    type: LineType = LineType.UNPARSED
    text: str = ""
    raw_text: str = ""
    position: int = 0
    length: int = 0
    section_depth: int = 0
    scene_number: str = ""
    color: str = ""
    forced: bool = False
    bold_ranges: set[int] = field(default_factory=set)
    italic_ranges: set[int] = field(default_factory=set)
    underlined_ranges: set[int] = field(default_factory=set)
    bold_italic_ranges: set[int] = field(default_factory=set)
    strikeout_ranges: set[int] = field(default_factory=set)
    note_ranges: set[int] = field(default_factory=set)
    omitted_ranges: set[int] = field(default_factory=set)
    escape_ranges: set[int] = field(default_factory=set)
    removal_suggestion_ranges: set[int] = field(default_factory=set)
    partial_types: dict[str, PartialLineType] = field(default_factory=dict)

    @property
    def end(self) -> int:
        """Grapheme offset just past the last grapheme of this line."""
        return self.position + self.length

    @property
    def raw_span(self) -> tuple[int, int]:
        """Document offset and length of the raw line."""
        return self.position, self.length

    @property
    def note_type(self) -> PartialLineType | None:
        return self.partial_types.get("note")

    @property
    def boneyard_type(self) -> PartialLineType | None:
        return self.partial_types.get("boneyard")

    def partial_type_for(self, kind: RangedElementKind) -> PartialLineType | None:
        """Return the partial-line tag for a ranged element kind, if any."""
        return self.partial_types.get(kind.key)

    def copy(self) -> Line:
        """Return a deep copy that shares no mutable state with this line."""
        return copy.deepcopy(self)

    def with_partial_type(
        self, kind: RangedElementKind, partial_type: PartialLineType
    ) -> Line:
        """Return a copy of this line tagged with a partial type for one kind."""
        new_line = self.copy()
        new_line.partial_types[kind.key] = partial_type
        return new_line

    # Element booleans

    def can_be_split_paragraph(self) -> bool:
        return self.type in (LineType.ACTION, LineType.LYRICS, LineType.CENTERED)

    def is_outline_element(self) -> bool:
        """Return True for headings and sections."""
        return self.type in (LineType.HEADING, LineType.SECTION)

    def is_title_page(self) -> bool:
        """Return True for any title page element, unknown keys included."""
        return self.type in TITLE_PAGE_TYPES

    def is_invisible(self) -> bool:
        """Return True for lines that never print: sections, synopses, title page."""
        return (
            self.type in (LineType.SECTION, LineType.SYNOPSIS) or self.is_title_page()
        )

    # Dialogue

    def is_any_sort_of_dialogue(self) -> bool:
        return self.is_dialogue() or self.is_dual_dialogue()

    def is_dialogue(self) -> bool:
        """Return True for any dialogue element, including the character cue."""
        return self.type in DIALOGUE_TYPES

    def is_dialogue_element(self) -> bool:
        """Return True for dialogue block elements, excluding character cues."""
        return self.type in (LineType.PARENTHETICAL, LineType.DIALOGUE)

    def is_dual_dialogue(self) -> bool:
        """Return True for any dual dialogue element, including the character cue."""
        return self.type in DUAL_DIALOGUE_TYPES

    def is_dual_dialogue_element(self) -> bool:
        return self.type in (
            LineType.DUAL_DIALOGUE_PARENTHETICAL,
            LineType.DUAL_DIALOGUE,
            LineType.DUAL_DIALOGUE_MORE,
        )

    def is_any_character(self) -> bool:
        return self.type in (LineType.CHARACTER, LineType.DUAL_DIALOGUE_CHARACTER)

    def is_any_parenthetical(self) -> bool:
        return self.type in (
            LineType.PARENTHETICAL,
            LineType.DUAL_DIALOGUE_PARENTHETICAL,
        )

    def is_any_dialogue(self) -> bool:
        return self.type in (LineType.DIALOGUE, LineType.DUAL_DIALOGUE)

    # Title page

    def title_page_key(self) -> str:
        """Lower-cased title page key of this line, or "" if it has none."""
        return ScreenplayUtils.title_page_key(self.text)


@dataclass
class DelimiterOccurrences:
    """Local grapheme offsets of one kind's delimiters within a single line."""

    opens: list[int] = field(default_factory=list)
    closes: list[int] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.opens and not self.closes


@dataclass(frozen=True)
class InlineSpan:
    """A complete invisible element that opens and closes on one line.

    ``local_end`` is the offset of the closing delimiter.
    """

    global_index: int
    local_start: int
    local_end: int


@dataclass(frozen=True)
class MultilineRange:
    """An invisible element spanning two or more lines.

    Starts at an orphaned open delimiter and ends at the matching orphaned
    close delimiter. Offsets are local grapheme offsets of the delimiters.
    """

    kind: str
    global_start: int
    local_start: int
    global_end: int
    local_end: int
    id: uuid.UUID | None = None

    def __post_init__(self) -> None:
        if self.global_end <= self.global_start:
            raise ValidationError(
                message="A multiline range must end on a later line than it starts",
                details={
                    "global_start": self.global_start,
                    "global_end": self.global_end,
                },
            )

    @property
    def line_indices(self) -> range:
        """Global indices of every line the range touches, both ends included."""
        return range(self.global_start, self.global_end + 1)

    @property
    def interior_indices(self) -> range:
        """Global indices strictly between the opening and closing lines."""
        return range(self.global_start + 1, self.global_end)

    def contains(self, global_index: int) -> bool:
        return self.global_start <= global_index <= self.global_end

    def with_id(self) -> MultilineRange:
        """Return a copy carrying a freshly generated identity."""
        return replace(self, id=uuid.uuid4())
