"""Closed type sets for Fountain line classification."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from screenlines.exceptions import ValidationError


class LineType(str, Enum):
    """Semantic type assigned to one physical screenplay line."""

    EMPTY = "empty"
    SECTION = "section"
    SYNOPSIS = "synopsis"
    TITLE_PAGE_TITLE = "title_page_title"
    TITLE_PAGE_AUTHOR = "title_page_author"
    TITLE_PAGE_CREDIT = "title_page_credit"
    TITLE_PAGE_SOURCE = "title_page_source"
    TITLE_PAGE_CONTACT = "title_page_contact"
    TITLE_PAGE_DRAFT_DATE = "title_page_draft_date"
    TITLE_PAGE_UNKNOWN = "title_page_unknown"
    HEADING = "heading"
    ACTION = "action"
    CHARACTER = "character"
    PARENTHETICAL = "parenthetical"
    DIALOGUE = "dialogue"
    DUAL_DIALOGUE_CHARACTER = "dual_dialogue_character"
    DUAL_DIALOGUE_PARENTHETICAL = "dual_dialogue_parenthetical"
    DUAL_DIALOGUE = "dual_dialogue"
    TRANSITION_LINE = "transition_line"
    LYRICS = "lyrics"
    PAGE_BREAK = "page_break"
    CENTERED = "centered"
    SHOT = "shot"
    # Only produced by export layers that split long dialogue
    MORE = "more"
    DUAL_DIALOGUE_MORE = "dual_dialogue_more"
    UNPARSED = "unparsed"


TITLE_PAGE_TYPES = frozenset(
    {
        LineType.TITLE_PAGE_TITLE,
        LineType.TITLE_PAGE_AUTHOR,
        LineType.TITLE_PAGE_CREDIT,
        LineType.TITLE_PAGE_SOURCE,
        LineType.TITLE_PAGE_CONTACT,
        LineType.TITLE_PAGE_DRAFT_DATE,
        LineType.TITLE_PAGE_UNKNOWN,
    }
)

DIALOGUE_TYPES = frozenset(
    {
        LineType.CHARACTER,
        LineType.PARENTHETICAL,
        LineType.DIALOGUE,
        LineType.MORE,
    }
)

DUAL_DIALOGUE_TYPES = frozenset(
    {
        LineType.DUAL_DIALOGUE_CHARACTER,
        LineType.DUAL_DIALOGUE_PARENTHETICAL,
        LineType.DUAL_DIALOGUE,
        LineType.DUAL_DIALOGUE_MORE,
    }
)

# Title page keys recognized by the classifier
TITLE_PAGE_KEYS: dict[str, LineType] = {
    "title": LineType.TITLE_PAGE_TITLE,
    "author": LineType.TITLE_PAGE_AUTHOR,
    "authors": LineType.TITLE_PAGE_AUTHOR,
    "credit": LineType.TITLE_PAGE_CREDIT,
    "source": LineType.TITLE_PAGE_SOURCE,
    "contact": LineType.TITLE_PAGE_CONTACT,
    "contacts": LineType.TITLE_PAGE_CONTACT,
    "contact info": LineType.TITLE_PAGE_CONTACT,
    "draft": LineType.TITLE_PAGE_DRAFT_DATE,
    "draft date": LineType.TITLE_PAGE_DRAFT_DATE,
}


class PartialLineType(str, Enum):
    """How a line relates to the delimiters of one invisible element kind."""

    SELF_CONTAINED = "self_contained"
    ORPHANED_OPEN = "orphaned_open"
    ORPHANED_CLOSE = "orphaned_close"
    ORPHANED_OPEN_AND_CLOSE = "orphaned_open_and_close"
    INVISIBLE_ONLY = "invisible_only"


OPENING_PARTIAL_TYPES = frozenset(
    {PartialLineType.ORPHANED_OPEN, PartialLineType.ORPHANED_OPEN_AND_CLOSE}
)
CLOSING_PARTIAL_TYPES = frozenset(
    {PartialLineType.ORPHANED_CLOSE, PartialLineType.ORPHANED_OPEN_AND_CLOSE}
)
INTERRUPTING_PARTIAL_TYPES = frozenset(
    {PartialLineType.SELF_CONTAINED, PartialLineType.INVISIBLE_ONLY}
)


class RangedElementFamily(str, Enum):
    """Family of an invisible, possibly multi-line element."""

    BONEYARD = "boneyard"
    NOTE = "note"
    OTHER = "other"


@dataclass(frozen=True)
class RangedElementKind:
    """An invisible element family together with its delimiter pair."""

    family: RangedElementFamily
    open: str
    close: str
    label: str | None = None

    def __post_init__(self) -> None:
        if not self.open or not self.close:
            raise ValidationError(
                message="Ranged element delimiters must not be empty",
                hint="Provide both an open and a close delimiter string",
                details={"open": self.open, "close": self.close},
            )
        if self.open == self.close:
            raise ValidationError(
                message="Ranged element open and close delimiters must differ",
                hint="Identical delimiters cannot be told apart on a line",
                details={"open": self.open, "close": self.close},
            )

    @property
    def key(self) -> str:
        """Name used to key per-kind tags and ranges."""
        return self.label or self.family.value

    @property
    def delimiters(self) -> tuple[str, str]:
        return self.open, self.close

    @classmethod
    def boneyard(cls) -> RangedElementKind:
        return BONEYARD

    @classmethod
    def note(cls) -> RangedElementKind:
        return NOTE

    @classmethod
    def other(cls, label: str, open: str, close: str) -> RangedElementKind:
        """Create a kind for a delimiter pair outside the Fountain syntax."""
        if not label or label in {
            RangedElementFamily.BONEYARD.value,
            RangedElementFamily.NOTE.value,
        }:
            raise ValidationError(
                message=f"Invalid label for custom ranged element: {label!r}",
                hint="Use a non-empty label that is not 'boneyard' or 'note'",
            )
        return cls(RangedElementFamily.OTHER, open, close, label=label)


BONEYARD = RangedElementKind(RangedElementFamily.BONEYARD, "/*", "*/")
NOTE = RangedElementKind(RangedElementFamily.NOTE, "[[", "]]")
DEFAULT_RANGED_KINDS: tuple[RangedElementKind, ...] = (NOTE, BONEYARD)
