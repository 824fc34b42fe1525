"""Screenplay-specific text utility functions.

All offsets and lengths handled here are counted in extended grapheme
clusters, so a base letter followed by combining marks, or an emoji with
modifiers, counts as one position.
"""

from __future__ import annotations

from bisect import bisect_right

import regex

_GRAPHEME_PATTERN = regex.compile(r"\X")


class ScreenplayUtils:
    """Utility functions for screenplay line processing."""

    @staticmethod
    def graphemes(text: str) -> list[str]:
        """Split text into extended grapheme clusters.

        Args:
            text: Any string

        Returns:
            List of grapheme clusters in order
        """
        if not text:
            return []
        return _GRAPHEME_PATTERN.findall(text)

    @staticmethod
    def grapheme_count(text: str) -> int:
        """Return the number of grapheme clusters in text."""
        return len(ScreenplayUtils.graphemes(text))

    @staticmethod
    def grapheme_at(text: str, index: int) -> str | None:
        """Return the grapheme at a zero-based index, or None when out of range."""
        clusters = ScreenplayUtils.graphemes(text)
        if -len(clusters) <= index < len(clusters):
            return clusters[index]
        return None

    @staticmethod
    def find_all(text: str, pattern: str) -> list[int]:
        """Find every non-overlapping occurrence of pattern in text.

        Matching is a plain left-to-right substring search; the returned
        offsets are grapheme positions of each match start.

        Args:
            text: Text to search
            pattern: Literal substring to look for

        Returns:
            Ascending list of grapheme offsets (empty if no match)
        """
        if not text or not pattern:
            return []

        starts: list[int] = []
        position = 0
        for cluster in ScreenplayUtils.graphemes(text):
            starts.append(position)
            position += len(cluster)

        offsets: list[int] = []
        found = text.find(pattern)
        while found != -1:
            offsets.append(bisect_right(starts, found) - 1)
            found = text.find(pattern, found + len(pattern))
        return offsets

    @staticmethod
    def is_blank(text: str) -> bool:
        """Return True when text is empty or whitespace only."""
        return text.strip() == ""

    @staticmethod
    def is_uppercase(text: str) -> bool:
        """Return True when upper-casing text leaves it unchanged."""
        return text == text.upper()

    @staticmethod
    def only_uppercase_until_parenthesis(text: str) -> bool:
        """Check that the text before the first ``(`` is non-empty and uppercase.

        ``"JOHN (V.O.)"`` passes, ``"(beat)"`` and ``"John"`` do not.
        """
        head = text.split("(", 1)[0]
        return len(head) > 0 and head == head.upper()

    @staticmethod
    def title_page_key(text: str) -> str:
        """Extract the lower-cased title page key from a line.

        The key is the text before the first colon. Lines with the colon in
        first position, a leading space, or a key ending in " to" (which is
        how transitions like "CUT TO:" read) have no key.

        Args:
            text: Line text

        Returns:
            The key, or an empty string when the line has none
        """
        if not text or ":" not in text:
            return ""
        index = text.index(":")
        prefix = text[:index].lower()
        if index == 0 or text.startswith(" ") or prefix.endswith(" to"):
            return ""
        return prefix
