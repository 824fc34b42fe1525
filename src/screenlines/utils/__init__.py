"""screenlines utilities module."""

from screenlines.utils.screenplay import ScreenplayUtils

__all__ = [
    "ScreenplayUtils",
]
