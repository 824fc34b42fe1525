"""screenlines: a continuous Fountain screenplay line parser.

Splits a Fountain document into lines, types every line in one forward
pass, and resolves notes and boneyard blocks that span several lines.
"""

from .config import ScreenLinesSettings, get_logger, get_settings
from .parser import (
    BONEYARD,
    NOTE,
    FountainDocument,
    FountainParser,
    Line,
    LineType,
    MultilineRange,
    PartialLineType,
    RangedElementKind,
    parse_fountain,
    split_lines,
)

__version__ = "0.1.0"
__license__ = "MIT"

__all__ = [
    "BONEYARD",
    "NOTE",
    "FountainDocument",
    "FountainParser",
    "Line",
    "LineType",
    "MultilineRange",
    "PartialLineType",
    "RangedElementKind",
    "ScreenLinesSettings",
    "__version__",
    "get_logger",
    "get_settings",
    "parse_fountain",
    "split_lines",
]
