"""Parser modes, read positions, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class Mode(Enum):
    AWAIT = auto()  # between elements/text, skipping whitespace
    TEXT = auto()  # accumulating a text run
    TAG_OPEN = auto()  # just saw <
    CLOSING_TAG = auto()  # saw </, waiting for >
    TAG_NAME = auto()  # accumulating a tag name
    PROPS = auto()  # between attributes
    PROP_NAME = auto()  # accumulating an attribute name
    PROP_VALUE = auto()  # saw =, waiting for " or a hole
    PROP_VALUE_STRING = auto()  # inside a quoted attribute value
    SELF_CLOSING = auto()  # saw / inside a tag, waiting for >


# Modes in which the parser is somewhere inside a <...> tag.
IN_TAG = frozenset(
    {
        Mode.TAG_OPEN,
        Mode.CLOSING_TAG,
        Mode.TAG_NAME,
        Mode.PROPS,
        Mode.PROP_NAME,
        Mode.PROP_VALUE,
        Mode.PROP_VALUE_STRING,
        Mode.SELF_CLOSING,
    }
)


@dataclass(frozen=True, slots=True)
class Cursor:
    """Parser read position: segment index and 0-based character index."""

    segment: int
    index: int


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based offset."""

    line: int
    column: int
    offset: int


_WS = frozenset(" \t\n\r")


def is_ws(ch: str) -> bool:
    """Return True if ch separates tokens inside a tag."""
    return ch in _WS


def position_in(source: str, offset: int) -> Position:
    """Return the line/column Position of offset within source."""
    offset = max(0, min(offset, len(source)))
    line = source.count("\n", 0, offset) + 1
    line_start = source.rfind("\n", 0, offset) + 1
    return Position(line, offset - line_start + 1, offset)
