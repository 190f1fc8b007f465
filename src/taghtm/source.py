"""Template source files: ${name} placeholders split into segments and holes."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from taghtm.errors import BindError, TemplateError
from taghtm.states import Cursor, Position, position_in


@dataclass(frozen=True, slots=True)
class Placeholder:
    """A ${name} placeholder as written in the source."""

    name: str
    raw: str
    offset: int


@dataclass(frozen=True, slots=True)
class SourceTemplate:
    """A template source split into literal segments and named placeholders."""

    source: str
    strings: tuple[str, ...]
    placeholders: tuple[Placeholder, ...]
    # Source offset where each segment starts
    starts: tuple[int, ...]
    # Per segment, indices at which a $$ escape collapsed to one character
    escapes: tuple[tuple[int, ...], ...]

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(p.name for p in self.placeholders)

    def bind(self, values: Mapping[str, Any]) -> tuple[Any, ...]:
        """Look up a value for every placeholder, in source order."""
        bound: list[Any] = []
        for ph in self.placeholders:
            found, value = _lookup(values, ph.name)
            if not found:
                raise BindError(
                    ph.name, position_in(self.source, ph.offset), self.source, len(ph.raw)
                )
            bound.append(value)
        return tuple(bound)

    def position(self, cursor: Cursor) -> Position:
        """Map a parser cursor back to a position in the source text."""
        if cursor.segment >= len(self.strings):
            return position_in(self.source, len(self.source))
        shift = sum(1 for q in self.escapes[cursor.segment] if q < cursor.index)
        return position_in(self.source, self.starts[cursor.segment] + cursor.index + shift)


_NAME_START = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ_")
_NAME_CHARS = _NAME_START | frozenset("0123456789-")


def is_placeholder_name(name: str) -> bool:
    """Return True if name is a dotted identifier such as user.name."""
    if not name:
        return False
    for part in name.split("."):
        if not part or part[0] not in _NAME_START:
            return False
        if any(ch not in _NAME_CHARS for ch in part):
            return False
    return True


def split_source(source: str) -> SourceTemplate:
    """Split template source on ${name} placeholders.

    ``$$`` writes a literal ``$``; a ``$`` not followed by ``{`` is literal.
    """
    strings: list[str] = []
    placeholders: list[Placeholder] = []
    starts: list[int] = [0]
    escapes: list[tuple[int, ...]] = []

    chars: list[str] = []
    seg_escapes: list[int] = []
    pos = 0
    while pos < len(source):
        ch = source[pos]
        if ch == "$" and source.startswith("$$", pos):
            seg_escapes.append(len(chars))
            chars.append("$")
            pos += 2
            continue
        if ch == "$" and source.startswith("${", pos):
            close = source.find("}", pos + 2)
            if close == -1:
                raise TemplateError(
                    "unterminated placeholder", position_in(source, pos), source, 2
                )
            raw = source[pos : close + 1]
            name = raw[2:-1].strip()
            if not name:
                raise TemplateError(
                    "empty placeholder", position_in(source, pos), source, len(raw)
                )
            if not is_placeholder_name(name):
                raise TemplateError(
                    f"invalid placeholder name '{name}'",
                    position_in(source, pos),
                    source,
                    len(raw),
                )
            strings.append("".join(chars))
            escapes.append(tuple(seg_escapes))
            placeholders.append(Placeholder(name, raw, pos))
            chars = []
            seg_escapes = []
            pos = close + 1
            starts.append(pos)
            continue
        chars.append(ch)
        pos += 1

    strings.append("".join(chars))
    escapes.append(tuple(seg_escapes))
    return SourceTemplate(
        source, tuple(strings), tuple(placeholders), tuple(starts), tuple(escapes)
    )


def _lookup(values: Mapping[str, Any], name: str) -> tuple[bool, Any]:
    """Resolve a dotted name; a full-name key wins over nested lookup."""
    if name in values:
        return True, values[name]
    current: Any = values
    for part in name.split("."):
        if not isinstance(current, Mapping) or part not in current:
            return False, None
        current = current[part]
    return True, current
