"""Error types with formatted source context."""

from __future__ import annotations

from collections.abc import Sequence

from taghtm.states import Cursor, Position, position_in

HOLE_MARKER = "${...}"


def format_context(
    message: str,
    source: str,
    position: Position,
    filename: str,
    width: int = 1,
) -> str:
    lines = source.splitlines(keepends=True)
    line_idx = position.line - 1
    col = position.column

    if 0 <= line_idx < len(lines):
        source_line = lines[line_idx].rstrip("\n").rstrip("\r")
    else:
        source_line = ""

    # At least one caret, but stay within the line
    underline_len = max(1, min(width, len(source_line) - col + 1))

    pad = " " * (col - 1)
    carets = "^" * underline_len

    line_num = str(position.line)
    gutter_width = len(line_num) + 1

    blank_gutter = " " * gutter_width + "|"
    line_gutter = f"{line_num:>{gutter_width - 1}} |"

    return (
        f"error: {message}\n"
        f"{' ' * gutter_width}--> {filename}:{position.line}:{col}\n"
        f"{blank_gutter}\n"
        f"{line_gutter} {source_line}\n"
        f"{blank_gutter} {pad}{carets}"
    )


class MarkupError(Exception):
    """Raised by strict parsing on malformed markup, with cursor and context."""

    def __init__(self, message: str, cursor: Cursor, strings: Sequence[str]) -> None:
        self.message = message
        self.cursor = cursor
        self.strings = tuple(strings)
        super().__init__(self.format())

    def source(self, placeholders: Sequence[str] | None = None) -> str:
        """Rebuild the template text, writing each hole as its placeholder."""
        parts: list[str] = []
        for k, segment in enumerate(self.strings):
            parts.append(segment)
            if k < len(self.strings) - 1:
                parts.append(placeholders[k] if placeholders is not None else HOLE_MARKER)
        return "".join(parts)

    def position(self, placeholders: Sequence[str] | None = None) -> Position:
        """Line/column of the cursor within the rebuilt template text."""
        offset = 0
        for k in range(min(self.cursor.segment, len(self.strings))):
            offset += len(self.strings[k])
            offset += len(placeholders[k]) if placeholders is not None else len(HOLE_MARKER)
        offset += self.cursor.index
        return position_in(self.source(placeholders), offset)

    def format(
        self,
        filename: str = "<template>",
        placeholders: Sequence[str] | None = None,
    ) -> str:
        return format_context(
            self.message,
            self.source(placeholders),
            self.position(placeholders),
            filename,
        )


class TemplateError(Exception):
    """Raised on errors in template source files, with position and context."""

    def __init__(self, message: str, position: Position, source: str, width: int = 1) -> None:
        self.message = message
        self.position = position
        self.source = source
        self.width = width
        super().__init__(self.format())

    def format(self, filename: str = "<template>") -> str:
        return format_context(self.message, self.source, self.position, filename, self.width)


class BindError(Exception):
    """Raised when a placeholder has no value to bind."""

    def __init__(self, name: str, position: Position, source: str, width: int = 1) -> None:
        self.name = name
        self.message = f"no value for placeholder '{name}'"
        self.position = position
        self.source = source
        self.width = width
        super().__init__(self.format())

    def format(self, filename: str = "<template>") -> str:
        return format_context(self.message, self.source, self.position, filename, self.width)
