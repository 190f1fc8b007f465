"""taghtm parser: converts template segments and holes into a node tree."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from taghtm.errors import MarkupError
from taghtm.nodes import Component, Factory, Name, TagRef, h, is_empty, tag_ref
from taghtm.states import IN_TAG, Cursor, Mode, is_ws


@dataclass(slots=True)
class _Frame:
    """Mutable state for one nesting level."""

    mode: Mode = Mode.AWAIT
    buffer: str = ""
    tag: TagRef = Name("")
    tag_literal: bool = False
    tag_start: Cursor = Cursor(0, 0)
    props: dict[str, Any] = field(default_factory=dict)
    prop_name: str = ""
    closing_hole: bool = False
    children: list[Any] = field(default_factory=list)

    def open_tag(self, at: Cursor) -> None:
        self.mode = Mode.TAG_OPEN
        self.tag_start = at

    def commit_tag_name(self) -> None:
        self.tag = Name(self.buffer)
        self.tag_literal = True
        self.props = {}

    def flush_text(self, trim: bool) -> None:
        if trim:
            self.buffer = self.buffer.rstrip()
        if not self.buffer:
            return
        self.children.append(self.buffer)
        self.buffer = ""


@dataclass(frozen=True, slots=True)
class _Open:
    """The element whose children a frame is collecting."""

    tag: TagRef
    literal: bool
    start: Cursor


class Parser:
    """Recursive descent parser over literal segments and hole values."""

    def __init__(
        self,
        strings: Sequence[str],
        values: Sequence[Any],
        factory: Factory = h,
        *,
        strict: bool = False,
    ) -> None:
        self._strings = tuple(strings)
        self._values = tuple(values)
        if len(self._strings) != len(self._values) + 1:
            raise ValueError(
                f"expected {len(self._values) + 1} segments for {len(self._values)} holes, "
                f"got {len(self._strings)}"
            )
        self._factory = factory
        self._strict = strict

    def parse(self) -> Any:
        children, _ = self._parse_frame(Cursor(0, 0), None)
        return _resolve(children)

    # ------------------------------------------------------------------
    # Frames
    # ------------------------------------------------------------------

    def _parse_frame(self, start: Cursor, opener: _Open | None) -> tuple[list[Any], Cursor | None]:
        """Parse one nesting level starting at *start*.

        Returns the children collected and the cursor just past the closing
        tag, or None as the cursor when the input ran out first.
        """
        frame = _Frame()
        strings = self._strings
        seg, index = start.segment, start.index

        while seg < len(strings):
            while index < len(strings[seg]):
                ch = strings[seg][index]
                match frame.mode:
                    case Mode.AWAIT:
                        if ch == "<":
                            frame.open_tag(Cursor(seg, index))
                        elif not is_ws(ch):
                            frame.mode = Mode.TEXT
                            frame.buffer = ch
                    case Mode.TEXT:
                        if ch == "<":
                            frame.flush_text(trim=True)
                            frame.open_tag(Cursor(seg, index))
                        else:
                            frame.buffer += ch
                    case Mode.TAG_OPEN:
                        if ch == "/":
                            frame.mode = Mode.CLOSING_TAG
                            frame.buffer = ""
                            frame.closing_hole = False
                        else:
                            frame.mode = Mode.TAG_NAME
                            frame.buffer = ch
                    case Mode.CLOSING_TAG:
                        if ch == ">":
                            self._check_close(frame, opener)
                            return frame.children, Cursor(seg, index + 1)
                        frame.buffer += ch
                    case Mode.TAG_NAME:
                        if is_ws(ch):
                            frame.commit_tag_name()
                            frame.mode = Mode.PROPS
                        elif ch == "/":
                            frame.commit_tag_name()
                            frame.mode = Mode.SELF_CLOSING
                        elif ch == ">":
                            frame.commit_tag_name()
                            resume = self._descend(frame, Cursor(seg, index + 1))
                            if resume is None:
                                return frame.children, None
                            seg, index = resume.segment, resume.index
                            continue
                        else:
                            frame.buffer += ch
                    case Mode.PROPS:
                        if ch == ".":
                            # Accepted and discarded, so ...${obj} spells a spread
                            pass
                        elif ch == "/":
                            frame.mode = Mode.SELF_CLOSING
                        elif ch == ">":
                            resume = self._descend(frame, Cursor(seg, index + 1))
                            if resume is None:
                                return frame.children, None
                            seg, index = resume.segment, resume.index
                            continue
                        elif not is_ws(ch):
                            frame.mode = Mode.PROP_NAME
                            frame.buffer = ch
                    case Mode.PROP_NAME:
                        if ch == "=":
                            frame.prop_name = frame.buffer
                            frame.mode = Mode.PROP_VALUE
                        else:
                            if self._strict and (is_ws(ch) or ch in "/>"):
                                raise self._error(
                                    f"attribute '{frame.buffer}' has no value", Cursor(seg, index)
                                )
                            frame.buffer += ch
                    case Mode.PROP_VALUE:
                        if ch == '"':
                            frame.mode = Mode.PROP_VALUE_STRING
                            frame.buffer = ""
                    case Mode.PROP_VALUE_STRING:
                        if ch == '"':
                            frame.props[frame.prop_name] = frame.buffer
                            frame.mode = Mode.PROPS
                        else:
                            frame.buffer += ch
                    case Mode.SELF_CLOSING:
                        if ch == ">":
                            frame.children.append(self._build(frame.tag, frame.props, []))
                            frame.mode = Mode.AWAIT
                index += 1

            skip_quote = self._hole(frame, seg)
            seg += 1
            index = 1 if skip_quote else 0

        self._check_end(frame, opener)
        return frame.children, None

    def _descend(self, frame: _Frame, start: Cursor) -> Cursor | None:
        """Parse the children of the tag just opened and build its node."""
        opener = _Open(frame.tag, frame.tag_literal, frame.tag_start)
        children, resume = self._parse_frame(start, opener)
        frame.children.append(self._build(frame.tag, frame.props, children))
        frame.mode = Mode.AWAIT
        return resume

    def _hole(self, frame: _Frame, seg: int) -> bool:
        """Splice the hole that follows segment *seg* into the frame.

        Returns True when the next segment starts with a closing quote that
        must be skipped.
        """
        if seg >= len(self._values):
            if frame.mode is Mode.TEXT:
                frame.flush_text(trim=True)
            return False

        value = self._values[seg]
        match frame.mode:
            case Mode.AWAIT:
                _splice(frame.children, value)
            case Mode.TEXT:
                frame.flush_text(trim=is_empty(value))
                _splice(frame.children, value)
            case Mode.TAG_OPEN:
                frame.tag = tag_ref(value)
                frame.tag_literal = False
                frame.props = {}
                frame.mode = Mode.PROPS
            case Mode.PROPS:
                if isinstance(value, Mapping):
                    frame.props.update(value)
            case Mode.PROP_VALUE:
                frame.props[frame.prop_name] = value
                frame.mode = Mode.PROPS
            case Mode.PROP_VALUE_STRING:
                frame.props[frame.prop_name] = value
                frame.mode = Mode.PROPS
                return True
            case Mode.CLOSING_TAG:
                frame.closing_hole = True
            case Mode.TAG_NAME if self._strict:
                raise self._error("hole inside tag name", Cursor(seg, len(self._strings[seg])))
            case Mode.PROP_NAME if self._strict:
                raise self._error(
                    "hole inside attribute name", Cursor(seg, len(self._strings[seg]))
                )
        return False

    # ------------------------------------------------------------------
    # Nodes
    # ------------------------------------------------------------------

    def _build(self, tag: TagRef, props: dict[str, Any], children: list[Any]) -> Any:
        if isinstance(tag, Component):
            return tag.func(props, children)
        return self._factory(tag.value, props, children)

    # ------------------------------------------------------------------
    # Strict checks
    # ------------------------------------------------------------------

    def _check_close(self, frame: _Frame, opener: _Open | None) -> None:
        if not self._strict:
            return
        if opener is None:
            raise self._error("closing tag without an open element", frame.tag_start)
        name = frame.buffer.strip()
        if frame.closing_hole or name in ("", "/") or not opener.literal:
            return
        if isinstance(opener.tag, Name) and name != opener.tag.value:
            raise self._error(
                f"closing tag </{name}> does not match <{opener.tag.value}>", frame.tag_start
            )

    def _check_end(self, frame: _Frame, opener: _Open | None) -> None:
        if not self._strict:
            return
        if frame.mode in IN_TAG:
            raise self._error("unterminated tag", frame.tag_start)
        if opener is not None:
            raise self._error(f"unclosed element <{_label(opener.tag)}>", opener.start)

    def _error(self, message: str, at: Cursor) -> MarkupError:
        return MarkupError(message, at, self._strings)


def _splice(children: list[Any], value: Any) -> None:
    if is_empty(value):
        return
    if isinstance(value, (list, tuple)):
        children.extend(value)
    else:
        children.append(value)


def _resolve(children: list[Any]) -> Any:
    return children[0] if len(children) == 1 else children


def _label(tag: TagRef) -> str:
    if isinstance(tag, Component):
        return getattr(tag.func, "__name__", repr(tag.func))
    return tag.value


def parse(
    strings: Sequence[str],
    values: Sequence[Any],
    factory: Factory = h,
    *,
    strict: bool = False,
) -> Any:
    """Parse template segments and holes into a node, string, or list of them."""
    return Parser(strings, values, factory, strict=strict).parse()
