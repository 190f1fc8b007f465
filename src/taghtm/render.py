"""HTML renderer: serializes Element trees to HTML text."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from taghtm.nodes import Element

VOID_ELEMENTS = frozenset(
    "area base br col embed hr img input link meta param source track wbr".split()
)


def render(node: Any, *, doctype: bool = False) -> str:
    """Render a node, string, or list of them to HTML."""
    parts: list[str] = []
    if doctype:
        parts.append("<!DOCTYPE html>\n")
    _render_into(node, parts)
    return "".join(parts)


# ---------------------------------------------------------------------------
# HTML escaping
# ---------------------------------------------------------------------------


def _escape_html(text: str) -> str:
    """Escape text for HTML body content. Also encodes non-ASCII as entities."""
    result: list[str] = []
    for ch in text:
        if ch == "&":
            result.append("&amp;")
        elif ch == "<":
            result.append("&lt;")
        elif ch == ">":
            result.append("&gt;")
        elif ord(ch) > 0x7F:
            result.append(f"&#x{ord(ch):X};")
        else:
            result.append(ch)
    return "".join(result)


def _escape_attr(text: str) -> str:
    """Escape text for HTML attribute values."""
    result: list[str] = []
    for ch in text:
        if ch == "&":
            result.append("&amp;")
        elif ch == "<":
            result.append("&lt;")
        elif ch == ">":
            result.append("&gt;")
        elif ch == '"':
            result.append("&quot;")
        elif ord(ch) > 0x7F:
            result.append(f"&#x{ord(ch):X};")
        else:
            result.append(ch)
    return "".join(result)


# ---------------------------------------------------------------------------
# Nodes
# ---------------------------------------------------------------------------


def _render_into(node: Any, parts: list[str]) -> None:
    match node:
        case Element():
            _render_element(node, parts)
        case str():
            parts.append(_escape_html(node))
        case list() | tuple():
            for child in node:
                _render_into(child, parts)
        case None | bool():
            pass
        case _:
            parts.append(_escape_html(str(node)))


def _render_element(node: Element, parts: list[str]) -> None:
    parts.append(f"<{node.tag}{_render_props(node.props)}>")
    if node.tag in VOID_ELEMENTS and not node.children:
        return
    for child in node.children:
        _render_into(child, parts)
    parts.append(f"</{node.tag}>")


def _render_props(props: Mapping[str, Any]) -> str:
    parts: list[str] = []
    for name, value in props.items():
        if value is None or value is False or callable(value):
            continue
        if value is True:
            parts.append(f" {name}")
            continue
        parts.append(f' {name}="{_escape_attr(_prop_text(value))}"')
    return "".join(parts)


def _prop_text(value: Any) -> str:
    """Flatten a property value to attribute text."""
    if isinstance(value, Mapping):
        # style={"color": "red"} -> "color: red"
        return "; ".join(f"{k}: {v}" for k, v in value.items())
    if isinstance(value, (list, tuple)):
        return " ".join(str(v) for v in value if v)
    return str(value)
