"""Node and tag reference types, plus the default node factory."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

Factory = Callable[[str, dict[str, Any], list[Any]], Any]


@dataclass(frozen=True, slots=True)
class Element:
    """Presentation node built by the default factory."""

    tag: str
    props: dict[str, Any]
    children: tuple[Any, ...] = ()


@dataclass(frozen=True, slots=True)
class Name:
    """Tag given by name; built through the node factory."""

    value: str


@dataclass(frozen=True, slots=True)
class Component:
    """Tag given as a callable; invoked as func(props, children)."""

    func: Callable[[dict[str, Any], list[Any]], Any]


TagRef = Name | Component


def tag_ref(value: Any) -> TagRef:
    """Classify a tag-position value by whether it can be called."""
    if callable(value):
        return Component(value)
    if isinstance(value, str):
        return Name(value)
    return Name(str(value))


def h(tag: str, props: dict[str, Any], children: list[Any]) -> Element:
    """Default node factory."""
    return Element(tag, props, tuple(children))


def is_empty(value: Any) -> bool:
    """Return True for falsy scalar holes, which contribute no child node.

    None, False, "" and numeric zero (or NaN) count as empty. True is kept
    and left for the renderer to drop.
    """
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return not value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0 or value != value
    return False
