"""Shared test fixtures and helpers."""

from __future__ import annotations

from typing import Any

import pytest

from taghtm.nodes import Element, h
from taghtm.parser import parse
from taghtm.source import split_source


@pytest.fixture
def markup():
    """Return a helper that parses ${name} source with keyword values as holes."""

    def _markup(source: str, strict: bool = False, **values: Any) -> Any:
        template = split_source(source)
        return parse(template.strings, template.bind(values), strict=strict)

    return _markup


class RecordingFactory:
    """Node factory that records every call it receives."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, dict[str, Any], list[Any]]] = []

    def __call__(self, tag: str, props: dict[str, Any], children: list[Any]) -> Element:
        self.calls.append((tag, props, children))
        return h(tag, props, children)


@pytest.fixture
def factory() -> RecordingFactory:
    return RecordingFactory()


def assert_element(
    node: Any,
    tag: str,
    props: dict[str, Any] | None = None,
    children: tuple[Any, ...] | None = None,
) -> None:
    """Assert basic properties of an Element node."""
    assert isinstance(node, Element), f"Expected Element, got {type(node).__name__}"
    assert node.tag == tag, f"Expected tag '{tag}', got '{node.tag}'"
    if props is not None:
        assert node.props == props, f"Expected props {props}, got {node.props}"
    if children is not None:
        assert node.children == children, f"Expected children {children}, got {node.children}"
