"""--debug tree dump to stderr."""

from __future__ import annotations

import sys
from typing import Any, TextIO

from taghtm.nodes import Element


def dump_tree(node: Any, *, file: TextIO = sys.stderr) -> None:
    """Print a human-readable node tree to *file*."""
    if isinstance(node, list):
        file.write("Fragment\n")
        for child in node:
            _dump_node(child, 1, file)
    else:
        _dump_node(node, 0, file)


def _indent(depth: int) -> str:
    return "  " * depth


def _dump_node(node: Any, depth: int, f: TextIO) -> None:
    if isinstance(node, Element):
        f.write(f"{_indent(depth)}Element <{node.tag}>\n")
        for name, value in node.props.items():
            f.write(f"{_indent(depth + 1)}Prop {name}={value!r}\n")
        for child in node.children:
            _dump_node(child, depth + 1, f)
    elif isinstance(node, str):
        f.write(f"{_indent(depth)}Text({node!r})\n")
    elif isinstance(node, (list, tuple)):
        f.write(f"{_indent(depth)}Fragment\n")
        for child in node:
            _dump_node(child, depth + 1, f)
    else:
        f.write(f"{_indent(depth)}Value({node!r})\n")
