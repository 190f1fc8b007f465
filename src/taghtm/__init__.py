"""taghtm: build node trees from markup templates with interpolated holes."""

from __future__ import annotations

from taghtm.errors import BindError, MarkupError, TemplateError
from taghtm.nodes import Component, Element, Name, h, tag_ref
from taghtm.parser import parse
from taghtm.render import render
from taghtm.template import Tag, bind, html

__version__ = "0.1.0"

__all__ = [
    "BindError",
    "Component",
    "Element",
    "MarkupError",
    "Name",
    "Tag",
    "TemplateError",
    "bind",
    "h",
    "html",
    "parse",
    "render",
    "tag_ref",
]
