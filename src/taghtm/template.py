"""Template-tag entry points, including PEP 750 template strings."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from taghtm.nodes import Factory, h
from taghtm.parser import parse


@runtime_checkable
class TemplateProtocol(Protocol):
    """Structural view of string.templatelib.Template (Python 3.14+)."""

    strings: tuple[str, ...]
    interpolations: tuple[Any, ...]


def split_template(template: TemplateProtocol) -> tuple[tuple[str, ...], tuple[Any, ...]]:
    """Return the (strings, values) pair of a template string."""
    if not isinstance(template, TemplateProtocol):
        raise TypeError("expected a string.templatelib.Template or compatible object")
    return tuple(template.strings), tuple(i.value for i in template.interpolations)


class Tag:
    """A template tag bound to a node factory.

    Call it with a template string, ``tag(t"<p>{name}</p>")``, or with the
    segments and holes spelled out, ``tag(["<p>", "</p>"], name)``.
    """

    def __init__(self, factory: Factory = h, *, strict: bool = False) -> None:
        self.factory = factory
        self.strict = strict

    def __call__(self, strings: Sequence[str] | TemplateProtocol, *values: Any) -> Any:
        if isinstance(strings, TemplateProtocol):
            if values:
                raise TypeError("a template string takes no extra values")
            strings, values = split_template(strings)
        elif isinstance(strings, str):
            strings = (strings,)
        return parse(strings, values, self.factory, strict=self.strict)

    def __repr__(self) -> str:
        name = getattr(self.factory, "__name__", repr(self.factory))
        return f"Tag({name}, strict={self.strict})"


def bind(factory: Factory = h, *, strict: bool = False) -> Tag:
    """Return a template tag that builds nodes with *factory*."""
    return Tag(factory, strict=strict)


html = bind(h)
