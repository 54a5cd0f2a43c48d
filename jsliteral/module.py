"""Module emitter: value graph → CommonJS module source.

A single literal cannot make two properties point at the same object, so the
primary literal is emitted with duplicates left out and each duplicate is
restored by an alias assignment:

    var m = module.exports = {'a': {one: true}, 'c': {}};
    m.b = m.a;
    m.c.d = m.a;
"""

from __future__ import annotations

from .engine import Path, Renderer
from .options import Options, OptionsLike, resolve_options
from .util import property_access

ROOT: str = "m"


def accessor(path: Path) -> str:
    """Render a path as a property-access chain on the root binding."""
    return ROOT + "".join(property_access(seg) for seg in path)


class ModuleEmitter:
    """Emit module statements for one value graph."""

    def __init__(self, options: Options) -> None:
        self.options = options
        self.lines: list[str] = []

    def line(self, text: str) -> None:
        self.lines.append(text)

    def emit(self, value: object) -> str:
        self.lines = []
        renderer = Renderer(self.options)
        literal = renderer.render(value)
        self.line("var " + ROOT + " = module.exports = " + literal + ";")
        for dup, first in renderer.duplicates:
            self.line(accessor(dup) + " = " + accessor(first) + ";")
        return self.output()

    def output(self) -> str:
        """Join statements; only single-line output ends with a newline."""
        text = "\n".join(self.lines)
        if not self.options.beautify:
            text += "\n"
        return text


def serialize_to_module(
    value: object,
    options: OptionsLike = None,
    *,
    reference: bool | None = None,
    beautify: bool | None = None,
    indent: str | None = None,
) -> str:
    """Convert value to `var m = module.exports = ...;` plus alias statements.

    Reference tracking and beautify are on unless switched off. With
    reference=False shared objects are written out in full at every
    occurrence and no alias statements follow.
    """
    opts = resolve_options(
        options,
        {"reference": reference, "beautify": beautify, "indent": indent},
        reference=True,
        beautify=True,
    )
    return ModuleEmitter(opts).emit(value)
