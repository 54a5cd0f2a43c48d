"""Serialization engine: Python value graph → JavaScript literal expression.

The renderer walks the graph depth-first and builds the text bottom-up.
Per call it keeps:

- the active containers (ids of arrays/objects being rendered), to reject
  circular structures;
- in reference mode, a registry mapping each object's id to the path where
  it was first rendered, and the ordered list of later duplicates.

Duplicates are left out of their container; `serialize_to_module` turns the
recorded pairs back into alias assignments.
"""

from __future__ import annotations

import base64
from datetime import datetime, timezone

from .errors import CircularStructureError, format_path
from .options import Options, OptionsLike, resolve_options
from .util import format_key, format_number, ordered_keys, quote
from .values import OBJECT_KINDS, Kind, RegExp, has_identity, kind_of

Path = tuple[str | int, ...]


class Serialized(str):
    """Literal text plus the duplicates found while rendering it.

    `references` holds (duplicate path, first-seen path) pairs in dotted form,
    e.g. ("c.d", "a"), in discovery order. `paths` holds the same pairs as
    segment tuples.
    """

    paths: list[tuple[Path, Path]]
    references: list[tuple[str, str]]

    def __new__(cls, text: str, paths: list[tuple[Path, Path]] | None = None) -> Serialized:
        self = super().__new__(cls, text)
        self.paths = list(paths or [])
        self.references = [(format_path(dup), format_path(first)) for dup, first in self.paths]
        return self


class Renderer:
    """Render one value graph. Not reusable across top-level calls."""

    def __init__(self, options: Options) -> None:
        self.options = options
        self.duplicates: list[tuple[Path, Path]] = []
        self._active: set[int] = set()
        # Registered objects are kept alive so their ids cannot be reused mid-call
        self._registry: dict[int, tuple[object, Path]] = {}

    def render(self, value: object, path: Path = (), depth: int = 0) -> str:
        """Render value found at path, nested depth containers deep."""
        return self._render(value, kind_of(value, path), path, depth)

    def _render(self, value: object, kind: Kind, path: Path, depth: int) -> str:
        if kind in OBJECT_KINDS:
            if id(value) in self._active:
                raise CircularStructureError(path)
            if self.options.reference and has_identity(value):
                self._registry[id(value)] = (value, path)
        match kind:
            case Kind.UNDEFINED:
                return "undefined"
            case Kind.NULL:
                return "null"
            case Kind.BOOLEAN:
                return "true" if value else "false"
            case Kind.NUMBER:
                return format_number(value)
            case Kind.STRING:
                return quote(value)
            case Kind.CODE:
                return value.source
            case Kind.REGEXP:
                regexp = value if isinstance(value, RegExp) else RegExp.from_pattern(value)
                return "/" + regexp.source + "/" + regexp.flags
            case Kind.DATE:
                return "new Date(" + quote(_iso_utc(value)) + ")"
            case Kind.ERROR:
                message = _error_message(value)
                if message:
                    return "new Error(" + quote(message) + ")"
                return "new Error()"
            case Kind.BUFFER:
                encoded = base64.b64encode(bytes(value)).decode("ascii")
                return "new Buffer(" + quote(encoded) + ", 'base64')"
            case Kind.ARRAY:
                return self._container(value, path, depth, self._array_items, "[", "]")
            case Kind.OBJECT:
                return self._container(value, path, depth, self._object_items, "{", "}")

    def _container(self, value, path: Path, depth: int, items, open_: str, close: str) -> str:
        self._active.add(id(value))
        try:
            parts = items(value, path, depth + 1)
        finally:
            self._active.discard(id(value))
        return self._join(parts, open_, close, depth)

    def _array_items(self, value, path: Path, depth: int) -> list[str]:
        parts: list[str] = []
        for i, item in enumerate(value):
            item_path = path + (i,)
            if self._is_duplicate(item, item_path):
                continue
            parts.append(self.render(item, item_path, depth))
        return parts

    def _object_items(self, value, path: Path, depth: int) -> list[str]:
        parts: list[str] = []
        for text, key in ordered_keys(value, path):
            item = value[key]
            item_path = path + (text,)
            if self._is_duplicate(item, item_path):
                continue
            kind = kind_of(item, item_path)
            rendered = self._render(item, kind, item_path, depth)
            parts.append(format_key(text, force_quote=kind in OBJECT_KINDS) + ": " + rendered)
        return parts

    def _is_duplicate(self, value: object, path: Path) -> bool:
        """Record value as a duplicate if it was already rendered elsewhere."""
        if not self.options.reference:
            return False
        entry = self._registry.get(id(value))
        if entry is None or entry[0] is not value:
            return False
        if id(value) in self._active:
            raise CircularStructureError(path)
        self.duplicates.append((path, entry[1]))
        return True

    def _join(self, parts: list[str], open_: str, close: str, depth: int) -> str:
        if not parts:
            return open_ + close
        if not self.options.beautify:
            return open_ + ", ".join(parts) + close
        indent = self.options.indent
        pad = indent * (depth + 1)
        return open_ + "\n" + pad + (",\n" + pad).join(parts) + "\n" + indent * depth + close


def _iso_utc(value: datetime) -> str:
    """ISO-8601 UTC text with millisecond precision; naive values count as UTC."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.isoformat(timespec="milliseconds") + "Z"


def _error_message(exc: BaseException) -> str:
    if len(exc.args) == 1:
        return str(exc.args[0])
    return str(exc)


def serialize(
    value: object,
    options: OptionsLike = None,
    *,
    reference: bool | None = None,
    beautify: bool | None = None,
    indent: str | None = None,
) -> Serialized:
    """Convert value to a JavaScript literal expression.

    With reference=True, objects seen a second time (by identity) are left
    out of their containers and reported in the result's `references`.
    Raises CircularStructureError or UnsupportedTypeError.
    """
    opts = resolve_options(
        options,
        {"reference": reference, "beautify": beautify, "indent": indent},
        reference=False,
        beautify=False,
    )
    renderer = Renderer(opts)
    text = renderer.render(value)
    return Serialized(text, renderer.duplicates)
