"""Value kinds understood by the serializer.

Python has no native `undefined`, regexp-with-flags, or function-source value,
so this module supplies small wrappers for them and classifies every input
into one closed set of kinds:

| Kind      | Python values                              |
|-----------|--------------------------------------------|
| UNDEFINED | UNDEFINED                                  |
| NULL      | None                                       |
| BOOLEAN   | bool                                       |
| NUMBER    | int, float                                 |
| STRING    | str                                        |
| CODE      | Code                                       |
| REGEXP    | RegExp, re.Pattern[str]                    |
| DATE      | datetime.datetime                          |
| ERROR     | BaseException instances                    |
| BUFFER    | bytes, bytearray, memoryview               |
| ARRAY     | list, tuple                                |
| OBJECT    | dict, collections.abc.Mapping              |
"""

from __future__ import annotations

import enum
import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime

from .errors import UnsupportedTypeError

# Canonical flag order: global, ignore-case, multiline, unicode, sticky, dot-all
REGEXP_FLAGS: str = "gimuys"


class _Undefined:
    """JavaScript `undefined`, distinct from `None` (which maps to `null`)."""

    _instance: _Undefined | None = None

    def __new__(cls) -> _Undefined:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "UNDEFINED"


UNDEFINED = _Undefined()


@dataclass(frozen=True)
class Code:
    """Executable source text, emitted verbatim.

    The text is assumed to be a valid JavaScript expression (typically a
    function); it is neither checked nor re-indented.
    """

    source: str


@dataclass(eq=False)
class RegExp:
    """A regular expression with JavaScript flags.

    Flags may be given in any order; `flags` is always stored in the
    canonical order of REGEXP_FLAGS.
    """

    source: str
    flags: str = ""

    def __post_init__(self) -> None:
        self.flags = normalize_flags(self.flags)

    @classmethod
    def from_pattern(cls, pattern: re.Pattern[str]) -> RegExp:
        """Convert a compiled str pattern, keeping the flags JavaScript shares."""
        flags = ""
        if pattern.flags & re.IGNORECASE:
            flags += "i"
        if pattern.flags & re.MULTILINE:
            flags += "m"
        if pattern.flags & re.DOTALL:
            flags += "s"
        return cls(pattern.pattern, flags)


def normalize_flags(flags: str) -> str:
    """Reorder regexp flags canonically. Raises ValueError on bad flags."""
    seen: set[str] = set()
    for c in flags:
        if c not in REGEXP_FLAGS:
            raise ValueError("invalid regular expression flag '" + c + "'")
        if c in seen:
            raise ValueError("duplicate regular expression flag '" + c + "'")
        seen.add(c)
    return "".join(c for c in REGEXP_FLAGS if c in seen)


class Kind(enum.Enum):
    UNDEFINED = "undefined"
    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    CODE = "code"
    REGEXP = "regexp"
    DATE = "date"
    ERROR = "error"
    BUFFER = "buffer"
    ARRAY = "array"
    OBJECT = "object"


# Kinds rendered as JS objects (containers or `new X(...)` / regexp literals).
OBJECT_KINDS: frozenset[Kind] = frozenset(
    {Kind.REGEXP, Kind.DATE, Kind.ERROR, Kind.BUFFER, Kind.ARRAY, Kind.OBJECT}
)


def kind_of(value: object, path: tuple[str | int, ...] = ()) -> Kind:
    """Classify a value. Raises UnsupportedTypeError for anything else."""
    if value is UNDEFINED:
        return Kind.UNDEFINED
    if value is None:
        return Kind.NULL
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return Kind.BOOLEAN
    if isinstance(value, (int, float)):
        return Kind.NUMBER
    if isinstance(value, str):
        return Kind.STRING
    if isinstance(value, Code):
        return Kind.CODE
    if isinstance(value, RegExp):
        return Kind.REGEXP
    if isinstance(value, re.Pattern) and isinstance(value.pattern, str):
        return Kind.REGEXP
    if isinstance(value, datetime):
        return Kind.DATE
    if isinstance(value, BaseException):
        return Kind.ERROR
    if isinstance(value, (bytes, bytearray, memoryview)):
        return Kind.BUFFER
    if isinstance(value, (list, tuple)):
        return Kind.ARRAY
    if isinstance(value, Mapping):
        return Kind.OBJECT
    raise UnsupportedTypeError(value, path)


def has_identity(value: object) -> bool:
    """Whether two occurrences of `value` by `is` mean a shared JS object.

    Immutable builtins (tuple, bytes, memoryview, compiled patterns) may be
    cached and shared by the interpreter, so sharing them says nothing about
    the caller's intent.
    """
    return not isinstance(value, (tuple, bytes, memoryview, re.Pattern))
