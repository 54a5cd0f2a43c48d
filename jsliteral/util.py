"""Shared text helpers for the engine and the module emitter."""

from __future__ import annotations

import math
import re
from collections.abc import Mapping

from .errors import DuplicateKeyError, UnsupportedTypeError

IDENTIFIER = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")
ARRAY_INDEX = re.compile(r"0|[1-9][0-9]*")
EXPONENT = re.compile(r"e([+-])0*(\d)")

# Largest array index JavaScript enumerates ahead of other keys
MAX_ARRAY_INDEX = 2**32 - 2


def escape_string(value: str) -> str:
    """Escape a string for a single-quoted literal (without quotes).

    Only the backslash and the single quote are escaped; control characters
    such as newline and tab pass through untouched.
    """
    return value.replace("\\", "\\\\").replace("'", "\\'")


def quote(value: str) -> str:
    return "'" + escape_string(value) + "'"


def is_identifier(key: str) -> bool:
    return IDENTIFIER.fullmatch(key) is not None


def is_array_index(key: str) -> bool:
    """Check if key is a canonical non-negative integer JS enumerates first."""
    return ARRAY_INDEX.fullmatch(key) is not None and int(key) <= MAX_ARRAY_INDEX


def format_key(key: str, force_quote: bool = False) -> str:
    """Render an object key: bare identifier when possible, else quoted."""
    if not force_quote and is_identifier(key):
        return key
    return quote(key)


def ordered_keys(
    mapping: Mapping[object, object], path: tuple[str | int, ...] = ()
) -> list[tuple[str, object]]:
    """Return (key text, original key) pairs in JS own-key enumeration order.

    Array-index keys come first in ascending numeric order, the remaining
    keys follow in insertion order. Keys that collide once converted to
    text (`1` and `"1"`) raise DuplicateKeyError.
    """
    indices: list[tuple[int, str, object]] = []
    others: list[tuple[str, object]] = []
    seen: set[str] = set()
    for key in mapping:
        if isinstance(key, bool) or not isinstance(key, (str, int)):
            raise UnsupportedTypeError(key, path)
        text = str.__str__(key) if isinstance(key, str) else int.__repr__(key)
        if text in seen:
            raise DuplicateKeyError(text, path)
        seen.add(text)
        if is_array_index(text):
            indices.append((int(text), text, key))
        else:
            others.append((text, key))
    indices.sort(key=lambda entry: entry[0])
    return [(text, key) for _, text, key in indices] + others


def format_number(value: int | float) -> str:
    """Render a number the way JavaScript's String(n) would."""
    if isinstance(value, int):
        return int.__repr__(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    # Python pads exponents ("1e-07"), JavaScript does not ("1e-7")
    return EXPONENT.sub(r"e\1\2", float.__repr__(value))


def property_access(segment: str | int) -> str:
    """Render one path segment as a property accessor (`.a`, `['b-c']`, `[0]`)."""
    if isinstance(segment, int):
        return "[" + str(segment) + "]"
    if is_identifier(segment):
        return "." + segment
    return "[" + quote(segment) + "]"
