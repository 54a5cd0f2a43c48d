"""Serialize Python values to JavaScript literal source."""

from .engine import Renderer, Serialized, serialize
from .errors import (
    CircularStructureError,
    DuplicateKeyError,
    SerializeError,
    UnsupportedTypeError,
)
from .module import ModuleEmitter, serialize_to_module
from .options import Options
from .values import UNDEFINED, Code, Kind, RegExp, kind_of

__all__ = [
    "UNDEFINED",
    "CircularStructureError",
    "Code",
    "DuplicateKeyError",
    "Kind",
    "ModuleEmitter",
    "Options",
    "RegExp",
    "Renderer",
    "SerializeError",
    "Serialized",
    "UnsupportedTypeError",
    "kind_of",
    "serialize",
    "serialize_to_module",
]
