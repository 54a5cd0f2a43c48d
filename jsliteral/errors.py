"""Errors raised while converting a value graph to JavaScript source."""

from __future__ import annotations


def format_path(path: tuple[str | int, ...]) -> str:
    """Join path segments with dots; the root is the empty string."""
    return ".".join(str(seg) for seg in path)


class SerializeError(Exception):
    """Serialization error with the path of the offending value."""

    def __init__(self, msg: str, path: tuple[str | int, ...] = ()):
        self.msg: str = msg
        self.path: tuple[str | int, ...] = path
        if path:
            super().__init__(msg + " (at '" + format_path(path) + "')")
        else:
            super().__init__(msg)


class CircularStructureError(SerializeError):
    """A container holds itself, directly or through its children."""

    def __init__(self, path: tuple[str | int, ...] = ()):
        super().__init__("can not convert circular structures", path)


class UnsupportedTypeError(SerializeError, TypeError):
    """A value has no JavaScript literal form."""

    def __init__(self, value: object, path: tuple[str | int, ...] = ()):
        self.type_name: str = type(value).__name__
        super().__init__("unsupported type '" + self.type_name + "'", path)


class DuplicateKeyError(UnsupportedTypeError):
    """Two mapping keys (such as `1` and `"1"`) name the same JS property."""

    def __init__(self, key: str, path: tuple[str | int, ...] = ()):
        self.key: str = key
        SerializeError.__init__(self, "duplicate key '" + key + "'", path)
        self.type_name = "key"
