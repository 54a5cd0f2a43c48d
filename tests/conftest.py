"""Pytest configuration for the jsliteral test suite."""

import sys
from pathlib import Path

import pytest

# Add project root to path for jsliteral imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from jsliteral import UNDEFINED  # noqa: E402


@pytest.fixture
def shared() -> dict[str, object]:
    """A value graph where `b` and `c.d` share identity with `a`."""
    r = {"one": True, "thr-ee": UNDEFINED}
    return {"a": r, "b": r, "c": {"d": r}}


@pytest.fixture
def circular() -> dict[str, object]:
    """A value graph where `a.b` is `a` itself."""
    o: dict[str, object] = {"a": {"b": {}}}
    o["a"]["b"] = o["a"]
    return o
