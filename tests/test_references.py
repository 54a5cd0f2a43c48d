"""Reference tracking and cycle detection tests."""

import re
from collections.abc import Mapping

import pytest

from jsliteral import CircularStructureError, RegExp, serialize


def test_shared_object_left_out(shared):
    result = serialize(shared, reference=True)
    assert result == "{'a': {one: true, 'thr-ee': undefined}, 'c': {}}"
    assert result.references == [("b", "a"), ("c.d", "a")]
    assert result.paths == [(("b",), ("a",)), (("c", "d"), ("a",))]


def test_options_mapping_not_mutated(shared):
    opts = {"reference": True}
    result = serialize(shared, opts)
    assert opts == {"reference": True}
    assert result.references == [("b", "a"), ("c.d", "a")]


def test_shared_in_array():
    r = [1]
    result = serialize({"list": [r, 2, r]}, reference=True)
    assert result == "{'list': [[1], 2]}"
    assert result.references == [("list.2", "list.0")]
    assert result.paths == [(("list", 2), ("list", 0))]


def test_equal_but_distinct_not_merged():
    result = serialize({"a": {"x": 1}, "b": {"x": 1}}, reference=True)
    assert result == "{'a': {x: 1}, 'b': {x: 1}}"
    assert result.references == []


def test_primitives_never_deduplicated():
    s = "shared text"
    result = serialize({"a": s, "b": s, "c": 10**20, "d": 10**20}, reference=True)
    assert result == (
        "{a: 'shared text', b: 'shared text', c: 100000000000000000000, d: 100000000000000000000}"
    )
    assert result.references == []


def test_special_objects_tracked():
    r = RegExp("a+", "g")
    result = serialize([r, {"again": r}], reference=True)
    assert result == "[/a+/g, {}]"
    assert result.references == [("1.again", "0")]


def test_immutable_values_rendered_each_time():
    t = (1, 2)
    p = re.compile("x")
    result = serialize({"a": t, "b": t, "c": p, "d": p, "e": b"", "f": b""}, reference=True)
    assert result == (
        "{'a': [1, 2], 'b': [1, 2], 'c': /x/, 'd': /x/, "
        "'e': new Buffer('', 'base64'), 'f': new Buffer('', 'base64')}"
    )
    assert result.references == []


def test_discovery_order_is_depth_first():
    r = {}
    value = {"x": {"y": r, "z": r}, "w": r}
    result = serialize(value, reference=True)
    assert result == "{'x': {'y': {}}}"
    assert result.references == [("x.z", "x.y"), ("w", "x.y")]


def test_sibling_reuse_is_not_circular():
    r = {"v": 1}
    assert serialize([r, r]) == "[{v: 1}, {v: 1}]"


def test_circular_raises(circular):
    with pytest.raises(CircularStructureError, match="can not convert circular structures"):
        serialize(circular)


def test_circular_raises_with_reference(circular):
    with pytest.raises(CircularStructureError) as exc_info:
        serialize(circular, reference=True)
    assert exc_info.value.path == ("a", "b")


def test_self_containing_list():
    a: list[object] = [1]
    a.append(a)
    with pytest.raises(CircularStructureError) as exc_info:
        serialize(a)
    assert exc_info.value.path == (1,)


def test_cycle_through_tuple():
    inner: list[object] = []
    outer = (inner,)
    inner.append(outer)
    with pytest.raises(CircularStructureError):
        serialize(outer)


class Computed(Mapping):
    """Mapping that builds a fresh dict on every lookup."""

    def __init__(self, keys: list[str]):
        self._keys = keys

    def __getitem__(self, key: str) -> dict[str, str]:
        return {"name": key}

    def __iter__(self):
        return iter(self._keys)

    def __len__(self) -> int:
        return len(self._keys)


def test_fresh_values_with_recycled_ids_kept():
    result = serialize(Computed(["a", "b", "c"]), reference=True)
    assert result == "{'a': {name: 'a'}, 'b': {name: 'b'}, 'c': {name: 'c'}}"
    assert result.references == []
