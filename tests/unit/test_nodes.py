from __future__ import annotations

from types import MappingProxyType

import pytest

from lib_immutable_params.domain.nodes import FrozenList, FrozenSet, freeze, nodes_equal, thaw


def test_freeze_produces_read_only_nodes() -> None:
    node = freeze({"user": {"tags": ["a"], "seen": {1}}})
    assert isinstance(node, MappingProxyType)
    assert isinstance(node["user"], MappingProxyType)
    assert isinstance(node["user"]["tags"], FrozenList)
    assert isinstance(node["user"]["seen"], FrozenSet)
    with pytest.raises(TypeError):
        node["user"]["name"] = "x"  # type: ignore[index]


def test_freeze_copies_input() -> None:
    source = {"user": {"tags": ["a"]}}
    node = freeze(source)
    source["user"]["tags"].append("b")
    source["user"]["name"] = "late"
    assert thaw(node) == {"user": {"tags": ["a"]}}


def test_freeze_canonicalises_keys() -> None:
    node = freeze({1: {b"x": True}})
    assert node["1"]["x"] is True


def test_thaw_restores_container_types() -> None:
    source = {"list": [1, [2]], "tuple": (1, {"a": 2}), "set": {3}, "frozen": frozenset({4}), "scalar": None}
    plain = thaw(freeze(source))
    assert plain == source
    assert type(plain["list"]) is list
    assert type(plain["list"][1]) is list
    assert type(plain["tuple"]) is tuple
    assert type(plain["tuple"][1]) is dict
    assert type(plain["set"]) is set
    assert type(plain["frozen"]) is frozenset


def test_thaw_returns_fresh_containers() -> None:
    node = freeze({"a": {"b": [1]}})
    first, second = thaw(node), thaw(node)
    first["a"]["b"].append(2)
    assert second == {"a": {"b": [1]}}
    assert thaw(node) == {"a": {"b": [1]}}


def test_nodes_equal_ignores_mapping_order_but_not_container_types() -> None:
    assert nodes_equal(freeze({"a": 1, "b": [2]}), freeze({"b": [2], "a": 1}))
    assert not nodes_equal(freeze([1, 2]), freeze((1, 2)))
    assert not nodes_equal(freeze({1}), freeze([1]))
    assert not nodes_equal(freeze({"a": {"b": 1}}), freeze({"a": {"b": 1, "c": 2}}))
    assert not nodes_equal(freeze({"a": 1}), 1)
    assert nodes_equal(freeze({"s": {1, 2}}), freeze({"s": {2, 1}}))
