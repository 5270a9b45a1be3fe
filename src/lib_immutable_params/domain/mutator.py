"""Copy-on-write updates with structural sharing.

Purpose
-------
Produce new roots for set and remove requests while leaving the input root, and
every node reachable from it, untouched.

Contents
--------
* :func:`set_value` – place a value at a locator, creating or replacing
  intermediate mappings as needed.
* :func:`remove_path` – delete the terminal key of a locator from its parent.

System Role
-----------
Only the mapping nodes on the modified path are rebuilt; every sibling subtree
is reused by reference. Rebuilt nodes are ``MappingProxyType`` views, matching
:mod:`lib_immutable_params.domain.nodes`. Values are stored exactly as given, so
callers holding plain (mutable) input must :func:`~lib_immutable_params.domain.nodes.freeze`
it first.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping, Sequence

from .locator import Locator
from .nodes import EMPTY_NODE, is_mapping


def set_value(root: Mapping[str, Any], locator: Locator, value: Any) -> Mapping[str, Any]:
    """Return a new root with *value* stored at *locator*.

    Missing intermediate mappings are created. Intermediate values that are not
    mappings (scalars and sequences alike) are replaced by new mappings, so the
    write always succeeds.

    Examples
    --------
    >>> root = MappingProxyType({"user": MappingProxyType({"name": "Mikko"}), "other": EMPTY_NODE})
    >>> updated = set_value(root, Locator(("user", "city")), "Helsinki")
    >>> dict(updated["user"])
    {'name': 'Mikko', 'city': 'Helsinki'}
    >>> updated["other"] is root["other"]
    True
    >>> "city" in root["user"]
    False
    """

    return _assoc(root, locator.keys, value)


def remove_path(root: Mapping[str, Any], locator: Locator) -> Mapping[str, Any]:
    """Return a new root without the terminal key of *locator*.

    Returns *root* itself when there is nothing to remove: the terminal key is
    absent, or a non-terminal segment does not lead to a mapping. Ancestors that
    become empty are kept.

    Examples
    --------
    >>> root = MappingProxyType({"a": MappingProxyType({"b": 1})})
    >>> dict(remove_path(root, Locator(("a", "b")))["a"])
    {}
    >>> remove_path(root, Locator(("a", "missing"))) is root
    True
    """

    return _dissoc(root, locator.keys)


def _assoc(node: Any, keys: Sequence[str], value: Any) -> Mapping[str, Any]:
    """Rebuild *node* with *value* placed under the path *keys*."""

    base = node if is_mapping(node) else EMPTY_NODE
    head, rest = keys[0], keys[1:]
    child = _assoc(base.get(head), rest, value) if rest else value
    return _with_entry(base, head, child)


def _dissoc(node: Mapping[str, Any], keys: Sequence[str]) -> Mapping[str, Any]:
    """Rebuild *node* without the path *keys*; return *node* when unchanged."""

    head, rest = keys[0], keys[1:]
    if head not in node:
        return node
    if not rest:
        return _without_entry(node, head)
    child = node[head]
    if not is_mapping(child):
        return node
    updated = _dissoc(child, rest)
    if updated is child:
        return node
    return _with_entry(node, head, updated)


def _with_entry(node: Mapping[str, Any], key: str, value: Any) -> Mapping[str, Any]:
    entries = dict(node)
    entries[key] = value
    return MappingProxyType(entries)


def _without_entry(node: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    entries = dict(node)
    del entries[key]
    return MappingProxyType(entries)
