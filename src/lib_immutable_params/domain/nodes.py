"""Persistent node representation for wrapped structures.

Purpose
-------
Give the params facade read-only storage that can be shared safely between an
original instance and every instance derived from it.

Contents
--------
* :class:`FrozenList` / :class:`FrozenSet` – private container types standing in
  for ``list`` and ``set`` so :func:`thaw` can restore the original shape.
* :func:`freeze` – deep-convert a plain structure into frozen nodes,
  canonicalising mapping keys on the way.
* :func:`freeze_mapping` – same as :func:`freeze` but requires a mapping.
* :func:`thaw` – deep-convert frozen nodes back into plain mutable containers.
* :func:`nodes_equal` – structural equality that tells lists, tuples and sets apart.
* :func:`is_mapping` / :func:`is_sequence` – traversal classification shared by
  the resolver and the mutator.
* :data:`EMPTY_NODE` – canonical empty mapping node.

System Role
-----------
Mappings become ``MappingProxyType`` views over dictionaries nobody else holds a
reference to, so nodes cannot be mutated once built. ``copy.deepcopy`` is not
used because it does not handle ``mappingproxy`` objects.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from types import MappingProxyType
from typing import Any, Final

from .locator import canonical_key


class FrozenList(tuple):
    """Immutable stand-in for a ``list`` inside a frozen structure."""

    __slots__ = ()


class FrozenSet(frozenset):
    """Immutable stand-in for a ``set`` inside a frozen structure."""

    __slots__ = ()


EMPTY_NODE: Final[Mapping[str, Any]] = MappingProxyType({})


def freeze(value: Any) -> Any:
    """Return a frozen deep copy of *value*.

    Examples
    --------
    >>> node = freeze({"tags": ["a", "b"], 1: {"x": True}})
    >>> isinstance(node["tags"], FrozenList)
    True
    >>> sorted(node)
    ['1', 'tags']
    >>> node["1"]["x"]
    True
    """

    if isinstance(value, Mapping):
        return freeze_mapping(value)
    if isinstance(value, (list, FrozenList)):
        return FrozenList(freeze(item) for item in value)
    if type(value) is tuple:
        return tuple(freeze(item) for item in value)
    if isinstance(value, (set, FrozenSet)):
        return FrozenSet(freeze(item) for item in value)
    return value


def freeze_mapping(mapping: Mapping[Any, Any]) -> Mapping[str, Any]:
    """Return a frozen deep copy of *mapping* with canonical keys."""

    return MappingProxyType({canonical_key(key): freeze(item) for key, item in mapping.items()})


def thaw(value: Any) -> Any:
    """Return a plain, mutable deep copy of the frozen *value*.

    Examples
    --------
    >>> plain = thaw(freeze({"tags": ["a"], "pair": (1, 2), "seen": {3}}))
    >>> plain == {"tags": ["a"], "pair": (1, 2), "seen": {3}}
    True
    >>> type(plain["tags"]).__name__, type(plain["pair"]).__name__, type(plain["seen"]).__name__
    ('list', 'tuple', 'set')
    """

    if isinstance(value, Mapping):
        return {key: thaw(item) for key, item in value.items()}
    if isinstance(value, FrozenList):
        return [thaw(item) for item in value]
    if isinstance(value, FrozenSet):
        return {thaw(item) for item in value}
    if type(value) is tuple:
        return tuple(thaw(item) for item in value)
    if isinstance(value, list):
        return [thaw(item) for item in value]
    if isinstance(value, set):
        return {thaw(item) for item in value}
    return value


def is_mapping(value: Any) -> bool:
    """Return ``True`` when *value* can be traversed by key."""

    return isinstance(value, Mapping)


def is_sequence(value: Any) -> bool:
    """Return ``True`` when *value* can be traversed by index (strings excluded)."""

    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def nodes_equal(left: Any, right: Any) -> bool:
    """Return ``True`` when two frozen nodes hold the same structure.

    Mapping order is ignored, but a list never equals a tuple with the same
    items, since :func:`thaw` would hand them out as different types.

    >>> nodes_equal(freeze({"a": [1], "b": 2}), freeze({"b": 2, "a": [1]}))
    True
    >>> nodes_equal(freeze({"a": [1]}), freeze({"a": (1,)}))
    False
    """

    if is_mapping(left) or is_mapping(right):
        if not (is_mapping(left) and is_mapping(right)) or left.keys() != right.keys():
            return False
        return all(nodes_equal(item, right[key]) for key, item in left.items())
    if isinstance(left, (tuple, frozenset)) or isinstance(right, (tuple, frozenset)):
        if type(left) is not type(right) or len(left) != len(right):
            return False
        if isinstance(left, frozenset):
            return left == right
        return all(nodes_equal(a, b) for a, b in zip(left, right))
    return left == right
