"""Immutable params facade.

Purpose
-------
Expose the public operation surface (strict and tolerant lookups, existence
predicates, conditional mapping, copy/move/remove) over a wrapped nested
mapping. Every operation is a pure function of the wrapped root and its
arguments.

Contents
--------
* :class:`Params` – the facade value object.

System Role
-----------
Locators are canonicalised by :mod:`~lib_immutable_params.domain.locator`, read
operations go through :mod:`~lib_immutable_params.domain.resolver`, and write
operations through :mod:`~lib_immutable_params.domain.mutator`. Write operations
return new :class:`Params` instances sharing untouched substructure with the
original; values handed out to callers are plain copies, so shared storage is
never reachable for mutation.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import date, time
from typing import Any, Callable, Iterable, Mapping, TypeVar

from .errors import InvalidFormat, NotFoundError
from .locator import LocatorLike, parse
from .mutator import remove_path, set_value
from .nodes import freeze, freeze_mapping, is_mapping, nodes_equal, thaw
from .resolver import Found, resolve, resolve_first

T = TypeVar("T")


@dataclass(frozen=True, slots=True, eq=False, init=False)
class Params:
    """Immutable wrapper around one nested mapping.

    Why
    ----
    Request parameters and similar payloads are deeply nested and frequently
    partial. A locator-addressed API replaces chains of presence checks, and
    immutability lets derived instances be passed around freely.

    Parameters
    ----------
    root:
        The mapping to wrap. It is deep-copied into frozen nodes, so later
        changes to the caller's object are not observed.

    Examples
    --------
    >>> params = Params({"user": {"name": {"first": "Mikko"}, "location": {"address": "X", "city": "Helsinki"}}})
    >>> params.get(":user:location:address")
    'X'
    >>> params.get_or_else(":user:location:zipcode", "00000")
    '00000'
    >>> params.map(":user:location:city", str.upper).get(":user:location:city")
    'HELSINKI'
    >>> moved = params.mv(":user:location:address", ":address")
    >>> moved.get(":address"), moved.defined(":user:location:address")
    ('X', False)
    >>> params.get(":user:location:address")
    'X'
    """

    _root: Mapping[str, Any]

    def __init__(self, root: Mapping[str, Any]) -> None:
        if not is_mapping(root):
            raise InvalidFormat(f"Params root must be a mapping, got {type(root).__name__}")
        object.__setattr__(self, "_root", freeze_mapping(root))

    @classmethod
    def _wrap(cls, root: Mapping[str, Any]) -> Params:
        """Wrap an already frozen *root* without copying it."""

        instance = object.__new__(cls)
        object.__setattr__(instance, "_root", root)
        return instance

    def _derive(self, root: Mapping[str, Any]) -> Params:
        """Return ``self`` when *root* is unchanged, otherwise a new instance."""

        return self if root is self._root else Params._wrap(root)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Params):
            return NotImplemented
        return nodes_equal(self._root, other._root)

    def __repr__(self) -> str:
        return f"Params({self.to_plain()!r})"

    def __contains__(self, locator: LocatorLike) -> bool:
        return self.defined(locator)

    def get(self, locator: LocatorLike) -> Any:
        """Return the value at *locator* or raise :class:`NotFoundError`.

        This is the only throwing read operation; use :meth:`get_or_else` or
        :meth:`defined` for tolerant access.

        >>> Params({"a": {"b": 1}}).get(":a:c")
        Traceback (most recent call last):
        ...
        lib_immutable_params.domain.errors.NotFoundError: Nothing found at :a:c
        """

        target = parse(locator)
        resolution = resolve(self._root, target)
        if isinstance(resolution, Found):
            return thaw(resolution.value)
        raise NotFoundError(target)

    def get_or_else(
        self,
        locator: LocatorLike,
        default: Any = None,
        *,
        fallbacks: Iterable[LocatorLike] = (),
    ) -> Any:
        """Return the value at *locator*, the first resolving fallback, or *default*.

        Locators are tried left to right; *default* is returned as given (it is
        not copied) when none resolves.

        >>> params = Params({"billing": {"city": "Espoo"}})
        >>> params.get_or_else(":shipping:city", fallbacks=[":billing:city"], default="?")
        'Espoo'
        >>> params.get_or_else(":shipping:zip") is None
        True
        """

        chain = [parse(locator), *(parse(candidate) for candidate in fallbacks)]
        resolution = resolve_first(self._root, chain)
        if isinstance(resolution, Found):
            return thaw(resolution.value)
        return default

    def defined(self, locator: LocatorLike) -> bool:
        """Return ``True`` iff *locator* resolves (a stored ``None`` counts)."""

        return isinstance(resolve(self._root, parse(locator)), Found)

    def any_defined(self, *locators: LocatorLike, predicate: Callable[[Any], bool] | None = None) -> bool:
        """Return ``True`` when at least one of *locators* resolves.

        With *predicate*, the resolved value must also satisfy it.

        >>> params = Params({"a": 1, "b": 0})
        >>> params.any_defined(":x", ":b")
        True
        >>> params.any_defined(":x", ":b", predicate=bool)
        False
        """

        return any(self._satisfies(locator, predicate) for locator in locators)

    def all_defined(self, *locators: LocatorLike, predicate: Callable[[Any], bool] | None = None) -> bool:
        """Return ``True`` when every one of *locators* resolves.

        With *predicate*, every resolved value must also satisfy it.

        >>> Params({"a": 1, "b": 2}).all_defined(":a", ":b")
        True
        >>> Params({"a": 1}).all_defined(":a", ":b")
        False
        """

        return all(self._satisfies(locator, predicate) for locator in locators)

    def map(self, locator: LocatorLike, fn: Callable[[Any], Any]) -> Params:
        """Replace the value at *locator* with ``fn(value)``; no-op when absent.

        Reads may step into sequences by index but writes never do: mapping a
        sequence element replaces the whole sequence with a mapping keyed by the
        index, dropping the other elements.

        >>> Params({"tags": ["a", "b"]}).map(":tags:0", str.upper).to_plain()
        {'tags': {'0': 'A'}}
        """

        target = parse(locator)
        resolution = resolve(self._root, target)
        if not isinstance(resolution, Found):
            return self
        return Params._wrap(set_value(self._root, target, freeze(fn(thaw(resolution.value)))))

    def cp(self, source: LocatorLike, destination: LocatorLike) -> Params:
        """Copy the value at *source* to *destination*; no-op when *source* is absent.

        The copied subtree is shared with the source, not duplicated.
        """

        resolution = resolve(self._root, parse(source))
        if not isinstance(resolution, Found):
            return self
        return Params._wrap(set_value(self._root, parse(destination), resolution.value))

    def rm(self, locator: LocatorLike) -> Params:
        """Remove the value at *locator*; no-op when absent.

        Mappings left empty by the removal are kept.

        >>> Params({"a": {"b": 1}}).rm(":a:b").to_plain()
        {'a': {}}
        """

        return self._derive(remove_path(self._root, parse(locator)))

    def mv(self, source: LocatorLike, destination: LocatorLike) -> Params:
        """Move the value at *source* to *destination*.

        Defined as ``cp(source, destination).rm(source)``: the removal applies to
        the result of the copy. When *destination* lies under *source* the
        removal deletes the freshly copied value too, and when *source* lies
        under *destination* the removal targets the copied subtree. A source
        inside a sequence can be read but not removed, so it stays in place.

        >>> Params({"a": {"b": 1}}).mv(":a", ":a:c").to_plain()
        {}
        >>> Params({"a": {"b": {"b": 2, "c": 3}}}).mv(":a:b", ":a").to_plain()
        {'a': {'c': 3}}
        >>> Params({"tags": ["a", "b"]}).mv(":tags:0", ":first").to_plain()
        {'tags': ['a', 'b'], 'first': 'a'}
        """

        return self.cp(source, destination).rm(source)

    def with_value(self, locator: LocatorLike, fn: Callable[[Params, Any], T]) -> T | Params:
        """Call ``fn(self, value)`` when *locator* resolves and return its result.

        Returns ``self`` when *locator* is absent or when *fn* returns ``None``.

        >>> params = Params({"user": {"id": 7}})
        >>> params.with_value(":user:id", lambda p, uid: p.cp(":user:id", ":owner")).get(":owner")
        7
        >>> params.with_value(":user:name", lambda p, name: name) is params
        True
        """

        resolution = resolve(self._root, parse(locator))
        if not isinstance(resolution, Found):
            return self
        result = fn(self, thaw(resolution.value))
        return self if result is None else result

    def to_plain(self) -> dict[str, Any]:
        """Return a plain, mutable deep copy of the wrapped structure.

        >>> source = {"a": [1, {"b": 2}]}
        >>> plain = Params(source).to_plain()
        >>> plain == source, plain is source
        (True, False)
        """

        return thaw(self._root)

    def to_json(self, *, indent: int | None = None) -> str:
        """Serialise :meth:`to_plain` to JSON.

        >>> Params({"a": {"b": 1}}).to_json()
        '{"a":{"b":1}}'
        """

        return encode_json(self.to_plain(), indent=indent)

    def _satisfies(self, locator: LocatorLike, predicate: Callable[[Any], bool] | None) -> bool:
        resolution = resolve(self._root, parse(locator))
        if not isinstance(resolution, Found):
            return False
        return predicate is None or bool(predicate(thaw(resolution.value)))


def encode_json(value: Any, *, indent: int | None = None) -> str:
    """Serialise a plain value compactly.

    Sets become lists and TOML/YAML temporal scalars become ISO 8601 strings.

    >>> encode_json({"tags": {"b", "a"}})
    '{"tags":["a","b"]}'
    >>> encode_json({"born": date(1990, 1, 1)})
    '{"born":"1990-01-01"}'
    """

    return json.dumps(value, indent=indent, separators=(",", ":"), ensure_ascii=False, default=_json_default)


def _json_default(value: Any) -> Any:
    """Encode sets and temporal scalars; reject everything else."""

    if isinstance(value, (date, time)):
        return value.isoformat()
    if isinstance(value, (set, frozenset)):
        try:
            return sorted(value)
        except TypeError:
            return list(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")
