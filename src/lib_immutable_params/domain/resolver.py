"""Read-only path resolution.

Purpose
-------
Walk a nested structure along a :class:`~lib_immutable_params.domain.locator.Locator`
and report whether a value lives there, without raising and without building any
new structure.

Contents
--------
* :class:`Found` – successful resolution carrying the value.
* :class:`Absent` / :data:`ABSENT` – the single "nothing there" outcome.
* :func:`resolve` – resolve one locator.
* :func:`resolve_first` – resolve a fallback chain, first success wins.

System Role
-----------
Absence is a first-class result here; the params facade decides whether it
becomes an error (``get``), a default (``get_or_else``), a boolean, or a no-op.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Final, Iterable, Mapping, Union

from .locator import Locator
from .nodes import is_mapping, is_sequence


@dataclass(frozen=True, slots=True)
class Found:
    """Successful resolution of a locator."""

    value: Any


class Absent:
    """Marker type for an unresolvable locator. Use the :data:`ABSENT` singleton."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT: Final[Absent] = Absent()

Resolution = Union[Found, Absent]


def resolve(root: Mapping[str, Any], locator: Locator) -> Resolution:
    """Resolve *locator* against *root*.

    Mappings are entered by key; sequences (never strings) are entered when the
    key is a non-negative decimal index within bounds. Any other step, including
    trying to descend into a scalar, short-circuits to :data:`ABSENT`.

    Examples
    --------
    >>> root = {"user": {"tags": ["admin", "staff"], "name": "Mikko"}}
    >>> resolve(root, Locator(("user", "name")))
    Found(value='Mikko')
    >>> resolve(root, Locator(("user", "tags", "1")))
    Found(value='staff')
    >>> resolve(root, Locator(("user", "name", "first")))
    ABSENT
    """

    current: Any = root
    for key in locator:
        if is_mapping(current):
            if key not in current:
                return ABSENT
            current = current[key]
        elif is_sequence(current):
            index = _as_index(key, len(current))
            if index is None:
                return ABSENT
            current = current[index]
        else:
            return ABSENT
    return Found(current)


def resolve_first(root: Mapping[str, Any], locators: Iterable[Locator]) -> Resolution:
    """Return the first successful resolution among *locators*, in order.

    >>> root = {"b": 2, "c": 3}
    >>> resolve_first(root, [Locator(("a",)), Locator(("b",)), Locator(("c",))])
    Found(value=2)
    """

    for locator in locators:
        resolution = resolve(root, locator)
        if isinstance(resolution, Found):
            return resolution
    return ABSENT


def _as_index(key: str, length: int) -> int | None:
    """Interpret *key* as a sequence index, or ``None`` when it is not one."""

    if not (key.isascii() and key.isdigit()):
        return None
    index = int(key)
    return index if index < length else None
