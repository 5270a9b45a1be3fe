"""Locator value object and parser.

Purpose
-------
Turn the compact path expressions accepted across the public API into one
canonical representation so the resolver and mutator never deal with duck-typed
input shapes.

Contents
--------
* :data:`DELIMITER` – segment separator used by string locators.
* :func:`canonical_key` – flatten ``str``/``bytes``/``Enum``/other keys into the
  canonical ``str`` key type.
* :class:`Locator` – immutable, non-empty ordered tuple of canonical keys.
* :func:`parse` – single entry point normalising every accepted source form.

System Role
-----------
Every facade operation that accepts a locator funnels it through :func:`parse`
before touching the wrapped structure. :class:`MalformedLocatorError` raised
here propagates uncaught to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Final, Iterator, Sequence, Union

from .errors import MalformedLocatorError

DELIMITER: Final[str] = ":"
"""Separator between segments of a string locator (``":user:name"``)."""


def canonical_key(key: Any) -> str:
    """Return the canonical ``str`` form of *key*.

    Two keys are considered equal iff their canonical forms are equal, which
    lets callers mix string keys, enum members, and numbers freely.

    Examples
    --------
    >>> canonical_key("city")
    'city'
    >>> canonical_key(b"city")
    'city'
    >>> canonical_key(3)
    '3'
    >>> class Field(Enum):
    ...     CITY = "city"
    >>> canonical_key(Field.CITY)
    'city'
    """

    if isinstance(key, str):
        return key
    if isinstance(key, bytes):
        return key.decode("utf-8")
    if isinstance(key, Enum):
        return canonical_key(key.value)
    return str(key)


@dataclass(frozen=True, slots=True)
class Locator:
    """Canonical, non-empty ordered sequence of keys addressing a nested value.

    Parameters
    ----------
    keys:
        Keys from the root downwards; each is canonicalised on construction.

    Examples
    --------
    >>> locator = Locator(("user", "location", "city"))
    >>> str(locator)
    ':user:location:city'
    >>> locator.last
    'city'
    >>> str(locator.parent)
    ':user:location'
    >>> Locator(())
    Traceback (most recent call last):
    ...
    lib_immutable_params.domain.errors.MalformedLocatorError: Locator must contain at least one key
    """

    keys: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.keys:
            raise MalformedLocatorError("Locator must contain at least one key")
        object.__setattr__(self, "keys", tuple(canonical_key(key) for key in self.keys))

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys)

    def __len__(self) -> int:
        return len(self.keys)

    def __str__(self) -> str:
        """Render the string form, or the key tuple when a key holds the delimiter.

        >>> str(Locator(("a:b", "c")))
        "('a:b', 'c')"
        """

        if any(DELIMITER in key for key in self.keys):
            return repr(self.keys)
        return DELIMITER + DELIMITER.join(self.keys)

    @property
    def last(self) -> str:
        """Terminal key of the path."""

        return self.keys[-1]

    @property
    def parent(self) -> Locator | None:
        """Locator of the enclosing mapping, ``None`` for top-level keys."""

        if len(self.keys) == 1:
            return None
        return Locator(self.keys[:-1])

    def child(self, key: Any) -> Locator:
        """Return a locator one level below this one.

        >>> str(Locator(("user",)).child("name"))
        ':user:name'
        """

        return Locator(self.keys + (key,))

    def is_prefix_of(self, other: Locator) -> bool:
        """Return ``True`` when *other* lies at or below this locator.

        >>> Locator(("a",)).is_prefix_of(Locator(("a", "b")))
        True
        >>> Locator(("a", "b")).is_prefix_of(Locator(("a",)))
        False
        """

        return other.keys[: len(self.keys)] == self.keys


LocatorLike = Union[Locator, str, Sequence[Any], Any]
"""Any of the accepted source forms: string, bare key, key sequence, or Locator."""


def parse(expression: LocatorLike) -> Locator:
    """Normalise *expression* into a canonical :class:`Locator`.

    Why
    ----
    Callers address paths in whatever form is most convenient; resolution and
    mutation only ever see the canonical tuple.

    What
    ----
    * :class:`Locator` instances are returned unchanged.
    * ``list``/``tuple`` inputs are explicit key sequences; each element is
      canonicalised but never split on the delimiter.
    * Strings lose an optional leading delimiter and are split on
      :data:`DELIMITER`; empty segments are discarded.
    * Anything else is treated as a single bare key.

    Raises
    ------
    MalformedLocatorError
        When the expression yields no segments.

    Examples
    --------
    >>> parse(":user:location:city").keys
    ('user', 'location', 'city')
    >>> parse("user").keys
    ('user',)
    >>> parse(["a:b", 0]).keys
    ('a:b', '0')
    >>> parse(":::")
    Traceback (most recent call last):
    ...
    lib_immutable_params.domain.errors.MalformedLocatorError: Locator ':::' contains no segments
    """

    if isinstance(expression, Locator):
        return expression
    if isinstance(expression, (list, tuple)):
        if not expression:
            raise MalformedLocatorError("Locator sequence must contain at least one key")
        return Locator(tuple(expression))
    if isinstance(expression, str):
        return Locator(_split(expression))
    return Locator((expression,))


def _split(expression: str) -> tuple[str, ...]:
    """Split a string locator into its non-empty segments."""

    body = expression[len(DELIMITER) :] if expression.startswith(DELIMITER) else expression
    segments = tuple(segment for segment in body.split(DELIMITER) if segment)
    if not segments:
        raise MalformedLocatorError(f"Locator {expression!r} contains no segments")
    return segments
