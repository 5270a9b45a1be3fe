"""Domain-level exception hierarchy.

Purpose
-------
Expose the stable error taxonomy shared by the locator parser, the params
facade, the document adapters, and consuming applications. The hierarchy lives
in the domain layer so outer layers may depend on it without the domain ever
importing them.

Contents
--------
* :class:`ParamsError` – umbrella base class for all library failures.
* :class:`MalformedLocatorError` – a locator expression yields no segments.
* :class:`NotFoundError` – strict lookup of a locator that does not resolve.
* :class:`InvalidFormat` – input cannot be interpreted as a nested mapping.
* :class:`UnsupportedFormat` – no document loader exists for a file suffix.
* :class:`DocumentNotFound` – a document file is missing.

System Role
-----------
Only :meth:`lib_immutable_params.domain.params.Params.get` raises
:class:`NotFoundError`; every other read/write operation treats absence as a
silent outcome. Callers catch :class:`ParamsError` to handle all library
failures uniformly.
"""

from __future__ import annotations

from typing import Any


class ParamsError(Exception):
    """Base type for all exceptions emitted by ``lib_immutable_params``.

    Why
    ----
    Provide a single catch-all type for consumers that do not need fine-grained
    handling.
    """


class MalformedLocatorError(ParamsError):
    """Raised when a locator expression parses to zero segments.

    Typical Sources
    ---------------
    Empty strings, strings made only of delimiters (``":::"``), and empty key
    sequences handed to :func:`lib_immutable_params.domain.locator.parse`.
    """


class NotFoundError(ParamsError):
    """Raised by strict lookups when a locator does not resolve.

    Why
    ----
    ``get`` is the single throwing read entry point; the failing locator is kept
    on the exception so callers can report which path was missing.

    Attributes
    ----------
    locator:
        The canonical locator that failed to resolve.

    Examples
    --------
    >>> error = NotFoundError(":user:zipcode")
    >>> error.locator
    ':user:zipcode'
    >>> str(error)
    'Nothing found at :user:zipcode'
    """

    def __init__(self, locator: Any) -> None:
        super().__init__(f"Nothing found at {locator}")
        self.locator = locator


class InvalidFormat(ParamsError):
    """Raised when input cannot be interpreted as a nested mapping.

    Typical Sources
    ---------------
    Structured document loaders (:mod:`tomllib`, :mod:`json`, :mod:`yaml`) and
    the :class:`~lib_immutable_params.domain.params.Params` constructor when
    handed a non-mapping root.
    """


class UnsupportedFormat(InvalidFormat):
    """Raised when no document loader is registered for a file suffix."""


class DocumentNotFound(ParamsError):
    """Represents a document file that does not exist on disk."""
