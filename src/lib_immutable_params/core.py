"""Composition root for ``lib_immutable_params``.

Purpose
-------
Wire the structured document adapters to the params facade so callers (and the
CLI) can go from a file on disk to an immutable :class:`Params` in one call.

Contents
--------
* :data:`_DOCUMENT_LOADERS` – mapping of file suffixes to loader instances.
* :func:`load_document` – parse a document into a plain nested mapping.
* :func:`read_params` – parse a document and wrap it in :class:`Params`.

System Role
-----------
The only module that knows both the adapters and the domain. It emits the
structured observability signals for document loading and re-exports the
stable public API.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping

from .adapters.file_loaders.structured import JSONDocumentLoader, TOMLDocumentLoader, YAMLDocumentLoader
from .application.ports import DocumentLoader
from .domain.errors import (
    DocumentNotFound,
    InvalidFormat,
    MalformedLocatorError,
    NotFoundError,
    ParamsError,
    UnsupportedFormat,
)
from .domain.locator import Locator, parse
from .domain.params import Params
from .observability import document_scope, log_operation

# Supported document loaders keyed by suffix.
_DOCUMENT_LOADERS: dict[str, DocumentLoader] = {
    ".toml": TOMLDocumentLoader(),
    ".json": JSONDocumentLoader(),
    ".yaml": YAMLDocumentLoader(),
    ".yml": YAMLDocumentLoader(),
}


def load_document(path: str | Path) -> Mapping[str, object]:
    """Return the nested mapping stored in the document at *path*.

    The loader is chosen from the file suffix (``.toml``, ``.json``, ``.yaml``,
    ``.yml``; case-insensitive).

    Raises
    ------
    UnsupportedFormat
        When no loader handles the suffix.
    DocumentNotFound
        When the file does not exist.
    InvalidFormat
        When the file cannot be parsed into a mapping.

    Examples
    --------
    >>> load_document("params.ini")
    Traceback (most recent call last):
    ...
    lib_immutable_params.domain.errors.UnsupportedFormat: No document loader for suffix '.ini' (params.ini)
    """

    location = str(path)
    suffix = Path(location).suffix.lower()
    loader = _DOCUMENT_LOADERS.get(suffix)
    if loader is None:
        log_operation("document_unsupported", "load", document=location, suffix=suffix)
        raise UnsupportedFormat(f"No document loader for suffix {suffix!r} ({location})")
    with document_scope(location):
        return loader.load(location)


def read_params(path: str | Path) -> Params:
    """Load the document at *path* and wrap it in an immutable :class:`Params`.

    Examples
    --------
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> document = Path(tmp.name) / "params.json"
    >>> _ = document.write_text('{"user": {"location": {"city": "Helsinki"}}}', encoding="utf-8")
    >>> read_params(document).get(":user:location:city")
    'Helsinki'
    >>> tmp.cleanup()
    """

    data = load_document(path)
    params = Params(data)
    log_operation("params_loaded", "load", level=logging.INFO, document=str(path), keys=len(data))
    return params


__all__ = [
    "DocumentNotFound",
    "InvalidFormat",
    "Locator",
    "MalformedLocatorError",
    "NotFoundError",
    "Params",
    "ParamsError",
    "UnsupportedFormat",
    "load_document",
    "parse",
    "read_params",
]
