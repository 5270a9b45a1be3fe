"""Structured document loaders.

Purpose
-------
Convert on-disk documents into the nested mappings a
:class:`~lib_immutable_params.domain.params.Params` wraps. Adapters are small
wrappers around ``tomllib``/``json``/``yaml.safe_load`` so error handling and
observability live in one place.

Contents
--------
* :class:`BaseDocumentLoader` – shared helpers for reading files and validating
  that the parser produced a mapping.
* :class:`TOMLDocumentLoader` – TOML documents.
* :class:`JSONDocumentLoader` – JSON documents.
* :class:`YAMLDocumentLoader` – YAML documents via PyYAML.

System Role
-----------
Selected by suffix in :func:`lib_immutable_params.core.load_document`; each
class satisfies :class:`lib_immutable_params.application.ports.DocumentLoader`.
Log entries name the document through the
:func:`~lib_immutable_params.observability.document_scope` bound by the caller.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Mapping

try:  # Python >= 3.11
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for <3.11
    import tomli as tomllib  # type: ignore[no-redef]

import yaml

from ...domain.errors import DocumentNotFound, InvalidFormat
from ...observability import log_operation


class BaseDocumentLoader:
    """Common utilities shared by the structured document loaders."""

    format_name = "unknown"

    def _read(self, path: str) -> bytes:
        """Read *path* as bytes, raising :class:`DocumentNotFound` when it is missing.

        Examples
        --------
        >>> from tempfile import NamedTemporaryFile
        >>> tmp = NamedTemporaryFile(delete=False)
        >>> _ = tmp.write(b'{"a": 1}')
        >>> tmp.close()
        >>> BaseDocumentLoader()._read(tmp.name)[:4]
        b'{"a"'
        >>> Path(tmp.name).unlink()
        """

        file_path = Path(path)
        if not file_path.is_file():
            raise DocumentNotFound(f"Document not found: {path}")
        payload = file_path.read_bytes()
        log_operation("document_read", "load", size=len(payload))
        return payload

    def _ensure_mapping(self, data: object, *, path: str) -> Mapping[str, object]:
        """Return *data* when it is a mapping, otherwise raise :class:`InvalidFormat`.

        Examples
        --------
        >>> BaseDocumentLoader()._ensure_mapping({"key": 1}, path="demo")
        {'key': 1}
        >>> BaseDocumentLoader()._ensure_mapping([1, 2], path="demo")
        Traceback (most recent call last):
        ...
        lib_immutable_params.domain.errors.InvalidFormat: Document demo did not produce a mapping
        """

        if not isinstance(data, Mapping):
            raise InvalidFormat(f"Document {path} did not produce a mapping")
        log_operation("document_loaded", "load", format=self.format_name, keys=len(data))
        return data

    def _invalid(self, path: str, exc: Exception) -> InvalidFormat:
        log_operation("document_invalid", "load", level=logging.ERROR, format=self.format_name, error=str(exc))
        return InvalidFormat(f"Invalid {self.format_name.upper()} in {path}: {exc}")


class TOMLDocumentLoader(BaseDocumentLoader):
    """Load TOML documents using the standard library parser."""

    format_name = "toml"

    def load(self, path: str) -> Mapping[str, object]:
        """Return the mapping parsed from the TOML document at *path*.

        Examples
        --------
        >>> from tempfile import NamedTemporaryFile
        >>> tmp = NamedTemporaryFile('w', delete=False, encoding='utf-8')
        >>> _ = tmp.write('[user]\\nname = "Mikko"')
        >>> tmp.close()
        >>> TOMLDocumentLoader().load(tmp.name)["user"]["name"]
        'Mikko'
        >>> Path(tmp.name).unlink()
        """

        try:
            data = tomllib.loads(self._read(path).decode("utf-8"))
        except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
            raise self._invalid(path, exc) from exc
        return self._ensure_mapping(data, path=path)


class JSONDocumentLoader(BaseDocumentLoader):
    """Load JSON documents."""

    format_name = "json"

    def load(self, path: str) -> Mapping[str, object]:
        """Return the mapping parsed from the JSON document at *path*."""

        try:
            data = json.loads(self._read(path))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise self._invalid(path, exc) from exc
        return self._ensure_mapping(data, path=path)


class YAMLDocumentLoader(BaseDocumentLoader):
    """Load YAML documents with ``yaml.safe_load``; an empty file is an empty mapping."""

    format_name = "yaml"

    def load(self, path: str) -> Mapping[str, object]:
        try:
            data = yaml.safe_load(self._read(path))
        except yaml.YAMLError as exc:
            raise self._invalid(path, exc) from exc
        if data is None:
            data = {}
        return self._ensure_mapping(data, path=path)
