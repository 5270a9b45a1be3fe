"""Application-layer ports describing adapter responsibilities.

Purpose
-------
Define the structural contract document adapters satisfy so the composition
root can pick a loader by file suffix without depending on concrete parsers.

Contents
--------
* :class:`DocumentLoader` – parses one structured document into a mapping.
"""

from __future__ import annotations

from typing import Mapping, Protocol, runtime_checkable


@runtime_checkable
class DocumentLoader(Protocol):
    """Parse a structured document into the nested mapping a ``Params`` wraps.

    Why
    ----
    Segregate parsing concerns (TOML/JSON/YAML) from orchestration logic.
    """

    format_name: str

    def load(self, path: str) -> Mapping[str, object]:
        """Read *path* and return a mapping, raising ``InvalidFormat`` or ``DocumentNotFound``."""
