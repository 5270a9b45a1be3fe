"""Public package surface for ``lib_immutable_params``.

Wrap a nested mapping in :class:`Params` and address it with compact locators
(``":user:location:city"``, a bare key, or an explicit key sequence). Every
operation leaves the original untouched and returns a value or a new
:class:`Params`.
"""

from __future__ import annotations

from .core import load_document, read_params
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
from .observability import bind_trace_id, get_logger

__all__ = [
    "DocumentNotFound",
    "InvalidFormat",
    "Locator",
    "MalformedLocatorError",
    "NotFoundError",
    "Params",
    "ParamsError",
    "UnsupportedFormat",
    "bind_trace_id",
    "get_logger",
    "load_document",
    "parse",
    "read_params",
]
