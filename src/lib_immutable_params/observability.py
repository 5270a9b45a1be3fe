"""Structured logging helpers for the outer layers.

Purpose
    Keep diagnostics from the document adapters, the composition root, and the
    CLI contextual and machine-readable without forcing applications onto a
    logging backend. The domain layer (locators, resolver, mutator, params)
    stays free of logging.

Contents
    - ``TRACE_ID``: context variable carrying the active trace identifier.
    - ``CURRENT_DOCUMENT``: context variable naming the document being processed.
    - ``get_logger``: returns the package logger (silent by default).
    - ``bind_trace_id``: binds or clears the trace identifier.
    - ``document_scope``: binds ``CURRENT_DOCUMENT`` for the duration of a block.
    - ``log_operation``: emits one entry describing an operation on a document.

Every entry carries a ``context`` attribute holding ``trace_id``, ``operation``,
``document`` and any extra fields, so handlers can render it as JSON.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Final, Iterator

TRACE_ID: ContextVar[str | None] = ContextVar("lib_immutable_params_trace_id", default=None)
"""Trace identifier attached to every structured log entry."""

CURRENT_DOCUMENT: ContextVar[str | None] = ContextVar("lib_immutable_params_document", default=None)
"""Document path reported by entries that do not name one explicitly."""

_LOGGER: Final[logging.Logger] = logging.getLogger("lib_immutable_params")
_LOGGER.addHandler(logging.NullHandler())


def get_logger() -> logging.Logger:
    """Expose the package logger so applications may attach handlers."""

    return _LOGGER


def bind_trace_id(trace_id: str | None) -> None:
    """Bind or clear the active trace identifier.

    Examples
    --------
    >>> bind_trace_id("req-42")
    >>> TRACE_ID.get()
    'req-42'
    >>> bind_trace_id(None)
    >>> TRACE_ID.get() is None
    True
    """

    TRACE_ID.set(trace_id)


@contextmanager
def document_scope(document: str | None) -> Iterator[None]:
    """Report *document* on every entry logged inside the block.

    Scopes nest; leaving one restores the enclosing document.

    >>> with document_scope("params.toml"):
    ...     CURRENT_DOCUMENT.get()
    'params.toml'
    >>> CURRENT_DOCUMENT.get() is None
    True
    """

    token = CURRENT_DOCUMENT.set(document)
    try:
        yield
    finally:
        CURRENT_DOCUMENT.reset(token)


def log_operation(message: str, operation: str, *, level: int = logging.DEBUG, **fields: Any) -> None:
    """Log *message* for *operation* with the trace and document context.

    A ``document`` keyword overrides the one bound by :func:`document_scope`.
    """

    if not _LOGGER.isEnabledFor(level):
        return
    context: dict[str, Any] = {
        "trace_id": TRACE_ID.get(),
        "operation": operation,
        "document": CURRENT_DOCUMENT.get(),
    }
    context.update(fields)
    _LOGGER.log(level, message, extra={"context": context})
