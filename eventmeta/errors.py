"""Exception hierarchy shared by the scan pipeline."""

from __future__ import annotations


class EventMetaError(RuntimeError):
    """Base class for errors raised while generating event metadata."""


class OutputError(EventMetaError):
    """Raised when the metadata document cannot be written."""


__all__ = ["EventMetaError", "OutputError"]
