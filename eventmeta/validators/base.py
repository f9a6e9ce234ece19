"""Core validation data structures."""

from __future__ import annotations

from typing import Protocol

from ..errors import EventMetaError
from ..models import Diagnostic


class UnresolvedArgumentError(EventMetaError):
    """Raised in strict mode when a trigger lacks a resolvable topic or eventType."""

    def __init__(self, message: str, *, source_file: str, target: str, line: int) -> None:
        super().__init__(message)
        self.source_file = source_file
        self.target = target
        self.line = line


class DiagnosticSink(Protocol):
    """Receives warnings emitted while validating triggers."""

    def __call__(self, diagnostic: Diagnostic) -> None:
        """Record a diagnostic."""


__all__ = ["DiagnosticSink", "UnresolvedArgumentError"]
