"""Trigger validation and record construction."""

from .base import DiagnosticSink, UnresolvedArgumentError
from .trigger import TriggerValidator

__all__ = ["DiagnosticSink", "TriggerValidator", "UnresolvedArgumentError"]
