"""Syntax-tree extraction: constants, annotation sites and argument values."""

from __future__ import annotations

from .annotations import AnnotationExtractor, AnnotationSite, SiteKind, annotation_arguments
from .constants import collect_constants
from .resolver import UNRESOLVED, resolve_int, resolve_string

__all__ = [
    "AnnotationExtractor",
    "AnnotationSite",
    "SiteKind",
    "UNRESOLVED",
    "annotation_arguments",
    "collect_constants",
    "resolve_int",
    "resolve_string",
]
