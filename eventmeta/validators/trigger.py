"""Turns resolved annotation arguments into trigger records."""

from __future__ import annotations

from typing import Dict, Optional

from tree_sitter import Node

from ..config import ScanConfig
from ..extractors.annotations import AnnotationSite, annotation_arguments
from ..extractors.resolver import resolve_int, resolve_string
from ..models import Diagnostic, FileContext, TriggerRecord
from ..parsing.nodes import node_line
from .base import DiagnosticSink, UnresolvedArgumentError

DEFAULT_VERSION = 1


class TriggerValidator:
    """Enforces required members, applies defaults and builds TriggerRecords."""

    def __init__(self, config: ScanConfig, sink: Optional[DiagnosticSink] = None) -> None:
        self.config = config
        self._sink = sink

    def build(self, site: AnnotationSite, context: FileContext) -> Optional[TriggerRecord]:
        """Return a record for the site, None when it is skipped.

        Raises UnresolvedArgumentError in strict mode when topic or eventType
        is missing, unresolved or blank.
        """
        arguments = annotation_arguments(site.node)
        if arguments is None:
            # marker or single-value form cannot carry topic/eventType
            return None

        line = node_line(site.node)
        topic = resolve_string(arguments.get("topic"), context.constants)
        event_type = resolve_string(arguments.get("eventType"), context.constants)

        if not _has_text(topic) or not _has_text(event_type):
            message = (
                f"Invalid @{self.config.annotation_simple_name} (missing topic/eventType) "
                f"in {context.relative_path} target={site.target} line={line}"
            )
            if self.config.fail_on_missing:
                raise UnresolvedArgumentError(
                    message, source_file=context.relative_path, target=site.target, line=line
                )
            self._warn(message, context, site.target, line)
            return None

        version = resolve_int(arguments["version"]) if "version" in arguments else DEFAULT_VERSION
        producer = self._optional_string(arguments, "producer", context, site.target, line)
        description = self._optional_string(arguments, "description", context, site.target, line)

        return TriggerRecord(
            source_file=context.relative_path,
            line=line,
            target=site.target,
            topic=topic,  # type: ignore[arg-type]
            event_type=event_type,  # type: ignore[arg-type]
            version=version,
            producer=producer,
            description=description,
        )

    def _optional_string(
        self,
        arguments: Dict[str, Node],
        member: str,
        context: FileContext,
        target: str,
        line: int,
    ) -> str:
        if member not in arguments:
            return ""
        value = resolve_string(arguments[member], context.constants)
        if isinstance(value, str):
            return value
        self._warn(
            f"Unresolved {member} in @{self.config.annotation_simple_name} "
            f"in {context.relative_path} target={target} line={line}; using empty string",
            context,
            target,
            line,
        )
        return ""

    def _warn(self, message: str, context: FileContext, target: str, line: int) -> None:
        if self._sink is None:
            return
        self._sink(
            Diagnostic(
                level="warning",
                message=message,
                source_file=context.relative_path,
                target=target,
                line=line,
            )
        )


def _has_text(value: object) -> bool:
    return isinstance(value, str) and bool(value.strip())


__all__ = ["DEFAULT_VERSION", "TriggerValidator"]
