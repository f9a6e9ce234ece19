"""Core data models shared across eventmeta components."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

SCHEMA_VERSION = "1"


@dataclass(frozen=True)
class TriggerRecord:
    """One published event tied to the class or method that emits it."""

    source_file: str
    line: int
    target: str
    topic: str
    event_type: str
    version: int = 1
    producer: str = ""
    description: str = ""

    def sort_key(self) -> Tuple[str, int, str]:
        return (self.source_file, self.line, self.target)

    def to_dict(self) -> Dict[str, Any]:
        # Key order is part of the output contract.
        return {
            "sourceFile": self.source_file,
            "line": self.line,
            "target": self.target,
            "topic": self.topic,
            "eventType": self.event_type,
            "version": self.version,
            "producer": self.producer,
            "description": self.description,
        }


@dataclass
class EventMetadata:
    """Top-level document emitted for a scanned source tree."""

    schema_version: str = SCHEMA_VERSION
    triggers: List[TriggerRecord] = field(default_factory=list)

    def sort_triggers(self) -> None:
        self.triggers.sort(key=TriggerRecord.sort_key)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "schemaVersion": self.schema_version,
            "triggers": [trigger.to_dict() for trigger in self.triggers],
        }


@dataclass
class FileContext:
    """Per-file state held while a single source file is processed."""

    path: str
    relative_path: str
    tree: Any
    constants: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Diagnostic:
    """A warning or informational message produced during a scan."""

    level: str
    message: str
    source_file: Optional[str] = None
    target: Optional[str] = None
    line: Optional[int] = None
