"""Configuration loading for eventmeta (.eventmeta.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import yaml

from .errors import EventMetaError

CONFIG_FILENAME = ".eventmeta.yml"

DEFAULT_SOURCE_DIR = "src/main/java"
DEFAULT_OUTPUT_FILE = "target/event-metadata.json"
DEFAULT_ANNOTATION_NAME = "EventTrigger"
DEFAULT_ANNOTATION_FQN = "com.acme.eventing.EventTrigger"
DEFAULT_SOURCE_EXTENSION = ".java"


class ConfigError(EventMetaError):
    """Raised when the configuration cannot be loaded or is invalid."""


@dataclass
class AnnotationConfig:
    """Annotation names from the `annotation:` block of .eventmeta.yml."""

    name: Optional[str] = None
    fqn: Optional[str] = None
    container: Optional[str] = None


@dataclass
class EventMetaConfig:
    """Represents the settings defined in .eventmeta.yml."""

    root: Path
    source_dir: Optional[str] = None
    output_file: Optional[str] = None
    annotation: AnnotationConfig = field(default_factory=AnnotationConfig)
    fail_on_missing: Optional[bool] = None
    includes: List[str] = field(default_factory=list)
    excludes: List[str] = field(default_factory=list)
    workers: Optional[int] = None


@dataclass(frozen=True)
class ScanConfig:
    """Immutable settings for one scan run."""

    source_root: Path
    annotation_simple_name: str = DEFAULT_ANNOTATION_NAME
    annotation_fqn: str = DEFAULT_ANNOTATION_FQN
    container_simple_name: str = ""
    container_fqn: str = ""
    fail_on_missing: bool = False
    includes: Tuple[str, ...] = ()
    excludes: Tuple[str, ...] = ()
    workers: int = 1

    def __post_init__(self) -> None:
        # Container names are derived from the target annotation unless configured.
        if not self.container_simple_name:
            object.__setattr__(self, "container_simple_name", f"{self.annotation_simple_name}s")
        if not self.container_fqn:
            object.__setattr__(self, "container_fqn", _derive_container_fqn(self))
        object.__setattr__(self, "includes", tuple(self.includes))
        object.__setattr__(self, "excludes", tuple(self.excludes))
        if self.workers < 1:
            raise ConfigError(f"workers must be at least 1, got {self.workers}")


def _derive_container_fqn(config: ScanConfig) -> str:
    package, _, _ = config.annotation_fqn.rpartition(".")
    if package:
        return f"{package}.{config.container_simple_name}"
    return config.container_simple_name


def load_config(config_path: Path) -> EventMetaConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return EventMetaConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    annotation_data = _as_dict(data.get("annotation"))
    annotation = AnnotationConfig()
    if annotation_data:
        annotation.name = _as_str(annotation_data.get("name"))
        annotation.fqn = _as_str(annotation_data.get("fqn"))
        annotation.container = _as_str(annotation_data.get("container"))

    workers = data.get("workers")
    if workers is not None and _as_int(workers) is None:
        raise ConfigError(f"workers must be an integer in {config_file.name}")

    return EventMetaConfig(
        root=root,
        source_dir=_as_str(data.get("source_dir")),
        output_file=_as_str(data.get("output_file")),
        annotation=annotation,
        fail_on_missing=_as_bool(data.get("fail_on_missing")),
        includes=_as_str_list(data.get("includes")),
        excludes=_as_str_list(data.get("excludes")),
        workers=_as_int(workers),
    )


def build_scan_config(
    config: EventMetaConfig,
    *,
    source_dir: Optional[str] = None,
    annotation_name: Optional[str] = None,
    annotation_fqn: Optional[str] = None,
    container_name: Optional[str] = None,
    fail_on_missing: Optional[bool] = None,
    includes: Optional[Sequence[str]] = None,
    excludes: Optional[Sequence[str]] = None,
    workers: Optional[int] = None,
) -> ScanConfig:
    """Merge file settings with explicit overrides into an immutable ScanConfig."""
    source = source_dir or config.source_dir or DEFAULT_SOURCE_DIR
    source_root = Path(source).expanduser()
    if not source_root.is_absolute():
        source_root = config.root / source_root

    if fail_on_missing is None:
        fail_on_missing = config.fail_on_missing if config.fail_on_missing is not None else False
    if workers is None:
        workers = config.workers if config.workers is not None else 1

    return ScanConfig(
        source_root=source_root,
        annotation_simple_name=annotation_name or config.annotation.name or DEFAULT_ANNOTATION_NAME,
        annotation_fqn=annotation_fqn or config.annotation.fqn or DEFAULT_ANNOTATION_FQN,
        container_simple_name=container_name or config.annotation.container or "",
        fail_on_missing=fail_on_missing,
        includes=tuple(includes) if includes else tuple(config.includes),
        excludes=tuple(excludes) if excludes else tuple(config.excludes),
        workers=workers,
    )


def resolve_output_file(config: EventMetaConfig, override: Optional[str] = None) -> Path:
    """Return the output path, relative paths anchored at the project root."""
    output = Path(override or config.output_file or DEFAULT_OUTPUT_FILE).expanduser()
    if not output.is_absolute():
        output = config.root / output
    return output


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}

    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []
