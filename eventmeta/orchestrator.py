"""Pipeline orchestration for the generate flow."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from .config import (
    ConfigError,
    EventMetaConfig,
    ScanConfig,
    build_scan_config,
    load_config,
    resolve_output_file,
)
from .emitter import render_metadata, write_metadata
from .logging import get_logger
from .models import Diagnostic, EventMetadata
from .scanner import EventScanner


@dataclass
class GenerateOutcome:
    """Result of a metadata generation run."""

    output_file: Path
    metadata: EventMetadata
    document: str
    dry_run: bool
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def warnings(self) -> List[str]:
        return [item.message for item in self.diagnostics if item.level == "warning"]


class Orchestrator:
    """Loads configuration, runs the scanner and writes the metadata document."""

    def __init__(self, scanner_factory: Callable[[ScanConfig], EventScanner] | None = None) -> None:
        self._scanner_factory = scanner_factory or EventScanner
        self.logger = get_logger("orchestrator")

    def run_generate(
        self,
        path: str = ".",
        *,
        config_path: Optional[str] = None,
        source_dir: Optional[str] = None,
        output_file: Optional[str] = None,
        annotation_name: Optional[str] = None,
        annotation_fqn: Optional[str] = None,
        container_name: Optional[str] = None,
        fail_on_missing: Optional[bool] = None,
        includes: Optional[Sequence[str]] = None,
        excludes: Optional[Sequence[str]] = None,
        workers: Optional[int] = None,
        dry_run: bool = False,
    ) -> GenerateOutcome | None:
        """Generate event metadata for the project at `path`.

        Returns None when the source directory does not exist. In strict
        mode an invalid trigger raises before anything is written.
        """
        project_path = Path(path).expanduser().resolve()
        config = self._load_config(project_path, config_path)
        scan_config = build_scan_config(
            config,
            source_dir=source_dir,
            annotation_name=annotation_name,
            annotation_fqn=annotation_fqn,
            container_name=container_name,
            fail_on_missing=fail_on_missing,
            includes=includes,
            excludes=excludes,
            workers=workers,
        )
        target = resolve_output_file(config, output_file)

        if not scan_config.source_root.exists():
            self.logger.info("Source dir does not exist, skipping: %s", scan_config.source_root)
            return None

        self.logger.info("Scanning Java sources: %s", scan_config.source_root)
        scanner = self._scanner_factory(scan_config)
        metadata = scanner.scan()
        document = render_metadata(metadata)

        if not dry_run:
            write_metadata(metadata, target)
            self.logger.info("Wrote event metadata: %s", target)
        self.logger.info("Found triggers: %d", len(metadata.triggers))

        return GenerateOutcome(
            output_file=target,
            metadata=metadata,
            document=document,
            dry_run=dry_run,
            diagnostics=list(scanner.diagnostics),
        )

    def _load_config(self, project_path: Path, config_path: Optional[str]) -> EventMetaConfig:
        if config_path:
            explicit = Path(config_path).expanduser()
            if not explicit.is_file():
                raise ConfigError(f"Config file not found: {explicit}")
            config = load_config(explicit)
            # An explicit config file anchors relative paths at the project, not the file.
            config.root = project_path
            return config
        return load_config(project_path)


__all__ = ["GenerateOutcome", "Orchestrator"]
