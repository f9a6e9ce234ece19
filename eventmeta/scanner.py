"""Drives the per-file extraction pipeline over a source tree."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, List, Optional

from .config import ConfigError, ScanConfig
from .extractors import AnnotationExtractor, collect_constants
from .globs import GlobFilter
from .logging import get_logger, location_extra
from .models import Diagnostic, EventMetadata, FileContext, TriggerRecord
from .parsing import SourceParser, get_parser
from .validators import TriggerValidator
from .walker import SourceFile, iter_source_files

_LOG_LEVELS = {
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


@dataclass
class FileOutcome:
    """Records and diagnostics produced by one source file."""

    triggers: List[TriggerRecord] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)


class EventScanner:
    """Walks `config.source_root` and collects trigger records.

    With `workers > 1` files are processed on a thread pool. Each worker only
    returns a FileOutcome; outcomes are merged on the calling thread in walk
    order, so triggers and diagnostics match a serial run.
    """

    def __init__(
        self,
        config: ScanConfig,
        *,
        logger: Optional[logging.Logger] = None,
        parser: Optional[SourceParser] = None,
    ) -> None:
        self.config = config
        self.logger = logger or get_logger("scanner")
        self.parser = parser or get_parser()
        self.glob_filter = GlobFilter(config.includes, config.excludes)
        self.extractor = AnnotationExtractor(config)
        self.diagnostics: List[Diagnostic] = []

    def scan(self) -> EventMetadata:
        """Return the sorted metadata document for the configured source root."""
        self.diagnostics = []
        metadata = EventMetadata()
        root = Path(self.config.source_root)

        if not root.exists():
            self._record(Diagnostic(level="info", message=f"Source dir does not exist, skipping: {root}"))
            return metadata
        if not root.is_dir():
            raise ConfigError(f"Source path is not a directory: {root}")

        files = [
            source for source in iter_source_files(root) if self.glob_filter.accepts(source.relative_path)
        ]
        self.logger.debug("Scanning %d source files under %s", len(files), root)

        if self.config.workers > 1 and len(files) > 1:
            outcomes: Iterable[FileOutcome] = self._scan_parallel(files)
        else:
            outcomes = (self._process(source) for source in files)

        for outcome in outcomes:
            metadata.triggers.extend(outcome.triggers)
            for diagnostic in outcome.diagnostics:
                self._record(diagnostic)

        # Stable ordering keeps diffs in CI readable
        metadata.sort_triggers()
        self.logger.debug("Collected %d triggers", len(metadata.triggers))
        return metadata

    def _scan_parallel(self, files: List[SourceFile]) -> Iterator[FileOutcome]:
        executor = ThreadPoolExecutor(
            max_workers=self.config.workers, thread_name_prefix="eventmeta-scan"
        )
        try:
            # map() yields in walk order and re-raises the first failure there
            yield from executor.map(self._process, files)
        except BaseException:
            executor.shutdown(wait=True, cancel_futures=True)
            raise
        executor.shutdown(wait=True)

    def _process(self, source: SourceFile) -> FileOutcome:
        outcome = FileOutcome()
        result = self.parser.parse(source.path)
        if not result.ok:
            outcome.diagnostics.append(
                Diagnostic(
                    level="warning",
                    message=f"Failed to parse: {source.relative_path} ({result.error})",
                    source_file=source.relative_path,
                )
            )
            return outcome

        tree = result.unwrap()
        context = FileContext(
            path=str(source.path),
            relative_path=source.relative_path,
            tree=tree,
            constants=collect_constants(tree),
        )

        validator = TriggerValidator(self.config, outcome.diagnostics.append)
        for site in self.extractor.extract(tree):
            record = validator.build(site, context)
            if record is not None:
                outcome.triggers.append(record)
        return outcome

    def _record(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)
        self.logger.log(
            _LOG_LEVELS.get(diagnostic.level, logging.WARNING),
            diagnostic.message,
            extra=location_extra(diagnostic.source_file, diagnostic.target, diagnostic.line),
        )


__all__ = ["EventScanner", "FileOutcome"]
