"""JSON rendering and writing of the metadata document."""

from __future__ import annotations

import json
from pathlib import Path

from .config import ConfigError
from .errors import OutputError
from .models import EventMetadata

_INDENT = 2


def render_metadata(metadata: EventMetadata) -> str:
    """Render the document as pretty-printed JSON with a trailing newline."""
    return json.dumps(metadata.to_dict(), indent=_INDENT, ensure_ascii=False) + "\n"


def write_metadata(metadata: EventMetadata, output_file: Path) -> Path:
    """Write the rendered document, creating parent directories as needed."""
    output_file = Path(output_file)
    if output_file.is_dir():
        raise ConfigError(f"Output path is a directory: {output_file}")
    try:
        output_file.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ConfigError(f"Cannot create output directory {output_file.parent}: {exc}") from exc
    try:
        output_file.write_text(render_metadata(metadata), encoding="utf-8")
    except OSError as exc:
        raise OutputError(f"Failed to write event metadata to {output_file}: {exc}") from exc
    return output_file


__all__ = ["render_metadata", "write_metadata"]
