"""Filesystem traversal for scan candidates."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator


@dataclass(frozen=True)
class SourceFile:
    """A regular file under the scan root."""

    path: Path
    relative_path: str


def iter_source_files(root: Path) -> Iterator[SourceFile]:
    """Yield regular files below `root` in a deterministic order.

    Relative paths always use `/` separators. Directory symlinks are not
    followed.
    """
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        current_dir = Path(dirpath)
        for filename in sorted(filenames):
            path = current_dir / filename
            if not path.is_file():
                continue
            yield SourceFile(path=path, relative_path=path.relative_to(root).as_posix())


__all__ = ["SourceFile", "iter_source_files"]
