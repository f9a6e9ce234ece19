"""Include/exclude glob matching for scan candidates."""

from __future__ import annotations

import re
import threading
from typing import Dict, Iterable, List, Optional, Pattern, Sequence

from .config import DEFAULT_SOURCE_EXTENSION


def normalize_patterns(
    patterns: Optional[Iterable[Optional[str]]], defaults: Sequence[str]
) -> List[str]:
    """Trim patterns and drop blanks, falling back to `defaults` when nothing is left."""
    if not patterns:
        return list(defaults)
    out = [pattern.strip() for pattern in patterns if pattern and pattern.strip()]
    return out or list(defaults)


def translate_glob(pattern: str) -> str:
    """Translate a path glob into an anchored regular expression.

    `**` spans zero or more path segments, `*` and `?` never cross a `/`.
    Character classes (`[abc]`, `[!abc]`) and alternation (`{a,b}`) are
    supported as well.
    """
    parts: List[str] = []
    index = 0
    length = len(pattern)
    brace_depth = 0
    while index < length:
        char = pattern[index]
        if char == "*":
            if pattern.startswith("**", index):
                index += 2
                at_segment_start = index == 2 or pattern[index - 3] == "/"
                if at_segment_start and pattern.startswith("/", index):
                    # "**/" may also match nothing at all
                    parts.append("(?:.*/)?")
                    index += 1
                elif at_segment_start and index == length and index > 2:
                    # trailing "/**" also matches the directory itself
                    if parts and parts[-1] == "/":
                        parts[-1] = "(?:/.*)?"
                    else:
                        parts.append(".*")
                else:
                    parts.append(".*")
                continue
            parts.append("[^/]*")
        elif char == "?":
            parts.append("[^/]")
        elif char == "[":
            end = pattern.find("]", index + 2 if pattern.startswith("[!", index) else index + 1)
            if end == -1:
                parts.append(re.escape(char))
            else:
                body = pattern[index + 1 : end]
                if body.startswith("!"):
                    body = "^/" + body[1:]
                parts.append("[" + body.replace("\\", "\\\\") + "]")
                index = end
        elif char == "{":
            brace_depth += 1
            parts.append("(?:")
        elif char == "}" and brace_depth:
            brace_depth -= 1
            parts.append(")")
        elif char == "," and brace_depth:
            parts.append("|")
        elif char == "/":
            parts.append("/")
        else:
            parts.append(re.escape(char))
        index += 1
    parts.extend(")" * brace_depth)
    return "".join(parts)


class GlobFilter:
    """Decides which files under the source root participate in a scan."""

    def __init__(
        self,
        includes: Optional[Iterable[Optional[str]]] = None,
        excludes: Optional[Iterable[Optional[str]]] = None,
        *,
        extension: str = DEFAULT_SOURCE_EXTENSION,
    ) -> None:
        self.includes = normalize_patterns(includes, [f"**/*{extension}"])
        self.excludes = normalize_patterns(excludes, [])
        self._cache: Dict[str, Pattern[str]] = {}
        self._lock = threading.Lock()

    def accepts(self, relative_path: str) -> bool:
        """Return True when an include matches and no exclude does."""
        normalized = relative_path.replace("\\", "/")
        if not any(self._matches(pattern, normalized) for pattern in self.includes):
            return False
        return not any(self._matches(pattern, normalized) for pattern in self.excludes)

    def _matches(self, pattern: str, path: str) -> bool:
        return self._compile(pattern).fullmatch(path) is not None

    def _compile(self, pattern: str) -> Pattern[str]:
        compiled = self._cache.get(pattern)
        if compiled is not None:
            return compiled
        with self._lock:
            compiled = self._cache.get(pattern)
            if compiled is None:
                compiled = re.compile(translate_glob(pattern))
                self._cache[pattern] = compiled
        return compiled


__all__ = ["GlobFilter", "normalize_patterns", "translate_glob"]
