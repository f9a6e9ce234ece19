"""
Tree-sitter Parser Wrapper

Parses Java source into a syntax tree without compiling it. Unknown
imports and types are fine; only syntactic errors make a file unusable.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import tree_sitter_java
from tree_sitter import Language, Parser, Tree

from ..errors import EventMetaError
from ..logging import get_logger

logger = get_logger("parsing")

_UTF8_BOM = b"\xef\xbb\xbf"


class ParseError(EventMetaError):
    """Raised when a source file cannot be read or parsed."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Failed to parse {path}: {reason}")
        self.path = path
        self.reason = reason


@dataclass
class ParseResult:
    """Outcome of parsing one file: a usable tree or an error message."""

    path: str
    tree: Optional[Tree] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.tree is not None and self.error is None

    def unwrap(self) -> Tree:
        """Return the tree or raise ParseError."""
        if not self.ok:
            raise ParseError(self.path, self.error or "no syntax tree")
        return self.tree  # type: ignore[return-value]


class SourceParser:
    """
    Java parser with one tree-sitter Parser per thread.

    tree-sitter parsers keep internal state between calls, so worker
    threads never share one.
    """

    def __init__(self) -> None:
        self._language = Language(tree_sitter_java.language())
        self._local = threading.local()

    def _get_parser(self) -> Parser:
        parser = getattr(self._local, "parser", None)
        if parser is None:
            parser = Parser(self._language)
            self._local.parser = parser
        return parser

    def parse_source(self, source: Union[str, bytes], path: str = "<memory>") -> ParseResult:
        """
        Parse an in-memory buffer.

        Args:
            source: Java source as text or UTF-8 bytes
            path: Label used in error messages

        Returns:
            ParseResult with the tree, or with an error when the source
            contains syntax errors
        """
        data = source.encode("utf-8") if isinstance(source, str) else source
        tree = self._get_parser().parse(data)
        if tree.root_node.has_error:
            return ParseResult(path=path, error=f"syntax error near line {_first_error_line(tree)}")
        return ParseResult(path=path, tree=tree)

    def parse(self, path: Union[str, Path]) -> ParseResult:
        """
        Read a file as UTF-8 and parse it.

        The file handle is closed before this returns.
        """
        label = str(path)
        try:
            data = Path(path).read_bytes()
            data.decode("utf-8")
        except OSError as exc:
            logger.debug("Failed to read %s: %s", label, exc)
            return ParseResult(path=label, error=f"unreadable file ({exc.strerror or exc})")
        except UnicodeDecodeError as exc:
            return ParseResult(path=label, error=f"not valid UTF-8 ({exc.reason})")
        if data.startswith(_UTF8_BOM):
            data = data[len(_UTF8_BOM) :]
        return self.parse_source(data, label)


def _first_error_line(tree: Tree) -> int:
    stack = [tree.root_node]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node.start_point[0] + 1
        if node.has_error:
            stack.extend(reversed(node.children))
    return -1


# Global parser instance (lazy singleton)
_parser: Optional[SourceParser] = None


def get_parser() -> SourceParser:
    """Get the shared SourceParser instance."""
    global _parser
    if _parser is None:
        _parser = SourceParser()
    return _parser


__all__ = ["ParseError", "ParseResult", "SourceParser", "get_parser"]
