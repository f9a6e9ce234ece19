"""Java source parsing built on tree-sitter."""

from .parser import ParseError, ParseResult, SourceParser, get_parser

__all__ = ["ParseError", "ParseResult", "SourceParser", "get_parser"]
