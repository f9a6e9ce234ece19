"""Conservative evaluation of annotation argument expressions.

Only string literals, same-file string constants and `+` concatenations of
those are folded. Everything else resolves to UNRESOLVED so that a value is
never guessed from partial information.
"""

from __future__ import annotations

import enum
import re
from typing import Mapping, Optional, Union

from tree_sitter import Node

from ..parsing.nodes import node_text

_INT_MAX = 2**31 - 1

_INT_LITERAL_TYPES = {
    "decimal_integer_literal",
    "octal_integer_literal",
    "hex_integer_literal",
    "binary_integer_literal",
}

_ESCAPE_PATTERN = re.compile(r"\\(u+[0-9a-fA-F]{4}|[0-3][0-7]{0,2}|[4-7][0-7]?|.)", re.DOTALL)

_SIMPLE_ESCAPES = {
    "b": "\b",
    "t": "\t",
    "n": "\n",
    "f": "\f",
    "r": "\r",
    "s": " ",
    '"': '"',
    "'": "'",
    "\\": "\\",
}


class Unresolved(enum.Enum):
    """Marker for expressions outside the supported folding subset."""

    TOKEN = "unresolved"

    def __repr__(self) -> str:
        return "UNRESOLVED"


UNRESOLVED = Unresolved.TOKEN

StringValue = Union[str, Unresolved]


def decode_string_literal(node: Node) -> StringValue:
    """Decode a Java string literal; text blocks are not folded."""
    raw = node_text(node)
    if raw.startswith('"""') or len(raw) < 2 or not (raw.startswith('"') and raw.endswith('"')):
        return UNRESOLVED
    return unescape_java(raw[1:-1])


def unescape_java(body: str) -> str:
    def _replace(match: re.Match[str]) -> str:
        escape = match.group(1)
        if escape[0] == "u" and len(escape) > 1:
            return chr(int(escape.lstrip("u"), 16))
        if escape[0] in "01234567":
            return chr(int(escape, 8))
        return _SIMPLE_ESCAPES.get(escape, escape)

    decoded = _ESCAPE_PATTERN.sub(_replace, body)
    if any("\ud800" <= char <= "\udfff" for char in decoded):
        # \uXXXX pairs arrive as separate UTF-16 surrogates
        decoded = decoded.encode("utf-16", "surrogatepass").decode("utf-16", errors="replace")
    return decoded


def resolve_string(expr: Optional[Node], constants: Mapping[str, str]) -> StringValue:
    """Resolve an expression to a string using the file's constant table."""
    if expr is None:
        return UNRESOLVED

    if expr.type == "string_literal":
        return decode_string_literal(expr)

    # topic = SOME_CONST (static final String SOME_CONST = "...")
    if expr.type == "identifier":
        return constants.get(node_text(expr), UNRESOLVED)

    if expr.type == "binary_expression":
        operator = expr.child_by_field_name("operator")
        if operator is not None and operator.type == "+":
            left = resolve_string(expr.child_by_field_name("left"), constants)
            right = resolve_string(expr.child_by_field_name("right"), constants)
            if isinstance(left, str) and isinstance(right, str):
                return left + right

    return UNRESOLVED


def resolve_int(expr: Optional[Node]) -> int:
    """Resolve an int literal by reading its digits as base 10; anything else yields 0.

    The literal text is taken as written, so `010` is 10 and forms with
    separators, a radix prefix or a long suffix do not parse.
    """
    if expr is None or expr.type not in _INT_LITERAL_TYPES:
        return 0
    text = node_text(expr)
    if not text.isascii() or not text.isdigit():
        return 0
    value = int(text, 10)
    if value > _INT_MAX:
        return 0
    return value


__all__ = [
    "UNRESOLVED",
    "StringValue",
    "Unresolved",
    "decode_string_literal",
    "resolve_int",
    "resolve_string",
    "unescape_java",
]
