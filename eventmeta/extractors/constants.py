"""Per-file table of `static final String` constants."""

from __future__ import annotations

from typing import Dict

from tree_sitter import Tree

from ..parsing.nodes import node_text
from .declarations import CONSTANT_HOLDER_TYPES, modifier_keywords, top_level_types, type_members
from .resolver import decode_string_literal

_FIELD_TYPES = {"field_declaration", "constant_declaration"}
_STRING_TYPES = {"String", "java.lang.String"}


def collect_constants(tree: Tree) -> Dict[str, str]:
    """Map constant names to literal values for every top-level type in the file.

    Only fields that are both `static` and `final`, typed `String` and
    initialized with a single string literal qualify. Later declarations
    overwrite earlier ones with the same name.
    """
    constants: Dict[str, str] = {}
    for declaration in top_level_types(tree, CONSTANT_HOLDER_TYPES):
        for member in type_members(declaration):
            if member.type not in _FIELD_TYPES:
                continue
            if not {"static", "final"} <= modifier_keywords(member):
                continue
            declared_type = "".join(node_text(member.child_by_field_name("type")).split())
            if declared_type not in _STRING_TYPES:
                continue
            for declarator in member.children_by_field_name("declarator"):
                if declarator.child_by_field_name("dimensions") is not None:
                    continue
                value = declarator.child_by_field_name("value")
                if value is None or value.type != "string_literal":
                    continue
                decoded = decode_string_literal(value)
                if isinstance(decoded, str):
                    constants[node_text(declarator.child_by_field_name("name"))] = decoded
    return constants


__all__ = ["collect_constants"]
