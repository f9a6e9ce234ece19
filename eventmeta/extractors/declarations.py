"""Navigation over top-level Java type declarations."""

from __future__ import annotations

from typing import Iterable, Iterator, List, Set

from tree_sitter import Node, Tree

from ..parsing.nodes import find_child, named_children, node_text

# Types that may carry trigger annotations on themselves and their methods.
ANNOTATED_TYPES = frozenset(
    {"class_declaration", "interface_declaration", "enum_declaration", "record_declaration"}
)

# Types whose fields feed the constant table.
CONSTANT_HOLDER_TYPES = ANNOTATED_TYPES | {"annotation_type_declaration"}

ANNOTATION_NODE_TYPES = frozenset({"annotation", "marker_annotation"})

_BODY_TYPES = ("class_body", "interface_body", "enum_body", "annotation_type_body")


def top_level_types(tree: Tree, kinds: Iterable[str]) -> Iterator[Node]:
    """Yield type declarations directly under the compilation unit, in source order."""
    wanted = set(kinds)
    for child in named_children(tree.root_node):
        if child.type in wanted:
            yield child


def type_name(declaration: Node) -> str:
    return node_text(declaration.child_by_field_name("name"))


def type_members(declaration: Node) -> List[Node]:
    """Return member declarations of a type body; nested bodies are not entered."""
    body = declaration.child_by_field_name("body") or find_child(declaration, *_BODY_TYPES)
    if body is None:
        return []
    members: List[Node] = []
    for child in named_children(body):
        if child.type == "enum_body_declarations":
            members.extend(named_children(child))
        else:
            members.append(child)
    return members


def modifier_keywords(declaration: Node) -> Set[str]:
    """Return keyword modifiers such as `static` or `final`."""
    modifiers = find_child(declaration, "modifiers")
    if modifiers is None:
        return set()
    return {child.type for child in modifiers.children if not child.is_named}


def annotations_of(declaration: Node) -> List[Node]:
    """Return the annotations attached to a declaration, in source order."""
    modifiers = find_child(declaration, "modifiers")
    if modifiers is None:
        return []
    return [child for child in modifiers.children if child.type in ANNOTATION_NODE_TYPES]


def annotation_name(annotation: Node) -> str:
    """Return the annotation name as written, e.g. `EventTrigger` or `a.b.EventTrigger`."""
    return "".join(node_text(annotation.child_by_field_name("name")).split())


__all__ = [
    "ANNOTATED_TYPES",
    "ANNOTATION_NODE_TYPES",
    "CONSTANT_HOLDER_TYPES",
    "annotation_name",
    "annotations_of",
    "modifier_keywords",
    "top_level_types",
    "type_members",
    "type_name",
]
