"""Locates trigger annotations on types and methods."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional

from tree_sitter import Node, Tree

from ..config import ScanConfig
from ..parsing.nodes import named_children, node_text
from .declarations import (
    ANNOTATED_TYPES,
    ANNOTATION_NODE_TYPES,
    annotation_name,
    annotations_of,
    top_level_types,
    type_members,
    type_name,
)


class SiteKind(enum.Enum):
    """How a target annotation was reached."""

    DIRECT = "direct"
    CONTAINER = "container"


@dataclass(frozen=True)
class AnnotationSite:
    """A target annotation paired with the label of the declaration it annotates."""

    target: str
    node: Node
    kind: SiteKind = SiteKind.DIRECT


class AnnotationExtractor:
    """Finds target annotations directly or inside their repeatable container."""

    def __init__(self, config: ScanConfig) -> None:
        self.config = config

    def extract(self, tree: Tree) -> Iterator[AnnotationSite]:
        """Yield sites for each top-level type and the methods declared on it.

        Nested types are not descended into.
        """
        for declaration in top_level_types(tree, ANNOTATED_TYPES):
            class_name = type_name(declaration)
            if not class_name:
                continue
            yield from self._classify(class_name, annotations_of(declaration))
            for member in type_members(declaration):
                if member.type != "method_declaration":
                    continue
                method_name = node_text(member.child_by_field_name("name"))
                yield from self._classify(f"{class_name}#{method_name}", annotations_of(member))

    def is_target(self, name: str) -> bool:
        if name == self.config.annotation_simple_name:
            return True
        # fully-qualified usage: @com.acme.eventing.EventTrigger
        return "." in name and name == self.config.annotation_fqn

    def is_container(self, name: str) -> bool:
        if name == self.config.container_simple_name:
            return True
        return "." in name and name == self.config.container_fqn

    def _classify(self, target: str, annotations: Iterable[Node]) -> Iterator[AnnotationSite]:
        for annotation in annotations:
            name = annotation_name(annotation)
            if self.is_target(name):
                yield AnnotationSite(target=target, node=annotation, kind=SiteKind.DIRECT)
            elif self.is_container(name):
                for inner in container_elements(annotation):
                    if self.is_target(annotation_name(inner)):
                        yield AnnotationSite(target=target, node=inner, kind=SiteKind.CONTAINER)


def container_elements(annotation: Node) -> List[Node]:
    """Return annotations listed in a container's `value` array.

    Both `@Container({...})` and `@Container(value = {...})` are accepted;
    any other shape yields nothing.
    """
    arguments = _argument_nodes(annotation)
    value: Optional[Node] = None
    if len(arguments) == 1 and arguments[0].type != "element_value_pair":
        value = arguments[0]
    else:
        for pair in arguments:
            if pair.type == "element_value_pair" and node_text(pair.child_by_field_name("key")) == "value":
                value = pair.child_by_field_name("value")
    if value is None or value.type != "element_value_array_initializer":
        return []
    return [element for element in named_children(value) if element.type in ANNOTATION_NODE_TYPES]


def annotation_arguments(annotation: Node) -> Optional[Dict[str, Node]]:
    """Return named member expressions, or None for marker and single-value forms."""
    if annotation.type != "annotation":
        return None
    arguments = _argument_nodes(annotation)
    if any(argument.type != "element_value_pair" for argument in arguments):
        return None
    members: Dict[str, Node] = {}
    for pair in arguments:
        key = node_text(pair.child_by_field_name("key"))
        value = pair.child_by_field_name("value")
        if key and value is not None:
            members[key] = value
    return members


def _argument_nodes(annotation: Node) -> List[Node]:
    argument_list = annotation.child_by_field_name("arguments")
    if argument_list is None:
        return []
    return named_children(argument_list)


__all__ = [
    "AnnotationExtractor",
    "AnnotationSite",
    "SiteKind",
    "annotation_arguments",
    "container_elements",
]
