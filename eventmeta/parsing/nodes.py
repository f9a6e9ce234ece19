"""Small helpers for walking tree-sitter nodes."""

from __future__ import annotations

from typing import List, Optional

from tree_sitter import Node

_COMMENT_TYPES = {"line_comment", "block_comment", "comment"}


def node_text(node: Optional[Node]) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8", errors="replace")


def node_line(node: Optional[Node]) -> int:
    """Return the 1-based line of the node's first token, or -1 when unknown."""
    if node is None:
        return -1
    return node.start_point[0] + 1


def named_children(node: Node) -> List[Node]:
    """Return named children, skipping comments."""
    return [child for child in node.named_children if child.type not in _COMMENT_TYPES]


def find_child(node: Node, *types: str) -> Optional[Node]:
    for child in node.children:
        if child.type in types:
            return child
    return None


__all__ = ["find_child", "named_children", "node_line", "node_text"]
