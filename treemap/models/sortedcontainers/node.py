"""
Tree node and traversal primitives for the Red-Black Tree.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any


class Color(IntEnum):
    """Node color for Red-Black Tree."""

    RED = 0
    BLACK = 1


@dataclass(eq=False)
class Node:
    """Node in the Red-Black Tree. Compared by identity."""

    key: Any
    value: Any
    color: Color = Color.RED
    left: "Node | None" = None
    right: "Node | None" = None
    parent: "Node | None" = None

    def __repr__(self) -> str:
        return f"<{self.color.name[0]} {self.key!r}: {self.value!r}>"


def minimum(node: Node | None) -> Node | None:
    """Leftmost node of the subtree rooted at node."""
    if node is not None:
        while node.left is not None:
            node = node.left
    return node


def maximum(node: Node | None) -> Node | None:
    """Rightmost node of the subtree rooted at node."""
    if node is not None:
        while node.right is not None:
            node = node.right
    return node


def successor(node: Node | None) -> Node | None:
    """Next node in key order, or None past the last node."""
    if node is None:
        return None
    if node.right is not None:
        return minimum(node.right)

    # Climb until we arrive from a left child
    parent = node.parent
    while parent is not None and node is parent.right:
        node = parent
        parent = parent.parent
    return parent


def predecessor(node: Node | None) -> Node | None:
    """Previous node in key order, or None before the first node."""
    if node is None:
        return None
    if node.left is not None:
        return maximum(node.left)

    parent = node.parent
    while parent is not None and node is parent.left:
        node = parent
        parent = parent.parent
    return parent


# Null-safe accessors used by the fixups. Absent nodes are black leaves.


def color_of(node: Node | None) -> Color:
    return Color.BLACK if node is None else node.color


def parent_of(node: Node | None) -> Node | None:
    return None if node is None else node.parent


def left_of(node: Node | None) -> Node | None:
    return None if node is None else node.left


def right_of(node: Node | None) -> Node | None:
    return None if node is None else node.right


def set_color(node: Node | None, color: Color) -> None:
    if node is not None:
        node.color = color
