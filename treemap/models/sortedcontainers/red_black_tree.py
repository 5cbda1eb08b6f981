"""
Red-Black Tree implementation for sorted key-value storage.

All lookups, inserts and deletes are O(log N). The tree owns every node; the
parent links are back-references used only for traversal and rebalancing.
"""

import logging
from collections.abc import AsyncIterator, Callable, Iterable, Iterator
from typing import Any

from treemap.interfaces.sorted_container import SortedContainer
from treemap.models.exceptions import InvariantViolationError
from treemap.models.ordering import Ordering
from treemap.models.sortedcontainers.iterators import (
    UNBOUNDED,
    AsyncTreeIterator,
    TreeIterator,
    project_item,
    project_key,
)
from treemap.models.sortedcontainers.node import (
    Color,
    Node,
    color_of,
    left_of,
    maximum,
    minimum,
    parent_of,
    right_of,
    set_color,
    successor,
)

logger = logging.getLogger(__name__)

# Marks "entries are (key, value) pairs" for bulk builds
_PAIRS = object()


class RedBlackTree(SortedContainer):
    """
    Red-Black Tree implementation of SortedContainer.

    Properties maintained:
    1. Every node is either red or black
    2. Root is always black
    3. Leaf positions (None) count as black
    4. Red nodes cannot have red children
    5. Every path from a node to its leaves has the same number of black nodes

    A structural-modification counter is bumped on every insert and delete
    (not on value updates) so iterators can fail fast.
    """

    def __init__(self, ordering: Ordering | None = None) -> None:
        self._ordering = ordering if ordering is not None else Ordering()
        self._root: Node | None = None
        self._size: int = 0
        self._mod_count: int = 0

    @property
    def ordering(self) -> Ordering:
        return self._ordering

    @property
    def modification_count(self) -> int:
        """Number of structural modifications made so far."""
        return self._mod_count

    def put(self, key: Any, value: Any) -> Any | None:
        """Insert or update a key-value pair. O(log N)"""
        if self._root is None:
            # Type and None check even though there is nothing to compare with
            self._ordering.check(key)
            self._root = Node(key=key, value=value, color=Color.BLACK)
            self._size = 1
            self._mod_count += 1
            return None

        compare = self._ordering.compare

        # Find insertion point
        parent = None
        current = self._root
        cmp = 0

        while current is not None:
            parent = current
            cmp = compare(key, current.key)
            if cmp < 0:
                current = current.left
            elif cmp > 0:
                current = current.right
            else:
                # Key exists, update value in place
                old_value = current.value
                current.value = value
                return old_value

        # Insert new node
        new_node = Node(key=key, value=value, parent=parent)
        if cmp < 0:
            parent.left = new_node
        else:
            parent.right = new_node

        self._size += 1
        self._mod_count += 1
        self._fix_insert(new_node)
        return None

    def get(self, key: Any, default: Any = None) -> Any:
        """Retrieve value by key. O(log N)"""
        node = self._find_node(key)
        return node.value if node is not None else default

    def delete(self, key: Any) -> Any | None:
        """Remove a key-value pair and return its value. O(log N)"""
        node = self._find_node(key)
        if node is None:
            return None

        value = node.value
        self._delete_node(node)
        return value

    def has(self, key: Any) -> bool:
        return self._find_node(key) is not None

    def size(self) -> int:
        return self._size

    def clear(self) -> None:
        """Drop every node at once."""
        logger.debug(f"Clearing tree of {self._size} entries")
        self._mod_count += 1
        self._size = 0
        self._root = None

    def __iter__(self) -> Iterator[tuple[Any, Any]]:
        return self.iterator()

    def iterator(self, start: Any = None, end: Any = None) -> Iterator[tuple[Any, Any]]:
        first, fence = self._range_bounds(start, end)
        return TreeIterator(self, first, fence)

    def __aiter__(self) -> AsyncIterator[tuple[Any, Any]]:
        return self.async_iterator()

    def async_iterator(
        self, start: Any = None, end: Any = None
    ) -> AsyncIterator[tuple[Any, Any]]:
        first, fence = self._range_bounds(start, end)
        return AsyncTreeIterator(self, first, fence)

    def _range_bounds(self, start: Any, end: Any) -> tuple[Node | None, Any]:
        """First node and fence key of the half-open range [start, end)."""
        first = self._first_node() if start is None else self._ceiling_node(start)
        fence = UNBOUNDED
        if end is not None:
            if first is not None and self._ordering.compare(first.key, end) >= 0:
                return None, fence
            stop = self._ceiling_node(end)
            if stop is not None:
                fence = stop.key
        return first, fence

    def _entry_iterator(
        self,
        project: Callable[[Node], Any] = project_item,
        reverse: bool = False,
        asynchronous: bool = False,
    ) -> TreeIterator:
        """Iterator over every node, projected to keys, values or items."""
        cls = AsyncTreeIterator if asynchronous else TreeIterator
        first = self._last_node() if reverse else self._first_node()
        return cls(self, first, descending=reverse, project=project)

    def _find_node(self, key: Any) -> Node | None:
        """Find node by key."""
        compare = self._ordering.compare
        current = self._root
        while current is not None:
            cmp = compare(key, current.key)
            if cmp < 0:
                current = current.left
            elif cmp > 0:
                current = current.right
            else:
                return current
        return None

    def _first_node(self) -> Node | None:
        return minimum(self._root)

    def _last_node(self) -> Node | None:
        return maximum(self._root)

    def _ceiling_node(self, key: Any) -> Node | None:
        """Smallest node with key >= key."""
        compare = self._ordering.compare
        best = None
        current = self._root
        while current is not None:
            cmp = compare(key, current.key)
            if cmp < 0:
                best = current
                current = current.left
            elif cmp > 0:
                current = current.right
            else:
                return current
        return best

    def _higher_node(self, key: Any) -> Node | None:
        """Smallest node with key > key."""
        compare = self._ordering.compare
        best = None
        current = self._root
        while current is not None:
            if compare(key, current.key) < 0:
                best = current
                current = current.left
            else:
                current = current.right
        return best

    def _floor_node(self, key: Any) -> Node | None:
        """Largest node with key <= key."""
        compare = self._ordering.compare
        best = None
        current = self._root
        while current is not None:
            cmp = compare(key, current.key)
            if cmp > 0:
                best = current
                current = current.right
            elif cmp < 0:
                current = current.left
            else:
                return current
        return best

    def _lower_node(self, key: Any) -> Node | None:
        """Largest node with key < key."""
        compare = self._ordering.compare
        best = None
        current = self._root
        while current is not None:
            if compare(key, current.key) > 0:
                best = current
                current = current.right
            else:
                current = current.left
        return best

    def _fix_insert(self, node: Node) -> None:
        """Fix Red-Black Tree properties after insert."""
        node.color = Color.RED

        while node is not self._root and color_of(parent_of(node)) == Color.RED:
            parent = parent_of(node)
            grandparent = parent_of(parent)

            if parent is left_of(grandparent):
                uncle = right_of(grandparent)

                if color_of(uncle) == Color.RED:
                    # Case 1: Uncle is red
                    set_color(parent, Color.BLACK)
                    set_color(uncle, Color.BLACK)
                    set_color(grandparent, Color.RED)
                    node = grandparent
                else:
                    if node is right_of(parent):
                        # Case 2: Node is an inner (right) child
                        node = parent
                        self._rotate_left(node)

                    # Case 3: Node is an outer (left) child
                    set_color(parent_of(node), Color.BLACK)
                    set_color(parent_of(parent_of(node)), Color.RED)
                    self._rotate_right(parent_of(parent_of(node)))
            else:
                uncle = left_of(grandparent)

                if color_of(uncle) == Color.RED:
                    set_color(parent, Color.BLACK)
                    set_color(uncle, Color.BLACK)
                    set_color(grandparent, Color.RED)
                    node = grandparent
                else:
                    if node is left_of(parent):
                        node = parent
                        self._rotate_right(node)

                    set_color(parent_of(node), Color.BLACK)
                    set_color(parent_of(parent_of(node)), Color.RED)
                    self._rotate_left(parent_of(parent_of(node)))

        self._root.color = Color.BLACK

    def _rotate_left(self, node: Node | None) -> None:
        """Left rotation."""
        if node is None or node.right is None:
            return
        right_child = node.right

        node.right = right_child.left
        if right_child.left is not None:
            right_child.left.parent = node

        right_child.parent = node.parent

        if node.parent is None:
            self._root = right_child
        elif node is node.parent.left:
            node.parent.left = right_child
        else:
            node.parent.right = right_child

        right_child.left = node
        node.parent = right_child

    def _rotate_right(self, node: Node | None) -> None:
        """Right rotation."""
        if node is None or node.left is None:
            return
        left_child = node.left

        node.left = left_child.right
        if left_child.right is not None:
            left_child.right.parent = node

        left_child.parent = node.parent

        if node.parent is None:
            self._root = left_child
        elif node is node.parent.right:
            node.parent.right = left_child
        else:
            node.parent.left = left_child

        left_child.right = node
        node.parent = left_child

    def _delete_node(self, node: Node) -> None:
        """Delete a node from the tree and rebalance."""
        self._mod_count += 1
        self._size -= 1

        if node.left is not None and node.right is not None:
            # Node has two children - take over the successor's entry and
            # delete the successor, which has at most one child
            succ = successor(node)
            node.key = succ.key
            node.value = succ.value
            node = succ

        # Node has at most one child
        child = node.left if node.left is not None else node.right

        if child is not None:
            self._replace_node(node, child)
            node.left = node.right = node.parent = None

            if node.color == Color.BLACK:
                self._fix_delete(child)
        elif node.parent is None:
            # Only node in the tree
            self._root = None
        else:
            # Leaf: use the node itself as the phantom replacement
            if node.color == Color.BLACK:
                self._fix_delete(node)

            if node.parent is not None:
                if node is node.parent.left:
                    node.parent.left = None
                elif node is node.parent.right:
                    node.parent.right = None
                node.parent = None

    def _replace_node(self, node: Node, child: Node) -> None:
        """Replace node with child in tree."""
        child.parent = node.parent

        if node.parent is None:
            self._root = child
        elif node is node.parent.left:
            node.parent.left = child
        else:
            node.parent.right = child

    def _fix_delete(self, node: Node) -> None:
        """Fix Red-Black Tree properties after removing a black node."""
        while node is not self._root and color_of(node) == Color.BLACK:
            if node is left_of(parent_of(node)):
                sibling = right_of(parent_of(node))

                if color_of(sibling) == Color.RED:
                    # Red sibling: rotate so the sibling becomes black
                    set_color(sibling, Color.BLACK)
                    set_color(parent_of(node), Color.RED)
                    self._rotate_left(parent_of(node))
                    sibling = right_of(parent_of(node))

                if (
                    color_of(left_of(sibling)) == Color.BLACK
                    and color_of(right_of(sibling)) == Color.BLACK
                ):
                    # Black sibling, black nephews: push the deficiency up
                    set_color(sibling, Color.RED)
                    node = parent_of(node)
                else:
                    if color_of(right_of(sibling)) == Color.BLACK:
                        # Near nephew red: rotate it to the far side
                        set_color(left_of(sibling), Color.BLACK)
                        set_color(sibling, Color.RED)
                        self._rotate_right(sibling)
                        sibling = right_of(parent_of(node))

                    # Far nephew red: absorb the deficiency
                    set_color(sibling, color_of(parent_of(node)))
                    set_color(parent_of(node), Color.BLACK)
                    set_color(right_of(sibling), Color.BLACK)
                    self._rotate_left(parent_of(node))
                    node = self._root
            else:
                sibling = left_of(parent_of(node))

                if color_of(sibling) == Color.RED:
                    set_color(sibling, Color.BLACK)
                    set_color(parent_of(node), Color.RED)
                    self._rotate_right(parent_of(node))
                    sibling = left_of(parent_of(node))

                if (
                    color_of(right_of(sibling)) == Color.BLACK
                    and color_of(left_of(sibling)) == Color.BLACK
                ):
                    set_color(sibling, Color.RED)
                    node = parent_of(node)
                else:
                    if color_of(left_of(sibling)) == Color.BLACK:
                        set_color(right_of(sibling), Color.BLACK)
                        set_color(sibling, Color.RED)
                        self._rotate_left(sibling)
                        sibling = left_of(parent_of(node))

                    set_color(sibling, color_of(parent_of(node)))
                    set_color(parent_of(node), Color.BLACK)
                    set_color(left_of(sibling), Color.BLACK)
                    self._rotate_right(parent_of(node))
                    node = self._root

        set_color(node, Color.BLACK)

    def _build_from_sorted(
        self, size: int, entries: Iterable[Any], default_value: Any = _PAIRS
    ) -> None:
        """
        Replace the contents with a tree built bottom-up from sorted entries.

        Runs in linear time. The tree is complete: every level is full except
        possibly the deepest, whose nodes are red. Full levels are colored by
        parity counting up from the deepest full level (black), and the root
        is always black, so every path carries the same number of black nodes.

        Args:
            size: Number of entries to consume.
            entries: In-order entries, (key, value) pairs unless default_value
                is given, in which case plain keys.
            default_value: Value stored under every key.

        Raises:
            ValueError: If entries runs out before size items were read. The
                tree is left unchanged.
        """
        if size < 0:
            raise ValueError(f"size must be >= 0, got {size}")

        red_level = _compute_red_level(size)
        source = iter(entries)
        try:
            root = self._build_subtree(0, 0, size - 1, red_level, source, default_value)
        except StopIteration:
            raise ValueError(f"sorted input ended before {size} entries") from None

        self._root = root
        self._size = size
        self._mod_count += 1
        logger.debug(f"Built tree of {size} entries from sorted input")

    def _build_subtree(
        self,
        level: int,
        lo: int,
        hi: int,
        red_level: int,
        source: Iterator[Any],
        default_value: Any,
    ) -> Node | None:
        if hi < lo:
            return None

        mid = (lo + hi) >> 1

        left = None
        if lo < mid:
            left = self._build_subtree(level + 1, lo, mid - 1, red_level, source, default_value)

        # Entries are consumed in order: left subtree, this node, right subtree
        item = next(source)
        if default_value is _PAIRS:
            key, value = item
        else:
            key, value = item, default_value

        node = Node(key=key, value=value, color=_level_color(level, red_level))
        if left is not None:
            node.left = left
            left.parent = node

        if mid < hi:
            right = self._build_subtree(level + 1, mid + 1, hi, red_level, source, default_value)
            node.right = right
            right.parent = node

        return node

    def check_invariants(self) -> int:
        """
        Walk the whole tree and verify every red-black invariant.

        Also checks parent links, strict key ordering and the size count.

        Returns:
            The black-height of the tree (black nodes on any root-to-leaf
            path, root included).

        Raises:
            InvariantViolationError: On the first violation found.
        """
        if self._root is None:
            if self._size != 0:
                raise InvariantViolationError(f"empty tree reports size {self._size}")
            return 0

        if self._root.color != Color.BLACK:
            raise InvariantViolationError("root is not black")
        if self._root.parent is not None:
            raise InvariantViolationError("root has a parent")

        compare = self._ordering.compare
        count = 0

        def walk(node: Node | None) -> int:
            nonlocal count
            if node is None:
                return 0
            count += 1

            if node.color not in (Color.RED, Color.BLACK):
                raise InvariantViolationError(f"{node!r} has invalid color")

            for child in (node.left, node.right):
                if child is None:
                    continue
                if child.parent is not node:
                    raise InvariantViolationError(f"{child!r} has a stale parent link")
                if node.color == Color.RED and child.color == Color.RED:
                    raise InvariantViolationError(f"red {node!r} has red child {child!r}")

            if node.left is not None and compare(node.left.key, node.key) >= 0:
                raise InvariantViolationError(f"left child of {node!r} is out of order")
            if node.right is not None and compare(node.right.key, node.key) <= 0:
                raise InvariantViolationError(f"right child of {node!r} is out of order")

            left_height = walk(node.left)
            right_height = walk(node.right)
            if left_height != right_height:
                raise InvariantViolationError(
                    f"black-height mismatch under {node!r}: {left_height} != {right_height}"
                )
            return left_height + (1 if node.color == Color.BLACK else 0)

        black_height = walk(self._root)

        if count != self._size:
            raise InvariantViolationError(f"tree holds {count} nodes but size is {self._size}")

        # In-order keys must be strictly increasing across subtrees too
        previous = None
        for position, key in enumerate(self._entry_iterator(project_key)):
            if position and compare(previous, key) >= 0:
                raise InvariantViolationError(f"keys out of order at {key!r}")
            previous = key

        return black_height

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {v!r}" for k, v in self._entry_iterator())
        return f"{type(self).__name__}({{{items}}})"


def _compute_red_level(size: int) -> int:
    """Index of the deepest, possibly partial, level of a complete tree of size nodes."""
    level = 0
    m = size - 1
    while m >= 0:
        level += 1
        m = m // 2 - 1
    return level


def _level_color(level: int, red_level: int) -> Color:
    if level == red_level:
        return Color.RED
    if level == 0 or (red_level - 1 - level) % 2 == 0:
        return Color.BLACK
    return Color.RED
