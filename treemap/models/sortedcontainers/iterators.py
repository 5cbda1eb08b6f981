"""
Fail-fast iterators over the Red-Black Tree.
"""

import logging
from collections.abc import AsyncIterator, Callable, Iterator
from typing import TYPE_CHECKING, Any

from treemap.models.exceptions import ConcurrentStructuralChangeError
from treemap.models.sortedcontainers.node import Node, predecessor, successor

if TYPE_CHECKING:
    from treemap.models.sortedcontainers.red_black_tree import RedBlackTree

logger = logging.getLogger(__name__)

# Fence key meaning "run to the end of the tree"
UNBOUNDED = object()


def project_key(node: Node) -> Any:
    return node.key


def project_value(node: Node) -> Any:
    return node.value


def project_item(node: Node) -> tuple[Any, Any]:
    return (node.key, node.value)


class TreeIterator(Iterator[Any]):
    """
    Iterator over a run of tree nodes in either direction.

    Snapshots the tree's modification count at creation and raises
    ConcurrentStructuralChangeError if the tree is structurally modified by
    anything other than this iterator's own remove().
    """

    def __init__(
        self,
        tree: "RedBlackTree",
        first: Node | None,
        fence: Any = UNBOUNDED,
        descending: bool = False,
        project: Callable[[Node], Any] = project_item,
    ) -> None:
        """
        Initialize iterator.

        Args:
            tree: The backing tree.
            first: First node to return, or None for an empty run.
            fence: Key at which iteration stops (exclusive). Compared by
                identity, so it still matches after a two-child deletion moves
                the fence key into another node.
            descending: Walk predecessors instead of successors.
            project: Maps each node to the yielded element.
        """
        self._tree = tree
        self._next = first
        self._fence = fence
        self._descending = descending
        self._project = project
        self._last_returned: Node | None = None
        self._expected_mod_count = tree.modification_count

    def __iter__(self) -> "TreeIterator":
        return self

    def __next__(self) -> Any:
        return self._project(self._step())

    def _step(self) -> Node:
        node = self._next
        if node is None or node.key is self._fence:
            raise StopIteration
        self._check_for_comodification()

        self._next = predecessor(node) if self._descending else successor(node)
        self._last_returned = node
        return node

    def _check_for_comodification(self) -> None:
        actual = self._tree.modification_count
        if actual != self._expected_mod_count:
            logger.debug(
                f"Structural change detected during iteration "
                f"(expected {self._expected_mod_count}, found {actual})"
            )
            raise ConcurrentStructuralChangeError(self._expected_mod_count, actual)

    def remove(self) -> None:
        """Remove the entry most recently returned by this iterator."""
        if self._last_returned is None:
            raise RuntimeError("remove() requires a preceding next()")
        self._check_for_comodification()

        node = self._last_returned
        # Deleting a node with two children moves its successor's entry into
        # it, so in ascending order the cursor must stay on that node.
        if not self._descending and node.left is not None and node.right is not None:
            self._next = node
        self._tree._delete_node(node)

        self._expected_mod_count = self._tree.modification_count
        self._last_returned = None


class AsyncTreeIterator(TreeIterator, AsyncIterator[Any]):
    """Async iterator over tree nodes (in-memory, no I/O)."""

    def __aiter__(self) -> "AsyncTreeIterator":
        return self

    async def __anext__(self) -> Any:
        try:
            node = self._step()
        except StopIteration:
            raise StopAsyncIteration from None
        return self._project(node)
