"""
TreeMap - Ordered map backed by a Red-Black Tree.
"""

from collections.abc import AsyncIterator, Callable, Iterable, Mapping
from typing import Any

from treemap.interfaces.navigable_map import NavigableMap
from treemap.models.ordering import Comparator, Ordering
from treemap.models.sortedcontainers.iterators import TreeIterator, project_key
from treemap.models.sortedcontainers.red_black_tree import RedBlackTree
from treemap.navigable.sub_map import SubMap


class TreeMap(RedBlackTree, NavigableMap):
    """
    Ordered map with navigation and live range views.

    Provides:
    - put/get/delete and the full MutableMapping protocol in O(log N)
    - first/last/poll and floor/ceiling/lower/higher navigation
    - sub_map/head_map/tail_map/descending_map live views
    - linear-time construction from sorted input

    Iterating the map yields keys in order. iterator(start, end) yields
    (key, value) pairs, like the other sorted containers. Every iterator is
    fail-fast.

    Not thread-safe: callers sharing a map across threads must synchronize.
    """

    def __init__(
        self,
        items: Mapping[Any, Any] | Iterable[tuple[Any, Any]] | None = None,
        comparator: Comparator | None = None,
        *,
        key: Callable[[Any], Any] | None = None,
        allow_none_keys: bool | None = None,
        ordering: Ordering | None = None,
    ) -> None:
        """
        Initialize the map.

        Args:
            items: Initial contents: a mapping or an iterable of (key, value)
                pairs. Another NavigableMap is copied in linear time and, unless
                an ordering is given here, lends its ordering.
            comparator: Two-argument comparison function.
            key: Sort-key function.
            allow_none_keys: None-key policy, see Ordering.
            ordering: A ready Ordering (exclusive with the three above).
        """
        super().__init__(_resolve_ordering(items, comparator, key, allow_none_keys, ordering))
        if items is not None:
            self.put_all(items)

    @classmethod
    def from_sorted(
        cls,
        items: Iterable[tuple[Any, Any]],
        comparator: Comparator | None = None,
        *,
        key: Callable[[Any], Any] | None = None,
        allow_none_keys: bool | None = None,
        ordering: Ordering | None = None,
    ) -> "TreeMap":
        """
        Build a map from (key, value) pairs already in ascending key order.

        Runs in linear time instead of N separate inserts.

        Raises:
            ValueError: If the keys are not strictly increasing.
        """
        tree_map = cls(
            comparator=comparator, key=key, allow_none_keys=allow_none_keys, ordering=ordering
        )
        entries = list(items)
        tree_map.ordering.check_sorted([k for k, _ in entries])
        tree_map._build_from_sorted(len(entries), entries)
        return tree_map

    def put_all(self, items: Mapping[Any, Any] | Iterable[tuple[Any, Any]]) -> None:
        """
        Copy every entry of items into this map.

        Uses the linear-time bulk build when this map is empty and items is a
        non-empty NavigableMap with the same ordering.
        """
        if (
            isinstance(items, NavigableMap)
            and self._size == 0
            and items.ordering == self._ordering
        ):
            size = len(items)
            if size > 0:
                self._build_from_sorted(size, items.iterator())
                return

        if isinstance(items, Mapping):
            items = items.items()
        for k, v in items:
            self.put(k, v)

    def copy(self) -> "TreeMap":
        """Shallow copy with the same ordering, built in linear time."""
        return TreeMap(self)

    def __iter__(self) -> TreeIterator:
        return self._entry_iterator(project_key)

    def __aiter__(self) -> AsyncIterator[Any]:
        return self._entry_iterator(project_key, asynchronous=True)

    def sub_map(
        self,
        from_key: Any,
        to_key: Any,
        from_inclusive: bool = True,
        to_inclusive: bool = False,
    ) -> SubMap:
        return SubMap(self, False, from_key, from_inclusive, False, to_key, to_inclusive)

    def head_map(self, to_key: Any, inclusive: bool = False) -> SubMap:
        return SubMap(self, True, None, True, False, to_key, inclusive)

    def tail_map(self, from_key: Any, inclusive: bool = True) -> SubMap:
        return SubMap(self, False, from_key, inclusive, True, None, True)

    def descending_map(self) -> SubMap:
        return SubMap(self, True, None, True, True, None, True, descending=True)


def _resolve_ordering(
    items: Any,
    comparator: Comparator | None,
    key: Callable[[Any], Any] | None,
    allow_none_keys: bool | None,
    ordering: Ordering | None,
) -> Ordering:
    """Pick the ordering for a new map from its constructor arguments."""
    explicit = comparator is not None or key is not None or allow_none_keys is not None
    if ordering is not None:
        if explicit:
            raise ValueError("ordering cannot be combined with comparator, key or allow_none_keys")
        return ordering
    if not explicit and isinstance(items, NavigableMap):
        return items.ordering
    return Ordering(comparator, key=key, allow_none_keys=allow_none_keys)

