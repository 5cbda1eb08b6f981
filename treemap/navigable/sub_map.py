"""
SubMap - live range and descending views over a TreeMap.
"""

from collections.abc import AsyncIterator, Callable, Iterator
from typing import TYPE_CHECKING, Any

from treemap.interfaces.navigable_map import NavigableMap
from treemap.models.exceptions import BoundsError
from treemap.models.ordering import Ordering
from treemap.models.sortedcontainers.iterators import (
    UNBOUNDED,
    AsyncTreeIterator,
    TreeIterator,
    project_item,
    project_key,
)
from treemap.models.sortedcontainers.node import Node

if TYPE_CHECKING:
    from treemap.navigable.tree_map import TreeMap


class SubMap(NavigableMap):
    """
    Window over a backing TreeMap between two optional bounds.

    The view never copies nodes: every call re-derives its start and stop
    points from the current tree, so changes made through the backing map
    (or any other view) show up immediately. Mutations go through the
    backing tree, which keeps the modification counter shared by all views.

    Bounds are stored in the backing map's ascending terms; the descending
    flag only changes which end is "first".
    """

    def __init__(
        self,
        tree_map: "TreeMap",
        from_start: bool,
        lo: Any,
        lo_inclusive: bool,
        to_end: bool,
        hi: Any,
        hi_inclusive: bool,
        descending: bool = False,
    ) -> None:
        """
        Initialize the view.

        Args:
            tree_map: The backing map.
            from_start: No lower bound; lo is ignored.
            lo: Lower bound key.
            lo_inclusive: Whether lo itself belongs to the view.
            to_end: No upper bound; hi is ignored.
            hi: Upper bound key.
            hi_inclusive: Whether hi itself belongs to the view.
            descending: Iterate from high to low.

        Raises:
            BoundsError: If lo is greater than hi.
        """
        ordering = tree_map.ordering
        if not from_start and not to_end:
            if ordering.compare(lo, hi) > 0:
                raise BoundsError(lo, f"lower bound is past upper bound {hi!r}")
        else:
            # Type check the bounds
            if not from_start:
                ordering.check(lo)
            if not to_end:
                ordering.check(hi)

        self._m = tree_map
        self._from_start = from_start
        self._lo = lo
        self._lo_inclusive = lo_inclusive
        self._to_end = to_end
        self._hi = hi
        self._hi_inclusive = hi_inclusive
        self._descending = descending

        self._cached_size = -1
        self._size_mod_count = -1

    @property
    def ordering(self) -> Ordering:
        base = self._m.ordering
        return base.reversed() if self._descending else base

    @property
    def is_descending(self) -> bool:
        return self._descending

    # Window tests, in the backing map's ascending terms

    def _too_low(self, key: Any) -> bool:
        if not self._from_start:
            c = self._m.ordering.compare(key, self._lo)
            if c < 0 or (c == 0 and not self._lo_inclusive):
                return True
        return False

    def _too_high(self, key: Any) -> bool:
        if not self._to_end:
            c = self._m.ordering.compare(key, self._hi)
            if c > 0 or (c == 0 and not self._hi_inclusive):
                return True
        return False

    def _in_range(self, key: Any) -> bool:
        return not self._too_low(key) and not self._too_high(key)

    def _in_closed_range(self, key: Any) -> bool:
        compare = self._m.ordering.compare
        return (self._from_start or compare(key, self._lo) >= 0) and (
            self._to_end or compare(self._hi, key) >= 0
        )

    def _in_range_inclusive(self, key: Any, inclusive: bool) -> bool:
        return self._in_range(key) if inclusive else self._in_closed_range(key)

    def _check_in_range(self, key: Any) -> None:
        if not self._in_range(key):
            raise BoundsError(key)

    # Absolute (ascending) navigation clipped to the window

    def _abs_lowest(self) -> Node | None:
        if self._from_start:
            node = self._m._first_node()
        elif self._lo_inclusive:
            node = self._m._ceiling_node(self._lo)
        else:
            node = self._m._higher_node(self._lo)
        return None if node is None or self._too_high(node.key) else node

    def _abs_highest(self) -> Node | None:
        if self._to_end:
            node = self._m._last_node()
        elif self._hi_inclusive:
            node = self._m._floor_node(self._hi)
        else:
            node = self._m._lower_node(self._hi)
        return None if node is None or self._too_low(node.key) else node

    def _abs_ceiling(self, key: Any) -> Node | None:
        if self._too_low(key):
            return self._abs_lowest()
        node = self._m._ceiling_node(key)
        return None if node is None or self._too_high(node.key) else node

    def _abs_higher(self, key: Any) -> Node | None:
        if self._too_low(key):
            return self._abs_lowest()
        node = self._m._higher_node(key)
        return None if node is None or self._too_high(node.key) else node

    def _abs_floor(self, key: Any) -> Node | None:
        if self._too_high(key):
            return self._abs_highest()
        node = self._m._floor_node(key)
        return None if node is None or self._too_low(node.key) else node

    def _abs_lower(self, key: Any) -> Node | None:
        if self._too_high(key):
            return self._abs_highest()
        node = self._m._lower_node(key)
        return None if node is None or self._too_low(node.key) else node

    def _abs_high_fence(self) -> Node | None:
        """First node past the upper bound, None if unbounded."""
        if self._to_end:
            return None
        if self._hi_inclusive:
            return self._m._higher_node(self._hi)
        return self._m._ceiling_node(self._hi)

    def _abs_low_fence(self) -> Node | None:
        """First node before the lower bound, None if unbounded."""
        if self._from_start:
            return None
        if self._lo_inclusive:
            return self._m._lower_node(self._lo)
        return self._m._floor_node(self._lo)

    # NavigableMap hooks, relative to the view's direction

    def _find_node(self, key: Any) -> Node | None:
        if not self._in_range(key):
            return None
        return self._m._find_node(key)

    def _first_node(self) -> Node | None:
        return self._abs_highest() if self._descending else self._abs_lowest()

    def _last_node(self) -> Node | None:
        return self._abs_lowest() if self._descending else self._abs_highest()

    def _ceiling_node(self, key: Any) -> Node | None:
        return self._abs_floor(key) if self._descending else self._abs_ceiling(key)

    def _floor_node(self, key: Any) -> Node | None:
        return self._abs_ceiling(key) if self._descending else self._abs_floor(key)

    def _higher_node(self, key: Any) -> Node | None:
        return self._abs_lower(key) if self._descending else self._abs_higher(key)

    def _lower_node(self, key: Any) -> Node | None:
        return self._abs_higher(key) if self._descending else self._abs_lower(key)

    def _delete_node(self, node: Node) -> None:
        self._m._delete_node(node)

    def _entry_iterator(
        self,
        project: Callable[[Node], Any] = project_item,
        reverse: bool = False,
        asynchronous: bool = False,
    ) -> TreeIterator:
        cls = AsyncTreeIterator if asynchronous else TreeIterator
        if self._descending == reverse:
            first, fence = self._abs_lowest(), self._abs_high_fence()
            descending = False
        else:
            first, fence = self._abs_highest(), self._abs_low_fence()
            descending = True
        fence_key = UNBOUNDED if fence is None else fence.key
        return cls(self._m, first, fence_key, descending=descending, project=project)

    # SortedContainer

    def put(self, key: Any, value: Any) -> Any | None:
        self._check_in_range(key)
        return self._m.put(key, value)

    def get(self, key: Any, default: Any = None) -> Any:
        if not self._in_range(key):
            return default
        return self._m.get(key, default)

    def delete(self, key: Any) -> Any | None:
        self._check_in_range(key)
        return self._m.delete(key)

    def has(self, key: Any) -> bool:
        return self._in_range(key) and self._m.has(key)

    def size(self) -> int:
        if self._from_start and self._to_end:
            return self._m.size()

        # Counting is linear, so reuse the count until the tree changes shape
        mod_count = self._m.modification_count
        if self._cached_size < 0 or self._size_mod_count != mod_count:
            self._cached_size = sum(1 for _ in self._entry_iterator(project_key))
            self._size_mod_count = mod_count
        return self._cached_size

    def clear(self) -> None:
        """Remove every entry inside the window from the backing map."""
        it = self._entry_iterator(project_key)
        for _ in it:
            it.remove()

    def __getitem__(self, key: Any) -> Any:
        self._check_in_range(key)
        return super().__getitem__(key)

    def __delitem__(self, key: Any) -> None:
        self._check_in_range(key)
        super().__delitem__(key)

    def __iter__(self) -> TreeIterator:
        return self._entry_iterator(project_key)

    def iterator(self, start: Any = None, end: Any = None) -> Iterator[tuple[Any, Any]]:
        return self._narrow(start, end)._entry_iterator()

    def __aiter__(self) -> AsyncIterator[Any]:
        return self._entry_iterator(project_key, asynchronous=True)

    def async_iterator(
        self, start: Any = None, end: Any = None
    ) -> AsyncIterator[tuple[Any, Any]]:
        return self._narrow(start, end)._entry_iterator(asynchronous=True)

    # Nested views

    def sub_map(
        self,
        from_key: Any,
        to_key: Any,
        from_inclusive: bool = True,
        to_inclusive: bool = False,
    ) -> "SubMap":
        if not self._in_range_inclusive(from_key, from_inclusive):
            raise BoundsError(from_key, "from_key out of range")
        if not self._in_range_inclusive(to_key, to_inclusive):
            raise BoundsError(to_key, "to_key out of range")
        if self._descending:
            return SubMap(
                self._m, False, to_key, to_inclusive, False, from_key, from_inclusive, True
            )
        return SubMap(self._m, False, from_key, from_inclusive, False, to_key, to_inclusive)

    def head_map(self, to_key: Any, inclusive: bool = False) -> "SubMap":
        if not self._in_range_inclusive(to_key, inclusive):
            raise BoundsError(to_key, "to_key out of range")
        if self._descending:
            return SubMap(
                self._m, False, to_key, inclusive,
                self._to_end, self._hi, self._hi_inclusive, True,
            )
        return SubMap(
            self._m, self._from_start, self._lo, self._lo_inclusive,
            False, to_key, inclusive,
        )

    def tail_map(self, from_key: Any, inclusive: bool = True) -> "SubMap":
        if not self._in_range_inclusive(from_key, inclusive):
            raise BoundsError(from_key, "from_key out of range")
        if self._descending:
            return SubMap(
                self._m, self._from_start, self._lo, self._lo_inclusive,
                False, from_key, inclusive, True,
            )
        return SubMap(
            self._m, False, from_key, inclusive,
            self._to_end, self._hi, self._hi_inclusive,
        )

    def descending_map(self) -> "SubMap":
        return SubMap(
            self._m,
            self._from_start, self._lo, self._lo_inclusive,
            self._to_end, self._hi, self._hi_inclusive,
            not self._descending,
        )

    def copy(self) -> "TreeMap":
        """Materialize the window into a new TreeMap with the view's ordering."""
        from treemap.navigable.tree_map import TreeMap

        return TreeMap(self)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {v!r}" for k, v in self._entry_iterator())
        return f"{type(self).__name__}({{{items}}})"
