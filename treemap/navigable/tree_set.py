"""
TreeSet - Ordered set stored as the keys of a navigable map.
"""

from collections.abc import AsyncIterator, Callable, Iterable, Iterator, MutableSet
from typing import Any

from treemap.interfaces.navigable_map import NavigableMap
from treemap.interfaces.range_iterable import RangeIterable
from treemap.models.ordering import Comparator, Ordering
from treemap.models.sortedcontainers.iterators import TreeIterator, project_key
from treemap.navigable.tree_map import TreeMap

# Value stored under every element in the backing map
_PRESENT = object()


class TreeSet(RangeIterable, MutableSet):
    """
    Ordered set backed by a NavigableMap whose values are a shared sentinel.

    All operations are thin projections of the map's operations onto keys,
    so views (sub_set, head_set, tail_set, descending_set) are live and
    bounds-checked exactly like the map views they wrap.
    """

    def __init__(
        self,
        iterable: Iterable[Any] | None = None,
        comparator: Comparator | None = None,
        *,
        key: Callable[[Any], Any] | None = None,
        allow_none_keys: bool | None = None,
        ordering: Ordering | None = None,
    ) -> None:
        """
        Initialize the set.

        Args:
            iterable: Initial elements. Another TreeSet lends its ordering
                (unless one is given here) and is copied in linear time.
            comparator: Two-argument comparison function.
            key: Sort-key function.
            allow_none_keys: None-key policy, see Ordering.
            ordering: A ready Ordering (exclusive with the three above).
        """
        explicit = comparator is not None or key is not None or allow_none_keys is not None
        if ordering is None and not explicit and isinstance(iterable, TreeSet):
            ordering = iterable.ordering

        self._m: NavigableMap = TreeMap(
            comparator=comparator, key=key, allow_none_keys=allow_none_keys, ordering=ordering
        )
        if iterable is not None:
            self.add_all(iterable)

    @classmethod
    def _from_map(cls, backing: NavigableMap) -> "TreeSet":
        """Wrap an existing map (usually a view) without copying."""
        tree_set = cls.__new__(cls)
        tree_set._m = backing
        return tree_set

    @classmethod
    def from_sorted(
        cls,
        elements: Iterable[Any],
        comparator: Comparator | None = None,
        *,
        key: Callable[[Any], Any] | None = None,
        allow_none_keys: bool | None = None,
        ordering: Ordering | None = None,
    ) -> "TreeSet":
        """
        Build a set from elements already in ascending order, in linear time.

        Raises:
            ValueError: If the elements are not strictly increasing.
        """
        tree_set = cls(
            comparator=comparator, key=key, allow_none_keys=allow_none_keys, ordering=ordering
        )
        elements = list(elements)
        tree_set.ordering.check_sorted(elements)
        tree_set._m._build_from_sorted(len(elements), elements, _PRESENT)
        return tree_set

    def _from_iterable(self, iterable: Iterable[Any]) -> "TreeSet":
        # Set algebra results keep this set's ordering
        return TreeSet(iterable, ordering=self.ordering)

    @property
    def ordering(self) -> Ordering:
        return self._m.ordering

    def add(self, element: Any) -> bool:
        """Add element. Returns True if it was not already present."""
        return self._m.put(element, _PRESENT) is None

    def add_all(self, elements: Iterable[Any]) -> bool:
        """
        Add every element. Returns True if the set changed.

        Uses the linear-time bulk build when this set is empty and elements is
        a non-empty TreeSet with the same ordering.
        """
        if (
            isinstance(elements, TreeSet)
            and isinstance(self._m, TreeMap)
            and len(self._m) == 0
            and elements.ordering == self.ordering
        ):
            size = len(elements)
            if size > 0:
                self._m._build_from_sorted(size, iter(elements), _PRESENT)
                return True

        changed = False
        for element in elements:
            if self.add(element):
                changed = True
        return changed

    def discard(self, element: Any) -> bool:
        """Remove element if present. Returns True if it was removed."""
        return self._m.delete(element) is not None

    def clear(self) -> None:
        self._m.clear()

    def copy(self) -> "TreeSet":
        """Shallow copy with the same ordering, built in linear time."""
        return TreeSet(self)

    def __contains__(self, element: object) -> bool:
        return self._m.has(element)

    def __len__(self) -> int:
        return len(self._m)

    def __iter__(self) -> TreeIterator:
        return self._m._entry_iterator(project_key)

    def __reversed__(self) -> TreeIterator:
        return self._m._entry_iterator(project_key, reverse=True)

    def iterator(self, start: Any = None, end: Any = None) -> Iterator[Any]:
        return self._m._narrow(start, end)._entry_iterator(project_key)

    def __aiter__(self) -> AsyncIterator[Any]:
        return self._m._entry_iterator(project_key, asynchronous=True)

    def async_iterator(self, start: Any = None, end: Any = None) -> AsyncIterator[Any]:
        return self._m._narrow(start, end)._entry_iterator(project_key, asynchronous=True)

    # Navigation

    def first(self) -> Any:
        return self._m.first_key()

    def last(self) -> Any:
        return self._m.last_key()

    def poll_first(self) -> Any:
        """Remove and return the first element."""
        return self._m.poll_first_entry()[0]

    def poll_last(self) -> Any:
        """Remove and return the last element."""
        return self._m.poll_last_entry()[0]

    def floor(self, element: Any) -> Any | None:
        return self._m.floor_key(element)

    def ceiling(self, element: Any) -> Any | None:
        return self._m.ceiling_key(element)

    def lower(self, element: Any) -> Any | None:
        return self._m.lower_key(element)

    def higher(self, element: Any) -> Any | None:
        return self._m.higher_key(element)

    # Views

    def sub_set(
        self,
        from_element: Any,
        to_element: Any,
        from_inclusive: bool = True,
        to_inclusive: bool = False,
    ) -> "TreeSet":
        return TreeSet._from_map(
            self._m.sub_map(from_element, to_element, from_inclusive, to_inclusive)
        )

    def head_set(self, to_element: Any, inclusive: bool = False) -> "TreeSet":
        return TreeSet._from_map(self._m.head_map(to_element, inclusive))

    def tail_set(self, from_element: Any, inclusive: bool = True) -> "TreeSet":
        return TreeSet._from_map(self._m.tail_map(from_element, inclusive))

    def descending_set(self) -> "TreeSet":
        return TreeSet._from_map(self._m.descending_map())

    def __repr__(self) -> str:
        elements = ", ".join(repr(e) for e in self)
        return f"{type(self).__name__}([{elements}])"
