"""
NavigableMap abstract base class for ordered maps and their views.
"""

from abc import abstractmethod
from collections.abc import Callable, MutableMapping
from typing import Any

from treemap.interfaces.sorted_container import SortedContainer
from treemap.models.exceptions import EmptyContainerError
from treemap.models.ordering import Ordering
from treemap.models.sortedcontainers.iterators import (
    TreeIterator,
    project_item,
    project_key,
    project_value,
)
from treemap.models.sortedcontainers.node import Node


class NavigableMap(SortedContainer, MutableMapping):
    """
    Sorted map with navigation relative to its iteration direction.

    Concrete maps supply the node-level hooks; this class derives the
    first/last, poll, floor/ceiling/lower/higher operations and the
    MutableMapping protocol from them. "First" and "lower" always follow the
    map's own direction, so a descending view swaps them automatically.
    """

    @property
    @abstractmethod
    def ordering(self) -> Ordering:
        """Ordering in which this map iterates."""
        pass

    @abstractmethod
    def _find_node(self, key: Any) -> Node | None:
        pass

    @abstractmethod
    def _first_node(self) -> Node | None:
        pass

    @abstractmethod
    def _last_node(self) -> Node | None:
        pass

    @abstractmethod
    def _ceiling_node(self, key: Any) -> Node | None:
        pass

    @abstractmethod
    def _floor_node(self, key: Any) -> Node | None:
        pass

    @abstractmethod
    def _higher_node(self, key: Any) -> Node | None:
        pass

    @abstractmethod
    def _lower_node(self, key: Any) -> Node | None:
        pass

    @abstractmethod
    def _delete_node(self, node: Node) -> None:
        pass

    @abstractmethod
    def _entry_iterator(
        self,
        project: Callable[[Node], Any] = project_item,
        reverse: bool = False,
        asynchronous: bool = False,
    ) -> TreeIterator:
        """Fail-fast iterator over the whole map in its own direction (or reversed)."""
        pass

    @abstractmethod
    def sub_map(
        self,
        from_key: Any,
        to_key: Any,
        from_inclusive: bool = True,
        to_inclusive: bool = False,
    ) -> "NavigableMap":
        """
        Live view of the keys between from_key and to_key.

        Raises:
            BoundsError: If from_key is past to_key, or either bound lies
                outside this map's window.
        """
        pass

    @abstractmethod
    def head_map(self, to_key: Any, inclusive: bool = False) -> "NavigableMap":
        """Live view of the keys before to_key."""
        pass

    @abstractmethod
    def tail_map(self, from_key: Any, inclusive: bool = True) -> "NavigableMap":
        """Live view of the keys from from_key on."""
        pass

    @abstractmethod
    def descending_map(self) -> "NavigableMap":
        """Live view of this map in reverse order."""
        pass

    # Mapping protocol

    def __getitem__(self, key: Any) -> Any:
        node = self._find_node(key)
        if node is None:
            raise KeyError(key)
        return node.value

    def __setitem__(self, key: Any, value: Any) -> None:
        self.put(key, value)

    def __delitem__(self, key: Any) -> None:
        node = self._find_node(key)
        if node is None:
            raise KeyError(key)
        self._delete_node(node)

    def __reversed__(self) -> TreeIterator:
        return self._entry_iterator(project_key, reverse=True)

    def contains_value(self, value: Any) -> bool:
        """Linear scan for a value."""
        for candidate in self._entry_iterator(project_value):
            if candidate == value:
                return True
        return False

    # Navigation

    def first_entry(self) -> tuple[Any, Any]:
        return _entry_or_raise(self._first_node(), "first_entry")

    def last_entry(self) -> tuple[Any, Any]:
        return _entry_or_raise(self._last_node(), "last_entry")

    def first_key(self) -> Any:
        return _entry_or_raise(self._first_node(), "first_key")[0]

    def last_key(self) -> Any:
        return _entry_or_raise(self._last_node(), "last_key")[0]

    def poll_first_entry(self) -> tuple[Any, Any]:
        """Remove and return the first entry."""
        return self._poll(self._first_node(), "poll_first_entry")

    def poll_last_entry(self) -> tuple[Any, Any]:
        """Remove and return the last entry."""
        return self._poll(self._last_node(), "poll_last_entry")

    def _poll(self, node: Node | None, operation: str) -> tuple[Any, Any]:
        entry = _entry_or_raise(node, operation)
        self._delete_node(node)
        return entry

    def floor_entry(self, key: Any) -> tuple[Any, Any] | None:
        """Greatest entry with key <= key, or None."""
        return _entry_or_none(self._floor_node(key))

    def ceiling_entry(self, key: Any) -> tuple[Any, Any] | None:
        """Least entry with key >= key, or None."""
        return _entry_or_none(self._ceiling_node(key))

    def lower_entry(self, key: Any) -> tuple[Any, Any] | None:
        """Greatest entry with key < key, or None."""
        return _entry_or_none(self._lower_node(key))

    def higher_entry(self, key: Any) -> tuple[Any, Any] | None:
        """Least entry with key > key, or None."""
        return _entry_or_none(self._higher_node(key))

    def floor_key(self, key: Any) -> Any | None:
        return _key_or_none(self._floor_node(key))

    def ceiling_key(self, key: Any) -> Any | None:
        return _key_or_none(self._ceiling_node(key))

    def lower_key(self, key: Any) -> Any | None:
        return _key_or_none(self._lower_node(key))

    def higher_key(self, key: Any) -> Any | None:
        return _key_or_none(self._higher_node(key))

    def _narrow(self, start: Any, end: Any) -> "NavigableMap":
        """View restricted to [start, end); None leaves a side open."""
        view = self
        if start is not None:
            view = view.tail_map(start, True)
        if end is not None:
            view = view.head_map(end, False)
        return view


def _entry_or_none(node: Node | None) -> tuple[Any, Any] | None:
    return None if node is None else (node.key, node.value)


def _key_or_none(node: Node | None) -> Any | None:
    return None if node is None else node.key


def _entry_or_raise(node: Node | None, operation: str) -> tuple[Any, Any]:
    if node is None:
        raise EmptyContainerError(operation)
    return (node.key, node.value)
