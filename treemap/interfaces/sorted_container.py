"""
SortedContainer abstract base class for sorted key-value data structures.
"""

from abc import abstractmethod
from typing import Any

from treemap.interfaces.range_iterable import RangeIterable


class SortedContainer(RangeIterable):
    """
    Abstract base class for sorted key-value containers.

    Provides O(log N) operations for put, get, and delete.
    Inherits range iteration capabilities from RangeIterable.

    Implementations:
    - RedBlackTree: the balanced tree engine
    - TreeMap / SubMap: the navigable map surface and its live views
    """

    @abstractmethod
    def put(self, key: Any, value: Any) -> Any | None:
        """
        Insert or update a key-value pair.

        Args:
            key: The key to insert/update.
            value: The value to associate with the key.

        Returns:
            The previous value if the key existed, None otherwise.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def get(self, key: Any, default: Any = None) -> Any:
        """
        Retrieve the value for a given key.

        Args:
            key: The key to look up.
            default: Returned when the key is absent.

        Returns:
            The value if found, default otherwise.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def delete(self, key: Any) -> Any | None:
        """
        Remove a key-value pair.

        Args:
            key: The key to remove.

        Returns:
            The removed value, or None if the key was absent.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def has(self, key: Any) -> bool:
        """
        Check if a key exists.

        Args:
            key: The key to check.

        Returns:
            True if the key exists, False otherwise.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def size(self) -> int:
        """
        Return the number of key-value pairs.

        Returns:
            The count of entries in the container.
        """
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove every entry."""
        pass

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, key: object) -> bool:
        return self.has(key)
