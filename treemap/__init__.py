"""
Ordered map and set backed by a Red-Black Tree.

This package provides:
- TreeMap(items, comparator) - sorted map, O(log N) put/get/delete
- Navigation - first/last/poll, floor/ceiling/lower/higher
- Views - sub_map/head_map/tail_map/descending_map, live and bounds-checked
- TreeSet - sorted set stored as the keys of a TreeMap
- from_sorted(items) - linear-time construction from sorted input
- Fail-fast iterators that detect structural change during iteration
"""

from treemap.models.exceptions import (
    BoundsError,
    ConcurrentStructuralChangeError,
    EmptyContainerError,
    InvariantViolationError,
    NullKeyError,
    OrderingError,
    TreeMapError,
)
from treemap.models.ordering import Ordering
from treemap.navigable import SubMap, TreeMap, TreeSet

__all__ = [
    "TreeMap",
    "TreeSet",
    "SubMap",
    "Ordering",
    "TreeMapError",
    "OrderingError",
    "NullKeyError",
    "BoundsError",
    "ConcurrentStructuralChangeError",
    "EmptyContainerError",
    "InvariantViolationError",
]
