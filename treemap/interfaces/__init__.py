"""
Abstract base classes and protocols for the ordered containers.
"""

from treemap.interfaces.range_iterable import RangeIterable
from treemap.interfaces.sorted_container import SortedContainer
from treemap.interfaces.navigable_map import NavigableMap

__all__ = ["RangeIterable", "SortedContainer", "NavigableMap"]
