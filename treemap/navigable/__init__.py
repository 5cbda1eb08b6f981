"""
Navigable map and set surfaces built on the Red-Black Tree.
"""

from treemap.navigable.sub_map import SubMap
from treemap.navigable.tree_map import TreeMap
from treemap.navigable.tree_set import TreeSet

__all__ = ["TreeMap", "SubMap", "TreeSet"]
