"""
Sorted container implementations for the ordered containers.
"""

from treemap.models.sortedcontainers.red_black_tree import RedBlackTree

__all__ = ["RedBlackTree"]
