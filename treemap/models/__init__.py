"""
Data models for the ordered containers.
"""

from treemap.models.ordering import Ordering
from treemap.models.sortedcontainers import RedBlackTree

__all__ = [
    "Ordering",
    "RedBlackTree",
]
