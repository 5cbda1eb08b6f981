"""
Shared pytest fixtures for the ordered container tests.
"""

import pytest

from treemap import TreeMap, TreeSet
from treemap.models.sortedcontainers import RedBlackTree


@pytest.fixture
def tree():
    """Provide a fresh RedBlackTree engine."""
    return RedBlackTree()


@pytest.fixture
def empty_map():
    """Provide an empty TreeMap with natural ordering."""
    return TreeMap()


@pytest.fixture
def odd_map():
    """Provide a TreeMap over the keys {1, 3, 5, 7, 9}."""
    return TreeMap((k, f"v{k}") for k in (1, 3, 5, 7, 9))


@pytest.fixture
def ten_map():
    """Provide a TreeMap over the keys 1..10."""
    return TreeMap((k, str(k)) for k in range(1, 11))


@pytest.fixture
def odd_set():
    """Provide a TreeSet of {1, 3, 5, 7, 9}."""
    return TreeSet([9, 1, 5, 3, 7])
