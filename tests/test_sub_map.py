"""
Tests for SubMap range and descending views.
"""

import pytest

from treemap import BoundsError, ConcurrentStructuralChangeError, EmptyContainerError, TreeMap


class TestSubMapViews:
    """Tests for ascending range views."""

    def test_view_is_live(self):
        """Test backing changes inside the window show up in the view."""
        tree_map = TreeMap((k, str(k)) for k in range(1, 11) if k != 4)
        view = tree_map.sub_map(3, 10)
        assert list(view) == [3, 5, 6, 7, 8, 9]

        tree_map.put(5, "five")
        tree_map.put(4, "four")

        assert list(view) == [3, 4, 5, 6, 7, 8, 9]
        assert view[5] == "five"
        assert len(view) == 7

    def test_inclusive_flags(self, ten_map):
        """Test every combination of bound inclusiveness."""
        assert list(ten_map.sub_map(3, 7)) == [3, 4, 5, 6]
        assert list(ten_map.sub_map(3, 7, from_inclusive=False, to_inclusive=True)) == [
            4, 5, 6, 7,
        ]
        assert list(ten_map.head_map(4)) == [1, 2, 3]
        assert list(ten_map.head_map(4, inclusive=True)) == [1, 2, 3, 4]
        assert list(ten_map.tail_map(8)) == [8, 9, 10]
        assert list(ten_map.tail_map(8, inclusive=False)) == [9, 10]

    def test_equal_bounds(self, ten_map):
        """Test a window of a single point."""
        assert list(ten_map.sub_map(5, 5)) == []
        assert list(ten_map.sub_map(5, 5, to_inclusive=True)) == [5]

    def test_inverted_bounds_rejected(self, ten_map):
        """Test from_key past to_key is rejected."""
        with pytest.raises(BoundsError):
            ten_map.sub_map(5, 3)

    def test_navigation_is_clipped(self, ten_map):
        """Test closest-match lookups never leave the window."""
        view = ten_map.sub_map(3, 8)

        assert view.first_key() == 3
        assert view.last_key() == 7
        assert view.floor_key(100) == 7
        assert view.ceiling_key(0) == 3
        assert view.ceiling_key(8) is None
        assert view.floor_key(1) is None
        assert view.higher_key(7) is None
        assert view.lower_key(3) is None
        assert view.lower_entry(5) == (4, "4")

    def test_empty_window(self, ten_map):
        """Test first/last on a window with no keys."""
        view = ten_map.sub_map(20, 30)

        assert len(view) == 0
        with pytest.raises(EmptyContainerError):
            view.first_key()

    def test_mutation_writes_through(self, ten_map):
        """Test puts and deletes through a view reach the backing map."""
        view = ten_map.sub_map(3, 8)

        assert view.put(4, "four") == "4"
        assert view.delete(5) == "5"
        assert view.poll_first_entry() == (3, "3")

        assert ten_map[4] == "four"
        assert 5 not in ten_map
        assert 3 not in ten_map
        ten_map.check_invariants()

    def test_out_of_window_writes_rejected(self, ten_map):
        """Test puts and deletes outside the window."""
        view = ten_map.sub_map(3, 8)

        with pytest.raises(BoundsError):
            view.put(8, "x")
        with pytest.raises(BoundsError):
            view.put(2, "x")
        with pytest.raises(BoundsError):
            view.delete(9)
        with pytest.raises(BoundsError):
            del view[9]

        assert len(ten_map) == 10

    def test_out_of_window_reads(self, ten_map):
        """Test lookups outside the window."""
        view = ten_map.sub_map(3, 8)

        assert view.get(2) is None
        assert view.get(2, "x") == "x"
        assert not view.has(2)
        assert 9 not in view
        with pytest.raises(BoundsError):
            view[2]

    def test_missing_key_inside_window(self, ten_map):
        """Test an absent key inside the window is a plain KeyError."""
        ten_map.delete(4)
        view = ten_map.sub_map(3, 8)

        with pytest.raises(KeyError):
            view[4]

    def test_size_tracks_changes(self, ten_map):
        """Test the window size follows structural changes."""
        view = ten_map.sub_map(3, 8)
        assert len(view) == 5

        ten_map.delete(4)
        assert len(view) == 4

        ten_map.put(100, "x")
        ten_map.put(5, "again")
        assert len(view) == 4

    def test_unbounded_size(self, ten_map):
        """Test an unbounded view reports the backing size."""
        assert len(ten_map.descending_map()) == 10

    def test_clear(self, ten_map):
        """Test clear removes only the keys inside the window."""
        view = ten_map.sub_map(3, 8)
        view.clear()

        assert list(ten_map) == [1, 2, 8, 9, 10]
        assert len(view) == 0
        ten_map.check_invariants()

    def test_range_iterator(self, ten_map):
        """Test iterator(start, end) inside a view."""
        view = ten_map.sub_map(3, 8)

        assert list(view.iterator(4, 6)) == [(4, "4"), (5, "5")]
        with pytest.raises(BoundsError):
            view.iterator(1, 6)

    async def test_async_iteration(self, ten_map):
        """Test async iteration over a view."""
        view = ten_map.sub_map(3, 8)

        assert [k async for k in view] == [3, 4, 5, 6, 7]
        assert [item async for item in view.async_iterator(4, 6)] == [(4, "4"), (5, "5")]

    def test_fail_fast(self, ten_map):
        """Test view iterators see changes made through the backing map."""
        it = iter(ten_map.sub_map(3, 8))
        next(it)

        ten_map.put(0, "0")

        with pytest.raises(ConcurrentStructuralChangeError):
            next(it)

    def test_copy(self, ten_map):
        """Test a view can be materialized into an independent map."""
        copy = ten_map.sub_map(3, 6).copy()
        copy.put(100, "x")

        assert list(copy) == [3, 4, 5, 100]
        assert 100 not in ten_map

    def test_repr(self, ten_map):
        """Test repr lists the window's entries."""
        assert repr(ten_map.sub_map(3, 5)) == "SubMap({3: '3', 4: '4'})"


class TestNestedViews:
    """Tests for views taken from other views."""

    def test_nested_windows(self, ten_map):
        """Test a view of a view narrows the window."""
        view = ten_map.sub_map(2, 9)

        assert list(view.sub_map(4, 6)) == [4, 5]
        assert list(view.head_map(5)) == [2, 3, 4]
        assert list(view.tail_map(5)) == [5, 6, 7, 8]

    def test_nested_bounds_must_fit(self, ten_map):
        """Test a nested view cannot widen its parent's window."""
        view = ten_map.sub_map(3, 8)

        with pytest.raises(BoundsError):
            view.sub_map(2, 5)
        with pytest.raises(BoundsError):
            view.head_map(9)
        # The exclusive upper bound itself is not in the window
        with pytest.raises(BoundsError):
            view.tail_map(8)

    def test_nested_edge_bounds(self, ten_map):
        """Test the parent's own bounds are valid exclusive nested bounds."""
        view = ten_map.sub_map(3, 8)

        assert list(view.head_map(8)) == [3, 4, 5, 6, 7]
        assert list(view.tail_map(8, inclusive=False)) == []

    def test_nested_writes_checked(self, ten_map):
        """Test writes are checked against the innermost window."""
        inner = ten_map.sub_map(2, 9).sub_map(4, 6)

        with pytest.raises(BoundsError):
            inner.put(3, "x")
        inner.put(5, "five")

        assert ten_map[5] == "five"


class TestDescendingViews:
    """Tests for descending views and their navigation."""

    def test_order(self, odd_map):
        """Test the view iterates from high to low."""
        view = odd_map.descending_map()

        assert list(view) == [9, 7, 5, 3, 1]
        assert list(view.items())[0] == (9, "v9")
        assert list(reversed(view)) == [1, 3, 5, 7, 9]

    def test_first_and_last_swap(self, odd_map):
        """Test first/last follow the view's direction."""
        view = odd_map.descending_map()

        assert view.first_key() == 9
        assert view.last_key() == 1

    def test_navigation_swaps(self, odd_map):
        """Test floor/ceiling/lower/higher follow the view's direction."""
        view = odd_map.descending_map()

        assert view.floor_key(6) == 7
        assert view.ceiling_key(6) == 5
        assert view.lower_key(5) == 7
        assert view.higher_key(5) == 3
        assert view.higher_key(1) is None

    def test_ordering_is_reversed(self, odd_map):
        """Test the view reports the reversed ordering."""
        view = odd_map.descending_map()

        assert view.ordering.is_reversed
        assert view.ordering.compare(1, 2) > 0
        assert view.is_descending

    def test_sub_views(self, odd_map):
        """Test range views of a descending view use its direction."""
        view = odd_map.descending_map()

        assert list(view.head_map(5)) == [9, 7]
        assert list(view.head_map(5, inclusive=True)) == [9, 7, 5]
        assert list(view.tail_map(5)) == [5, 3, 1]
        assert list(view.sub_map(7, 3)) == [7, 5]
        with pytest.raises(BoundsError):
            view.sub_map(3, 7)

    def test_double_descending(self, odd_map):
        """Test reversing twice restores ascending order."""
        assert list(odd_map.descending_map().descending_map()) == [1, 3, 5, 7, 9]

    def test_descending_of_range(self, odd_map):
        """Test a descending view of a bounded window."""
        view = odd_map.sub_map(3, 9).descending_map()

        assert list(view) == [7, 5, 3]
        assert view.first_key() == 7
        assert len(view) == 3

    def test_poll_removes_from_backing(self, odd_map):
        """Test poll on the descending view takes the highest key."""
        view = odd_map.descending_map()

        assert view.poll_first_entry() == (9, "v9")
        assert view.poll_last_entry() == (1, "v1")
        assert list(odd_map) == [3, 5, 7]

    def test_range_iterator(self, odd_map):
        """Test iterator(start, end) runs in the view's direction."""
        view = odd_map.descending_map()

        assert list(view.iterator(7, 3)) == [(7, "v7"), (5, "v5")]

    def test_clear(self, ten_map):
        """Test clearing a descending window."""
        ten_map.sub_map(3, 8).descending_map().clear()

        assert list(ten_map) == [1, 2, 8, 9, 10]
        ten_map.check_invariants()
