"""
Ordering policy shared by every lookup, insert and delete path.
"""

from collections.abc import Callable, Sequence
from typing import Any

from treemap.models.exceptions import NullKeyError, OrderingError, TreeMapError

Comparator = Callable[[Any, Any], int]


class Ordering:
    """
    Strict total order over keys.

    Wraps one of:
    - an external comparator ``(a, b) -> int`` (<0, 0, >0)
    - a sort-key function, compared with natural ordering
    - the keys' natural ordering (``<``)

    The choice is resolved once into ``compare`` so the tree never branches
    on which policy is in use.
    """

    def __init__(
        self,
        comparator: Comparator | None = None,
        *,
        key: Callable[[Any], Any] | None = None,
        allow_none_keys: bool | None = None,
        reverse: bool = False,
    ) -> None:
        """
        Initialize ordering.

        Args:
            comparator: Two-argument comparison function.
            key: Sort-key function (exclusive with comparator).
            allow_none_keys: Whether None keys reach the comparison. Defaults to
                True with a comparator and False otherwise. Natural and
                key-function orderings cannot accept None.
            reverse: Invert the order.
        """
        if comparator is not None and key is not None:
            raise ValueError("comparator and key are mutually exclusive")
        if comparator is not None and not callable(comparator):
            raise ValueError(f"comparator must be callable, got {comparator!r}")
        if key is not None and not callable(key):
            raise ValueError(f"key must be callable, got {key!r}")

        if allow_none_keys is None:
            allow_none_keys = comparator is not None
        elif allow_none_keys and comparator is None:
            raise ValueError("None keys require an external comparator")

        self._comparator = comparator
        self._key = key
        self._allow_none_keys = allow_none_keys
        self._reverse = reverse
        self.compare: Comparator = self._resolve()

    @property
    def comparator(self) -> Comparator | None:
        return self._comparator

    @property
    def key(self) -> Callable[[Any], Any] | None:
        return self._key

    @property
    def allow_none_keys(self) -> bool:
        return self._allow_none_keys

    @property
    def is_reversed(self) -> bool:
        return self._reverse

    def reversed(self) -> "Ordering":
        """Return the same ordering with the direction inverted."""
        return Ordering(
            self._comparator,
            key=self._key,
            allow_none_keys=self._allow_none_keys if self._comparator is not None else None,
            reverse=not self._reverse,
        )

    def check(self, key: Any) -> None:
        """Validate a single key by comparing it with itself."""
        self.compare(key, key)

    def check_sorted(self, keys: Sequence[Any]) -> None:
        """
        Verify keys are strictly increasing under this ordering.

        Raises:
            ValueError: At the first pair out of order or equal.
        """
        if keys:
            self.check(keys[0])
        for i in range(1, len(keys)):
            if self.compare(keys[i - 1], keys[i]) >= 0:
                raise ValueError(
                    f"keys are not strictly increasing at position {i}: "
                    f"{keys[i - 1]!r} then {keys[i]!r}"
                )

    def _resolve(self) -> Comparator:
        """Build the single compare callable for this policy."""
        if self._comparator is not None:
            compare = _external(self._comparator, self._allow_none_keys)
        elif self._key is not None:
            compare = _keyed(self._key)
        else:
            compare = _natural

        return _reversed(compare) if self._reverse else compare

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ordering):
            return NotImplemented
        return (
            self._comparator is other._comparator
            and self._key is other._key
            and self._allow_none_keys == other._allow_none_keys
            and self._reverse == other._reverse
        )

    def __hash__(self) -> int:
        return hash(
            (id(self._comparator), id(self._key), self._allow_none_keys, self._reverse)
        )

    def __repr__(self) -> str:
        if self._comparator is not None:
            kind = f"comparator={self._comparator!r}"
        elif self._key is not None:
            kind = f"key={self._key!r}"
        else:
            kind = "natural"
        return f"Ordering({kind}, reverse={self._reverse})"


def _natural(a: Any, b: Any) -> int:
    if a is None or b is None:
        raise NullKeyError()
    try:
        if a < b:
            return -1
        if b < a:
            return 1
    except TypeError as e:
        raise OrderingError(a, b) from e
    return 0


def _reversed(forward: Comparator) -> Comparator:
    def compare(a: Any, b: Any) -> int:
        return forward(b, a)

    return compare


def _keyed(key: Callable[[Any], Any]) -> Comparator:
    def compare(a: Any, b: Any) -> int:
        if a is None or b is None:
            raise NullKeyError()
        try:
            ka, kb = key(a), key(b)
        except Exception as e:
            raise OrderingError(a, b) from e
        return _natural(ka, kb)

    return compare


def _external(comparator: Comparator, allow_none_keys: bool) -> Comparator:
    def compare(a: Any, b: Any) -> int:
        if a is None or b is None:
            if not allow_none_keys:
                raise NullKeyError()
            try:
                return comparator(a, b)
            except TreeMapError:
                raise
            except Exception as e:
                # Comparator refused the None key
                raise NullKeyError() from e
        try:
            return comparator(a, b)
        except TreeMapError:
            raise
        except Exception as e:
            raise OrderingError(a, b) from e

    return compare
