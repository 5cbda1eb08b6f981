"""
Custom exceptions for the ordered containers.
"""

from typing import Any


class TreeMapError(Exception):
    """Base class for every error raised by the ordered containers."""


class OrderingError(TreeMapError, TypeError):
    """
    Raised when two keys cannot be compared.

    Covers keys without a natural ordering as well as comparators or key
    functions that raise. The original exception is chained as the cause.
    """

    def __init__(self, left: Any, right: Any):
        """
        Initialize ordering error.

        Args:
            left: First key of the failed comparison.
            right: Second key of the failed comparison.
        """
        self.left = left
        self.right = right
        super().__init__(f"Cannot compare keys {left!r} and {right!r}")


class NullKeyError(TreeMapError, TypeError):
    """Raised when a None key is used under an ordering that rejects it."""

    def __init__(self) -> None:
        super().__init__("None keys are not permitted by this ordering")


class BoundsError(TreeMapError, ValueError):
    """
    Raised when a key falls outside the window of a sub-map view.

    Also raised when a view is requested with inverted bounds.
    """

    def __init__(self, key: Any, reason: str = "key out of range"):
        self.key = key
        super().__init__(f"{reason}: {key!r}")


class ConcurrentStructuralChangeError(TreeMapError, RuntimeError):
    """
    Raised by an iterator when the tree was structurally modified after the
    iterator was created.

    Detection is best-effort and meant for finding bugs only.
    """

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Tree changed during iteration: "
            f"expected modification count {expected}, found {actual}"
        )


class EmptyContainerError(TreeMapError, LookupError):
    """Raised by first/last/poll operations on an empty container."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"{operation}() called on an empty container")


class InvariantViolationError(TreeMapError):
    """Raised by check_invariants() when the tree is not a valid red-black tree."""
