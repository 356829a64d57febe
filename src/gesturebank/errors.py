"""Error types raised by gesturebank operations.

Every error is terminal for the current unit of work. Nothing is retried,
and samples committed before the failure stay in the store.
"""


class GestureBankError(Exception):
    """Base class for all gesturebank errors."""


class ValidationError(GestureBankError, ValueError):
    """Invalid caller input (empty label, non-positive count, bad frame shape).

    Raised before any state change or store mutation.
    """


class StorageError(GestureBankError):
    """Persistence layer failure on append, read, clear or archive write."""


class EmptyDatasetError(GestureBankError):
    """Export requested while the store holds no samples."""


__all__ = [
    "GestureBankError",
    "ValidationError",
    "StorageError",
    "EmptyDatasetError",
]
