"""Exception types raised by the curve engine and the plot layer.

Each class also derives from the closest built-in so callers catching
``IndexError`` or ``ValueError`` keep working.
"""

from __future__ import annotations


class HilbertPlotError(Exception):
    """Base class for every error raised by hilbertplot."""


class InvalidOrientationError(HilbertPlotError, ValueError):
    """An orientation outside {A, B, C, D} reached the engine."""


class OutOfRangeError(HilbertPlotError, IndexError):
    """Index or (x, y) access outside the plot or curve bounds."""


class AllocationError(HilbertPlotError, MemoryError):
    """The output buffer for a curve or plot could not be allocated."""


class SizeMismatchError(HilbertPlotError, ValueError):
    """Replacement data does not have the length of the existing data."""


class DegenerateOperationError(HilbertPlotError, ValueError):
    """The operation needs non-empty data."""
