"""Point: one visited grid cell of a curve."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    """Integer cell coordinate plus its traversal index and discontinuity score."""

    x: int
    y: int
    index: int = 0
    discontinuity: float = 0.0

    @property
    def xy(self) -> tuple[int, int]:
        return (self.x, self.y)

    def raster_key(self) -> tuple[int, int]:
        """Row-major ordering key: by y, then x."""
        return (self.y, self.x)

    def manhattan(self, other: Point) -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)
