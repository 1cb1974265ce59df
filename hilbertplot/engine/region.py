"""Region: quasi-square partitioning and the primitive base-case curves.

A region of height n and width m splits into halves n1 + n2 and m1 + m2.
The halves are swapped when the split would leave an odd extent on the
side the orientation joins through: n1/m1 for A and B, n2/m2 for C and D.
Without that correction the composed families stop being continuous.

Children come back in traversal order, so the starting index of each child
in the shared output buffer is the running sum of the areas before it.
"""

from __future__ import annotations

import enum
import numbers
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from hilbertplot.engine.pool import ThreadPool
from hilbertplot.errors import InvalidOrientationError


class Orientation(enum.Enum):
    A = "A"
    B = "B"
    C = "C"
    D = "D"

    @classmethod
    def parse(cls, value: Orientation | str | int) -> Orientation:
        """Accept an Orientation, its letter (any case) or its ordinal 0-3."""
        if isinstance(value, cls):
            return value
        if isinstance(value, numbers.Integral) and not isinstance(value, bool) and 0 <= value < 4:
            return list(cls)[int(value)]
        if isinstance(value, str) and value.upper() in cls.__members__:
            return cls[value.upper()]
        raise InvalidOrientationError(f"Invalid orientation: {value!r}")

    @property
    def mirrors_x(self) -> bool:
        """A and C mirror about the vertical centre line, B and D about the horizontal one."""
        return self in (Orientation.A, Orientation.C)


_A, _B, _C, _D = Orientation.A, Orientation.B, Orientation.C, Orientation.D

# Child layout per orientation in traversal order: (row half, column half, orientation).
# Row half 1 is the n1 rows at dy=0, row half 2 the n2 rows at dy=n1.
# Column half 1 is the m1 columns at dx=0, column half 2 the m2 columns at dx=m1.
_CHILDREN: dict[Orientation, tuple[tuple[int, int, Orientation], ...]] = {
    _A: ((1, 1, _B), (2, 1, _A), (2, 2, _A), (1, 2, _D)),
    _B: ((1, 1, _A), (1, 2, _B), (2, 2, _B), (2, 1, _C)),
    _C: ((2, 2, _D), (1, 2, _C), (1, 1, _C), (2, 1, _B)),
    _D: ((2, 2, _C), (2, 1, _D), (1, 1, _D), (1, 2, _A)),
}

_AB = (_A, _B)
_CD = (_C, _D)

# Base-case cell offsets keyed by (height, width), in visiting order.
_PRIMITIVES: dict[tuple[int, int], dict[Orientation, NDArray[np.int64]]] = {}


def _primitive(shape: tuple[int, int], orientations: tuple[Orientation, ...], offsets) -> None:
    table = _PRIMITIVES.setdefault(shape, {})
    for o in orientations:
        table[o] = np.asarray(offsets, dtype=np.int64).reshape(-1, 2)


_primitive((1, 1), _AB + _CD, [(0, 0)])
_primitive((1, 2), _AB, [(0, 0), (1, 0)])
_primitive((1, 2), _CD, [(1, 0), (0, 0)])
_primitive((2, 1), _AB, [(0, 0), (0, 1)])
_primitive((2, 1), _CD, [(0, 1), (0, 0)])
_primitive((2, 2), (_A,), [(0, 0), (0, 1), (1, 1), (1, 0)])
_primitive((2, 2), (_B,), [(0, 0), (1, 0), (1, 1), (0, 1)])
_primitive((2, 2), (_C,), [(1, 1), (1, 0), (0, 0), (0, 1)])
_primitive((2, 2), (_D,), [(1, 1), (0, 1), (0, 0), (1, 0)])


@dataclass(frozen=True)
class Region:
    """Rectangle of ``height`` rows and ``width`` columns anchored at (x, y)."""

    height: int
    width: int
    x: int = 0
    y: int = 0
    orientation: Orientation = Orientation.A

    @property
    def area(self) -> int:
        return self.height * self.width

    @property
    def is_primitive(self) -> bool:
        return self.height <= 2 and self.width <= 2

    def halves(self) -> tuple[int, int, int, int]:
        """(n1, n2, m1, m2) after the parity correction."""
        n1 = self.height // 2
        n2 = self.height - n1
        m1 = self.width // 2
        m2 = self.width - m1
        if self.orientation in _AB:
            if n1 % 2:
                n1, n2 = n2, n1
            if m1 % 2:
                m1, m2 = m2, m1
        elif self.orientation in _CD:
            if n2 % 2:
                n1, n2 = n2, n1
            if m2 % 2:
                m1, m2 = m2, m1
        else:
            raise InvalidOrientationError(f"Invalid orientation: {self.orientation!r}")
        return n1, n2, m1, m2

    def split(self) -> list[Region]:
        """The four child regions in traversal order."""
        n1, n2, m1, m2 = self.halves()
        rows = {1: (n1, 0), 2: (n2, n1)}
        cols = {1: (m1, 0), 2: (m2, m1)}
        children = []
        for row_half, col_half, orientation in _CHILDREN[self.orientation]:
            height, dy = rows[row_half]
            width, dx = cols[col_half]
            children.append(Region(height, width, self.x + dx, self.y + dy, orientation))
        return children

    def primitive_points(self) -> NDArray[np.int64]:
        """Absolute cell coordinates of a base-case region, in visiting order."""
        try:
            offsets = _PRIMITIVES[(self.height, self.width)][self.orientation]
        except KeyError:
            raise ValueError(f"{self.height}x{self.width} is not a primitive region") from None
        return offsets + np.array([self.x, self.y], dtype=np.int64)


def build_region(
    region: Region,
    buf: NDArray[np.int64],
    index: int = 0,
    pool: ThreadPool | None = None,
) -> None:
    """Write the primitive-family curve of ``region`` into ``buf[index:]``.

    With a pool, the first two children of every split are submitted as
    tasks and the other two run on the calling thread. The caller drains
    the pool before reading ``buf``.
    """
    if region.height == 0 or region.width == 0:
        return
    if region.is_primitive:
        points = region.primitive_points()
        buf[index:index + len(points)] = points
        return

    for i, child in enumerate(region.split()):
        if pool is not None and i < 2:
            pool.submit(build_region, child, buf, index, pool)
        else:
            build_region(child, buf, index, pool)
        index += child.area
