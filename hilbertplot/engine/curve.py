"""Curve construction, the reverse/mirror transforms and the discontinuity map.

Points are held as an (N, 2) int64 array of (x, y) in traversal order. H0
curves are written into one pre-sized buffer by ``build_region``; every
task writes a disjoint index range computed before it is submitted.
Composite families build their four quadrant curves, transform them in
place and concatenate them in the production's join order.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterator

import numpy as np
from numpy.typing import NDArray

from hilbertplot.engine.config import EngineConfig
from hilbertplot.engine.grammar import Family, Transform, parse_family, production, quadrants
from hilbertplot.engine.parallel import map_parallel, reverse_parallel
from hilbertplot.engine.point import Point
from hilbertplot.engine.pool import ThreadPool
from hilbertplot.engine.region import Orientation, Region, build_region
from hilbertplot.errors import AllocationError, OutOfRangeError

logger = logging.getLogger(__name__)

# 8-connected neighbourhood as (dy, dx)
_NEIGHBOURS = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1), (0, 1),
    (1, -1), (1, 0), (1, 1),
)


# ── Transforms ──


def _allocate(cells: int) -> NDArray[np.int64]:
    try:
        return np.empty((cells, 2), dtype=np.int64)
    except MemoryError as e:
        raise AllocationError(f"Cannot allocate a curve of {cells} cells") from e


def _mirror_inplace(
    points: NDArray[np.int64],
    region: Region,
    pool: ThreadPool | None,
    config: EngineConfig,
) -> None:
    if region.orientation.mirrors_x:
        axis, span = 0, region.width - 1 + 2 * region.x
    else:
        axis, span = 1, region.height - 1 + 2 * region.y

    def mirror(block: NDArray[np.int64]) -> NDArray[np.int64]:
        out = block.copy()
        out[:, axis] = span - out[:, axis]
        return out

    map_parallel(points, mirror, pool, config.map_min_per_task)


def apply_transform(
    points: NDArray[np.int64],
    transform: Transform,
    region: Region,
    pool: ThreadPool | None = None,
    config: EngineConfig | None = None,
) -> None:
    """Apply a production transform in place.

    Mirroring uses the orientation, extent and origin of ``region``, the
    region the points were built for.
    """
    config = config or EngineConfig()
    if transform.mirrors:
        _mirror_inplace(points, region, pool, config)
    if transform.reverses:
        reverse_parallel(points, pool, config.reverse_block_size)


def reverse_points(points: NDArray[np.int64], pool: ThreadPool | None = None) -> NDArray[np.int64]:
    """Reversed copy of ``points``."""
    out = points.copy()
    reverse_parallel(out, pool)
    return out


def mirror_points(
    points: NDArray[np.int64],
    region: Region,
    pool: ThreadPool | None = None,
) -> NDArray[np.int64]:
    """Mirrored copy of ``points`` about the centre line of ``region``."""
    out = points.copy()
    _mirror_inplace(out, region, pool, EngineConfig())
    return out


# ── Construction ──


def _compose(
    family: Family,
    region: Region,
    pool: ThreadPool | None,
    config: EngineConfig,
) -> NDArray[np.int64]:
    if family == Family.H0:
        buf = _allocate(region.area)
        build_region(region, buf, 0, pool)
        if pool is not None:
            pool.drain()
        return buf

    rule_set = production(family, region.orientation)
    parts = []
    for rule, (dx, dy, w, h) in zip(rule_set.children, quadrants(region.width, region.height)):
        child = Region(h, w, region.x + dx, region.y + dy, rule.orientation)
        points = _compose(rule.family, child, pool, config)
        apply_transform(points, rule.transform, child, pool, config)
        parts.append(points)
    return np.concatenate([parts[q] for q in rule_set.join])


def discontinuity_map(
    points: NDArray[np.int64],
    width: int,
    height: int,
    origin: tuple[int, int] = (0, 0),
) -> tuple[NDArray[np.float64], float]:
    """Per-point discontinuity scores (traversal order) and their mean.

    A cell's score is the mean absolute traversal-index difference to the
    8-connected neighbours that exist on the grid. Cells with no neighbours
    score 0.
    """
    n = len(points)
    if n == 0:
        return np.zeros(0), 0.0

    xs = points[:, 0] - origin[0]
    ys = points[:, 1] - origin[1]

    # Raster grid of traversal indices, NaN-bordered so edge cells see fewer neighbours
    ranks = np.full((height + 2, width + 2), np.nan)
    ranks[ys + 1, xs + 1] = np.arange(n)
    centre = ranks[1:-1, 1:-1]

    total = np.zeros((height, width))
    count = np.zeros((height, width))
    for dy, dx in _NEIGHBOURS:
        neighbour = ranks[1 + dy:1 + dy + height, 1 + dx:1 + dx + width]
        present = ~np.isnan(neighbour)
        total += np.where(present, np.abs(centre - np.where(present, neighbour, 0.0)), 0.0)
        count += present

    scores = np.divide(total, count, out=np.zeros_like(total), where=count > 0)

    # Batched Welford update, one raster row at a time
    mean = 0.0
    seen = 0
    for row in scores:
        seen += row.size
        mean += (float(row.sum()) - row.size * mean) / seen

    return scores[ys, xs], mean


class Curve:
    """A built curve: ``width * height`` points visiting every cell once.

    The point buffer is read-only once construction finishes. Pass a pool to
    share workers across builds; otherwise one is created for this build
    and shut down before the constructor returns.
    """

    def __init__(
        self,
        width: int,
        height: int,
        family: Family | str | int = Family.H0,
        origin: tuple[int, int] = (0, 0),
        orientation: Orientation | str | int = Orientation.A,
        *,
        discontinuity: bool = False,
        pool: ThreadPool | None = None,
        config: EngineConfig | None = None,
    ) -> None:
        if width < 0 or height < 0:
            raise ValueError(f"Curve dimensions must be non-negative, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self.family = parse_family(family)
        self.orientation = Orientation.parse(orientation)
        self.origin = (int(origin[0]), int(origin[1]))
        self.config = config or EngineConfig()
        self._region = Region(self.height, self.width, self.origin[0], self.origin[1], self.orientation)

        t0 = time.perf_counter()
        if pool is None:
            with ThreadPool(self.config.pool_workers) as scoped:
                points = _compose(self.family, self._region, scoped, self.config)
        else:
            points = _compose(self.family, self._region, pool, self.config)
        logger.debug(
            "Built %s %dx%d (%s) in %.1fms",
            self.family.name,
            self.width,
            self.height,
            self.orientation.name,
            (time.perf_counter() - t0) * 1000,
        )
        self._set_points(points, discontinuity)

    @classmethod
    def _derive(cls, source: Curve, points: NDArray[np.int64]) -> Curve:
        curve = cls.__new__(cls)
        curve.width = source.width
        curve.height = source.height
        curve.family = source.family
        curve.orientation = source.orientation
        curve.origin = source.origin
        curve.config = source.config
        curve._region = source._region
        curve._set_points(points, source._scores is not None)
        return curve

    def _set_points(self, points: NDArray[np.int64], discontinuity: bool) -> None:
        points.setflags(write=False)
        self._points = points
        self._scores: NDArray[np.float64] | None = None
        self._mean = 0.0
        if discontinuity:
            self._scores, self._mean = discontinuity_map(points, self.width, self.height, self.origin)
            self._scores.setflags(write=False)

    # ── Access ──

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Point]:
        for i in range(len(self._points)):
            yield self.point_at(i)

    def __getitem__(self, index: int) -> Point:
        return self.point_at(index)

    def point_at(self, index: int) -> Point:
        if not 0 <= index < len(self._points):
            raise OutOfRangeError(f"Point index {index} outside curve of length {len(self._points)}")
        x, y = self._points[index]
        score = float(self._scores[index]) if self._scores is not None else 0.0
        return Point(int(x), int(y), int(index), score)

    @property
    def coordinates(self) -> NDArray[np.int64]:
        """Read-only (N, 2) array of (x, y) in traversal order."""
        return self._points

    @property
    def discontinuity(self) -> NDArray[np.float64]:
        """Per-point discontinuity scores; zeros when the map was not computed."""
        if self._scores is None:
            return np.zeros(len(self._points))
        return self._scores

    @property
    def has_discontinuity(self) -> bool:
        return self._scores is not None

    @property
    def mean_discontinuity(self) -> float:
        return self._mean

    # ── Derived curves ──

    def reversed(self) -> Curve:
        return Curve._derive(self, reverse_points(self._points))

    def mirrored(self) -> Curve:
        return Curve._derive(self, mirror_points(self._points, self._region))

    def mirror_reversed(self) -> Curve:
        points = mirror_points(self._points, self._region)
        reverse_parallel(points)
        return Curve._derive(self, points)

    def __repr__(self) -> str:
        return (
            f"Curve({self.family.name}, {self.width}x{self.height}, "
            f"orientation={self.orientation.name}, origin={self.origin})"
        )


def build_curve(
    family: Family | str | int,
    width: int,
    height: int,
    origin: tuple[int, int] = (0, 0),
    orientation: Orientation | str | int = Orientation.A,
    *,
    discontinuity: bool = False,
    pool: ThreadPool | None = None,
    config: EngineConfig | None = None,
) -> Curve:
    """Build a curve of ``family`` over a width x height grid anchored at ``origin``."""
    return Curve(
        width,
        height,
        family,
        origin,
        orientation,
        discontinuity=discontinuity,
        pool=pool,
        config=config,
    )
