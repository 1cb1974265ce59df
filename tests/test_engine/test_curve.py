"""Tests for curve construction, transforms and the discontinuity map."""

from __future__ import annotations

import numpy as np
import pytest

import hilbertplot.engine.curve as curve_module
from hilbertplot.engine.curve import (
    Curve,
    build_curve,
    discontinuity_map,
    mirror_points,
    reverse_points,
)
from hilbertplot.engine.grammar import Family
from hilbertplot.engine.point import Point
from hilbertplot.engine.region import Orientation, Region, build_region
from hilbertplot.errors import AllocationError, OutOfRangeError
from tests.conftest import GOLDEN, parse_points

ALL_FAMILIES = list(Family)
BIJECTION_SIZES = [(1, 1), (1, 2), (2, 1), (1, 5), (6, 1), (3, 5), (5, 3), (6, 7), (7, 7), (9, 4)]


def _cells(curve: Curve) -> set[tuple[int, int]]:
    return {(int(x), int(y)) for x, y in curve.coordinates}


def _steps(curve: Curve) -> np.ndarray:
    return np.abs(np.diff(curve.coordinates, axis=0)).sum(axis=1)


class TestGolden:
    @pytest.mark.parametrize("key", sorted(GOLDEN))
    def test_matches_reference_order(self, key, pool):
        family, orientation, width, height = key
        curve = build_curve(family, width, height, orientation=orientation, pool=pool)
        assert np.array_equal(curve.coordinates, parse_points(GOLDEN[key]))


class TestBijection:
    @pytest.mark.parametrize("family", ALL_FAMILIES, ids=lambda f: f.name)
    def test_visits_every_cell_once(self, family, pool):
        for orientation in Orientation:
            for width, height in BIJECTION_SIZES:
                curve = build_curve(family, width, height, orientation=orientation, pool=pool)
                assert len(curve) == width * height
                assert _cells(curve) == {(x, y) for x in range(width) for y in range(height)}

    def test_origin_offsets_cells(self, pool):
        curve = build_curve(Family.H7, 5, 6, origin=(10, 3), pool=pool)
        assert _cells(curve) == {(10 + x, 3 + y) for x in range(5) for y in range(6)}
        base = build_curve(Family.H7, 5, 6, pool=pool)
        assert np.array_equal(curve.coordinates, base.coordinates + [10, 3])


class TestAdjacency:
    @pytest.mark.parametrize("family", ALL_FAMILIES, ids=lambda f: f.name)
    def test_unit_steps_on_multiple_of_four_squares(self, family, pool):
        for orientation in Orientation:
            for side in (4, 8, 12):
                curve = build_curve(family, side, side, orientation=orientation, pool=pool)
                assert (_steps(curve) == 1).all(), f"{family.name}/{orientation.name} {side}x{side}"

    @pytest.mark.parametrize("family", [Family.H0, Family.H13, Family.H27, Family.H39])
    def test_unit_steps_16(self, family, pool):
        curve = build_curve(family, 16, 16, orientation=Orientation.B, pool=pool)
        assert (_steps(curve) == 1).all()

    @pytest.mark.parametrize("width,height", [(1, 1), (1, 2), (2, 1), (2, 2)])
    def test_unit_steps_on_primitives(self, width, height, pool):
        for family in ALL_FAMILIES:
            for orientation in Orientation:
                curve = build_curve(family, width, height, orientation=orientation, pool=pool)
                assert (_steps(curve) == 1).all()


class TestDeterminism:
    def test_repeated_parallel_builds_identical(self, pool):
        region = Region(8, 8)
        expected = np.empty((64, 2), dtype=np.int64)
        build_region(region, expected, 0, None)
        for _ in range(20):
            assert np.array_equal(build_curve(Family.H0, 8, 8, pool=pool).coordinates, expected)

    def test_scoped_pool_build(self):
        first = build_curve(Family.H21, 9, 8)
        second = build_curve(Family.H21, 9, 8)
        assert np.array_equal(first.coordinates, second.coordinates)


class TestTransforms:
    def test_reverse_involution(self, pool):
        curve = build_curve(Family.H9, 8, 8, pool=pool)
        assert np.array_equal(reverse_points(reverse_points(curve.coordinates)), curve.coordinates)

    @pytest.mark.parametrize("orientation", list(Orientation))
    def test_mirror_involution(self, orientation, pool):
        curve = build_curve(Family.H14, 7, 5, origin=(3, 2), orientation=orientation, pool=pool)
        region = Region(5, 7, 3, 2, orientation)
        twice = mirror_points(mirror_points(curve.coordinates, region), region)
        assert np.array_equal(twice, curve.coordinates)

    def test_mirror_axis_by_orientation(self):
        points = np.array([[0, 0], [1, 2]], dtype=np.int64)
        assert mirror_points(points, Region(3, 4, 0, 0, Orientation.A)).tolist() == [[3, 0], [2, 2]]
        assert mirror_points(points, Region(3, 4, 0, 0, Orientation.B)).tolist() == [[0, 2], [1, 0]]

    def test_mirror_reverse_undone(self, pool):
        curve = build_curve(Family.H30, 6, 6, pool=pool)
        back = curve.mirror_reversed().reversed().mirrored()
        assert np.array_equal(back.coordinates, curve.coordinates)

    def test_derived_curves_keep_cells(self, pool):
        curve = build_curve(Family.H2, 5, 4, pool=pool)
        for derived in (curve.reversed(), curve.mirrored(), curve.mirror_reversed()):
            assert _cells(derived) == _cells(curve)
            assert derived.family == curve.family

    def test_coordinates_read_only(self, pool):
        curve = build_curve(Family.H0, 4, 4, pool=pool)
        with pytest.raises(ValueError):
            curve.coordinates[0, 0] = 9


class TestDiscontinuity:
    def test_two_by_two(self):
        curve = build_curve(Family.H0, 2, 2, discontinuity=True)
        assert curve.mean_discontinuity == pytest.approx(5 / 3)
        assert curve.discontinuity.tolist() == pytest.approx([2.0, 4 / 3, 4 / 3, 2.0])
        assert curve[0] == Point(0, 0, 0, 2.0)

    def test_single_row_raster_is_minimal(self):
        points = np.array([[x, 0] for x in range(10)], dtype=np.int64)
        scores, mean = discontinuity_map(points, 10, 1)
        assert scores.tolist() == [1.0] * 10
        assert mean == 1.0

    def test_raster_fixture_matches_brute_force(self):
        width, height = 5, 4
        points = np.array([[x, y] for y in range(height) for x in range(width)], dtype=np.int64)
        scores, mean = discontinuity_map(points, width, height)

        expected = []
        for y in range(height):
            for x in range(width):
                diffs = [
                    abs((y + dy) * width + (x + dx) - (y * width + x))
                    for dx in (-1, 0, 1)
                    for dy in (-1, 0, 1)
                    if (dx or dy) and 0 <= x + dx < width and 0 <= y + dy < height
                ]
                expected.append(sum(diffs) / len(diffs))
        assert scores.tolist() == pytest.approx(expected)
        assert mean == pytest.approx(sum(expected) / len(expected))

    def test_origin_is_respected(self):
        points = np.array([[7, 3], [7, 4], [8, 4], [8, 3]], dtype=np.int64)
        scores, mean = discontinuity_map(points, 2, 2, origin=(7, 3))
        assert mean == pytest.approx(5 / 3)

    def test_non_negative_and_single_cell(self, pool):
        assert build_curve(Family.H0, 1, 1, discontinuity=True).mean_discontinuity == 0.0
        curve = build_curve(Family.H33, 9, 7, discontinuity=True, pool=pool)
        assert curve.mean_discontinuity > 0
        assert (curve.discontinuity >= 0).all()

    def test_disabled_by_default(self, pool):
        curve = build_curve(Family.H0, 4, 4, pool=pool)
        assert not curve.has_discontinuity
        assert curve.mean_discontinuity == 0.0
        assert curve.discontinuity.tolist() == [0.0] * 16


class TestAccess:
    def test_points_and_iteration(self, pool):
        curve = build_curve(Family.H0, 4, 4, pool=pool)
        first = list(curve)
        assert [p.index for p in first] == list(range(16))
        assert list(curve) == first
        assert curve.point_at(5).xy == (0, 3)

    @pytest.mark.parametrize("index", [-1, 16, 100])
    def test_out_of_range(self, index, pool):
        curve = build_curve(Family.H0, 4, 4, pool=pool)
        with pytest.raises(OutOfRangeError):
            curve.point_at(index)
        with pytest.raises(IndexError):
            curve[index]

    def test_empty_grid(self):
        curve = build_curve(Family.H20, 0, 5, discontinuity=True)
        assert len(curve) == 0
        assert curve.mean_discontinuity == 0.0

    def test_negative_size_rejected(self):
        with pytest.raises(ValueError):
            Curve(-1, 3)

    def test_parses_names(self, pool):
        curve = Curve(4, 4, "h3", orientation="b", pool=pool)
        assert curve.family == Family.H3
        assert curve.orientation == Orientation.B

    def test_raster_order_and_unit_steps(self, pool):
        points = list(build_curve(Family.H9, 8, 8, pool=pool))
        raster = sorted(points, key=Point.raster_key)
        assert [p.xy for p in raster] == [(x, y) for y in range(8) for x in range(8)]
        assert all(a.manhattan(b) == 1 for a, b in zip(points, points[1:]))


class TestAllocation:
    def test_memory_error_becomes_allocation_error(self, monkeypatch):
        original = MemoryError("no room")

        def fail(*args, **kwargs):
            raise original

        monkeypatch.setattr(curve_module.np, "empty", fail)
        with pytest.raises(AllocationError) as excinfo:
            build_curve(Family.H0, 8, 8)
        assert isinstance(excinfo.value, MemoryError)
        assert excinfo.value.__cause__ is original
