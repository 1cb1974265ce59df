"""Tests for quasi-square partitioning and primitive curves."""

from __future__ import annotations

import numpy as np
import pytest

from hilbertplot.engine.region import Orientation, Region, build_region
from hilbertplot.errors import InvalidOrientationError


class TestOrientation:
    def test_parse_letter_and_ordinal(self):
        assert Orientation.parse("c") is Orientation.C
        assert Orientation.parse(3) is Orientation.D
        assert Orientation.parse(Orientation.B) is Orientation.B

    def test_parse_numpy_ordinal(self):
        ordinals = np.arange(4)
        assert [Orientation.parse(o) for o in ordinals] == list(Orientation)

    @pytest.mark.parametrize("bad", ["E", "", 4, -1, None, True])
    def test_parse_rejects_invalid(self, bad):
        with pytest.raises(InvalidOrientationError):
            Orientation.parse(bad)

    def test_mirror_axis(self):
        assert Orientation.A.mirrors_x and Orientation.C.mirrors_x
        assert not Orientation.B.mirrors_x and not Orientation.D.mirrors_x


class TestPartition:
    @pytest.mark.parametrize("orientation", list(Orientation))
    @pytest.mark.parametrize("height,width", [(3, 3), (4, 7), (5, 5), (6, 10), (9, 2), (1, 8)])
    def test_children_tile_parent(self, orientation, height, width):
        region = Region(height, width, 2, 5, orientation)
        children = region.split()
        assert len(children) == 4
        assert sum(c.area for c in children) == region.area

        cells = set()
        for c in children:
            for dx in range(c.width):
                for dy in range(c.height):
                    cells.add((c.x + dx, c.y + dy))
        assert len(cells) == region.area
        assert cells == {(2 + dx, 5 + dy) for dx in range(width) for dy in range(height)}

    def test_parity_correction_ab_swaps_odd_first_half(self):
        # 6 rows: n1 = 3 is odd, so A/B move the odd half to n2
        assert Region(6, 6, orientation=Orientation.A).halves() == (3, 3, 3, 3)
        assert Region(10, 6, orientation=Orientation.A).halves() == (5, 5, 3, 3)
        assert Region(7, 7, orientation=Orientation.B).halves() == (4, 3, 4, 3)
        assert Region(6, 7, orientation=Orientation.A).halves() == (3, 3, 4, 3)

    def test_parity_correction_cd_swaps_odd_second_half(self):
        # 7: n1 = 3, n2 = 4 (even) -> unchanged; 5: n1 = 2, n2 = 3 (odd) -> swapped
        assert Region(7, 5, orientation=Orientation.C).halves() == (3, 4, 3, 2)
        assert Region(5, 5, orientation=Orientation.D).halves() == (3, 2, 3, 2)

    def test_children_orientations_for_a(self):
        children = Region(4, 4, orientation=Orientation.A).split()
        assert [c.orientation for c in children] == [
            Orientation.B, Orientation.A, Orientation.A, Orientation.D,
        ]
        assert [(c.x, c.y) for c in children] == [(0, 0), (0, 2), (2, 2), (2, 0)]

    def test_invalid_orientation_is_fatal(self):
        with pytest.raises(InvalidOrientationError):
            Region(4, 4, orientation="Z").halves()


class TestPrimitives:
    def test_two_by_two_per_orientation(self):
        expected = {
            Orientation.A: [(0, 0), (0, 1), (1, 1), (1, 0)],
            Orientation.B: [(0, 0), (1, 0), (1, 1), (0, 1)],
            Orientation.C: [(1, 1), (1, 0), (0, 0), (0, 1)],
            Orientation.D: [(1, 1), (0, 1), (0, 0), (1, 0)],
        }
        for orientation, points in expected.items():
            got = Region(2, 2, 10, 20, orientation).primitive_points()
            assert got.tolist() == [[x + 10, y + 20] for x, y in points]

    def test_strips_reverse_for_c_and_d(self):
        assert Region(1, 2, orientation=Orientation.A).primitive_points().tolist() == [[0, 0], [1, 0]]
        assert Region(1, 2, orientation=Orientation.D).primitive_points().tolist() == [[1, 0], [0, 0]]
        assert Region(2, 1, orientation=Orientation.B).primitive_points().tolist() == [[0, 0], [0, 1]]
        assert Region(2, 1, orientation=Orientation.C).primitive_points().tolist() == [[0, 1], [0, 0]]

    def test_non_primitive_rejected(self):
        with pytest.raises(ValueError):
            Region(3, 2).primitive_points()


class TestBuildRegion:
    def test_writes_at_offset_only(self):
        buf = np.full((20, 2), -1, dtype=np.int64)
        build_region(Region(4, 4), buf, 2)
        assert (buf[:2] == -1).all()
        assert (buf[18:] == -1).all()
        assert len({tuple(p) for p in buf[2:18]}) == 16

    def test_zero_area_writes_nothing(self):
        buf = np.full((3, 2), -1, dtype=np.int64)
        build_region(Region(0, 5), buf, 0)
        build_region(Region(5, 0), buf, 0)
        assert (buf == -1).all()

    def test_pool_matches_sequential(self, pool):
        region = Region(13, 11, orientation=Orientation.C)
        seq = np.empty((region.area, 2), dtype=np.int64)
        par = np.empty((region.area, 2), dtype=np.int64)
        build_region(region, seq, 0, None)
        build_region(region, par, 0, pool)
        pool.drain()
        assert np.array_equal(seq, par)
