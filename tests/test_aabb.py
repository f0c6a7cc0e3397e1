"""Tests for AABox - 3D box with explicit empty state."""

import itertools

import numpy as np
import pytest

from geomkit.geombase import AABox, Intersection


def box(lo, hi):
    return AABox(np.array(lo, dtype=float), np.array(hi, dtype=float))


class TestAABoxEmpty:

    def test_default_is_empty(self):
        b = AABox()
        assert b.is_empty
        assert np.all(b.min == np.finfo(np.float64).max)
        assert np.all(b.max == np.finfo(np.float64).min)

    def test_float32_sentinels(self):
        b = AABox(dtype=np.float32)
        assert b.min.dtype == np.float32
        assert np.all(b.min == np.finfo(np.float32).max)

    def test_empty_metrics_are_zero(self):
        b = AABox()
        assert b.longest_edge() == 0.0
        assert b.shortest_edge() == 0.0
        np.testing.assert_array_equal(b.extents(), [0.0, 0.0, 0.0])

    def test_empty_contains_nothing(self):
        assert not AABox().contains([0.0, 0.0, 0.0])

    def test_only_one_corner_given(self):
        with pytest.raises(ValueError):
            AABox(np.zeros(3))

    @pytest.mark.parametrize("lo, hi", [
        ([1.0, 1.0, 1.0], [0.0, 0.0, 0.0]),
        ([0.0, 2.0, 0.0], [1.0, 1.0, 1.0]),
    ])
    def test_inverted_corners_rejected(self, lo, hi):
        with pytest.raises(ValueError):
            box(lo, hi)

    def test_flat_box_allowed(self):
        b = box([0, 0, 0], [1, 0, 1])
        assert not b.is_empty
        assert b.shortest_edge() == 0.0


class TestAABoxExtend:

    def test_first_extend_sets_min_and_max(self):
        b = AABox().extend([1.0, 2.0, 3.0])
        assert not b.is_empty
        np.testing.assert_array_equal(b.min, [1.0, 2.0, 3.0])
        np.testing.assert_array_equal(b.max, [1.0, 2.0, 3.0])

    @pytest.mark.parametrize("order", list(itertools.permutations(range(3))))
    def test_extend_order_independent(self, order):
        points = [(1.0, 0.0, 0.0), (-1.0, 0.0, 0.0), (0.0, 1.0, 0.0)]
        b = AABox()
        for i in order:
            b += np.array(points[i])
        np.testing.assert_array_equal(b.min, [-1.0, 0.0, 0.0])
        np.testing.assert_array_equal(b.max, [1.0, 1.0, 0.0])

    def test_union_with_empty(self):
        a = box([0, 0, 0], [1, 1, 1])
        assert a.merge(AABox()) == a
        assert AABox().merge(a) == a
        assert AABox().merge(AABox()).is_empty

    def test_union(self):
        a = box([0, 0, 0], [1, 1, 1])
        a += box([-1, 0.5, 0.5], [0.5, 3, 0.5])
        np.testing.assert_array_equal(a.min, [-1.0, 0.0, 0.0])
        np.testing.assert_array_equal(a.max, [1.0, 3.0, 1.0])

    def test_merge_does_not_mutate(self):
        a = box([0, 0, 0], [1, 1, 1])
        a.merge(box([5, 5, 5], [6, 6, 6]))
        np.testing.assert_array_equal(a.max, [1.0, 1.0, 1.0])

    def test_from_points(self):
        b = AABox.from_points(np.array([[0.0, 2.0, -1.0], [1.0, -2.0, 4.0], [0.5, 0.0, 0.0]]))
        np.testing.assert_array_equal(b.min, [0.0, -2.0, -1.0])
        np.testing.assert_array_equal(b.max, [1.0, 2.0, 4.0])
        assert AABox.from_points(np.zeros((0, 3))).is_empty


class TestAABoxMetrics:

    def test_center_and_extents(self):
        b = box([0, 0, 0], [1, 2, 3])
        np.testing.assert_array_almost_equal(b.center(), [0.5, 1.0, 1.5])
        np.testing.assert_array_almost_equal(b.extents(), [1.0, 2.0, 3.0])
        assert b.longest_edge() == pytest.approx(3.0)
        assert b.shortest_edge() == pytest.approx(1.0)

    def test_corner_order(self):
        b = box([0, 0, 0], [1, 2, 3])
        np.testing.assert_array_equal(b.corner(0), [0, 0, 0])
        np.testing.assert_array_equal(b.corner(1), [1, 0, 0])
        np.testing.assert_array_equal(b.corner(2), [0, 2, 0])
        np.testing.assert_array_equal(b.corner(4), [0, 0, 3])
        np.testing.assert_array_equal(b.corner(7), [1, 2, 3])

    def test_corners_follow_bit_index(self):
        b = box([-1, -2, -3], [1, 2, 3])
        corners = b.corners()
        assert corners.shape == (8, 3)
        for i, c in enumerate(corners):
            for axis in range(3):
                expected = b.max[axis] if i & (1 << axis) else b.min[axis]
                assert c[axis] == expected

    def test_corners_homogeneous(self):
        h = box([0, 0, 0], [1, 1, 1]).corners_homogeneous()
        assert h.shape == (8, 4)
        np.testing.assert_array_equal(h[:, 3], np.ones(8))

    def test_bad_corner_index(self):
        with pytest.raises(ValueError):
            box([0, 0, 0], [1, 1, 1]).corner(8)


class TestAABoxRelations:

    def setup_method(self):
        self.big = box([0, 0, 0], [10, 10, 10])

    def test_contains_inclusive(self):
        b = box([0, 0, 0], [1, 1, 1])
        assert b.contains([0.0, 0.0, 0.0])
        assert b.contains([1.0, 1.0, 1.0])
        assert b.contains([0.5, 1.0, 0.0])
        assert not b.contains([1.0001, 0.5, 0.5])
        assert not b.contains([0.5, -0.0001, 0.5])

    def test_classify(self):
        assert self.big.classify(box([1, 1, 1], [2, 2, 2])) is Intersection.INSIDE
        assert self.big.classify(box([5, 5, 5], [15, 15, 15])) is Intersection.INTERSECT
        assert self.big.classify(box([11, 11, 11], [12, 12, 12])) is Intersection.OUTSIDE
        assert self.big.classify(AABox()) is Intersection.OUTSIDE
        assert AABox().classify(self.big) is Intersection.OUTSIDE

    def test_classify_self_is_inside(self):
        assert self.big.classify(self.big.copy()) is Intersection.INSIDE

    def test_touching_faces_intersect(self):
        other = box([10, 0, 0], [11, 1, 1])
        assert self.big.intersects(other)
        assert self.big.classify(other) is Intersection.INTERSECT

    def test_separated_on_single_axis(self):
        assert not self.big.intersects(box([0, 0, 10.5], [1, 1, 11]))

    def test_project_point(self):
        np.testing.assert_array_equal(self.big.project_point([-1.0, 5.0, 20.0]), [0.0, 5.0, 10.0])


class TestAABoxEquality:

    def test_exact(self):
        assert box([0, 0, 0], [1, 1, 1]) == box([0, 0, 0], [1, 1, 1])
        assert box([0, 0, 0], [1, 1, 1]) != box([0, 0, 0], [1, 1, 2])
        assert AABox() == AABox()

    def test_tolerance(self):
        a = box([0, 0, 0], [1, 1, 1])
        b = box([0, 0, 1e-9], [1, 1, 1])
        assert a.is_equal(b, 1e-6)
        assert not a.is_equal(b, 0.0)
        with pytest.raises(ValueError):
            a.is_equal(b, -1.0)
