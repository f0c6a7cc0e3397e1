"""
Tests for Frustum plane extraction and culling.

The row-combination and corner methods are checked against each other
on the same matrices, and against planes known in closed form.
"""

import math

import numpy as np
import pytest

from geomkit.config import ClipDepth, MatrixLayout
from geomkit.errors import DegenerateGeometryError
from geomkit.geomalgo import look_at, orthographic, perspective
from geomkit.geombase import (
    AABox,
    ExtractionMethod,
    Frustum,
    FrustumPlane,
    Intersection,
    Sphere,
)

NEAR = 0.5
FAR = 50.0


def both_methods(matrix, depth=ClipDepth.ZERO_TO_ONE, layout=MatrixLayout.COLUMN_VECTORS):
    rows = Frustum.from_matrix(matrix, ExtractionMethod.ROWS, depth, layout)
    corners = Frustum.from_matrix(matrix, ExtractionMethod.CORNERS, depth, layout)
    return rows, corners


@pytest.fixture
def camera():
    """90 degree square perspective frustum, camera at the origin looking along -Z."""
    return Frustum.from_matrix(perspective(math.radians(90.0), 1.0, NEAR, FAR))


class TestKnownPlanes:

    @pytest.mark.parametrize("method", list(ExtractionMethod))
    def test_near_far(self, method):
        f = Frustum.from_matrix(perspective(math.radians(60.0), 1.5, NEAR, FAR), method)
        np.testing.assert_array_almost_equal(f[FrustumPlane.NEAR].normal, [0.0, 0.0, -1.0])
        assert f[FrustumPlane.NEAR].offset == pytest.approx(NEAR)
        np.testing.assert_array_almost_equal(f[FrustumPlane.FAR].normal, [0.0, 0.0, 1.0])
        assert f[FrustumPlane.FAR].offset == pytest.approx(-FAR)

    @pytest.mark.parametrize("method", list(ExtractionMethod))
    def test_side_planes_pass_through_eye(self, method):
        f = Frustum.from_matrix(perspective(math.radians(90.0), 1.0, NEAR, FAR), method)
        s = 1.0 / math.sqrt(2.0)
        np.testing.assert_array_almost_equal(f[FrustumPlane.LEFT].normal, [s, 0.0, -s])
        np.testing.assert_array_almost_equal(f[FrustumPlane.RIGHT].normal, [-s, 0.0, -s])
        np.testing.assert_array_almost_equal(f[FrustumPlane.BOTTOM].normal, [0.0, s, -s])
        np.testing.assert_array_almost_equal(f[FrustumPlane.TOP].normal, [0.0, -s, -s])
        for index in (FrustumPlane.LEFT, FrustumPlane.RIGHT, FrustumPlane.BOTTOM, FrustumPlane.TOP):
            assert f[index].offset == pytest.approx(0.0, abs=1e-9)

    @pytest.mark.parametrize("method", list(ExtractionMethod))
    def test_orthographic(self, method):
        f = Frustum.from_matrix(orthographic(-2.0, 2.0, -1.0, 1.0, 1.0, 10.0), method)
        np.testing.assert_array_almost_equal(f[FrustumPlane.LEFT].normal, [1.0, 0.0, 0.0])
        assert f[FrustumPlane.LEFT].offset == pytest.approx(-2.0)
        np.testing.assert_array_almost_equal(f[FrustumPlane.TOP].normal, [0.0, -1.0, 0.0])
        assert f[FrustumPlane.TOP].offset == pytest.approx(-1.0)
        assert f[FrustumPlane.NEAR].offset == pytest.approx(1.0)
        assert f[FrustumPlane.FAR].offset == pytest.approx(-10.0)

    @pytest.mark.parametrize("method", list(ExtractionMethod))
    def test_normals_are_unit(self, method):
        view = look_at([3.0, 2.0, 5.0], [0.0, 0.0, 0.0])
        f = Frustum.from_view_projection(view, perspective(1.0, 1.3, 0.1, 100.0), method)
        for plane in f.planes:
            assert np.linalg.norm(plane.normal) == pytest.approx(1.0)


class TestMethodsAgree:

    @pytest.mark.parametrize("depth", list(ClipDepth))
    def test_perspective(self, depth):
        rows, corners = both_methods(perspective(math.radians(70.0), 16.0 / 9.0, NEAR, FAR, depth), depth)
        assert rows.is_equal(corners, 1e-6)

    @pytest.mark.parametrize("depth", list(ClipDepth))
    def test_orthographic(self, depth):
        m = orthographic(-3.0, 1.0, -2.0, 4.0, 0.5, 20.0, depth)
        rows, corners = both_methods(m, depth)
        assert rows.is_equal(corners, 1e-6)

    def test_with_view(self):
        view = look_at([10.0, -4.0, 3.0], [0.0, 1.0, 0.0], up=[0.0, 0.0, 1.0])
        m = perspective(math.radians(45.0), 1.0, 1.0, 200.0) @ view
        rows, corners = both_methods(m)
        assert rows.is_equal(corners, 1e-6)

    @pytest.mark.parametrize("depth", list(ClipDepth))
    def test_mirrored_matrix(self, depth):
        view = look_at([3.0, 2.0, 5.0], [0.0, 0.0, 0.0])
        mirror = np.diag([-1.0, 1.0, 1.0, 1.0])
        m = perspective(math.radians(60.0), 1.5, NEAR, FAR, depth) @ view @ mirror
        rows, corners = both_methods(m, depth)
        assert rows.is_equal(corners, 1e-6)
        # the mirror image of the camera target is in view
        assert corners.contains_point([0.0, 0.0, 0.0])
        assert corners.contains_point([-1.0, 0.5, 0.5])
        assert not corners.contains_point([-3.0, 2.0, 5.0])

    @pytest.mark.parametrize("method", list(ExtractionMethod))
    def test_float32_matrix(self, method):
        m = perspective(math.radians(60.0), 1.5, NEAR, FAR)
        expected = Frustum.from_matrix(m, ExtractionMethod.ROWS)
        f = Frustum.from_matrix(m.astype(np.float32), method)
        for plane in f.planes:
            assert plane.normal.dtype == np.float32
        assert f.is_equal(expected, 1e-2)

    def test_row_vector_layout(self):
        view = look_at([1.0, 2.0, 3.0], [0.0, 0.0, -5.0])
        proj = perspective(math.radians(60.0), 1.2, NEAR, FAR)
        expected = Frustum.from_view_projection(view, proj, ExtractionMethod.ROWS)
        for method in ExtractionMethod:
            f = Frustum.from_view_projection(view.T, proj.T, method, layout=MatrixLayout.ROW_VECTORS)
            assert f.is_equal(expected, 1e-6)


class TestCulling:

    def test_contains_point(self, camera):
        assert camera.contains_point([0.0, 0.0, -10.0])
        assert camera.contains_point([4.0, -4.0, -5.0])
        assert not camera.contains_point([0.0, 0.0, -0.1])
        assert not camera.contains_point([0.0, 0.0, 10.0])
        assert not camera.contains_point([20.0, 0.0, -10.0])
        assert not camera.contains_point([0.0, 0.0, -60.0])

    def test_intersects_sphere(self, camera):
        assert camera.intersects_sphere(Sphere([0.0, 0.0, -10.0], 1.0))
        assert not camera.intersects_sphere(Sphere([0.0, 0.0, 1.0], 0.4))
        assert camera.intersects_sphere(Sphere([0.0, 0.0, 1.0], 2.0))
        assert not camera.intersects_sphere(Sphere([30.0, 0.0, -10.0], 1.0))

    def test_classify_aabox(self, camera):
        inside = AABox(np.array([-1.0, -1.0, -11.0]), np.array([1.0, 1.0, -9.0]))
        crossing_far = AABox(np.array([-1.0, -1.0, -60.0]), np.array([1.0, 1.0, -40.0]))
        behind = AABox(np.array([-1.0, -1.0, 1.0]), np.array([1.0, 1.0, 2.0]))
        assert camera.classify_aabox(inside) is Intersection.INSIDE
        assert camera.classify_aabox(crossing_far) is Intersection.INTERSECT
        assert camera.classify_aabox(behind) is Intersection.OUTSIDE
        assert camera.classify_aabox(AABox()) is Intersection.OUTSIDE

    def test_box_around_camera(self, camera):
        box = AABox(np.array([-100.0, -100.0, -100.0]), np.array([100.0, 100.0, 100.0]))
        assert camera.classify_aabox(box) is Intersection.INTERSECT


class TestDegenerate:

    @pytest.mark.parametrize("method", list(ExtractionMethod))
    def test_singular_matrix(self, method):
        with pytest.raises(DegenerateGeometryError):
            Frustum.from_matrix(np.zeros((4, 4)), method)

    def test_wrong_plane_count(self):
        with pytest.raises(ValueError):
            Frustum([])

    def test_bad_perspective_range(self):
        with pytest.raises(ValueError):
            perspective(1.0, 1.0, 0.0, 10.0)
        with pytest.raises(ValueError):
            perspective(1.0, 1.0, 5.0, 1.0)

    def test_look_at_parallel_up(self):
        with pytest.raises(DegenerateGeometryError):
            look_at([0.0, 0.0, 0.0], [0.0, 5.0, 0.0])
